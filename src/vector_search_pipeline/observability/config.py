"""
Phoenix/OpenTelemetry Configuration

Loads tracing settings from environment variables.
Supports graceful degradation when Phoenix is not installed.
"""

import os
from dataclasses import dataclass


@dataclass
class PhoenixConfig:
    """Configuration for Phoenix tracing.

    Environment Variables:
        PHOENIX_ENABLED: Enable Phoenix tracing (default: false)
        PHOENIX_PROJECT_NAME: Project name in Phoenix UI (default: vector-search-pipeline)
        PHOENIX_COLLECTOR_ENDPOINT: Remote endpoint (optional, local if empty)
        PHOENIX_CAPTURE_CONTENT: Attach document text to spans (default: false)
    """

    enabled: bool = False
    project_name: str = "vector-search-pipeline"
    collector_endpoint: str | None = None
    capture_content: bool = False

    @classmethod
    def from_env(cls) -> "PhoenixConfig":
        """Load config from environment variables."""
        return cls(
            enabled=os.environ.get("PHOENIX_ENABLED", "false").lower() in ("true", "1", "yes"),
            project_name=os.environ.get("PHOENIX_PROJECT_NAME", "vector-search-pipeline"),
            collector_endpoint=os.environ.get("PHOENIX_COLLECTOR_ENDPOINT") or None,
            capture_content=os.environ.get("PHOENIX_CAPTURE_CONTENT", "false").lower() in ("true", "1", "yes"),
        )


_config: PhoenixConfig | None = None


def get_config() -> PhoenixConfig:
    """Get the global Phoenix config (lazy-loaded from env)."""
    global _config
    if _config is None:
        _config = PhoenixConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset config (useful for testing)."""
    global _config
    _config = None
