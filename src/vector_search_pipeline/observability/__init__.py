"""
Observability Module - Phoenix + OpenTelemetry Integration

Traces embedding calls, store operations and pipeline runs. When
PHOENIX_ENABLED is unset or Phoenix is not installed every span is a
no-op, so the core never depends on tracing being available.

USAGE:
------
from vector_search_pipeline.observability import init_phoenix, get_tracer

init_phoenix()

tracer = get_tracer()
with tracer.start_span("store.search", attributes={"store.search.top_k": 1}) as span:
    ...
"""

from __future__ import annotations

import logging

from vector_search_pipeline.observability.config import (
    PhoenixConfig,
    get_config,
    reset_config,
)
from vector_search_pipeline.observability.tracer import (
    TracerProtocol,
    SpanProtocol,
    NoOpTracer,
    NoOpSpan,
    get_tracer,
    reset_tracer,
)

logger = logging.getLogger(__name__)

_phoenix_initialized = False


def init_phoenix(config: PhoenixConfig | None = None) -> bool:
    """
    Initialize Phoenix tracing. Call once at startup.

    Returns:
        True if Phoenix was initialized, False if disabled or unavailable
    """
    global _phoenix_initialized
    if _phoenix_initialized:
        return True

    config = config or get_config()

    if not config.enabled:
        logger.debug("Phoenix observability disabled")
        return False

    try:
        import phoenix as px
        from phoenix.otel import register
    except ImportError as e:
        logger.warning(f"Phoenix not installed, observability disabled: {e}")
        return False

    if config.collector_endpoint:
        logger.info(f"Phoenix connecting to remote: {config.collector_endpoint}")
    else:
        session = px.launch_app()
        logger.info(f"Phoenix UI available at: {session.url}")

    # Installs an SDK TracerProvider as the global provider
    register(
        project_name=config.project_name,
        endpoint=config.collector_endpoint,
        set_global_tracer_provider=True,
    )

    try:
        from openinference.instrumentation.openai import OpenAIInstrumentor

        OpenAIInstrumentor().instrument()
        logger.info("Registered instrumentors: openai")
    except ImportError:
        logger.debug("OpenAI instrumentor not available")

    reset_tracer()
    _phoenix_initialized = True
    return True


def shutdown_phoenix() -> None:
    """Flush spans and reset tracing state."""
    global _phoenix_initialized

    if not _phoenix_initialized:
        return

    from opentelemetry import trace

    provider = trace.get_tracer_provider()
    if hasattr(provider, "shutdown"):
        provider.shutdown()

    reset_tracer()
    reset_config()
    _phoenix_initialized = False


__all__ = [
    "init_phoenix",
    "shutdown_phoenix",
    "PhoenixConfig",
    "get_config",
    "reset_config",
    "TracerProtocol",
    "SpanProtocol",
    "NoOpTracer",
    "NoOpSpan",
    "get_tracer",
    "reset_tracer",
]
