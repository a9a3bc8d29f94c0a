"""
Observability Module - Phoenix + OpenTelemetry Integration

Traces extraction runs with Arize Phoenix and OpenInference
auto-instrumentation of the OpenAI client.

USAGE:
------
# At application startup:
from esrs_extraction_pipeline.observability import init_phoenix

init_phoenix()  # Starts local Phoenix UI if PHOENIX_ENABLED=true

# In code that needs tracing:
from esrs_extraction_pipeline.observability import get_tracer

tracer = get_tracer()
with tracer.start_span("metric_extraction", attributes={"extraction.metric.id": "E1-1"}) as span:
    ...
"""

from __future__ import annotations

import logging

from esrs_extraction_pipeline.observability.config import (
    PhoenixConfig,
    get_config,
    reset_config,
)
from esrs_extraction_pipeline.observability.tracer import (
    TracerProtocol,
    SpanProtocol,
    NoOpTracer,
    NoOpSpan,
    get_tracer,
    reset_tracer,
)
from esrs_extraction_pipeline.observability.attributes import (
    # GenAI
    GEN_AI_SYSTEM,
    GEN_AI_REQUEST_MODEL,
    # Run
    EXTRACTION_DOCUMENT_COUNT,
    EXTRACTION_CHUNK_COUNT,
    EXTRACTION_METRIC_COUNT,
    EXTRACTION_CANCELLED,
    # Metric
    METRIC_ID,
    METRIC_PRIORITY,
    METRIC_CONFIDENCE,
    # Helpers
    index_build_attributes,
    metric_result_attributes,
    extraction_run_attributes,
)

logger = logging.getLogger(__name__)

_phoenix_initialized = False


def init_phoenix(config: PhoenixConfig | None = None) -> bool:
    """
    Initialize Phoenix observability.

    Call once at application startup. Sets up the OpenTelemetry tracer
    provider and registers auto-instrumentors.

    Args:
        config: Optional config (uses env vars if not provided)

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
        from opentelemetry import trace
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
    except ImportError as e:
        logger.warning(f"Phoenix not installed, observability disabled: {e}")
        return False

    if config.collector_endpoint:
        endpoint = config.collector_endpoint
        logger.info(f"Phoenix connecting to remote: {endpoint}")
    else:
        session = px.launch_app()
        endpoint = f"{session.url.rstrip('/')}/v1/traces"
        logger.info(f"Phoenix UI available at: {session.url}")

    provider = TracerProvider(
        resource=Resource.create({"openinference.project.name": config.project_name})
    )
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    trace.set_tracer_provider(provider)

    from esrs_extraction_pipeline.observability.instrumentation import register_instrumentors
    register_instrumentors()

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
    # Initialization
    "init_phoenix",
    "shutdown_phoenix",
    # Config
    "PhoenixConfig",
    "get_config",
    "reset_config",
    # Tracer
    "TracerProtocol",
    "SpanProtocol",
    "NoOpTracer",
    "NoOpSpan",
    "get_tracer",
    "reset_tracer",
    # Attributes
    "GEN_AI_SYSTEM",
    "GEN_AI_REQUEST_MODEL",
    "EXTRACTION_DOCUMENT_COUNT",
    "EXTRACTION_CHUNK_COUNT",
    "EXTRACTION_METRIC_COUNT",
    "EXTRACTION_CANCELLED",
    "METRIC_ID",
    "METRIC_PRIORITY",
    "METRIC_CONFIDENCE",
    # Helpers
    "index_build_attributes",
    "metric_result_attributes",
    "extraction_run_attributes",
]
