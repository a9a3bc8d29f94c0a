"""
Semantic Conventions for Span Attributes

Attribute keys follow the OpenTelemetry GenAI conventions for model calls
and use an extraction.* namespace for pipeline data.

Reference: https://opentelemetry.io/docs/specs/semconv/gen-ai/
"""

# ---------------------------------------------------------------------------
# GENAI NAMESPACE (OTel standard)
# ---------------------------------------------------------------------------

GEN_AI_SYSTEM = "gen_ai.system"  # "openai", "local"
GEN_AI_REQUEST_MODEL = "gen_ai.request.model"  # "gpt-4o-mini"


# ---------------------------------------------------------------------------
# EXTRACTION NAMESPACE (custom)
# ---------------------------------------------------------------------------

# Run level
EXTRACTION_DOCUMENT_COUNT = "extraction.document_count"
EXTRACTION_CHUNK_COUNT = "extraction.chunk_count"
EXTRACTION_METRIC_COUNT = "extraction.metric_count"
EXTRACTION_GAP_COUNT = "extraction.gap_count"
EXTRACTION_CANCELLED = "extraction.cancelled"
EXTRACTION_PROCESSING_TIME_MS = "extraction.processing_time_ms"

# Index build
INDEX_VECTOR_COUNT = "extraction.index.vector_count"
INDEX_EMBEDDING_FAILURES = "extraction.index.embedding_failures"
INDEX_WORKERS = "extraction.index.workers"

# Metric level
METRIC_ID = "extraction.metric.id"  # "E1-1"
METRIC_PRIORITY = "extraction.metric.priority"
METRIC_CONFIDENCE = "extraction.metric.confidence"
METRIC_HAS_VALUE = "extraction.metric.has_value"
METRIC_EVIDENCE_CHUNK_ID = "extraction.metric.evidence_chunk_id"
METRIC_ERROR = "extraction.metric.error"


# ---------------------------------------------------------------------------
# HELPER FUNCTIONS
# ---------------------------------------------------------------------------


def index_build_attributes(
    vector_count: int,
    embedding_failures: int,
    workers: int,
) -> dict:
    """Create attributes dict for an index build span."""
    return {
        INDEX_VECTOR_COUNT: vector_count,
        INDEX_EMBEDDING_FAILURES: embedding_failures,
        INDEX_WORKERS: workers,
    }


def metric_result_attributes(
    metric_id: str,
    confidence: float,
    has_value: bool,
    evidence_chunk_id: str | None = None,
    error: str | None = None,
) -> dict:
    """Create attributes dict for a metric extraction span."""
    attrs = {
        METRIC_ID: metric_id,
        METRIC_CONFIDENCE: confidence,
        METRIC_HAS_VALUE: has_value,
    }
    if evidence_chunk_id:
        attrs[METRIC_EVIDENCE_CHUNK_ID] = evidence_chunk_id
    if error:
        attrs[METRIC_ERROR] = error
    return attrs


def extraction_run_attributes(
    chunk_count: int,
    metric_count: int,
    gap_count: int,
    cancelled: bool,
    processing_time_ms: float,
) -> dict:
    """Create attributes dict for a whole extraction run."""
    return {
        EXTRACTION_CHUNK_COUNT: chunk_count,
        EXTRACTION_METRIC_COUNT: metric_count,
        EXTRACTION_GAP_COUNT: gap_count,
        EXTRACTION_CANCELLED: cancelled,
        EXTRACTION_PROCESSING_TIME_MS: processing_time_ms,
    }
