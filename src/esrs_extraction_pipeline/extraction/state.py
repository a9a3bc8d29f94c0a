"""
Extraction state definition - the data flowing through the LangGraph.

One state object per metric. Each node reads the keys it needs and
returns the keys it writes.
"""

from typing import TypedDict

from esrs_extraction_pipeline.catalog import MetricDefinition
from esrs_extraction_pipeline.core import QAAnswer
from esrs_extraction_pipeline.retrieval import IndexHit
from esrs_extraction_pipeline.schemas import MetricExtraction


class MetricState(TypedDict):
    """
    State for a single metric extraction.

    Input fields are set at invocation time.
    Intermediate fields are populated by nodes.
    The output field is always set when the graph reaches END.
    """

    # -------------------------------------------------------------------------
    # INPUT (set at invocation)
    # -------------------------------------------------------------------------
    metric: MetricDefinition

    # -------------------------------------------------------------------------
    # INTERMEDIATE (populated by nodes)
    # -------------------------------------------------------------------------
    search_query: str
    hits: list[IndexHit]
    context: str
    question: str
    qa_answer: QAAnswer | None
    value: str | None
    units: str | None

    # -------------------------------------------------------------------------
    # OUTPUT (final result)
    # -------------------------------------------------------------------------
    extraction: MetricExtraction | None

    # -------------------------------------------------------------------------
    # METRICS (for tracing)
    # -------------------------------------------------------------------------
    retrieval_latency_ms: float
    qa_latency_ms: float


def create_initial_state(metric: MetricDefinition) -> MetricState:
    """Create the state a metric extraction starts from."""
    return MetricState(
        metric=metric,
        search_query="",
        hits=[],
        context="",
        question="",
        qa_answer=None,
        value=None,
        units=None,
        extraction=None,
        retrieval_latency_ms=0,
        qa_latency_ms=0,
    )
