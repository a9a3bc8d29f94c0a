"""
MetricExtractor - runs the extraction graph for one metric at a time.

Whatever happens inside the graph, extract() returns a MetricExtraction.
Exceptions raised by the embedding model, the QA model or validation are
caught here and turned into a failed extraction (confidence 0, no value).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from esrs_extraction_pipeline.extraction.graph import build_extraction_graph
from esrs_extraction_pipeline.extraction.state import create_initial_state
from esrs_extraction_pipeline.observability import get_tracer
from esrs_extraction_pipeline.observability.attributes import (
    METRIC_ID,
    METRIC_PRIORITY,
    metric_result_attributes,
)
from esrs_extraction_pipeline.schemas import MetricExtraction

if TYPE_CHECKING:
    from esrs_extraction_pipeline.catalog import MetricDefinition
    from esrs_extraction_pipeline.core import QAModel
    from esrs_extraction_pipeline.observability import TracerProtocol
    from esrs_extraction_pipeline.retrieval import EmbeddingIndex

logger = logging.getLogger(__name__)


def failed_extraction(metric_id: str, error: BaseException) -> MetricExtraction:
    return MetricExtraction(
        metric_id=metric_id,
        confidence=0.0,
        explanation=f"Extraction failed: {error}",
    )


class MetricExtractor:
    """
    Per-metric retrieval -> QA -> parse -> evidence pipeline.

    The index must be fully built before the first extract() call; the
    extractor only reads it.
    """

    def __init__(
        self,
        index: EmbeddingIndex,
        qa: QAModel,
        top_k: int = 3,
        max_context_chars: int = 4000,
        tracer: TracerProtocol | None = None,
    ):
        self._graph = build_extraction_graph(index, qa, top_k, max_context_chars)
        self._tracer = tracer or get_tracer()

    def extract(self, metric: MetricDefinition) -> MetricExtraction:
        attributes = {METRIC_ID: metric.id, METRIC_PRIORITY: metric.priority}
        error = None
        with self._tracer.start_span("metric_extraction", attributes=attributes) as span:
            try:
                final_state = self._graph.invoke(create_initial_state(metric))
                extraction = final_state["extraction"]
                if extraction is None:
                    raise RuntimeError("extraction graph finished without a result")
            except Exception as e:
                logger.error(f"Extraction failed for {metric.id}: {e}")
                span.record_exception(e)
                span.set_status("error", str(e))
                extraction = failed_extraction(metric.id, e)
                error = str(e)

            span.set_attributes(metric_result_attributes(
                metric_id=metric.id,
                confidence=extraction.confidence,
                has_value=extraction.value is not None,
                evidence_chunk_id=extraction.evidence_chunk.id if extraction.evidence_chunk else None,
                error=error,
            ))
        return extraction
