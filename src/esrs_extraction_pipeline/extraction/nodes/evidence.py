"""
Evidence node - attributes the answer to a retrieved chunk and builds the
final MetricExtraction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from esrs_extraction_pipeline.extraction.parsing import (
    find_evidence_hit,
    format_confidence_explanation,
)
from esrs_extraction_pipeline.schemas import MetricExtraction

if TYPE_CHECKING:
    from esrs_extraction_pipeline.extraction.state import MetricState
    from esrs_extraction_pipeline.retrieval import EmbeddingIndex


def create_attribute_node(index: EmbeddingIndex) -> Callable[[MetricState], dict]:
    """Factory that creates the evidence node; the index resolves chunk ids."""

    def attribute_evidence(state: MetricState) -> dict:
        """
        Reads from state:
        - metric, hits, qa_answer, value, units

        Writes to state:
        - extraction
        """
        answer = state["qa_answer"]
        hit = find_evidence_hit(answer.text, state["hits"])
        chunk = index.chunk(hit.chunk_id) if hit is not None else None

        extraction = MetricExtraction(
            metric_id=state["metric"].id,
            value=state["value"],
            units=state["units"],
            confidence=answer.score,
            evidence_chunk=chunk,
            evidence_span=answer.text,
            is_modelled=False,
            explanation=format_confidence_explanation(answer.score),
        )
        return {"extraction": extraction}

    return attribute_evidence
