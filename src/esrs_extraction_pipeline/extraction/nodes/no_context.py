"""
No-context node - terminal failure when retrieval found nothing to read.

This is a PURE NODE with NO dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from esrs_extraction_pipeline.schemas import MetricExtraction

if TYPE_CHECKING:
    from esrs_extraction_pipeline.extraction.state import MetricState

NO_CONTEXT_EXPLANATION = "No relevant context found"


def no_context(state: MetricState) -> dict:
    """
    Writes to state:
    - extraction (confidence 0, no value)
    """
    return {
        "extraction": MetricExtraction(
            metric_id=state["metric"].id,
            confidence=0.0,
            explanation=NO_CONTEXT_EXPLANATION,
        )
    }
