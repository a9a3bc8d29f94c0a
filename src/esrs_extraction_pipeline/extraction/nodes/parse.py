"""
Parse node - turns the QA answer text into value and units.

This is a PURE NODE with NO dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from esrs_extraction_pipeline.extraction.parsing import parse_metric_answer

if TYPE_CHECKING:
    from esrs_extraction_pipeline.extraction.state import MetricState


def parse_answer(state: MetricState) -> dict:
    """
    Reads from state:
    - qa_answer, metric

    Writes to state:
    - value, units
    """
    value, units = parse_metric_answer(state["qa_answer"].text, state["metric"].unit)
    return {"value": value, "units": units}
