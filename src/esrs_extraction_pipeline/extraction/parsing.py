"""
Turning a QA answer into a value, and finding the chunk it came from.
"""

import re

from esrs_extraction_pipeline.retrieval import IndexHit

_QUALIFIERS = re.compile(r"^(?:(?:the|total|approximately|about)\s+)+", re.IGNORECASE)
_NUMBER_WITH_UNIT = re.compile(r"(\d+(?:,\d+)*(?:\.\d+)?)\s*([a-zA-Z%][a-zA-Z0-9%]*)?")


def parse_metric_answer(
    answer: str, default_unit: str | None = None
) -> tuple[str | None, str | None]:
    """
    Split an answer such as "approximately 1,250 tCO2e" into value and units.

    The first number in the answer wins. Thousands separators are dropped
    from the value; the unit falls back to default_unit when the answer has
    none. An answer without a number is returned whole, with no units.

    Returns:
        (value, units); value is None only for a blank answer
    """
    cleaned = _QUALIFIERS.sub("", answer.strip()).strip()

    match = _NUMBER_WITH_UNIT.search(cleaned)
    if match is None:
        return (cleaned or None), None

    value = match.group(1).replace(",", "")
    units = match.group(2) or default_unit
    return value, units


def find_evidence_hit(answer: str, hits: list[IndexHit]) -> IndexHit | None:
    """
    First hit (in similarity order) containing the answer verbatim.

    Falls back to the most similar hit; None only when there are no hits.
    """
    if not hits:
        return None
    if answer:
        for hit in hits:
            if answer in hit.text:
                return hit
    return hits[0]


def format_confidence_explanation(score: float) -> str:
    return f"Extracted from context with {score * 100:.1f}% confidence"
