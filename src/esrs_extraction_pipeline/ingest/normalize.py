"""
Text normalisation applied to extracted document text before chunking.

normalize() is pure and idempotent: normalize(normalize(x)) == normalize(x).
Each rule only ever removes whitespace or rewrites a number/unit token into
a form none of the rules match again, and the rules run in an order where a
later rule cannot produce input for an earlier one.

Rules, in order:
1. Words hyphenated across a line break are rejoined
2. Horizontal whitespace runs become one space; spaces around line breaks go
3. Three or more line breaks become exactly two (paragraph break)
4. Currency: "€ 1,000" and "1,000 €" become "€1,000" (a trailing "€" left
   in front of a line-break hyphen stays put, rule 1 has already run)
5. "1,250k tCO2" style quantities expand to "1250000 tCO2e"
6. "12 %" becomes "12%"
"""

from __future__ import annotations

import re

_HYPHENATED_BREAK = re.compile(r"(?<=\w)-[^\S\n]*\n\s*(?=\w)")
_HORIZONTAL_SPACE = re.compile(r"[^\S\n]+")
_SPACE_AROUND_NEWLINE = re.compile(r" *\n *")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")

_NUMBER = r"\d+(?:,\d+)*(?:\.\d+)?"
_CURRENCY_LEADING = re.compile(r"€ +(?=\d)")
_CURRENCY_TRAILING = re.compile(rf"(?<![\w€.,])({_NUMBER}) ?€(?!\d|-[^\S\n]*(?:\n|$))")

_KILO_CO2 = re.compile(
    r"(?<![\d,])(\d{1,3}(?:,\d{3})+)\s*k\s*(tco2e?|co2e?|tonnes?)(?![a-z0-9])",
    re.IGNORECASE,
)
_PERCENT_SPACING = re.compile(r"(?<=\d) +%")


def _canonical_co2_unit(unit: str) -> str:
    unit = unit.lower()
    if unit.startswith("t") and "co2" in unit:
        return "tCO2e"
    if unit.startswith("co2"):
        return "CO2e"
    return "tonnes"


def _expand_kilo_quantity(match: re.Match) -> str:
    value = int(match.group(1).replace(",", "")) * 1000
    return f"{value} {_canonical_co2_unit(match.group(2))}"


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace while keeping paragraph structure."""
    text = _HORIZONTAL_SPACE.sub(" ", text)
    text = _SPACE_AROUND_NEWLINE.sub("\n", text)
    return _EXCESS_NEWLINES.sub("\n\n", text)


def normalize(text: str) -> str:
    """
    Clean up raw extracted text.

    Args:
        text: Text as produced by a document reader

    Returns:
        Normalised text, stripped of leading/trailing whitespace
    """
    text = _HYPHENATED_BREAK.sub("", text)
    text = normalize_whitespace(text)
    text = _CURRENCY_LEADING.sub("€", text)
    text = _CURRENCY_TRAILING.sub(r"€\1", text)
    text = _KILO_CO2.sub(_expand_kilo_quantity, text)
    text = _PERCENT_SPACING.sub("%", text)
    return text.strip()
