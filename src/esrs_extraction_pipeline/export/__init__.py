"""
Export module - results for reporting systems and auditors.

- to_json() / to_dict(): full result as JSON
- to_excel() / to_dataframe(): tabular report via pandas
- summarize() / confidence_badge(): dashboard statistics
"""

from esrs_extraction_pipeline.export.summary import (
    GAP_THRESHOLD,
    HIGH_CONFIDENCE_THRESHOLD,
    ResultSummary,
    confidence_badge,
    is_completed,
    summarize,
)
from esrs_extraction_pipeline.export.report import (
    EXCEL_COLUMNS,
    to_dict,
    to_json,
    to_rows,
    to_dataframe,
    to_excel,
)

__all__ = [
    "GAP_THRESHOLD",
    "HIGH_CONFIDENCE_THRESHOLD",
    "ResultSummary",
    "confidence_badge",
    "is_completed",
    "summarize",
    "EXCEL_COLUMNS",
    "to_dict",
    "to_json",
    "to_rows",
    "to_dataframe",
    "to_excel",
]
