"""
JSON and Excel export of extraction results.

Values and evidence are exported exactly as extracted: confidence stays a
float and evidence_span is the literal QA answer.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from esrs_extraction_pipeline.catalog import get_metric_by_id
from esrs_extraction_pipeline.export.summary import confidence_badge, summarize
from esrs_extraction_pipeline.schemas import ExtractionResult

logger = logging.getLogger(__name__)

EXCEL_COLUMNS = [
    "Metric ID",
    "Metric",
    "Category",
    "Regulation",
    "Value",
    "Units",
    "Confidence",
    "Status",
    "Evidence",
    "Source",
    "Page",
    "Explanation",
]


def to_dict(result: ExtractionResult) -> dict:
    """JSON-ready dict: the result plus a summary and export timestamp."""
    return {
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "summary": summarize(result).to_dict(),
        **result.model_dump(mode="json"),
    }


def to_json(result: ExtractionResult, indent: int = 2) -> str:
    return json.dumps(to_dict(result), indent=indent)


def to_rows(result: ExtractionResult) -> list[dict]:
    """One flat row per extraction, labelled from the catalog."""
    rows = []
    for extraction in result.extractions:
        metric = get_metric_by_id(extraction.metric_id)
        chunk = extraction.evidence_chunk
        rows.append({
            "Metric ID": extraction.metric_id,
            "Metric": metric.label if metric else extraction.metric_id,
            "Category": metric.category if metric else None,
            "Regulation": metric.regulation if metric else None,
            "Value": extraction.value,
            "Units": extraction.units,
            "Confidence": extraction.confidence,
            "Status": confidence_badge(extraction.confidence),
            "Evidence": extraction.evidence_span,
            "Source": chunk.source if chunk else None,
            "Page": chunk.page if chunk else None,
            "Explanation": extraction.explanation,
        })
    return rows


def to_dataframe(result: ExtractionResult) -> pd.DataFrame:
    return pd.DataFrame(to_rows(result), columns=EXCEL_COLUMNS)


def to_excel(result: ExtractionResult, path: str | Path) -> Path:
    """
    Write a workbook with a "Metrics" sheet and a "Summary" sheet.

    Returns:
        The path written
    """
    path = Path(path)
    summary = summarize(result).to_dict()
    summary_df = pd.DataFrame(list(summary.items()), columns=["Statistic", "Value"])

    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        to_dataframe(result).to_excel(writer, sheet_name="Metrics", index=False)
        summary_df.to_excel(writer, sheet_name="Summary", index=False)

    logger.info(f"Excel report written to {path}")
    return path
