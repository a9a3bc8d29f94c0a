"""
Catalog Package

The ESRS metrics the pipeline extracts.

Example:
    from esrs_extraction_pipeline.catalog import (
        MetricDefinition,
        get_metric_by_id,
        get_priority_metrics,
    )
"""

from esrs_extraction_pipeline.catalog.esrs_metrics import (
    MetricDefinition,
    ESRS_METRICS,
    get_all_metrics,
    get_metric_by_id,
    get_priority_metrics,
)

__all__ = [
    "MetricDefinition",
    "ESRS_METRICS",
    "get_all_metrics",
    "get_metric_by_id",
    "get_priority_metrics",
]
