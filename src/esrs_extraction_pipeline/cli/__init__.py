"""
CLI module - command-line interface.

Provides entry points for:
- Extracting metrics from documents (esrs-extract run)
- Listing the metric catalog (esrs-extract metrics)
"""

from esrs_extraction_pipeline.cli.commands import (
    main,
    run_extract_cli,
    run_metrics_cli,
)

__all__ = [
    "main",
    "run_extract_cli",
    "run_metrics_cli",
]
