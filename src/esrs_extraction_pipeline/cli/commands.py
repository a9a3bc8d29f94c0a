"""
CLI commands - entry points for extraction runs.

Each command follows a consistent pattern:
1. Parse arguments
2. Load environment
3. Run the pipeline
4. Print results
5. Return exit code

Exit codes: 0 success, 1 fatal pipeline error, 130 interrupted.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys

from dotenv import load_dotenv


def _load_env() -> None:
    """Load environment variables from .env file."""
    load_dotenv()


def _configure_logging(quiet: bool, verbose: bool) -> None:
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_progress(event) -> None:
    print(f"  [{event.phase:10}] {event.percent:3d}% {event.label}", file=sys.stderr)


def run_extract_cli(argv: list[str] | None = None) -> int:
    """CLI entry point for extracting metrics from files."""
    from esrs_extraction_pipeline.catalog import ESRS_METRICS, get_metric_by_id
    from esrs_extraction_pipeline.config import get_config
    from esrs_extraction_pipeline.errors import ModelInitializationError, NoDocumentsError
    from esrs_extraction_pipeline.export import confidence_badge, summarize, to_excel, to_json
    from esrs_extraction_pipeline.models import get_model_handle
    from esrs_extraction_pipeline.observability import init_phoenix, shutdown_phoenix
    from esrs_extraction_pipeline.pipeline import ExtractionPipeline, ProgressEmitter

    _load_env()

    parser = argparse.ArgumentParser(
        prog="esrs-extract run",
        description="Extract ESRS metrics from documents",
    )
    parser.add_argument("files", nargs="+", help="PDF, DOCX, XLSX, CSV or TXT files")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--output", metavar="PATH", help="Write the JSON result to PATH")
    parser.add_argument("--excel", metavar="PATH", help="Write an Excel report to PATH")
    parser.add_argument("--mock", action="store_true", help="Use offline models (no API calls)")
    parser.add_argument(
        "--all-metrics",
        action="store_true",
        help="Extract every catalog metric, not only priority <= threshold",
    )
    parser.add_argument("--quiet", action="store_true", help="Minimal output")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    _configure_logging(args.quiet, args.verbose)

    config = get_config()
    if args.mock:
        config = dataclasses.replace(config, use_mock_models=True)
    if args.all_metrics:
        config = dataclasses.replace(
            config, priority_threshold=max(m.priority for m in ESRS_METRICS)
        )

    progress = ProgressEmitter()
    if not (args.quiet or args.json):
        progress.subscribe(_print_progress)

    init_phoenix()
    models = get_model_handle(
        use_mock=config.use_mock_models,
        embedding_model=config.embedding_model,
        qa_model=config.qa_model,
        timeout=config.openai_timeout_seconds,
    )
    try:
        with models:
            run = ExtractionPipeline(models, config=config, progress=progress).run_batch(args.files)
    except (NoDocumentsError, ModelInitializationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        shutdown_phoenix()

    result = run.result

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(to_json(result))
    if args.excel:
        to_excel(result, args.excel)

    if args.json:
        print(to_json(result))
        return 0

    print("=" * 60)
    print("ESRS METRIC EXTRACTION")
    print("=" * 60)

    for failure in run.documents.failed:
        print(f"  [SKIPPED] {failure.item_id}: {failure.error_message}")

    if not args.quiet:
        for extraction in result.extractions:
            metric = get_metric_by_id(extraction.metric_id)
            label = metric.label if metric else extraction.metric_id
            badge = confidence_badge(extraction.confidence)
            if extraction.value:
                shown = f"{extraction.value} {extraction.units or ''}".strip()
            else:
                shown = extraction.explanation or "-"
            print(f"  [{badge:6}] {extraction.metric_id:5} {label}: {shown}")

    summary = summarize(result)
    print(f"\nCompleted: {summary.completed}/{summary.total} ({summary.completion_rate:.1f}%)")
    print(f"Average confidence: {summary.average_confidence:.1%}")
    print(f"Chunks: {summary.total_chunks}  Time: {summary.processing_time_ms:.0f}ms")
    if result.cancelled:
        print("\n>>> RUN CANCELLED - PARTIAL RESULTS <<<")
    return 0


def run_metrics_cli(argv: list[str] | None = None) -> int:
    """CLI entry point listing the metric catalog."""
    from esrs_extraction_pipeline.catalog import get_all_metrics

    parser = argparse.ArgumentParser(
        prog="esrs-extract metrics",
        description="List the ESRS metric catalog",
    )
    parser.add_argument(
        "--priority",
        type=int,
        default=None,
        help="Only list metrics with priority <= N",
    )
    args = parser.parse_args(argv)

    for metric in get_all_metrics():
        if args.priority is not None and metric.priority > args.priority:
            continue
        unit = f" [{metric.unit}]" if metric.unit else ""
        print(f"  {metric.id:5} P{metric.priority}  {metric.label}{unit}  ({metric.regulation})")
    return 0


def main() -> int:
    """
    Main CLI entry point with subcommands.

    Usage:
        esrs-extract run report.pdf data.xlsx    # Extract metrics
        esrs-extract run --mock --json notes.txt # Offline, JSON output
        esrs-extract metrics                     # List the catalog
    """
    parser = argparse.ArgumentParser(
        description="ESRS metric extraction pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  run       Extract metrics from documents
  metrics   List the metric catalog

Examples:
  esrs-extract run report.pdf --excel report.xlsx
  esrs-extract run --all-metrics --json *.pdf
        """,
    )
    parser.add_argument("command", choices=["run", "metrics"], help="Command to run")

    args, remaining = parser.parse_known_args()

    commands = {
        "run": run_extract_cli,
        "metrics": run_metrics_cli,
    }

    try:
        return commands[args.command](remaining)
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
