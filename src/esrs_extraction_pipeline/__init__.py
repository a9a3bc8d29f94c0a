"""
ESRS metric extraction pipeline.

Turns sustainability reports (PDF, DOCX, XLSX, CSV, TXT) into ESRS metric
values, each with a confidence score and the literal evidence it came from.

USAGE:
------
from esrs_extraction_pipeline import ExtractionPipeline, get_model_handle

with get_model_handle(use_mock=True) as models:
    run = ExtractionPipeline(models).run_batch(["annual_report.pdf"])

for extraction in run.result.extractions:
    print(extraction.metric_id, extraction.value, extraction.units)
"""

from esrs_extraction_pipeline.config import PipelineConfig, get_config, reset_config
from esrs_extraction_pipeline.errors import (
    ExtractionPipelineError,
    NoDocumentsError,
    ModelInitializationError,
    UnsupportedFormatError,
    DocumentReadError,
    IndexFrozenError,
    EmbeddingDimensionError,
)
from esrs_extraction_pipeline.schemas import (
    DocumentChunk,
    ProcessedDocument,
    MetricExtraction,
    ExtractionResult,
)
from esrs_extraction_pipeline.catalog import MetricDefinition, ESRS_METRICS
from esrs_extraction_pipeline.models import ModelHandle, get_model_handle
from esrs_extraction_pipeline.pipeline import (
    ExtractionPipeline,
    ProgressEmitter,
    ProgressEvent,
)

__version__ = "0.1.0"

__all__ = [
    "PipelineConfig",
    "get_config",
    "reset_config",
    "ExtractionPipelineError",
    "NoDocumentsError",
    "ModelInitializationError",
    "UnsupportedFormatError",
    "DocumentReadError",
    "IndexFrozenError",
    "EmbeddingDimensionError",
    "DocumentChunk",
    "ProcessedDocument",
    "MetricExtraction",
    "ExtractionResult",
    "MetricDefinition",
    "ESRS_METRICS",
    "ModelHandle",
    "get_model_handle",
    "ExtractionPipeline",
    "ProgressEmitter",
    "ProgressEvent",
]
