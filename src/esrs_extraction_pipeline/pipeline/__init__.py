"""
Pipeline module - orchestration of a full extraction run.
"""

from esrs_extraction_pipeline.pipeline.progress import (
    EMBEDDING_PHASE,
    EXTRACTION_PHASE,
    ProgressEvent,
    ProgressCallback,
    ProgressEmitter,
)
from esrs_extraction_pipeline.pipeline.orchestrator import (
    BatchRun,
    ExtractionPipeline,
    IndexBuild,
    flatten_chunks,
    select_metrics,
)

__all__ = [
    "EMBEDDING_PHASE",
    "EXTRACTION_PHASE",
    "ProgressEvent",
    "ProgressCallback",
    "ProgressEmitter",
    "BatchRun",
    "ExtractionPipeline",
    "IndexBuild",
    "flatten_chunks",
    "select_metrics",
]
