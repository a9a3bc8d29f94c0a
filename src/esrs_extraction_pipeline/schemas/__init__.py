"""
Schemas module - the data contract of the pipeline.
"""

from esrs_extraction_pipeline.schemas.extraction import (
    DocumentChunk,
    ProcessedDocument,
    MetricExtraction,
    ExtractionResult,
)

__all__ = [
    "DocumentChunk",
    "ProcessedDocument",
    "MetricExtraction",
    "ExtractionResult",
]
