"""
Exception hierarchy for the extraction pipeline.

Only STRUCTURAL failures are raised to the caller:
- NoDocumentsError: nothing survived document reading
- ModelInitializationError: the embedding / QA models could not be loaded
- EmbeddingDimensionError: vectors of different length were compared

Per-item failures (one document, one chunk, one metric) are encoded as data
instead; see core.outcomes and MetricExtraction.explanation.
"""


class ExtractionPipelineError(Exception):
    """Base class for every error raised by this package."""


class NoDocumentsError(ExtractionPipelineError):
    """No chunks were produced across all input documents."""


class ModelInitializationError(ExtractionPipelineError):
    """The embedding or QA model failed to load."""


class UnsupportedFormatError(ExtractionPipelineError):
    """A document's format tag has no registered reader."""

    def __init__(self, filename: str, detail: str = ""):
        self.filename = filename
        message = (
            f"Unsupported file type for {filename}"
            f"{f' ({detail})' if detail else ''}. "
            "Supported formats: PDF, DOCX, XLSX, CSV, TXT"
        )
        super().__init__(message)


class DocumentReadError(ExtractionPipelineError):
    """A reader failed while parsing a supported document."""


class IndexFrozenError(ExtractionPipelineError):
    """A write was attempted on an index after the build phase."""


class EmbeddingDimensionError(ExtractionPipelineError, ValueError):
    """Two vectors of different length were compared."""

    def __init__(self, left: int, right: int):
        self.left = left
        self.right = right
        super().__init__(f"Vectors must have the same length (got {left} and {right})")
