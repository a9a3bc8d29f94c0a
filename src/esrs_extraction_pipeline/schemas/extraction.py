"""
Structured schemas for documents, chunks and extracted metrics.

These Pydantic models are the contract between the pipeline and everything
around it: document readers produce ProcessedDocument, the orchestrator
produces ExtractionResult, and the exporters serialise it unchanged.

Confidence is kept as a float all the way to export; evidence text is never
rewritten after extraction so it stays usable as an audit citation.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DocumentChunk(BaseModel):
    """
    A bounded span of normalised document text - the unit of retrieval.

    Immutable once created. The id is unique within a processing run.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique chunk id within a run")
    text: str = Field(description="Normalised chunk text")
    source: str = Field(description="Originating document name")
    page: int | None = Field(default=None, description="1-based page or sheet number")
    start_char: int | None = Field(default=None, ge=0)
    end_char: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _check_offsets(self) -> "DocumentChunk":
        if (
            self.start_char is not None
            and self.end_char is not None
            and self.start_char > self.end_char
        ):
            raise ValueError(
                f"start_char ({self.start_char}) must not exceed end_char ({self.end_char})"
            )
        return self


class ProcessedDocument(BaseModel):
    """One input file after reading, normalisation and chunking."""

    id: str = Field(description="Content hash, doubles as the document id")
    filename: str
    mime_type: str
    content_hash: str = Field(description="SHA-256 of the raw file bytes")
    chunks: list[DocumentChunk] = Field(default_factory=list)
    total_pages: int | None = None
    total_chars: int = 0


class MetricExtraction(BaseModel):
    """
    The extracted value for a single metric.

    A data gap is encoded as confidence == 0 with no value; the explanation
    says why (no context, model error, ...).
    """

    metric_id: str
    value: str | None = None
    units: str | None = None
    confidence: float = Field(ge=0.0, le=1.0, description="QA model score")
    evidence_chunk: DocumentChunk | None = None
    evidence_span: str | None = Field(
        default=None, description="Literal answer text returned by the QA model"
    )
    is_modelled: bool = False
    explanation: str | None = None

    @property
    def is_gap(self) -> bool:
        return self.value is None or self.confidence == 0.0


class ExtractionResult(BaseModel):
    """Aggregate output of one extraction run."""

    extractions: list[MetricExtraction] = Field(default_factory=list)
    processing_time_ms: float = 0.0
    total_chunks: int = 0
    embedding_failures: int = 0
    cancelled: bool = False

    def get(self, metric_id: str) -> MetricExtraction | None:
        for extraction in self.extractions:
            if extraction.metric_id == metric_id:
                return extraction
        return None
