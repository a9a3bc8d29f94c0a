"""
Summary statistics over an extraction result.

Thresholds:
- completed: has a value and confidence > 0.3
- gap: no value, or confidence <= 0.3
- low confidence: has a value and 0.3 < confidence < 0.7
- high confidence: confidence >= 0.7
"""

from dataclasses import asdict, dataclass

from esrs_extraction_pipeline.schemas import ExtractionResult, MetricExtraction

GAP_THRESHOLD = 0.3
HIGH_CONFIDENCE_THRESHOLD = 0.7


def confidence_badge(confidence: float) -> str:
    """Label shown next to a value: High, Medium, Low or Gap."""
    if confidence >= 0.8:
        return "High"
    if confidence >= 0.5:
        return "Medium"
    if confidence > 0:
        return "Low"
    return "Gap"


def is_completed(extraction: MetricExtraction) -> bool:
    return bool(extraction.value) and extraction.confidence > GAP_THRESHOLD


@dataclass
class ResultSummary:
    """Dashboard numbers for one run."""
    total: int
    completed: int
    gaps: int
    low_confidence: int
    high_confidence: int
    average_confidence: float
    completion_rate: float  # percent
    processing_time_ms: float
    total_chunks: int
    cancelled: bool

    def to_dict(self) -> dict:
        return asdict(self)


def summarize(result: ExtractionResult) -> ResultSummary:
    extractions = result.extractions
    total = len(extractions)

    completed = sum(1 for e in extractions if is_completed(e))
    low = sum(
        1 for e in extractions
        if e.value and GAP_THRESHOLD < e.confidence < HIGH_CONFIDENCE_THRESHOLD
    )
    high = sum(1 for e in extractions if e.confidence >= HIGH_CONFIDENCE_THRESHOLD)

    return ResultSummary(
        total=total,
        completed=completed,
        gaps=total - completed,
        low_confidence=low,
        high_confidence=high,
        average_confidence=(sum(e.confidence for e in extractions) / total) if total else 0.0,
        completion_rate=(completed / total * 100) if total else 0.0,
        processing_time_ms=result.processing_time_ms,
        total_chunks=result.total_chunks,
        cancelled=result.cancelled,
    )
