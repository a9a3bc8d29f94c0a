"""
Core module - shared protocols and types for the entire system.

USAGE:
------
from esrs_extraction_pipeline.core import EmbeddingProvider, QAModel

class MyEmbeddings:
    '''Implements EmbeddingProvider protocol.'''
    ...
"""

from esrs_extraction_pipeline.core.protocols import (
    # Protocols
    EmbeddingProvider,
    QAModel,
    AbortSignal,
    # Data classes
    QAAnswer,
)
from esrs_extraction_pipeline.core.outcomes import (
    Success,
    Failure,
    Outcome,
    BatchReport,
)

__all__ = [
    # Protocols
    "EmbeddingProvider",
    "QAModel",
    "AbortSignal",
    # Data classes
    "QAAnswer",
    # Outcomes
    "Success",
    "Failure",
    "Outcome",
    "BatchReport",
]
