"""
Index entry model for the retrieval system.

Single responsibility: Define the structure of the vectors
held by EmbeddingIndex.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class EmbeddingVector:
    """
    One successfully embedded chunk.

    Chunks whose embedding failed have no EmbeddingVector at all.
    """
    chunk_id: str
    vector: np.ndarray
    text: str

    @property
    def dimensions(self) -> int:
        return int(self.vector.shape[0])

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization (vector omitted)."""
        return {
            "chunk_id": self.chunk_id,
            "text": self.text,
            "dimensions": self.dimensions,
        }


@dataclass(frozen=True)
class IndexHit:
    """A chunk returned by EmbeddingIndex.query with its similarity."""
    chunk_id: str
    text: str
    score: float
