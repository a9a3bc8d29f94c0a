"""
In-memory embedding index over document chunks.

The index is built once per run (add / add_vector), then frozen and only
queried. Similarity is cosine, computed with numpy; every query compares
against every stored vector.
"""

from __future__ import annotations

import logging

import numpy as np

from esrs_extraction_pipeline.core import EmbeddingProvider, Failure, Outcome, Success
from esrs_extraction_pipeline.errors import EmbeddingDimensionError, IndexFrozenError
from esrs_extraction_pipeline.retrieval.vector import EmbeddingVector, IndexHit
from esrs_extraction_pipeline.schemas import DocumentChunk

logger = logging.getLogger(__name__)


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """
    Cosine similarity of two vectors.

    Raises EmbeddingDimensionError when the lengths differ. A zero vector
    has similarity 0.0 with everything.
    """
    a = np.asarray(a, dtype=np.float64).ravel()
    b = np.asarray(b, dtype=np.float64).ravel()
    if a.shape[0] != b.shape[0]:
        raise EmbeddingDimensionError(a.shape[0], b.shape[0])

    norm = np.linalg.norm(a) * np.linalg.norm(b)
    if norm == 0:
        return 0.0
    return float(np.dot(a, b) / norm)


class EmbeddingIndex:
    """
    Cosine-similarity index over embedded chunks.

    Dependencies are INJECTED: the embedding provider is passed in, so tests
    run against MockEmbeddings or a MagicMock.
    """

    def __init__(self, embeddings: EmbeddingProvider):
        self._embeddings = embeddings
        self._vectors: list[EmbeddingVector] = []
        self._chunks: dict[str, DocumentChunk] = {}
        self._frozen = False

    def __len__(self) -> int:
        return len(self._vectors)

    @property
    def vectors(self) -> list[EmbeddingVector]:
        return list(self._vectors)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def chunk(self, chunk_id: str) -> DocumentChunk | None:
        return self._chunks.get(chunk_id)

    def freeze(self) -> None:
        """End the build phase. Later writes raise IndexFrozenError."""
        self._frozen = True

    def add(self, chunk: DocumentChunk) -> Outcome:
        """
        Embed a chunk and store it.

        An embedding failure is logged and returned as a Failure; the chunk
        is simply absent from the index.
        """
        try:
            vector = self._embeddings.embed(chunk.text)
        except Exception as e:
            logger.warning(f"Failed to embed chunk {chunk.id}: {e}")
            return Failure.from_exception(chunk.id, e)
        return Success(chunk.id, self.add_vector(chunk, vector))

    def add_vector(self, chunk: DocumentChunk, vector: np.ndarray) -> EmbeddingVector:
        """Store a precomputed vector for a chunk."""
        if self._frozen:
            raise IndexFrozenError(f"Index is frozen; cannot add chunk {chunk.id}")

        entry = EmbeddingVector(
            chunk_id=chunk.id,
            vector=np.asarray(vector, dtype=np.float32),
            text=chunk.text,
        )
        self._vectors.append(entry)
        self._chunks[chunk.id] = chunk
        return entry

    def query(self, vector: np.ndarray, top_k: int = 3) -> list[IndexHit]:
        """
        Return up to top_k entries ranked by descending cosine similarity.

        Ties keep insertion order.
        """
        if top_k <= 0 or not self._vectors:
            return []

        scored = [
            (entry, cosine_similarity(vector, entry.vector))
            for entry in self._vectors
        ]
        # list.sort is stable
        scored.sort(key=lambda x: x[1], reverse=True)

        return [
            IndexHit(chunk_id=entry.chunk_id, text=entry.text, score=score)
            for entry, score in scored[:top_k]
        ]

    def search(self, query: str, top_k: int = 3) -> list[IndexHit]:
        """Embed a query string and run query()."""
        return self.query(self._embeddings.embed(query), top_k=top_k)
