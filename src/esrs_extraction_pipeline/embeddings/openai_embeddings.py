"""
Embeddings Module - Single Responsibility: Generate text embeddings.

It has ONE job: convert text to vector embeddings.
No index logic, no chunk handling.
"""

import hashlib
import os
import re

import numpy as np
from openai import OpenAI

from esrs_extraction_pipeline.core.protocols import EmbeddingProvider


class OpenAIEmbeddings:
    """
    OpenAI-based embedding provider.

    Uses text-embedding-3-small by default (1536 dimensions).
    """

    def __init__(
        self,
        model: str = "text-embedding-3-small",
        api_key: str | None = None,
        timeout: float = 30.0,
    ):
        self.model = model
        self._client = OpenAI(
            api_key=api_key or os.environ.get("OPENAI_API_KEY"),
            timeout=timeout,
        )

    @property
    def dimensions(self) -> int:
        """Return embedding dimensions for the model."""
        model_dims = {
            "text-embedding-3-small": 1536,
            "text-embedding-3-large": 3072,
            "text-embedding-ada-002": 1536,
        }
        return model_dims.get(self.model, 1536)

    def embed(self, text: str) -> np.ndarray:
        """Generate embedding for a single text."""
        response = self._client.embeddings.create(
            input=text,
            model=self.model
        )
        return np.array(response.data[0].embedding, dtype=np.float32)

    def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts efficiently."""
        if not texts:
            return []

        response = self._client.embeddings.create(
            input=texts,
            model=self.model
        )
        return [
            np.array(item.embedding, dtype=np.float32)
            for item in response.data
        ]

    def close(self) -> None:
        self._client.close()


_TOKEN = re.compile(r"[a-z0-9]+")


class MockEmbeddings:
    """
    Mock embedding provider for testing without API calls.

    Hashes each lower-cased token into one of `dimensions` buckets and
    L2-normalises the counts, so texts sharing words land close together.
    Deterministic across processes.
    NOT for production use - only for testing/development.
    """

    def __init__(self, dimensions: int = 384):
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def _bucket(self, token: str) -> int:
        digest = hashlib.sha256(token.encode()).digest()
        return int.from_bytes(digest[:4], "big") % self._dimensions

    def embed(self, text: str) -> np.ndarray:
        """Generate a deterministic bag-of-words embedding."""
        vector = np.zeros(self._dimensions, dtype=np.float32)
        for token in _TOKEN.findall(text.lower()):
            vector[self._bucket(token)] += 1.0
        norm = np.linalg.norm(vector)
        if norm > 0:
            vector /= norm
        return vector

    def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts."""
        return [self.embed(text) for text in texts]


def get_embedding_provider(
    use_mock: bool = False,
    model: str = "text-embedding-3-small",
    timeout: float = 30.0,
) -> EmbeddingProvider:
    """
    Factory function to get the appropriate embedding provider.

    Args:
        use_mock: If True, return MockEmbeddings (for testing)
        model: OpenAI embedding model name
        timeout: Per-request timeout in seconds
    """
    if use_mock:
        return MockEmbeddings()
    return OpenAIEmbeddings(model=model, timeout=timeout)
