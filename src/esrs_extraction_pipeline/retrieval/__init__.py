"""
Retrieval module - vector similarity search over document chunks.

This module provides:
- EmbeddingVector / IndexHit: index entry and query result models
- EmbeddingIndex: in-memory cosine-similarity index
- cosine_similarity(): the similarity measure
"""

from esrs_extraction_pipeline.retrieval.vector import EmbeddingVector, IndexHit
from esrs_extraction_pipeline.retrieval.index import EmbeddingIndex, cosine_similarity

__all__ = [
    "EmbeddingVector",
    "IndexHit",
    "EmbeddingIndex",
    "cosine_similarity",
]
