"""
Core protocols defining the contracts of the external collaborators.

The pipeline never constructs a model itself. Everything it needs is passed
in through these protocols, so production implementations (OpenAI) and
offline test doubles are interchangeable:

- Protocol defines the contract
- Multiple implementations possible
- Factory functions for instantiation
- Test doubles for fast unit tests
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np


# ---------------------------------------------------------------------------
# EMBEDDING PROVIDER PROTOCOL
# ---------------------------------------------------------------------------


@runtime_checkable
class EmbeddingProvider(Protocol):
    """
    Contract for embedding generation.

    embed() returns a vector of fixed dimension for a given provider
    instance. Vectors are conventionally near unit norm, but callers must
    not rely on it.

    Implementations:
    - OpenAIEmbeddings (production)
    - MockEmbeddings (testing)
    """

    def embed(self, text: str) -> np.ndarray:
        """Generate embedding for a single text."""
        ...

    def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts."""
        ...


# ---------------------------------------------------------------------------
# EXTRACTIVE QA PROTOCOL
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class QAAnswer:
    """
    A span selected from the context by an extractive QA model.

    start/end are character offsets into the context the model was given.
    """

    text: str
    score: float
    start: int = 0
    end: int = 0


@runtime_checkable
class QAModel(Protocol):
    """
    Contract for extractive question answering.

    Implementations:
    - OpenAIExtractiveQA (production)
    - LexicalQA (offline / testing)
    """

    def answer(self, question: str, context: str) -> QAAnswer:
        """Select the span of context that answers the question."""
        ...


# ---------------------------------------------------------------------------
# CANCELLATION
# ---------------------------------------------------------------------------


@runtime_checkable
class AbortSignal(Protocol):
    """Cooperative cancellation flag. threading.Event satisfies it."""

    def is_set(self) -> bool:
        ...
