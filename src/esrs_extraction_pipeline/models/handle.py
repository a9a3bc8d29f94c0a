"""
Model lifecycle.

A ModelHandle owns the embedding provider and the QA model for one
pipeline. It is constructed explicitly, initialised once, reused for every
run and closed when the caller is done. Nothing is global: two pipelines
can hold two handles.
"""

import logging
from typing import Callable

from esrs_extraction_pipeline.core import EmbeddingProvider, QAModel
from esrs_extraction_pipeline.errors import ModelInitializationError

logger = logging.getLogger(__name__)


def _close_model(model) -> None:
    close = getattr(model, "close", None)
    if callable(close):
        close()


class ModelHandle:
    """Lazily constructed embedding + QA models with an explicit lifecycle."""

    def __init__(
        self,
        embeddings_factory: Callable[[], EmbeddingProvider],
        qa_factory: Callable[[], QAModel],
    ):
        self._embeddings_factory = embeddings_factory
        self._qa_factory = qa_factory
        self._embeddings: EmbeddingProvider | None = None
        self._qa: QAModel | None = None

    @property
    def is_initialized(self) -> bool:
        return self._embeddings is not None and self._qa is not None

    def initialize(self) -> None:
        """
        Load both models. Idempotent.

        Raises:
            ModelInitializationError: if either factory fails
        """
        if self.is_initialized:
            return

        logger.info("Loading embedding and QA models")
        try:
            embeddings = self._embeddings_factory()
        except Exception as e:
            raise ModelInitializationError(f"Failed to initialize AI models: {e}") from e

        try:
            qa = self._qa_factory()
        except Exception as e:
            _close_model(embeddings)
            raise ModelInitializationError(f"Failed to initialize AI models: {e}") from e

        self._embeddings = embeddings
        self._qa = qa
        logger.info("Models loaded")

    @property
    def embeddings(self) -> EmbeddingProvider:
        if self._embeddings is None:
            raise ModelInitializationError("Models not initialized; call initialize() first")
        return self._embeddings

    @property
    def qa(self) -> QAModel:
        if self._qa is None:
            raise ModelInitializationError("Models not initialized; call initialize() first")
        return self._qa

    def close(self) -> None:
        """Release model clients. The handle can be initialised again."""
        for model in (self._embeddings, self._qa):
            _close_model(model)
        self._embeddings = None
        self._qa = None

    def __enter__(self) -> "ModelHandle":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def get_model_handle(
    use_mock: bool = False,
    embedding_model: str = "text-embedding-3-small",
    qa_model: str = "gpt-4o-mini",
    timeout: float = 30.0,
) -> ModelHandle:
    """
    Factory function to get a handle over the appropriate models.

    Args:
        use_mock: If True, use MockEmbeddings and LexicalQA (no API calls)
        embedding_model: OpenAI embedding model name
        qa_model: OpenAI chat model name
        timeout: Per-request timeout in seconds
    """
    from esrs_extraction_pipeline.embeddings import get_embedding_provider
    from esrs_extraction_pipeline.qa import get_qa_model

    return ModelHandle(
        embeddings_factory=lambda: get_embedding_provider(
            use_mock=use_mock, model=embedding_model, timeout=timeout
        ),
        qa_factory=lambda: get_qa_model(use_mock=use_mock, model=qa_model, timeout=timeout),
    )
