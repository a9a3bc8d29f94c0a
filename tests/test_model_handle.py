"""
Unit Tests for ModelHandle

Tests lazy initialisation, the failure wrapping and the close lifecycle.
"""

from unittest.mock import MagicMock

import pytest

from esrs_extraction_pipeline.embeddings import MockEmbeddings
from esrs_extraction_pipeline.errors import ModelInitializationError
from esrs_extraction_pipeline.models import ModelHandle, get_model_handle
from esrs_extraction_pipeline.qa import LexicalQA


class TestModelHandle:
    """Lifecycle of a ModelHandle."""

    def test_factories_not_called_until_initialize(self):
        embeddings_factory = MagicMock()
        qa_factory = MagicMock()

        handle = ModelHandle(embeddings_factory, qa_factory)

        assert not handle.is_initialized
        embeddings_factory.assert_not_called()
        qa_factory.assert_not_called()

    def test_initialize_is_idempotent(self):
        embeddings_factory = MagicMock()
        qa_factory = MagicMock()
        handle = ModelHandle(embeddings_factory, qa_factory)

        handle.initialize()
        handle.initialize()

        assert handle.is_initialized
        embeddings_factory.assert_called_once()
        qa_factory.assert_called_once()
        assert handle.embeddings is embeddings_factory.return_value
        assert handle.qa is qa_factory.return_value

    def test_access_before_initialize_raises(self):
        handle = ModelHandle(MagicMock(), MagicMock())
        with pytest.raises(ModelInitializationError):
            handle.embeddings
        with pytest.raises(ModelInitializationError):
            handle.qa

    def test_factory_failure_is_wrapped(self):
        handle = ModelHandle(MagicMock(), MagicMock(side_effect=OSError("model not found")))

        with pytest.raises(ModelInitializationError, match="Failed to initialize AI models: model not found"):
            handle.initialize()
        assert not handle.is_initialized

    def test_qa_failure_closes_embeddings_client(self):
        embeddings = MagicMock()
        handle = ModelHandle(lambda: embeddings, MagicMock(side_effect=RuntimeError("bad key")))

        with pytest.raises(ModelInitializationError, match="bad key"):
            handle.initialize()

        embeddings.close.assert_called_once()
        assert not handle.is_initialized

    def test_embeddings_failure_skips_qa_factory(self):
        qa_factory = MagicMock()
        handle = ModelHandle(MagicMock(side_effect=OSError("no model")), qa_factory)

        with pytest.raises(ModelInitializationError):
            handle.initialize()

        qa_factory.assert_not_called()

    def test_close_releases_models(self):
        embeddings = MagicMock()
        qa = MagicMock()
        handle = ModelHandle(lambda: embeddings, lambda: qa)
        handle.initialize()

        handle.close()

        embeddings.close.assert_called_once()
        qa.close.assert_called_once()
        assert not handle.is_initialized

    def test_close_skips_models_without_close(self):
        handle = ModelHandle(MockEmbeddings, LexicalQA)
        handle.initialize()
        handle.close()
        assert not handle.is_initialized

    def test_can_reinitialize_after_close(self):
        embeddings_factory = MagicMock()
        handle = ModelHandle(embeddings_factory, MagicMock())
        handle.initialize()
        handle.close()
        handle.initialize()
        assert embeddings_factory.call_count == 2

    def test_context_manager(self):
        embeddings = MagicMock()
        handle = ModelHandle(lambda: embeddings, MagicMock())

        with handle as entered:
            assert entered is handle
            assert handle.is_initialized

        assert not handle.is_initialized
        embeddings.close.assert_called_once()


class TestGetModelHandle:
    """Tests for the factory."""

    def test_mock_models(self):
        handle = get_model_handle(use_mock=True)
        handle.initialize()
        assert isinstance(handle.embeddings, MockEmbeddings)
        assert isinstance(handle.qa, LexicalQA)

    def test_handles_are_independent(self):
        first = get_model_handle(use_mock=True)
        second = get_model_handle(use_mock=True)
        first.initialize()
        assert not second.is_initialized
