"""
Shared fixtures.

Every test runs with tracing disabled and a fresh PipelineConfig, so
environment variables set by one test never leak into another.
"""

import pytest
from unittest.mock import MagicMock
import numpy as np

from esrs_extraction_pipeline.config import reset_config
from esrs_extraction_pipeline.observability import reset_tracer
from esrs_extraction_pipeline.observability.config import reset_config as reset_phoenix_config
from esrs_extraction_pipeline.schemas import DocumentChunk


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Tracing off, config re-read from a clean environment."""
    monkeypatch.setenv("PHOENIX_ENABLED", "false")
    for name in (
        "ESRS_MAX_CHARS",
        "ESRS_CHUNK_OVERLAP",
        "ESRS_MIN_CHUNK_CHARS",
        "ESRS_TOP_K",
        "ESRS_PRIORITY_THRESHOLD",
        "ESRS_MAX_CONTEXT_CHARS",
        "ESRS_EMBEDDING_WORKERS",
        "ESRS_EMBEDDING_MODEL",
        "ESRS_QA_MODEL",
        "ESRS_OPENAI_TIMEOUT_SECONDS",
        "ESRS_USE_MOCK_MODELS",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    reset_phoenix_config()
    reset_tracer()
    yield
    reset_config()
    reset_phoenix_config()
    reset_tracer()


@pytest.fixture
def make_chunk():
    """Factory for DocumentChunks with sequential ids."""
    counter = {"n": 0}

    def _make(text: str, chunk_id: str | None = None, source: str = "report.txt", page=None):
        if chunk_id is None:
            chunk_id = f"doc-chunk-{counter['n']}"
        counter["n"] += 1
        return DocumentChunk(
            id=chunk_id,
            text=text,
            source=source,
            page=page,
            start_char=0,
            end_char=len(text),
        )

    return _make


@pytest.fixture
def topic_embeddings():
    """
    MagicMock embedding provider with three orthogonal topics.

    emissions/ghg/scope -> x, water -> y, anything else -> z.
    """
    embeddings = MagicMock()

    def mock_embed(text):
        lowered = text.lower()
        if "emission" in lowered or "ghg" in lowered or "scope" in lowered:
            return np.array([1.0, 0.0, 0.0])
        elif "water" in lowered:
            return np.array([0.0, 1.0, 0.0])
        else:
            return np.array([0.0, 0.0, 1.0])

    embeddings.embed.side_effect = mock_embed
    embeddings.embed_batch.side_effect = lambda texts: [mock_embed(t) for t in texts]
    return embeddings


@pytest.fixture
def sample_report_text():
    """A short sustainability report excerpt."""
    return (
        "Climate disclosures. Total Scope 1 GHG emissions were 1,250 tCO2e in 2023, "
        "down from 1,400 tCO2e in the previous year.\n\n"
        "Water stewardship. Total water consumption was 52,000 m3 across all production sites.\n\n"
        "Our people. At year end the company had 4,812 employees, of whom 41% were female."
    )
