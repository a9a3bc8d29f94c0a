"""
Pipeline configuration.

Loads chunking, retrieval and model settings from environment variables.
The CLI loads a .env file (python-dotenv) before the first call to
get_config(), so values there are picked up as well.

Environment Variables:
    ESRS_MAX_CHARS: Maximum chunk size in characters (default: 800)
    ESRS_CHUNK_OVERLAP: Overlap between consecutive chunks (default: 200)
    ESRS_MIN_CHUNK_CHARS: Chunks shorter than this are dropped (default: 50)
    ESRS_TOP_K: Chunks retrieved per metric (default: 3)
    ESRS_PRIORITY_THRESHOLD: Highest priority value extracted (default: 2)
    ESRS_MAX_CONTEXT_CHARS: Upper bound on the QA context (default: 4000)
    ESRS_EMBEDDING_WORKERS: Threads used to embed chunks (default: 1)
    ESRS_EMBEDDING_MODEL: OpenAI embedding model (default: text-embedding-3-small)
    ESRS_QA_MODEL: OpenAI chat model used for extractive QA (default: gpt-4o-mini)
    ESRS_OPENAI_TIMEOUT_SECONDS: Per-request timeout for model calls (default: 30)
    ESRS_USE_MOCK_MODELS: Use deterministic offline models (default: false)
"""

import os
from dataclasses import dataclass


def _to_bool(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _to_int(value: str | None, *, default: int, minimum: int) -> int:
    if value is None:
        return default
    return max(minimum, int(value))


@dataclass(frozen=True)
class PipelineConfig:
    """Settings shared by the ingest, retrieval and extraction stages."""

    max_chars: int = 800
    chunk_overlap: int = 200
    min_chunk_chars: int = 50
    top_k: int = 3
    priority_threshold: int = 2
    max_context_chars: int = 4000
    embedding_workers: int = 1
    embedding_model: str = "text-embedding-3-small"
    qa_model: str = "gpt-4o-mini"
    openai_timeout_seconds: float = 30.0
    use_mock_models: bool = False

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """Load config from environment variables."""
        return cls(
            max_chars=_to_int(os.environ.get("ESRS_MAX_CHARS"), default=800, minimum=100),
            chunk_overlap=_to_int(os.environ.get("ESRS_CHUNK_OVERLAP"), default=200, minimum=0),
            min_chunk_chars=_to_int(os.environ.get("ESRS_MIN_CHUNK_CHARS"), default=50, minimum=0),
            top_k=_to_int(os.environ.get("ESRS_TOP_K"), default=3, minimum=1),
            priority_threshold=_to_int(
                os.environ.get("ESRS_PRIORITY_THRESHOLD"), default=2, minimum=1
            ),
            max_context_chars=_to_int(
                os.environ.get("ESRS_MAX_CONTEXT_CHARS"), default=4000, minimum=200
            ),
            embedding_workers=_to_int(
                os.environ.get("ESRS_EMBEDDING_WORKERS"), default=1, minimum=1
            ),
            embedding_model=os.environ.get("ESRS_EMBEDDING_MODEL", "text-embedding-3-small"),
            qa_model=os.environ.get("ESRS_QA_MODEL", "gpt-4o-mini"),
            openai_timeout_seconds=float(os.environ.get("ESRS_OPENAI_TIMEOUT_SECONDS", "30")),
            use_mock_models=_to_bool(os.environ.get("ESRS_USE_MOCK_MODELS"), default=False),
        )


# Global config singleton
_config: PipelineConfig | None = None


def get_config() -> PipelineConfig:
    """Get the global pipeline config (lazy-loaded from env)."""
    global _config
    if _config is None:
        _config = PipelineConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset config (useful for testing)."""
    global _config
    _config = None
