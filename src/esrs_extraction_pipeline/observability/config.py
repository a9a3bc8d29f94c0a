"""
Phoenix/OpenTelemetry Configuration

Loads observability settings from environment variables.
Tracing is off unless PHOENIX_ENABLED is set.
"""

import os
from dataclasses import dataclass

_TRUTHY = ("true", "1", "yes")


@dataclass
class PhoenixConfig:
    """Configuration for Phoenix observability.

    Environment Variables:
        PHOENIX_ENABLED: Enable Phoenix tracing (default: false)
        PHOENIX_PROJECT_NAME: Project name in Phoenix UI (default: esrs-extraction-pipeline)
        PHOENIX_COLLECTOR_ENDPOINT: Remote endpoint (optional, local if empty)
        PHOENIX_CAPTURE_LLM_CONTENT: Export QA prompts/answers (default: false)

    Report excerpts sent to the QA model can contain unpublished figures;
    PHOENIX_CAPTURE_LLM_CONTENT exports them verbatim to the collector.
    """

    enabled: bool = False
    project_name: str = "esrs-extraction-pipeline"
    collector_endpoint: str | None = None
    capture_llm_content: bool = False

    @classmethod
    def from_env(cls) -> "PhoenixConfig":
        """Load config from environment variables."""
        return cls(
            enabled=os.environ.get("PHOENIX_ENABLED", "false").lower() in _TRUTHY,
            project_name=os.environ.get("PHOENIX_PROJECT_NAME", "esrs-extraction-pipeline"),
            collector_endpoint=os.environ.get("PHOENIX_COLLECTOR_ENDPOINT") or None,
            capture_llm_content=(
                os.environ.get("PHOENIX_CAPTURE_LLM_CONTENT", "false").lower() in _TRUTHY
            ),
        )


# Global config singleton
_config: PhoenixConfig | None = None


def get_config() -> PhoenixConfig:
    """Get the global Phoenix config (lazy-loaded from env)."""
    global _config
    if _config is None:
        _config = PhoenixConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset config (useful for testing)."""
    global _config
    _config = None
