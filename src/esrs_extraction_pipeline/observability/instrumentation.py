"""
OpenInference Auto-Instrumentation

Registers auto-instrumentors for the OpenAI client and for LangChain
(which also traces LangGraph runs). Model calls are traced without code
changes.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

_instrumented = False


def _instrumentors() -> list[tuple[str, type]]:
    found = []
    try:
        from openinference.instrumentation.openai import OpenAIInstrumentor
        found.append(("openai", OpenAIInstrumentor))
    except ImportError:
        logger.debug("OpenAI instrumentor not available")
    try:
        from openinference.instrumentation.langchain import LangChainInstrumentor
        found.append(("langchain", LangChainInstrumentor))
    except ImportError:
        logger.debug("LangChain instrumentor not available")
    return found


def register_instrumentors() -> bool:
    """
    Register OpenInference auto-instrumentors.

    Call once at startup, before any model calls.

    Returns:
        True if any instrumentors were registered, False otherwise
    """
    global _instrumented
    if _instrumented:
        return True

    registered = []
    for name, instrumentor in _instrumentors():
        try:
            instrumentor().instrument()
            registered.append(name)
        except Exception as e:
            logger.warning(f"Failed to instrument {name}: {e}")

    if registered:
        logger.info(f"Registered instrumentors: {', '.join(registered)}")
        _instrumented = True
        return True

    return False


def uninstrument() -> None:
    """Remove all instrumentors (useful for testing)."""
    global _instrumented

    for name, instrumentor in _instrumentors():
        try:
            instrumentor().uninstrument()
        except Exception as e:
            logger.debug(f"Failed to uninstrument {name}: {e}")

    _instrumented = False
