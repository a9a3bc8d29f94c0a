"""
Retrieval node - fetches the chunks most similar to a metric.

This node is TESTABLE IN ISOLATION because:
1. EmbeddingIndex is injected, not global
2. No side effects beyond state updates
3. Deterministic given same inputs
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Callable

from esrs_extraction_pipeline.extraction.questions import build_search_query

if TYPE_CHECKING:
    from esrs_extraction_pipeline.extraction.state import MetricState
    from esrs_extraction_pipeline.retrieval import EmbeddingIndex, IndexHit


def build_context(hits: list[IndexHit], max_chars: int) -> str:
    """
    Join hit texts with blank lines, most similar first.

    Whole chunks are added while they fit in max_chars; when not even the
    first one fits, it is truncated.
    """
    parts: list[str] = []
    length = 0
    for hit in hits:
        added = len(hit.text) + (2 if parts else 0)
        if length + added > max_chars:
            break
        parts.append(hit.text)
        length += added

    if not parts and hits:
        return hits[0].text[:max_chars]
    return "\n\n".join(parts)


def create_retrieve_node(
    index: EmbeddingIndex,
    top_k: int = 3,
    max_context_chars: int = 4000,
) -> Callable[[MetricState], dict]:
    """
    Factory that creates a retrieval node with an injected index.

    Args:
        index: Built (frozen) EmbeddingIndex for the run
        top_k: Number of chunks to retrieve
        max_context_chars: Upper bound on the QA context

    Returns:
        A node function compatible with LangGraph
    """

    def retrieve_context(state: MetricState) -> dict:
        """
        Reads from state:
        - metric

        Writes to state:
        - search_query, hits, context, retrieval_latency_ms
        """
        start = time.perf_counter()

        query = build_search_query(state["metric"])
        hits = index.search(query, top_k=top_k) if len(index) else []

        return {
            "search_query": query,
            "hits": hits,
            "context": build_context(hits, max_context_chars),
            "retrieval_latency_ms": (time.perf_counter() - start) * 1000,
        }

    return retrieve_context
