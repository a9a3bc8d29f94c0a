"""
Graph construction with dependency injection.

The graph is just WIRING - all logic lives in nodes.

Graph structure:
START -> retrieve_context -+-> answer_question -> parse_answer -> attribute_evidence -> END
                           |
                           +-> no_context -> END      (blank context)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from langgraph.graph import END, StateGraph

from esrs_extraction_pipeline.extraction.state import MetricState
from esrs_extraction_pipeline.extraction.nodes import (
    create_retrieve_node,
    create_answer_node,
    parse_answer,
    create_attribute_node,
    no_context,
)

if TYPE_CHECKING:
    from esrs_extraction_pipeline.core import QAModel
    from esrs_extraction_pipeline.retrieval import EmbeddingIndex


def route_after_retrieval(state: MetricState) -> str:
    """Skip the QA model when there is nothing to read."""
    if state["context"].strip():
        return "answer_question"
    return "no_context"


def build_extraction_graph(
    index: EmbeddingIndex,
    qa: QAModel,
    top_k: int = 3,
    max_context_chars: int = 4000,
):
    """
    Build the per-metric extraction workflow with injected dependencies.

    Args:
        index: Frozen EmbeddingIndex for the run
        qa: Extractive QA model
        top_k: Chunks retrieved per metric
        max_context_chars: Upper bound on the QA context

    Returns:
        Compiled StateGraph ready for invocation

    Example:
        index = EmbeddingIndex(MockEmbeddings())
        graph = build_extraction_graph(index, LexicalQA())
        final = graph.invoke(create_initial_state(metric))
        final["extraction"]
    """
    workflow = StateGraph(MetricState)

    workflow.add_node("retrieve_context", create_retrieve_node(index, top_k, max_context_chars))
    workflow.add_node("answer_question", create_answer_node(qa))
    workflow.add_node("parse_answer", parse_answer)
    workflow.add_node("attribute_evidence", create_attribute_node(index))
    workflow.add_node("no_context", no_context)

    workflow.set_entry_point("retrieve_context")
    workflow.add_conditional_edges(
        "retrieve_context",
        route_after_retrieval,
        {"answer_question": "answer_question", "no_context": "no_context"},
    )
    workflow.add_edge("answer_question", "parse_answer")
    workflow.add_edge("parse_answer", "attribute_evidence")
    workflow.add_edge("attribute_evidence", END)
    workflow.add_edge("no_context", END)

    return workflow.compile()
