"""
LangGraph extraction nodes - isolated, testable functions.

PATTERN:
--------
1. Pure nodes (no dependencies) are simple functions
2. Nodes with dependencies use factory pattern: create_X_node(deps) -> node_fn
"""

from esrs_extraction_pipeline.extraction.nodes.retrieve import create_retrieve_node, build_context
from esrs_extraction_pipeline.extraction.nodes.answer import create_answer_node
from esrs_extraction_pipeline.extraction.nodes.parse import parse_answer
from esrs_extraction_pipeline.extraction.nodes.evidence import create_attribute_node
from esrs_extraction_pipeline.extraction.nodes.no_context import (
    NO_CONTEXT_EXPLANATION,
    no_context,
)

__all__ = [
    "create_retrieve_node",
    "build_context",
    "create_answer_node",
    "parse_answer",
    "create_attribute_node",
    "no_context",
    "NO_CONTEXT_EXPLANATION",
]
