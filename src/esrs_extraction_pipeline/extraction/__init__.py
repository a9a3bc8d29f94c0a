"""
Extraction module - per-metric retrieval-augmented extraction.

This module provides:
- MetricExtractor: runs the graph for one metric, never raises
- build_extraction_graph(): the LangGraph wiring
- parse_metric_answer() / find_evidence_hit(): answer post-processing
- build_question() / build_search_query(): what is asked and searched
"""

from esrs_extraction_pipeline.extraction.state import MetricState, create_initial_state
from esrs_extraction_pipeline.extraction.questions import (
    METRIC_QUESTIONS,
    build_question,
    build_search_query,
)
from esrs_extraction_pipeline.extraction.parsing import (
    parse_metric_answer,
    find_evidence_hit,
    format_confidence_explanation,
)
from esrs_extraction_pipeline.extraction.graph import build_extraction_graph, route_after_retrieval
from esrs_extraction_pipeline.extraction.extractor import MetricExtractor, failed_extraction

__all__ = [
    "MetricState",
    "create_initial_state",
    "METRIC_QUESTIONS",
    "build_question",
    "build_search_query",
    "parse_metric_answer",
    "find_evidence_hit",
    "format_confidence_explanation",
    "build_extraction_graph",
    "route_after_retrieval",
    "MetricExtractor",
    "failed_extraction",
]
