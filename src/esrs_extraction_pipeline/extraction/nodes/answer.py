"""
QA node - asks the extractive QA model about the retrieved context.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

from esrs_extraction_pipeline.extraction.questions import build_question

if TYPE_CHECKING:
    from esrs_extraction_pipeline.core import QAModel
    from esrs_extraction_pipeline.extraction.state import MetricState

logger = logging.getLogger(__name__)


def create_answer_node(qa: QAModel) -> Callable[[MetricState], dict]:
    """
    Factory that creates the QA node with an injected model.

    Args:
        qa: Any QAModel (OpenAIExtractiveQA, LexicalQA, a MagicMock...)
    """

    def answer_question(state: MetricState) -> dict:
        """
        Reads from state:
        - metric, context

        Writes to state:
        - question, qa_answer, qa_latency_ms
        """
        question = build_question(state["metric"])

        start = time.perf_counter()
        answer = qa.answer(question, state["context"])
        latency = (time.perf_counter() - start) * 1000

        logger.debug(f"{state['metric'].id}: QA answered {answer.text!r} ({answer.score:.3f})")
        return {
            "question": question,
            "qa_answer": answer,
            "qa_latency_ms": latency,
        }

    return answer_question
