"""
QA module - extractive question answering over retrieved context.

1. Protocol (QAModel) defines the interface
2. Production implementation (OpenAIExtractiveQA)
3. Test double (LexicalQA) for fast, offline testing
4. Factory function (get_qa_model)
"""

from esrs_extraction_pipeline.qa.openai_qa import (
    QAModel,
    QASpan,
    OpenAIExtractiveQA,
    LexicalQA,
    get_qa_model,
    locate_span,
)

__all__ = [
    "QAModel",
    "QASpan",
    "OpenAIExtractiveQA",
    "LexicalQA",
    "get_qa_model",
    "locate_span",
]
