"""
Extractive question answering.

The QA model receives a question and a context and must return a span
copied verbatim from the context together with a score in [0, 1].

OpenAIExtractiveQA uses OpenAI's structured output mode so the response
always parses into QASpan; offsets are then located in the context.
LexicalQA is an offline, deterministic stand-in used for tests and for runs
without an API key.
"""

import logging
import os
import re

from openai import OpenAI
from pydantic import BaseModel, Field

from esrs_extraction_pipeline.core.protocols import QAAnswer, QAModel

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are an extractive question answering model for sustainability reports.

RULES (NEVER VIOLATE):
1. The answer MUST be copied character-for-character from the context
2. Prefer the shortest span that answers the question, including its unit
3. NEVER compute, convert, or round values
4. If the context does not contain the answer, return an empty answer with score 0

SCORE:
- A probability in [0, 1] that the span answers the question"""


class QASpan(BaseModel):
    """Structured response from the QA model."""

    answer: str = Field(description="Span copied verbatim from the context")
    score: float = Field(ge=0.0, le=1.0, description="Confidence that the span answers the question")


def locate_span(answer: str, context: str) -> tuple[int, int]:
    """Character offsets of answer in context; (0, 0) if it is not there."""
    if not answer:
        return 0, 0
    start = context.find(answer)
    if start < 0:
        start = context.lower().find(answer.lower())
    if start < 0:
        return 0, 0
    return start, start + len(answer)


class OpenAIExtractiveQA:
    """OpenAI chat model constrained to extractive answers."""

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str | None = None,
        timeout: float = 30.0,
    ):
        self.model = model
        self._client = OpenAI(
            api_key=api_key or os.environ.get("OPENAI_API_KEY"),
            timeout=timeout,
        )

    def answer(self, question: str, context: str) -> QAAnswer:
        response = self._client.beta.chat.completions.parse(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": f"CONTEXT:\n{context}\n\nQUESTION: {question}"},
            ],
            response_format=QASpan,
            temperature=0,
        )

        parsed = response.choices[0].message.parsed
        if parsed is None:
            raise ValueError(
                f"Model returned None for parsed output: {response.choices[0].message.content!r}"
            )

        start, end = locate_span(parsed.answer, context)
        if parsed.answer and end == 0:
            logger.warning(f"QA answer not found verbatim in context: {parsed.answer!r}")

        return QAAnswer(
            text=parsed.answer,
            score=min(max(parsed.score, 0.0), 1.0),
            start=start,
            end=end,
        )

    def close(self) -> None:
        self._client.close()


# ---------------------------------------------------------------------------
# LEXICAL QA (offline / testing)
# ---------------------------------------------------------------------------

_TOKEN = re.compile(r"[a-z0-9]+")
_SENTENCE_END = re.compile(r"[.!?](?=\s)|\n")
_QUANTITY = re.compile(
    r"(?P<number>\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)"
    r"(?:\s?(?P<unit>%|[A-Za-z][A-Za-z0-9]*))?"
)
_PERCENT_WORDS = frozenset({"percent", "percentage", "proportion", "rate", "share"})
_STOP_WORDS = frozenset({
    "a", "an", "are", "by", "company", "did", "do", "does", "for", "from", "has",
    "have", "how", "in", "is", "many", "of", "the", "to", "was", "were", "what",
    "which",
})


def _tokens(text: str) -> set[str]:
    return set(_TOKEN.findall(text.lower()))


def _sentence_spans(context: str) -> list[tuple[int, int]]:
    bounds: list[tuple[int, int]] = []
    start = 0
    for match in _SENTENCE_END.finditer(context):
        bounds.append((start, match.end()))
        start = match.end()
    bounds.append((start, len(context)))

    spans = []
    for begin, end in bounds:
        segment = context[begin:end]
        left = begin + len(segment) - len(segment.lstrip())
        right = begin + len(segment.rstrip())
        if right > left:
            spans.append((left, right))
    return spans


class LexicalQA:
    """
    Deterministic extractive QA for tests and offline runs.

    Picks the sentence sharing the most content words with the question,
    then the quantity in it that best fits the question (unit mentioned in
    the question, or a percentage when the question asks for one; number
    not itself part of the question). Falls back to the whole sentence when
    it holds no quantity.
    NOT for production use - only for testing/development.
    """

    def answer(self, question: str, context: str) -> QAAnswer:
        keywords = _tokens(question) - _STOP_WORDS
        sentences = _sentence_spans(context)
        if not sentences:
            return QAAnswer(text="", score=0.0)

        def overlap(span: tuple[int, int]) -> float:
            if not keywords:
                return 0.0
            return len(keywords & _tokens(context[span[0]:span[1]])) / len(keywords)

        best = max(sentences, key=overlap)
        best_overlap = overlap(best)
        sentence_start, sentence_end = best
        sentence = context[sentence_start:sentence_end]

        asks_percent = bool(keywords & _PERCENT_WORDS)
        candidates = []
        for position, match in enumerate(_QUANTITY.finditer(sentence)):
            unit = (match.group("unit") or "").lower()
            number = match.group("number").replace(",", "")
            unit_fits = unit == "%" if asks_percent else bool(unit) and unit in keywords
            candidates.append((
                unit_fits,
                number not in keywords,
                -position,
                match,
            ))

        if not candidates:
            return QAAnswer(
                text=sentence,
                score=round(best_overlap * 0.5, 4),
                start=sentence_start,
                end=sentence_end,
            )

        unit_matches, novel, _, match = max(candidates, key=lambda c: c[:3])
        weight = 0.95 if unit_matches else (0.8 if novel else 0.6)
        return QAAnswer(
            text=match.group(0),
            score=round(best_overlap * weight, 4),
            start=sentence_start + match.start(),
            end=sentence_start + match.end(),
        )


def get_qa_model(
    use_mock: bool = False,
    model: str = "gpt-4o-mini",
    timeout: float = 30.0,
) -> QAModel:
    """
    Factory function to get the appropriate QA model.

    Args:
        use_mock: If True, return LexicalQA (for testing)
        model: OpenAI chat model name
        timeout: Per-request timeout in seconds
    """
    if use_mock:
        return LexicalQA()
    return OpenAIExtractiveQA(model=model, timeout=timeout)
