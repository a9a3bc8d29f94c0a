"""
Unit Tests for Extractive QA

LexicalQA is tested against a fixed report excerpt; OpenAIExtractiveQA runs
against a patched OpenAI client.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from esrs_extraction_pipeline.core import QAAnswer, QAModel
from esrs_extraction_pipeline.qa import (
    LexicalQA,
    OpenAIExtractiveQA,
    QASpan,
    get_qa_model,
    locate_span,
)


# ---------------------------------------------------------------------------
# SPAN LOCATION
# ---------------------------------------------------------------------------


class TestLocateSpan:
    """Tests for locate_span."""

    def test_exact_match(self):
        assert locate_span("1,250 tCO2e", "emissions were 1,250 tCO2e.") == (15, 26)

    def test_case_insensitive_fallback(self):
        assert locate_span("TOTAL", "the total was") == (4, 9)

    def test_missing(self):
        assert locate_span("42 MWh", "nothing here") == (0, 0)

    def test_empty_answer(self):
        assert locate_span("", "context") == (0, 0)


# ---------------------------------------------------------------------------
# LEXICAL QA
# ---------------------------------------------------------------------------


class TestLexicalQA:
    """Tests for the deterministic offline QA model."""

    def test_satisfies_protocol(self):
        assert isinstance(LexicalQA(), QAModel)

    def test_picks_quantity_with_question_unit(self, sample_report_text):
        result = LexicalQA().answer(
            "What is the total Scope 1 GHG emissions in tCO2e?", sample_report_text
        )
        assert result.text == "1,250 tCO2e"
        assert result.score == pytest.approx(0.95)
        assert sample_report_text[result.start:result.end] == "1,250 tCO2e"

    def test_picks_percentage_for_percentage_question(self, sample_report_text):
        result = LexicalQA().answer("What percentage of employees are female?", sample_report_text)
        assert result.text == "41%"
        assert result.score == pytest.approx(0.6333)

    def test_unit_named_in_question(self, sample_report_text):
        result = LexicalQA().answer("How many employees does the company have?", sample_report_text)
        assert result.text == "4,812 employees"
        assert result.score == pytest.approx(0.95)

    def test_quantity_without_matching_unit(self, sample_report_text):
        result = LexicalQA().answer(
            "What is the total water consumption in cubic meters?", sample_report_text
        )
        assert result.text == "52,000 m3"
        assert result.score == pytest.approx(0.48)

    def test_sentence_fallback_without_quantity(self):
        context = "The board is chaired by an independent director."
        result = LexicalQA().answer("Who chairs the board?", context)
        assert result.text == context
        assert result.score == pytest.approx(round(1 / 3 * 0.5, 4))

    def test_empty_context(self):
        assert LexicalQA().answer("What is the total energy consumption?", "") == QAAnswer("", 0.0)

    def test_unrelated_context_scores_zero(self):
        result = LexicalQA().answer("What is the total energy consumption in MWh?", "Apples 12 kg.")
        assert result.score == 0.0

    def test_deterministic(self, sample_report_text):
        qa = LexicalQA()
        question = "What is the total water consumption in cubic meters?"
        assert qa.answer(question, sample_report_text) == qa.answer(question, sample_report_text)

    def test_answer_is_substring_of_context(self, sample_report_text):
        qa = LexicalQA()
        for question in (
            "What is the total Scope 2 GHG emissions in tCO2e?",
            "How many workplace injuries occurred?",
            "What is the total waste generated in tonnes?",
        ):
            result = qa.answer(question, sample_report_text)
            assert result.text in sample_report_text
            assert 0.0 <= result.score <= 1.0


# ---------------------------------------------------------------------------
# OPENAI QA
# ---------------------------------------------------------------------------


def _parse_response(parsed, content="{}"):
    message = SimpleNamespace(parsed=parsed, content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def mock_client():
    with patch("esrs_extraction_pipeline.qa.openai_qa.OpenAI") as mock_openai:
        client = MagicMock()
        mock_openai.return_value = client
        yield client


class TestOpenAIExtractiveQA:
    """Tests for OpenAIExtractiveQA with a mocked client."""

    def test_returns_located_span(self, mock_client):
        mock_client.beta.chat.completions.parse.return_value = _parse_response(
            QASpan(answer="1,250 tCO2e", score=0.91)
        )
        context = "Scope 1 emissions were 1,250 tCO2e."

        result = OpenAIExtractiveQA(api_key="k").answer("Scope 1?", context)

        assert result == QAAnswer(text="1,250 tCO2e", score=0.91, start=23, end=34)

    def test_request_uses_structured_output(self, mock_client):
        mock_client.beta.chat.completions.parse.return_value = _parse_response(
            QASpan(answer="", score=0.0)
        )

        OpenAIExtractiveQA(model="gpt-4o", api_key="k").answer("Q?", "CTX")

        kwargs = mock_client.beta.chat.completions.parse.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["response_format"] is QASpan
        assert kwargs["temperature"] == 0
        assert "CTX" in kwargs["messages"][1]["content"]
        assert "Q?" in kwargs["messages"][1]["content"]

    def test_score_is_clamped(self, mock_client):
        mock_client.beta.chat.completions.parse.return_value = _parse_response(
            SimpleNamespace(answer="41%", score=1.7)
        )
        result = OpenAIExtractiveQA(api_key="k").answer("Q?", "41% female")
        assert result.score == 1.0

    def test_answer_not_in_context_keeps_text(self, mock_client, caplog):
        mock_client.beta.chat.completions.parse.return_value = _parse_response(
            QASpan(answer="1250 tonnes", score=0.5)
        )
        result = OpenAIExtractiveQA(api_key="k").answer("Q?", "1,250 tCO2e")

        assert result.text == "1250 tonnes"
        assert (result.start, result.end) == (0, 0)
        assert "not found verbatim" in caplog.text

    def test_unparsed_response_raises(self, mock_client):
        mock_client.beta.chat.completions.parse.return_value = _parse_response(None, "refused")
        with pytest.raises(ValueError, match="refused"):
            OpenAIExtractiveQA(api_key="k").answer("Q?", "context")

    def test_api_errors_propagate(self, mock_client):
        mock_client.beta.chat.completions.parse.side_effect = TimeoutError("timed out")
        with pytest.raises(TimeoutError):
            OpenAIExtractiveQA(api_key="k").answer("Q?", "context")

    def test_close(self, mock_client):
        OpenAIExtractiveQA(api_key="k").close()
        mock_client.close.assert_called_once()


class TestQASpan:
    """Validation of the structured response model."""

    @pytest.mark.parametrize("score", [-0.1, 1.1])
    def test_score_out_of_range_rejected(self, score):
        with pytest.raises(ValueError):
            QASpan(answer="x", score=score)


class TestGetQAModel:
    """Tests for the factory."""

    def test_mock(self):
        assert isinstance(get_qa_model(use_mock=True), LexicalQA)

    def test_production(self, mock_client):
        model = get_qa_model(model="gpt-4o", timeout=3.0)
        assert isinstance(model, OpenAIExtractiveQA)
        assert model.model == "gpt-4o"
