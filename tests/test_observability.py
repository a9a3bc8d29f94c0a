"""
Unit Tests for Observability Module

Tests the Phoenix/OpenTelemetry integration with focus on:
1. Graceful degradation (NoOpTracer when disabled)
2. Configuration loading from environment
3. Span attribute helpers used by the pipeline
"""

import pytest
from unittest.mock import patch, MagicMock

from esrs_extraction_pipeline.observability import init_phoenix, shutdown_phoenix
from esrs_extraction_pipeline.observability import instrumentation
from esrs_extraction_pipeline.observability.config import (
    PhoenixConfig,
    get_config,
    reset_config,
)
from esrs_extraction_pipeline.observability.tracer import (
    NoOpTracer,
    NoOpSpan,
    OTelSpan,
    get_tracer,
    reset_tracer,
)
from esrs_extraction_pipeline.observability.attributes import (
    INDEX_EMBEDDING_FAILURES,
    INDEX_VECTOR_COUNT,
    EXTRACTION_CANCELLED,
    EXTRACTION_GAP_COUNT,
    METRIC_CONFIDENCE,
    METRIC_ERROR,
    METRIC_EVIDENCE_CHUNK_ID,
    METRIC_ID,
    extraction_run_attributes,
    index_build_attributes,
    metric_result_attributes,
)


# ---------------------------------------------------------------------------
# CONFIG TESTS
# ---------------------------------------------------------------------------


class TestPhoenixConfig:
    """Test configuration loading."""

    def test_config_defaults(self):
        """Config should have sensible defaults when env vars not set."""
        with patch.dict("os.environ", {}, clear=True):
            config = PhoenixConfig.from_env()

            assert config.enabled is False
            assert config.project_name == "esrs-extraction-pipeline"
            assert config.collector_endpoint is None
            assert config.capture_llm_content is False

    @pytest.mark.parametrize("value", ["true", "1", "yes", "TRUE"])
    def test_config_from_env_enabled(self, value):
        """Config should read PHOENIX_ENABLED correctly."""
        with patch.dict("os.environ", {"PHOENIX_ENABLED": value}):
            assert PhoenixConfig.from_env().enabled is True

    @pytest.mark.parametrize("value", ["false", "0", "no"])
    def test_config_from_env_disabled(self, value):
        with patch.dict("os.environ", {"PHOENIX_ENABLED": value}):
            assert PhoenixConfig.from_env().enabled is False

    def test_config_project_name(self):
        with patch.dict("os.environ", {"PHOENIX_PROJECT_NAME": "esrs-staging"}):
            assert PhoenixConfig.from_env().project_name == "esrs-staging"

    def test_config_collector_endpoint(self):
        with patch.dict(
            "os.environ",
            {"PHOENIX_COLLECTOR_ENDPOINT": "https://phoenix.example.com/v1/traces"},
        ):
            config = PhoenixConfig.from_env()
            assert config.collector_endpoint == "https://phoenix.example.com/v1/traces"

    def test_empty_collector_endpoint_is_none(self):
        with patch.dict("os.environ", {"PHOENIX_COLLECTOR_ENDPOINT": ""}):
            assert PhoenixConfig.from_env().collector_endpoint is None

    def test_get_config_singleton(self):
        """get_config should return same instance."""
        assert get_config() is get_config()
        first = get_config()
        reset_config()
        assert get_config() is not first


# ---------------------------------------------------------------------------
# TRACER TESTS
# ---------------------------------------------------------------------------


class TestNoOpTracer:
    """Test NoOpTracer for graceful degradation."""

    def test_noop_tracer_creates_spans(self):
        with NoOpTracer().start_span("metric_extraction") as span:
            assert isinstance(span, NoOpSpan)

    def test_noop_span_accepts_everything(self):
        with NoOpTracer().start_span("index_build", attributes={"k": 1}) as span:
            span.set_attribute("key", "value")
            span.set_attributes({"number": 42, "float": 3.14})
            span.set_status("ok")
            span.set_status("error", "Something went wrong")
            span.record_exception(ValueError("test error"))

    def test_noop_tracer_does_not_swallow_exceptions(self):
        with pytest.raises(ValueError):
            with NoOpTracer().start_span("failing_operation"):
                raise ValueError("Test error")


class TestOTelSpan:
    """OTelSpan forwards to the wrapped span."""

    def test_forwards_attributes(self):
        inner = MagicMock()
        span = OTelSpan(inner)

        span.set_attribute("a", 1)
        span.set_attributes({"b": 2})
        error = RuntimeError("x")
        span.record_exception(error)

        inner.set_attribute.assert_called_once_with("a", 1)
        inner.set_attributes.assert_called_once_with({"b": 2})
        inner.record_exception.assert_called_once_with(error)


class TestGetTracer:
    """Test the get_tracer factory function."""

    def test_get_tracer_returns_noop_when_disabled(self):
        assert isinstance(get_tracer(), NoOpTracer)

    def test_get_tracer_singleton(self):
        assert get_tracer() is get_tracer()

    def test_get_tracer_returns_tracer_when_enabled(self, monkeypatch):
        monkeypatch.setenv("PHOENIX_ENABLED", "true")
        reset_config()
        reset_tracer()

        tracer = get_tracer()

        assert callable(tracer.start_span)
        with tracer.start_span("extraction_run") as span:
            span.set_attribute("extraction.cancelled", False)


class TestInitPhoenix:
    """init_phoenix / shutdown_phoenix when disabled."""

    def test_disabled_returns_false(self):
        assert init_phoenix(PhoenixConfig(enabled=False)) is False

    def test_shutdown_without_init_is_noop(self):
        shutdown_phoenix()


class TestInstrumentation:
    """Registration of auto-instrumentors."""

    def teardown_method(self):
        instrumentation._instrumented = False

    def test_registers_available_instrumentors(self):
        instrumentor_cls = MagicMock()
        with patch.object(instrumentation, "_instrumentors", return_value=[("openai", instrumentor_cls)]):
            assert instrumentation.register_instrumentors() is True
            instrumentor_cls.return_value.instrument.assert_called_once()

            instrumentation.uninstrument()
            instrumentor_cls.return_value.uninstrument.assert_called_once()

    def test_nothing_available(self):
        with patch.object(instrumentation, "_instrumentors", return_value=[]):
            assert instrumentation.register_instrumentors() is False

    def test_failing_instrumentor_is_skipped(self):
        broken = MagicMock()
        broken.return_value.instrument.side_effect = RuntimeError("version mismatch")
        working = MagicMock()
        with patch.object(
            instrumentation,
            "_instrumentors",
            return_value=[("openai", broken), ("langchain", working)],
        ):
            assert instrumentation.register_instrumentors() is True
            working.return_value.instrument.assert_called_once()


# ---------------------------------------------------------------------------
# ATTRIBUTE HELPER TESTS
# ---------------------------------------------------------------------------


class TestAttributeHelpers:
    """Test attribute helper functions."""

    def test_index_build_attributes(self):
        attrs = index_build_attributes(vector_count=40, embedding_failures=2, workers=4)
        assert attrs[INDEX_VECTOR_COUNT] == 40
        assert attrs[INDEX_EMBEDDING_FAILURES] == 2

    def test_metric_result_attributes(self):
        attrs = metric_result_attributes(
            metric_id="E1-1",
            confidence=0.95,
            has_value=True,
            evidence_chunk_id="abc-chunk-0",
        )

        assert attrs[METRIC_ID] == "E1-1"
        assert attrs[METRIC_CONFIDENCE] == 0.95
        assert attrs[METRIC_EVIDENCE_CHUNK_ID] == "abc-chunk-0"
        assert METRIC_ERROR not in attrs

    def test_metric_result_attributes_with_error(self):
        attrs = metric_result_attributes(
            metric_id="E1-1",
            confidence=0.0,
            has_value=False,
            error="QA backend unavailable",
        )

        assert attrs[METRIC_ERROR] == "QA backend unavailable"
        assert METRIC_EVIDENCE_CHUNK_ID not in attrs

    def test_extraction_run_attributes(self):
        attrs = extraction_run_attributes(
            chunk_count=12,
            metric_count=23,
            gap_count=5,
            cancelled=True,
            processing_time_ms=1500.5,
        )

        assert attrs[EXTRACTION_GAP_COUNT] == 5
        assert attrs[EXTRACTION_CANCELLED] is True
        assert attrs["extraction.processing_time_ms"] == 1500.5
