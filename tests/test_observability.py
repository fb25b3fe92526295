"""
Tests for metrics collection, performance monitoring, request ids,
structured logging and configuration.
"""
import re

import pytest
from loguru import logger

from colorpalette.config import Config
from colorpalette.utils.ids import generate_request_id
from colorpalette.utils.logging import StructuredLogger, get_logger, log_request
from colorpalette.utils.metrics import MetricsCollector, get_metrics, performance_monitor


class TestMetricsCollector:
    """Test the in-process metrics collector."""

    def test_counters(self):
        metrics = MetricsCollector()
        metrics.increment("palettes_total")
        metrics.increment("palettes_total", 2)
        assert metrics.get_counters() == {"palettes_total": 3}

    def test_failure_counter_name(self):
        metrics = MetricsCollector()
        metrics.increment_failure_count("color_extraction", "UnsupportedSourceError")
        assert metrics.get_counters() == {"color_extraction_failed_total_UnsupportedSourceError": 1}

    def test_timing_stats(self):
        metrics = MetricsCollector()
        for value in (10.0, 20.0, 30.0):
            metrics.record_timing("generate", value)
        stats = metrics.get_timing_stats()["generate_duration_ms"]
        assert stats["count"] == 3
        assert stats["mean"] == pytest.approx(20.0)
        assert stats["min"] == 10.0
        assert stats["max"] == 30.0
        assert stats["p50"] == pytest.approx(20.0)

    def test_samples_are_bounded(self):
        metrics = MetricsCollector(max_samples=5)
        for value in range(20):
            metrics.record_timing("op", float(value))
        stats = metrics.get_timing_stats()["op_duration_ms"]
        assert stats["count"] == 5
        assert stats["min"] == 15.0

    def test_reset(self):
        metrics = MetricsCollector()
        metrics.increment("a")
        metrics.record_timing("b", 1.0)
        metrics.reset()
        assert metrics.get_counters() == {}
        assert metrics.get_timing_stats() == {}


class TestPerformanceMonitor:
    """Test the timing context manager."""

    def test_success(self):
        with performance_monitor("unit_op", request_id="pal-1"):
            pass
        metrics = get_metrics()
        assert metrics.get_counters()["unit_op_total"] == 1
        assert metrics.get_timing_stats()["unit_op_duration_ms"]["count"] == 1

    def test_failure_is_counted_and_reraised(self):
        with pytest.raises(ValueError):
            with performance_monitor("unit_op"):
                raise ValueError("boom")
        counters = get_metrics().get_counters()
        assert counters["unit_op_total"] == 1
        assert counters["unit_op_failed_total_ValueError"] == 1


class TestRequestIds:
    """Test request id generation."""

    def test_format(self):
        request_id = generate_request_id("extract")
        assert re.match(r"^extract-\d{14}-[0-9a-f]{8}$", request_id)

    def test_unique(self):
        assert generate_request_id() != generate_request_id()


class TestLogging:
    """Test the structured logger."""

    def test_singleton(self):
        assert get_logger() is get_logger()

    def test_extra_fields_are_bound(self):
        messages = []
        StructuredLogger(level="DEBUG")
        sink_id = logger.add(lambda message: messages.append(message.record), level="DEBUG")
        try:
            log_request("pal-123", "generate", scheme="triadic")
        finally:
            logger.remove(sink_id)

        record = messages[-1]
        assert record["message"] == "generate request"
        assert record["extra"]["request_id"] == "pal-123"
        assert record["extra"]["scheme"] == "triadic"


class TestConfig:
    """Test configuration validators."""

    def test_count_bounds(self):
        assert Config.validate_count(1)
        assert Config.validate_count(50)
        assert not Config.validate_count(0)
        assert not Config.validate_count(51)

    def test_backend(self):
        assert Config.validate_backend("pillow")
        assert Config.validate_backend("opencv")
        assert not Config.validate_backend("wand")

    def test_ranges(self):
        assert Config.validate_max_edge(1024)
        assert not Config.validate_max_edge(10)
        assert Config.validate_quantize_step(16)
        assert not Config.validate_quantize_step(0)

    def test_allowed_origins(self, monkeypatch):
        monkeypatch.setattr(Config, "ALLOWED_ORIGINS", "http://a.test, http://b.test,")
        assert Config.allowed_origins() == ["http://a.test", "http://b.test"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
