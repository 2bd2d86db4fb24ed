"""
Unit tests for request ids and metrics collection.
"""

import pytest

from palettesync.utils.ids import generate_request_id
from palettesync.utils.metrics import MetricsCollector


class TestRequestIds:
    def test_prefix_and_uniqueness(self):
        first = generate_request_id("theme")
        second = generate_request_id("theme")
        assert first.startswith("theme-")
        assert first != second

    def test_timestamp_segment(self):
        _, timestamp, short_uuid = generate_request_id("extract").split("-")
        assert len(timestamp) == 14 and timestamp.isdigit()
        assert len(short_uuid) == 8


class TestMetricsCollector:
    """Test in-process counters and timing statistics"""

    def test_counters(self):
        metrics = MetricsCollector()
        metrics.increment_request_count("extract")
        metrics.increment_request_count("theme")
        metrics.increment_algorithm_count("median")
        metrics.increment_failure_count("emptysampleerror")

        counters = metrics.get_counters()
        assert counters["requests_total"] == 2
        assert counters["requests_total_extract"] == 1
        assert counters["extract_algorithm_used_total_median"] == 1
        assert counters["failed_total_emptysampleerror"] == 1

    def test_timing_percentiles(self):
        metrics = MetricsCollector()
        for ms in (10.0, 20.0, 30.0, 40.0, 50.0):
            metrics.record_timing("extract", ms)

        stats = metrics.get_timing_stats()["extract_duration_ms"]
        assert stats["count"] == 5
        assert stats["mean"] == pytest.approx(30.0)
        assert stats["p50"] == pytest.approx(30.0)
        assert stats["p95"] == pytest.approx(48.0)

    def test_palette_sizes_and_reset(self):
        metrics = MetricsCollector()
        assert metrics.get_palette_size_stats() == {}
        metrics.record_palette_size(6)
        metrics.record_palette_size(8)
        assert metrics.get_palette_size_stats()["max"] == 8

        metrics.reset()
        summary = metrics.get_summary()
        assert summary["counters"] == {}
        assert summary["timing_stats"] == {}
        assert summary["palette_size_stats"] == {}
