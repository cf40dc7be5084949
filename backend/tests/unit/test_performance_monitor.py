"""
Unit tests for PerformanceMonitor.

Tests the rolling sample buffer, aggregate statistics,
slow operation warnings and periodic stats logging.
"""

import logging
import threading

import pytest

from clonescope.services.performance_monitor import (
    PerformanceMonitor,
    PerformanceSample,
    PerformanceStats,
)

LOGGER_NAME = "clonescope.services.performance_monitor"


class TestConstruction:
    """Tests for constructor validation."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"stats_log_interval": 0},
            {"stats_log_interval": -5},
            {"max_samples": 0},
            {"slow_threshold_ms": 0},
        ],
    )
    def test_invalid_configuration_rejected(self, kwargs):
        with pytest.raises(ValueError):
            PerformanceMonitor(**kwargs)

    def test_single_sample_buffer_allowed(self):
        monitor = PerformanceMonitor(max_samples=1, slow_threshold_ms=1000, stats_log_interval=1)
        monitor.record_detection(1.0, success=True)
        monitor.record_detection(2.0, success=True)

        assert [s.duration_ms for s in monitor.get_recent_samples(5)] == [2.0]


class TestRecording:
    """Tests for sample recording."""

    def test_record_detection(self, monitor):
        monitor.record_detection(120.0, success=True, technologies_detected=7)

        sample = monitor.get_recent_samples(1)[0]
        assert isinstance(sample, PerformanceSample)
        assert sample.operation == "detection"
        assert sample.technologies_detected == 7
        assert sample.is_fallback is False

    def test_record_insights_generation(self, monitor):
        monitor.record_insights_generation(3.5, cached=True)

        sample = monitor.get_recent_samples(1)[0]
        assert sample.operation == "insights"
        assert sample.success is True
        assert sample.cached is True

    def test_buffer_keeps_most_recent(self):
        monitor = PerformanceMonitor(max_samples=10, slow_threshold_ms=1000, stats_log_interval=100)
        for i in range(25):
            monitor.record_detection(float(i), success=True)

        assert len(monitor) == 10
        durations = [s.duration_ms for s in monitor.get_recent_samples(10)]
        assert durations == [float(i) for i in range(15, 25)]

    def test_negative_duration_rejected(self, monitor):
        with pytest.raises(ValueError):
            monitor.record_detection(-1.0, success=True)

    def test_concurrent_recording(self):
        monitor = PerformanceMonitor(max_samples=10000, slow_threshold_ms=1000, stats_log_interval=10000)

        def worker():
            for _ in range(100):
                monitor.record_insights_generation(1.0)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert monitor.get_stats().total == 800


class TestStats:
    """Tests for aggregate statistics."""

    def test_empty_stats(self, monitor):
        stats = monitor.get_stats()

        assert isinstance(stats, PerformanceStats)
        assert stats.total == 0
        assert stats.success_rate == 0.0
        assert stats.average_duration_ms == 0.0

    def test_rates_and_average(self, monitor):
        monitor.record_detection(100.0, success=True)
        monitor.record_detection(200.0, success=True)
        monitor.record_detection(300.0, success=False, is_fallback=True)

        stats = monitor.get_stats()
        assert stats.total == 3
        assert stats.successful == 2
        assert stats.failed == 1
        assert stats.fallback_count == 1
        assert stats.success_rate == 66.67
        assert stats.fallback_rate == 33.33
        assert stats.average_duration_ms == 200.0

    def test_filter_by_operation(self, monitor):
        monitor.record_detection(100.0, success=True)
        monitor.record_insights_generation(2.0, cached=True)
        monitor.record_insights_generation(40.0, success=False, is_fallback=True)

        detection = monitor.get_stats("detection")
        insights = monitor.get_stats("insights")

        assert detection.total == 1
        assert insights.total == 2
        assert insights.cached_count == 1
        assert insights.fallback_count == 1
        assert monitor.get_stats().total == 3

    def test_slow_count(self):
        monitor = PerformanceMonitor(max_samples=100, slow_threshold_ms=50, stats_log_interval=100)
        monitor.record_detection(49.0, success=True)
        monitor.record_detection(50.0, success=True)
        monitor.record_detection(51.0, success=True)

        assert monitor.get_stats().slow_count == 1


class TestLogging:
    """Tests for warning and periodic stats logs."""

    def test_slow_operation_warning(self, caplog):
        monitor = PerformanceMonitor(max_samples=100, slow_threshold_ms=50, stats_log_interval=100)

        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            monitor.record_detection(75.0, success=False)

        assert "Slow detection operation: 75ms" in caplog.text

    def test_fast_operation_not_logged(self, caplog):
        monitor = PerformanceMonitor(max_samples=100, slow_threshold_ms=50, stats_log_interval=100)

        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            monitor.record_detection(10.0, success=True)

        assert "Slow" not in caplog.text

    def test_stats_logged_every_interval(self, caplog):
        monitor = PerformanceMonitor(max_samples=100, slow_threshold_ms=1000, stats_log_interval=5)

        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            for _ in range(12):
                monitor.record_insights_generation(1.0)

        messages = [r.getMessage() for r in caplog.records if "Performance stats" in r.getMessage()]
        assert len(messages) == 2
        assert "after 5 operations" in messages[0]
        assert "after 10 operations" in messages[1]

    def test_interval_counts_recorded_samples_past_buffer_size(self, caplog):
        """The buffer stays full, the interval keeps firing."""
        monitor = PerformanceMonitor(max_samples=10, slow_threshold_ms=1000, stats_log_interval=10)

        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            for _ in range(30):
                monitor.record_detection(1.0, success=True)

        messages = [r.getMessage() for r in caplog.records if "Performance stats" in r.getMessage()]
        assert len(messages) == 3


class TestRecentAndReset:
    """Tests for sample access and reset."""

    def test_recent_samples_order(self, monitor):
        for duration in (1.0, 2.0, 3.0):
            monitor.record_detection(duration, success=True)

        assert [s.duration_ms for s in monitor.get_recent_samples(2)] == [2.0, 3.0]

    def test_recent_samples_more_than_available(self, monitor):
        monitor.record_detection(1.0, success=True)
        assert len(monitor.get_recent_samples(10)) == 1

    def test_recent_samples_zero(self, monitor):
        monitor.record_detection(1.0, success=True)
        assert monitor.get_recent_samples(0) == []

    def test_reset(self, monitor):
        monitor.record_detection(1.0, success=True)
        monitor.reset()

        assert len(monitor) == 0
        assert monitor.get_stats().total == 0
