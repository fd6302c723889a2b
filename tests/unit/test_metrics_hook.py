"""Tests for the cache metrics hook."""

import logging

import pytest

from neo_cache.application.monitoring.cache_metrics_hook import CacheMetricsHook
from neo_cache.core.value_objects.cache_metrics_event import CacheMetric


class TestCacheMetricsHook:
    """Test aggregation, sinks and hit-rate alerts."""

    def test_aggregates_per_domain(self, metrics):
        metrics.record_hit("tenant-config")
        metrics.record_hit("tenant-config")
        metrics.record_miss("tenant-config")
        metrics.record_origin_latency("tenant-config", 30.0)
        metrics.record_origin_latency("tenant-config", 10.0)
        metrics.record_lock_wait("tenant-config", 4.0)
        metrics.record_hit("user-profile")

        stats = metrics.get_stats("tenant-config")
        assert stats.hits == 2
        assert stats.misses == 1
        assert stats.hit_rate == pytest.approx(2 / 3)
        assert stats.avg_origin_time_ms == pytest.approx(20.0)
        assert stats.avg_lock_wait_ms == pytest.approx(4.0)
        assert set(metrics.get_all_stats()) == {"tenant-config", "user-profile"}

    def test_empty_stats(self, metrics):
        metrics.record_lock_wait("tenant-config", 1.0)
        stats = metrics.get_stats("tenant-config")

        assert stats.hit_rate == 0.0
        assert stats.avg_origin_time_ms == 0.0
        assert stats.to_dict()["lock_waits"] == 1

    def test_sinks_receive_events(self, metrics):
        events = []
        metrics.add_sink(events.append)

        metrics.record_miss("tenant-config", tenant_id="t1", extra={"key": "k"})

        assert len(events) == 1
        assert events[0].metric == CacheMetric.MISS
        assert events[0].tenant_id == "t1"
        assert events[0].extra == {"key": "k"}

    def test_failing_sink_is_isolated(self):
        events = []

        def broken(event):
            raise RuntimeError("exporter down")

        hook = CacheMetricsHook(sinks=[broken, events.append])
        hook.record_hit("tenant-config")

        assert len(events) == 1
        assert hook.get_stats("tenant-config").hits == 1

    def test_failure_is_logged_at_error(self, metrics, caplog):
        with caplog.at_level(logging.ERROR):
            metrics.record_failure("tenant-config", ConnectionError("redis down"), "t1")

        assert metrics.get_stats("tenant-config").failures == 1
        assert "redis down" in caplog.text

    def test_hit_rate_alert_fires_once_per_crossing(self, metrics, caplog):
        # user-profile alerts below 50% after 4 lookups
        with caplog.at_level(logging.WARNING):
            for _ in range(4):
                metrics.record_miss("user-profile")
            metrics.record_miss("user-profile")

        alerts = [record for record in caplog.records if "dropped to" in record.getMessage()]
        assert len(alerts) == 1
        assert metrics.get_stats("user-profile").below_hit_threshold

        for _ in range(10):
            metrics.record_hit("user-profile")
        assert not metrics.get_stats("user-profile").below_hit_threshold

    def test_no_alert_without_threshold(self, metrics, caplog):
        with caplog.at_level(logging.WARNING):
            for _ in range(10):
                metrics.record_miss("tenant-config")

        assert "dropped to" not in caplog.text

    def test_reset(self, metrics):
        metrics.record_hit("tenant-config")
        metrics.reset()

        assert metrics.get_stats("tenant-config") is None
