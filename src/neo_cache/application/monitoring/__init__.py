"""Cache metrics."""

from .cache_metrics_hook import CacheMetricsHook, CacheDomainStats, MetricsSink

__all__ = ["CacheMetricsHook", "CacheDomainStats", "MetricsSink"]
