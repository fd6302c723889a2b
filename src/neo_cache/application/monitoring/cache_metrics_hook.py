"""Cache metrics hook.

Records hit, miss, origin latency, lock wait and failure measurements,
keeps per-domain aggregates and forwards events to optional sinks.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from ...core.value_objects.cache_metrics_event import CacheMetric, CacheMetricsEvent

if TYPE_CHECKING:
    from ..services.cache_namespace_registry import CacheNamespaceRegistry

logger = logging.getLogger(__name__)

MetricsSink = Callable[[CacheMetricsEvent], None]


@dataclass
class CacheDomainStats:
    """Aggregated cache statistics for one domain."""

    domain: str
    hits: int = 0
    misses: int = 0
    failures: int = 0
    origin_loads: int = 0
    origin_time_ms: float = 0.0
    lock_waits: int = 0
    lock_wait_time_ms: float = 0.0
    below_hit_threshold: bool = False

    @property
    def lookups(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        return self.hits / self.lookups if self.lookups else 0.0

    @property
    def avg_origin_time_ms(self) -> float:
        return self.origin_time_ms / self.origin_loads if self.origin_loads else 0.0

    @property
    def avg_lock_wait_ms(self) -> float:
        return self.lock_wait_time_ms / self.lock_waits if self.lock_waits else 0.0

    def update(self, event: CacheMetricsEvent) -> None:
        """Update statistics with a new event."""
        if event.metric == CacheMetric.HIT:
            self.hits += 1
        elif event.metric == CacheMetric.MISS:
            self.misses += 1
        elif event.metric == CacheMetric.FAILURE:
            self.failures += 1
        elif event.metric == CacheMetric.ORIGIN:
            self.origin_loads += 1
            self.origin_time_ms += event.value
        elif event.metric == CacheMetric.LOCK:
            self.lock_waits += 1
            self.lock_wait_time_ms += event.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "hits": self.hits,
            "misses": self.misses,
            "failures": self.failures,
            "hit_rate": round(self.hit_rate, 4),
            "origin_loads": self.origin_loads,
            "avg_origin_time_ms": round(self.avg_origin_time_ms, 2),
            "lock_waits": self.lock_waits,
            "avg_lock_wait_ms": round(self.avg_lock_wait_ms, 2),
        }


class CacheMetricsHook:
    """Cache metrics recorder.

    Every event is logged at debug level and folded into per-domain stats.
    When a namespace policy declares ``hit_threshold_alert`` a warning is
    logged once the hit rate falls below it (after ``min_alert_samples``
    lookups), and again only after it has recovered.
    """

    def __init__(
        self,
        registry: Optional["CacheNamespaceRegistry"] = None,
        sinks: Optional[List[MetricsSink]] = None,
        min_alert_samples: int = 100,
    ):
        self.registry = registry
        self._sinks: List[MetricsSink] = list(sinks or [])
        self.min_alert_samples = min_alert_samples
        self._stats: Dict[str, CacheDomainStats] = {}

    def add_sink(self, sink: MetricsSink) -> None:
        """Forward future events to ``sink``."""
        self._sinks.append(sink)

    def record_hit(self, domain: str, tenant_id: Optional[str] = None, extra: Optional[Dict[str, Any]] = None) -> None:
        self.record(CacheMetricsEvent(domain=domain, tenant_id=tenant_id, metric=CacheMetric.HIT, value=1, extra=extra))

    def record_miss(self, domain: str, tenant_id: Optional[str] = None, extra: Optional[Dict[str, Any]] = None) -> None:
        self.record(CacheMetricsEvent(domain=domain, tenant_id=tenant_id, metric=CacheMetric.MISS, value=1, extra=extra))

    def record_origin_latency(
        self,
        domain: str,
        value_ms: float,
        tenant_id: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.record(CacheMetricsEvent(domain=domain, tenant_id=tenant_id, metric=CacheMetric.ORIGIN, value=value_ms, extra=extra))

    def record_lock_wait(
        self,
        domain: str,
        value_ms: float,
        tenant_id: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.record(CacheMetricsEvent(domain=domain, tenant_id=tenant_id, metric=CacheMetric.LOCK, value=value_ms, extra=extra))

    def record_failure(
        self,
        domain: str,
        error: BaseException,
        tenant_id: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Record a failed cache operation and log it at error level."""
        self.record(CacheMetricsEvent(domain=domain, tenant_id=tenant_id, metric=CacheMetric.FAILURE, value=1, extra=extra))
        logger.error(
            f"Cache operation failed for domain '{domain}': {error}",
            extra={"domain": domain, "tenant_id": tenant_id, "metric_extra": extra or {}},
        )

    def record(self, event: CacheMetricsEvent) -> None:
        """Record a metrics event."""
        logger.debug(f"Cache metric {event.metric.value}={event.value} domain={event.domain}")

        stats = self._stats.get(event.domain)
        if stats is None:
            stats = self._stats[event.domain] = CacheDomainStats(domain=event.domain)
        stats.update(event)

        if event.metric in (CacheMetric.HIT, CacheMetric.MISS):
            self._check_hit_threshold(stats)

        for sink in self._sinks:
            try:
                sink(event)
            except Exception as e:
                logger.error(f"Cache metrics sink failed: {e}")

    def get_stats(self, domain: str) -> Optional[CacheDomainStats]:
        """Return aggregated stats for a domain."""
        return self._stats.get(domain)

    def get_all_stats(self) -> Dict[str, CacheDomainStats]:
        return dict(self._stats)

    def reset(self) -> None:
        self._stats.clear()

    def _check_hit_threshold(self, stats: CacheDomainStats) -> None:
        if self.registry is None or stats.lookups < self.min_alert_samples:
            return

        policy = self.registry.get(stats.domain)
        if policy is None or policy.hit_threshold_alert is None:
            return

        below = stats.hit_rate < policy.hit_threshold_alert
        if below and not stats.below_hit_threshold:
            logger.warning(
                f"Cache hit rate for domain '{stats.domain}' dropped to {stats.hit_rate:.2%} "
                f"(alert threshold {policy.hit_threshold_alert:.2%})",
                extra={"domain": stats.domain, "hit_rate": stats.hit_rate},
            )
        stats.below_hit_threshold = below
