"""
Performance measurement for dispersion calculations.

A PerformanceMonitor is an ordinary object the caller creates and passes in;
there is no module-level instance.  Wrap any call in ``monitor.measure()``
to record its duration and whether it raised:

    monitor = PerformanceMonitor()
    with monitor.measure("hazard_zones", chemical="chlorine"):
        zones = hazard_zones(scenario)
    monitor.get_stats("hazard_zones")
"""

import logging
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from config import MONITOR_MAX_METRICS, SLOW_OPERATION_MS

logger = logging.getLogger(__name__)


@dataclass
class PerformanceMetric:
    """One measured call."""

    name: str
    duration_ms: float
    timestamp: float
    success: bool
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PerformanceStats:
    """Aggregate timings for every call recorded under one name."""

    name: str
    count: int
    total_ms: float
    avg_ms: float
    min_ms: float
    max_ms: float
    success_rate: float
    last_run: float


class PerformanceMonitor:
    """Records call durations in a bounded buffer.

    Args:
        max_metrics: Oldest metrics are discarded beyond this many.
        slow_threshold_ms: Calls slower than this are logged as warnings.
        enabled: When False, ``measure`` records nothing.
    """

    def __init__(
        self,
        max_metrics: int = MONITOR_MAX_METRICS,
        slow_threshold_ms: float = SLOW_OPERATION_MS,
        enabled: bool = True,
    ):
        self._metrics = deque(maxlen=max_metrics)
        self.slow_threshold_ms = slow_threshold_ms
        self.enabled = enabled

    @contextmanager
    def measure(self, name: str, **metadata) -> Iterator[None]:
        """Time the enclosed block; exceptions are recorded and re-raised."""
        if not self.enabled:
            yield
            return

        start = time.perf_counter()
        success = True
        try:
            yield
        except BaseException:
            success = False
            raise
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            self._record(PerformanceMetric(
                name=name,
                duration_ms=duration_ms,
                timestamp=time.time(),
                success=success,
                metadata=metadata,
            ))

    def _record(self, metric: PerformanceMetric) -> None:
        self._metrics.append(metric)
        if metric.duration_ms > self.slow_threshold_ms:
            logger.warning(
                "Slow operation: %s took %.2f ms", metric.name, metric.duration_ms
            )

    def get_metrics(self, name: Optional[str] = None) -> List[PerformanceMetric]:
        """All recorded metrics, optionally only those with the given name."""
        if name is None:
            return list(self._metrics)
        return [m for m in self._metrics if m.name == name]

    def get_stats(self, name: str) -> Optional[PerformanceStats]:
        """Aggregate statistics for one operation, or None if never measured."""
        metrics = self.get_metrics(name)
        if not metrics:
            return None
        durations = [m.duration_ms for m in metrics]
        total = sum(durations)
        return PerformanceStats(
            name=name,
            count=len(metrics),
            total_ms=total,
            avg_ms=total / len(metrics),
            min_ms=min(durations),
            max_ms=max(durations),
            success_rate=sum(m.success for m in metrics) / len(metrics),
            last_run=metrics[-1].timestamp,
        )

    def get_all_stats(self) -> List[PerformanceStats]:
        """Statistics for every operation name, in order of first appearance."""
        names = dict.fromkeys(m.name for m in self._metrics)
        return [self.get_stats(name) for name in names]

    def get_summary(self, top: int = 5) -> Dict[str, Any]:
        """Totals across all operations plus the slowest ones on average."""
        count = len(self._metrics)
        total = sum(m.duration_ms for m in self._metrics)
        successes = sum(m.success for m in self._metrics)
        slowest = sorted(self.get_all_stats(), key=lambda s: s.avg_ms, reverse=True)
        return {
            "total_operations": count,
            "total_ms": total,
            "avg_ms": total / count if count else 0.0,
            "success_rate": successes / count if count else 1.0,
            "slowest_operations": slowest[:top],
        }

    def clear(self) -> None:
        self._metrics.clear()
