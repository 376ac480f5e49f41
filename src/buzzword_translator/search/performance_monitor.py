"""Rolling search latency tracking."""

import statistics
import threading
from collections import deque
from typing import Any, Deque, Dict

from ..config.logging import get_logger, log_performance
from ..config.settings import SearchConfig

logger = get_logger(__name__)

# Emit an average every this many searches
REPORT_INTERVAL = 10


class SearchPerformanceMonitor:
    """Keeps the most recent search timings and warns about slow searches."""

    def __init__(self, config: SearchConfig):
        """Initialize the performance monitor.

        Args:
            config: Search configuration with latency target and history size
        """
        self.config = config
        self.timings: Deque[float] = deque(maxlen=max(1, config.performance_history))
        self.total_searches = 0
        self._lock = threading.Lock()

    def record(self, duration_ms: float, cache_hit: bool = False) -> None:
        """Record one search and log against the latency target."""
        with self._lock:
            self.timings.append(duration_ms)
            self.total_searches += 1
            total = self.total_searches
            average = self._average()
        target = self.config.slow_search_ms

        log_performance(logger, "search", duration_ms, cache_hit=cache_hit)

        if duration_ms > target:
            logger.warning(
                "Search exceeded latency target",
                duration_ms=round(duration_ms, 3),
                target_ms=target,
                cache_hit=cache_hit,
            )

        if average > target:
            logger.warning(
                "Average search time exceeds latency target",
                average_ms=round(average, 3),
                target_ms=target,
            )

        if total % REPORT_INTERVAL == 0:
            logger.info(
                "Search performance",
                average_ms=round(average, 3),
                last_ms=round(duration_ms, 3),
                samples=len(self.timings),
            )

    @property
    def average_ms(self) -> float:
        with self._lock:
            return self._average()

    def _average(self) -> float:
        if not self.timings:
            return 0.0
        return statistics.fmean(self.timings)

    def summary(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "total_searches": self.total_searches,
                "samples": len(self.timings),
                "average_ms": self._average(),
                "max_ms": max(self.timings) if self.timings else 0.0,
            }
