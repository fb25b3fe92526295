"""
colorpalette Metrics Collection
In-process metrics collection and timing for extraction and API calls.
"""
import time
from collections import defaultdict, Counter
from contextlib import contextmanager
from threading import Lock
from typing import Any, Dict, List, Optional

import numpy as np
from loguru import logger


class MetricsCollector:
    """Simple in-process metrics collector."""

    def __init__(self, max_samples: int = 1000):
        """Initialize metrics collector."""
        self.max_samples = max_samples
        self._lock = Lock()
        self._counters: Dict[str, int] = Counter()
        self._timings: Dict[str, List[float]] = defaultdict(list)
        self._start_time = time.time()

    def increment(self, name: str, amount: int = 1):
        """Increment a named counter."""
        with self._lock:
            self._counters[name] += amount

    def increment_failure_count(self, operation: str, error_type: str):
        """Increment failure counter by operation and error type."""
        with self._lock:
            self._counters[f"{operation}_failed_total_{error_type}"] += 1

    def record_timing(self, operation: str, duration_ms: float):
        """Record timing for an operation."""
        with self._lock:
            timings = self._timings[f"{operation}_duration_ms"]
            timings.append(duration_ms)
            # Keep only recent samples to bound memory
            if len(timings) > self.max_samples:
                del timings[0]

    def get_counters(self) -> Dict[str, int]:
        """Get current counter values."""
        with self._lock:
            return dict(self._counters)

    def get_timing_stats(self) -> Dict[str, Dict[str, float]]:
        """Get timing statistics."""
        with self._lock:
            stats = {}
            for operation, timings in self._timings.items():
                if timings:
                    stats[operation] = {
                        "count": len(timings),
                        "mean": float(np.mean(timings)),
                        "min": float(np.min(timings)),
                        "max": float(np.max(timings)),
                        "p50": float(np.percentile(timings, 50)),
                        "p95": float(np.percentile(timings, 95))
                    }
            return stats

    def get_uptime_seconds(self) -> float:
        """Get service uptime in seconds."""
        return time.time() - self._start_time

    def get_summary(self) -> Dict[str, Any]:
        """Get complete metrics summary."""
        return {
            "uptime_seconds": self.get_uptime_seconds(),
            "counters": self.get_counters(),
            "timing_stats": self.get_timing_stats()
        }

    def reset(self):
        """Reset all metrics (for testing)."""
        with self._lock:
            self._counters.clear()
            self._timings.clear()
            self._start_time = time.time()


# Global metrics instance
_metrics: Optional[MetricsCollector] = None


def get_metrics() -> MetricsCollector:
    """Get or create global metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def reset_metrics():
    """Reset global metrics (for testing)."""
    global _metrics
    if _metrics is not None:
        _metrics.reset()


@contextmanager
def performance_monitor(operation_name: str, **context: Any):
    """Context manager timing an operation and recording it in the global collector."""
    metrics = get_metrics()
    start_time = time.perf_counter()
    error_msg = None

    try:
        yield
    except Exception as e:
        error_msg = str(e)
        metrics.increment_failure_count(operation_name, type(e).__name__)
        raise
    finally:
        duration_ms = (time.perf_counter() - start_time) * 1000
        metrics.record_timing(operation_name, duration_ms)
        metrics.increment(f"{operation_name}_total")

        if error_msg:
            logger.bind(**context).error(f"Operation {operation_name} failed after {duration_ms:.1f}ms: {error_msg}")
        else:
            logger.bind(**context).debug(f"Operation {operation_name} completed in {duration_ms:.1f}ms")
