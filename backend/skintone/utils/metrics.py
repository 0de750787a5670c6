"""
SkinTone Metrics Collection
In-process counters and timing windows for the analysis service.
"""
import time
from collections import Counter, defaultdict, deque
from threading import Lock
from typing import Any, Deque, Dict, Optional

import numpy as np

# Timing samples kept per operation; older samples fall out of the window
TIMING_WINDOW = 1000


class MetricsCollector:
    """
    Lock-guarded counters and rolling timing windows.

    Counter names follow ``<name>_total`` or ``<name>_total_<label>``.
    """

    def __init__(self, timing_window: int = TIMING_WINDOW):
        self._lock = Lock()
        self._timing_window = timing_window
        self._counters: Counter = Counter()
        self._timings: Dict[str, Deque[float]] = defaultdict(lambda: deque(maxlen=self._timing_window))
        self._start_time = time.time()

    def increment(self, name: str, label: Optional[str] = None, amount: int = 1):
        key = f"{name}_total_{label}" if label else f"{name}_total"
        with self._lock:
            self._counters[key] += amount

    def increment_analysis_count(self):
        self.increment("analyses")

    def increment_undertone_count(self, undertone: str):
        self.increment("undertone", undertone)

    def increment_face_detected_count(self):
        self.increment("face_detected")

    def increment_cache_hit_count(self):
        self.increment("cache_hits")

    def increment_fallback_count(self, reason: str):
        """Count a default-palette fallback ("error", "insufficient_samples")."""
        self.increment("fallback", reason)

    def record_timing(self, operation: str, duration_ms: float):
        with self._lock:
            self._timings[f"{operation}_duration_ms"].append(duration_ms)

    def get_counters(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counters)

    def get_timing_stats(self) -> Dict[str, Dict[str, float]]:
        """count / mean / min / max / p50 / p95 per timed operation."""
        with self._lock:
            windows = {name: np.asarray(samples, dtype=np.float64)
                       for name, samples in self._timings.items() if samples}

        stats = {}
        for name, values in windows.items():
            p50, p95 = np.percentile(values, [50, 95])
            stats[name] = {
                "count": int(values.size),
                "mean": float(values.mean()),
                "min": float(values.min()),
                "max": float(values.max()),
                "p50": float(p50),
                "p95": float(p95),
            }
        return stats

    def get_summary(self) -> Dict[str, Any]:
        return {
            "uptime_seconds": time.time() - self._start_time,
            "counters": self.get_counters(),
            "timing_stats": self.get_timing_stats(),
        }

    def reset(self):
        with self._lock:
            self._counters.clear()
            self._timings.clear()
            self._start_time = time.time()


# Global metrics instance
_metrics: Optional[MetricsCollector] = None


def get_metrics() -> MetricsCollector:
    """Get or create the process-wide collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def reset_metrics():
    """Clear the process-wide collector (tests)."""
    if _metrics is not None:
        _metrics.reset()
