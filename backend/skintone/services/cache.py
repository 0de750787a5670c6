"""
SkinTone Consistency Cache
Bounded store of recent (signature, result) pairs so that visually similar
photos of the same subject get the same recommendation.
"""
from collections import deque
from dataclasses import dataclass
from threading import Lock
from typing import Any, Deque, Dict, List, Optional

import numpy as np
from loguru import logger

from skintone.schemas import AnalysisResult
from skintone.services.signature import FaceSignature, signatures_comparable


def similarity(a: FaceSignature, b: FaceSignature, scale: float = 0.4) -> float:
    """
    Similarity score in [0, 100] between two signatures.

    Args:
        a, b: Face signatures
        scale: Score lost per unit of mean absolute difference

    Returns:
        max(0, 100 - mean|a_i - b_i| * scale); 0 when lengths differ or both are empty
    """
    if not a or not signatures_comparable(a, b):
        return 0.0

    diff = np.abs(np.asarray(a, dtype=np.int64) - np.asarray(b, dtype=np.int64))
    return max(0.0, 100.0 - float(diff.mean()) * scale)


@dataclass(frozen=True)
class CacheEntry:
    """A recorded signature and the result it produced."""
    signature: FaceSignature
    result: AnalysisResult


class ConsistencyCache:
    """
    FIFO cache of recent analyses matched by signature similarity.

    Lookup returns the first entry, in insertion order, whose similarity is
    above the threshold rather than the closest one, so results depend on
    the order entries were recorded. Hits never reorder entries.
    """

    def __init__(self, capacity: int = 5, threshold: float = 80.0, scale: float = 0.4):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self.threshold = threshold
        self.scale = scale
        self._entries: Deque[CacheEntry] = deque()
        self._lock = Lock()
        self.stats_counters = {'hits': 0, 'misses': 0, 'records': 0, 'evictions': 0}

    def lookup(self, signature: FaceSignature) -> Optional[AnalysisResult]:
        """Result of the first entry more similar than the threshold, if any."""
        if not signature:
            return None

        with self._lock:
            for index, entry in enumerate(self._entries):
                score = similarity(signature, entry.signature, self.scale)
                if score > self.threshold:
                    self.stats_counters['hits'] += 1
                    logger.debug(f"Consistency cache hit at entry {index} (similarity {score:.1f})")
                    return entry.result
            self.stats_counters['misses'] += 1
        return None

    def record(self, signature: FaceSignature, result: AnalysisResult) -> None:
        """Append an entry, evicting the oldest one when full. Empty signatures are ignored."""
        if not signature:
            return

        with self._lock:
            if len(self._entries) >= self.capacity:
                self._entries.popleft()
                self.stats_counters['evictions'] += 1
            self._entries.append(CacheEntry(tuple(signature), result))
            self.stats_counters['records'] += 1

    def entries(self) -> List[CacheEntry]:
        """Snapshot of entries, oldest first."""
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        """Drop all entries and reset statistics."""
        with self._lock:
            self._entries.clear()
            for key in self.stats_counters:
                self.stats_counters[key] = 0

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            return {
                'size': len(self._entries),
                'capacity': self.capacity,
                **self.stats_counters
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
