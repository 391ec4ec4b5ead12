"""Read-through memoization for rotation trails.

Re-render triggers and interactive period tuning ask for the same trail
many times with unchanged inputs. Trails are pure functions of
(candles, benchmark candles, periods, trail length), so they can be reused
until any of those change.

Keys embed a fingerprint of the candle data itself. New or revised candles
produce a new key, so stale trails are never served; ``invalidate`` only
frees memory early.
"""

import threading
from collections import OrderedDict
from collections.abc import Callable, Sequence
from typing import NamedTuple

from marketpulse.logging import get_logger
from marketpulse.models import Candle, PeriodSettings
from marketpulse.rotation.models import RotationPoint

logger = get_logger(__name__)


def candle_fingerprint(candles: Sequence[Candle]) -> int:
    """Hash the (date_str, close) sequence of a candle history."""
    return hash(tuple((c.date_str, c.close) for c in candles))


class TrailKey(NamedTuple):
    """Everything a trail depends on."""

    ticker: str
    benchmark: str
    settings: PeriodSettings
    trail_length: int
    symbol_fingerprint: int
    benchmark_fingerprint: int


class TrailCache:
    """LRU-bounded trail cache guarded by a lock.

    The lock is held only around dictionary access, never while a trail is
    computed, so two callers racing on the same key may both compute it.
    Both results are identical, so the last write simply wins.

    Args:
        max_entries: Entries kept before the least recently used is evicted.
    """

    def __init__(self, max_entries: int = 256) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self._max_entries = max_entries
        self._entries: OrderedDict[TrailKey, tuple[RotationPoint, ...]] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: TrailKey) -> tuple[RotationPoint, ...] | None:
        """Return the cached trail for ``key``, or None."""
        with self._lock:
            trail = self._entries.get(key)
            if trail is None:
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return trail

    def put(self, key: TrailKey, trail: Sequence[RotationPoint]) -> tuple[RotationPoint, ...]:
        """Store ``trail`` under ``key`` and return the stored (immutable) copy."""
        frozen = tuple(trail)
        with self._lock:
            self._entries[key] = frozen
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
        return frozen

    def get_or_compute(
        self,
        key: TrailKey,
        compute: Callable[[], Sequence[RotationPoint]],
    ) -> tuple[RotationPoint, ...]:
        """Return the cached trail for ``key``, computing and storing it on a miss."""
        cached = self.get(key)
        if cached is not None:
            logger.debug("trail_cache_hit", ticker=key.ticker, benchmark=key.benchmark)
            return cached

        logger.debug("trail_cache_miss", ticker=key.ticker, benchmark=key.benchmark)
        return self.put(key, compute())

    def invalidate(self, ticker: str | None = None) -> int:
        """Drop cached trails for ``ticker`` (as symbol or benchmark), or all of them.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            if ticker is None:
                removed = len(self._entries)
                self._entries.clear()
                return removed

            stale = [
                key for key in self._entries
                if key.ticker == ticker or key.benchmark == ticker
            ]
            for key in stale:
                del self._entries[key]
            return len(stale)
