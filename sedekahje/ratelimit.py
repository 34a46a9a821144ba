"""Generic cell rate algorithm (GCRA) request limiting."""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from collections.abc import Hashable
from dataclasses import dataclass

DEFAULT_MAX_KEYS = 65536


@dataclass(frozen=True)
class RateQuota:
    """``max_rate`` requests per ``period`` seconds, plus a burst of ``max_burst``."""

    max_rate: int
    period: float = 60.0
    max_burst: int = 0

    def __post_init__(self):
        if self.max_rate <= 0 or self.period <= 0 or self.max_burst < 0:
            raise ValueError("max_rate and period must be positive, max_burst not negative")

    @property
    def emission_interval(self) -> float:
        return self.period / self.max_rate

    @property
    def limit(self) -> int:
        return self.max_burst + 1


DEFAULT_QUOTA = RateQuota(max_rate=20, period=60.0, max_burst=5)


@dataclass(frozen=True)
class RateLimitResult:
    limited: bool
    limit: int
    remaining: int
    reset_after: float
    retry_after: float | None


class GCRARateLimiter:
    """Per-key GCRA limiter keeping at most ``max_keys`` keys, least recently used evicted."""

    def __init__(self, quota: RateQuota = DEFAULT_QUOTA, max_keys: int = DEFAULT_MAX_KEYS):
        if max_keys <= 0:
            raise ValueError("max_keys must be positive")
        self.quota = quota
        self.max_keys = max_keys
        self._arrivals: OrderedDict[Hashable, float] = OrderedDict()
        self._lock = threading.Lock()

    def allow(self, key: Hashable, now: float | None = None) -> RateLimitResult:
        """Account for one request under ``key`` at ``now`` (monotonic seconds)."""
        now = time.monotonic() if now is None else now
        emission = self.quota.emission_interval
        tolerance = emission * self.quota.limit

        with self._lock:
            tat = self._arrivals.get(key, now)
            new_tat = max(tat, now) + emission
            diff = now - (new_tat - tolerance)
            limited = diff < 0
            if limited:
                ttl = tat - now
            else:
                ttl = new_tat - now
                self._arrivals[key] = new_tat
            if key in self._arrivals:
                self._arrivals.move_to_end(key)
            while len(self._arrivals) > self.max_keys:
                self._arrivals.popitem(last=False)

        headroom = tolerance - ttl
        return RateLimitResult(
            limited=limited,
            limit=self.quota.limit,
            remaining=max(int(headroom / emission), 0) if headroom > -emission else 0,
            reset_after=max(ttl, 0.0),
            retry_after=-diff if limited else None,
        )