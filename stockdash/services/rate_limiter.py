from __future__ import annotations

import threading
import time
from typing import Callable

from stockdash.schemas.rate_limit import RateLimitRecord

DEFAULT_MAX_REQUESTS = 10
DEFAULT_WINDOW_MS = 60_000


def _now_ms() -> int:
    return int(time.time() * 1000)


class InMemoryRateLimitStore:
    """Process-local record map with its own clock and lock.

    Expired records are swept at most once per ``sweep_interval_ms``.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], int] | None = None,
        sweep_interval_ms: int = DEFAULT_WINDOW_MS,
    ) -> None:
        self.clock = clock or _now_ms
        self.sweep_interval_ms = sweep_interval_ms
        self.lock = threading.Lock()
        self._records: dict[str, RateLimitRecord] = {}
        self._next_sweep_at = 0

    def now(self) -> int:
        return int(self.clock())

    def get(self, key: str) -> RateLimitRecord | None:
        return self._records.get(key)

    def put(self, key: str, record: RateLimitRecord) -> None:
        self._records[key] = record

    def evict_expired(self, now: int) -> int:
        if now < self._next_sweep_at:
            return 0
        self._next_sweep_at = now + self.sweep_interval_ms
        expired = [k for k, record in self._records.items() if now > record.reset_time]
        for k in expired:
            self._records.pop(k, None)
        return len(expired)

    def __len__(self) -> int:
        return len(self._records)


def rate_limit(
    key: str,
    max_requests: int = DEFAULT_MAX_REQUESTS,
    window_ms: int = DEFAULT_WINDOW_MS,
    *,
    store: InMemoryRateLimitStore,
) -> bool:
    """Fixed-window counter: True when the request for ``key`` is accepted."""
    with store.lock:
        now = store.now()
        store.evict_expired(now)
        record = store.get(key)

        if record is None or now > record.reset_time:
            store.put(key, RateLimitRecord(count=1, reset_time=now + window_ms))
            return True

        if record.count >= max_requests:
            return False

        record.count += 1
        return True
