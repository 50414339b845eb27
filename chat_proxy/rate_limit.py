"""Fixed-window request counting keyed by client IP."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

FORWARDED_FOR_HEADER = "x-forwarded-for"
CDN_CLIENT_IP_HEADER = "cf-connecting-ip"
UNKNOWN_CLIENT = "unknown"


@dataclass(frozen=True)
class RateLimitEntry:
    count: int
    reset_at: float

    def expired(self, now: float) -> bool:
        return now > self.reset_at


class RateLimitStore(Protocol):
    """Storage backend for per-key request counters."""

    def hit(self, key: str, now: float, window: float) -> RateLimitEntry:
        """Atomically start a new window or increment the current one."""

    def prune(self, now: float) -> int:
        """Drop expired entries and return how many were removed."""


class InMemoryRateLimitStore:
    """Process-local store; counters are lost on restart."""

    def __init__(self) -> None:
        self._entries: dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()

    def hit(self, key: str, now: float, window: float) -> RateLimitEntry:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.expired(now):
                entry = RateLimitEntry(count=1, reset_at=now + window)
            else:
                entry = RateLimitEntry(count=entry.count + 1, reset_at=entry.reset_at)
            self._entries[key] = entry
            return entry

    def prune(self, now: float) -> int:
        with self._lock:
            stale = [key for key, entry in self._entries.items() if entry.expired(now)]
            for key in stale:
                del self._entries[key]
            return len(stale)

    def get(self, key: str) -> RateLimitEntry | None:
        with self._lock:
            return self._entries.get(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class RateLimiter:
    """Allow ``max_requests`` per ``window_seconds`` for each client."""

    def __init__(
        self,
        store: RateLimitStore | None = None,
        *,
        max_requests: int = 10,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.store = store if store is not None else InMemoryRateLimitStore()
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock

    def prune(self) -> int:
        """Remove expired counters from the store."""

        return self.store.prune(self._clock())

    def is_rate_limited(self, client_ip: str) -> bool:
        now = self._clock()
        self.store.prune(now)
        entry = self.store.hit(client_ip, now, self.window_seconds)
        limited = entry.count > self.max_requests
        if limited:
            logger.warning(
                "Rate limit exceeded",
                extra={"client_ip": client_ip, "count": entry.count},
            )
        return limited


def client_ip(headers: Mapping[str, str]) -> str:
    """Best-effort client address from proxy headers.

    Callers without either header all share the ``unknown`` bucket.
    """

    forwarded = headers.get(FORWARDED_FOR_HEADER)
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    cdn_ip = headers.get(CDN_CLIENT_IP_HEADER)
    if cdn_ip and cdn_ip.strip():
        return cdn_ip.strip()
    return UNKNOWN_CLIENT
