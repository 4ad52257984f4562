# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable
from functools import wraps
from threading import Lock

from flask import current_app, request

from tailorshop.shared.errors import RateLimitedError

ENABLED_KEY = "RATE_LIMIT_ENABLED"


class InMemoryRateLimiter:
    """Sliding-window log per key; state lives in this process only."""

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = max(1, int(limit))
        self.window = max(0.1, float(window_seconds))
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = Lock()

    def _prune(self, key: str, now: float) -> deque[float]:
        hits = self._hits.pop(key, None) or deque()
        horizon = now - self.window
        while hits and hits[0] <= horizon:
            hits.popleft()
        if hits:
            self._hits[key] = hits
        return hits

    def allow(self, key: str) -> bool:
        with self._lock:
            now = self._clock()
            hits = self._prune(key, now)
            if len(hits) >= self.limit:
                return False
            hits.append(now)
            self._hits[key] = hits
            return True

    def retry_after(self, key: str) -> float:
        with self._lock:
            now = self._clock()
            hits = self._prune(key, now)
            return self.window - (now - hits[0]) if hits else 0.0

    def __len__(self) -> int:
        with self._lock:
            return len(self._hits)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


def _caller() -> str:
    # ProxyFix rewrites remote_addr when the app runs behind trusted proxies
    return request.remote_addr or "unknown"


def rate_limit(limit: int, window_seconds: float):
    """Per-caller limit on a single view; skipped when the app sets ``RATE_LIMIT_ENABLED`` off."""
    limiter = InMemoryRateLimiter(limit, window_seconds)

    def decorator(view: Callable):
        @wraps(view)
        def limited(*args, **kwargs):
            if current_app.config.get(ENABLED_KEY, True):
                key = f"{request.endpoint}|{_caller()}"
                if not limiter.allow(key):
                    raise RateLimitedError(limiter.retry_after(key))
            return view(*args, **kwargs)

        limited.limiter = limiter  # type: ignore[attr-defined]
        return limited

    return decorator


__all__ = ["ENABLED_KEY", "InMemoryRateLimiter", "rate_limit"]
