import threading
import time
from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    retry_after_s: int


class SlidingWindowRateLimiter:
    """Counts hits per key over the trailing ``window_s`` seconds."""

    def __init__(self, *, max_requests: int, window_s: int, max_keys: int = 20000) -> None:
        self._max_requests = max(1, int(max_requests or 1))
        self._window_s = max(1, int(window_s or 1))
        self._max_keys = max(1, int(max_keys or 1))
        self._hits: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    @property
    def max_requests(self) -> int:
        return self._max_requests

    def hit(self, key: str, now: float | None = None) -> RateLimitDecision:
        now = time.monotonic() if now is None else now
        cutoff = now - self._window_s
        with self._lock:
            hits = self._hits.get(key)
            if hits is None:
                self._evict_if_needed(cutoff)
                hits = deque()
                self._hits[key] = hits
            while hits and hits[0] <= cutoff:
                hits.popleft()

            if len(hits) >= self._max_requests:
                retry_after = int(hits[0] + self._window_s - now) + 1
                return RateLimitDecision(False, self._max_requests, 0, max(1, retry_after))

            hits.append(now)
            return RateLimitDecision(True, self._max_requests, self._max_requests - len(hits), 0)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()

    def _evict_if_needed(self, cutoff: float) -> None:
        if len(self._hits) < self._max_keys:
            return
        for k in list(self._hits.keys()):
            hits = self._hits[k]
            if not hits or hits[-1] <= cutoff:
                self._hits.pop(k, None)
        while len(self._hits) >= self._max_keys and self._hits:
            self._hits.pop(next(iter(self._hits)), None)
