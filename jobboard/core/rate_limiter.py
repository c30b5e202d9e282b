import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable

from jobboard.config import settings

AUTH_PATHS = frozenset({"/auth/login", "/auth/register"})
LISTING_WRITE_METHODS = frozenset({"POST", "PUT", "DELETE"})


@dataclass(frozen=True)
class RateLimitRule:
    scope: str
    limit: int
    window_seconds: int


def rule_for(method: str, path: str) -> RateLimitRule | None:
    """Pick the throttle for a request, or None when it is not throttled.

    Limits are read from settings on every call so they can be tuned
    without rebuilding the limiter. A limit of 0 disables the scope.
    """
    window = settings.rate_limit_window_seconds
    if method == "POST" and path in AUTH_PATHS:
        rule = RateLimitRule("auth", settings.rate_limit_auth_per_min, window)
    elif method in LISTING_WRITE_METHODS and path.startswith("/listings"):
        rule = RateLimitRule("listing-writes", settings.rate_limit_listing_writes_per_min, window)
    else:
        return None
    return rule if rule.limit > 0 else None


class SlidingWindowRateLimiter:
    """
    In-memory sliding-window log, one deque of hit times per (scope, client).
    Single-process only; each worker keeps its own counts.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._hits: dict[tuple[str, str], deque[float]] = {}

    def hit(self, rule: RateLimitRule, client: str) -> int:
        """Record a request. Returns 0 when allowed, else seconds until a slot frees."""
        now = self._clock()
        with self._lock:
            hits = self._hits.setdefault((rule.scope, client), deque())
            while hits and now - hits[0] >= rule.window_seconds:
                hits.popleft()
            if len(hits) >= rule.limit:
                return max(1, int(rule.window_seconds - (now - hits[0]) + 0.999))
            hits.append(now)
            return 0

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


rate_limiter = SlidingWindowRateLimiter()
