import math
import time
from dataclasses import dataclass

from limits import RateLimitItemPerMinute
from limits.storage import storage_from_string
from limits.strategies import FixedWindowRateLimiter

TOO_MANY_REQUESTS = "Too many requests, please try again later."


@dataclass(frozen=True)
class RateLimitStatus:
    allowed: bool
    limit: int
    remaining: int
    reset_after: int

    @property
    def headers(self) -> dict:
        headers = {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(self.reset_after),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.reset_after)
        return headers


class ContactRateLimiter:
    """Fixed-window request counter keyed by client address.

    The counter store is owned by the instance, so each app (or test) gets
    its own table.
    """

    def __init__(self, max_requests: int = 20, window_minutes: int = 10, storage_uri: str = "memory://"):
        self.item = RateLimitItemPerMinute(max_requests, window_minutes)
        self.storage = storage_from_string(storage_uri)
        self.strategy = FixedWindowRateLimiter(self.storage)

    def hit(self, key: str) -> RateLimitStatus:
        allowed = self.strategy.hit(self.item, key)
        stats = self.strategy.get_window_stats(self.item, key)
        return RateLimitStatus(
            allowed=allowed,
            limit=self.item.amount,
            remaining=max(0, stats.remaining),
            reset_after=max(0, math.ceil(stats.reset_time - time.time())),
        )

    def reset(self) -> None:
        self.storage.reset()
