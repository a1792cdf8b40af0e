"""Per-IP request rate limits using throttled-py."""

import logging
from dataclasses import dataclass
from datetime import timedelta

from throttled import RateLimiterType, Throttled, rate_limiter, store

_logger = logging.getLogger(__name__)


@dataclass
class RateLimits:
    """General and strict fixed-window limiters sharing one memory store."""

    general: Throttled
    strict: Throttled

    @classmethod
    def create(
        cls, window_seconds: int, general_limit: int, strict_limit: int
    ) -> "RateLimits":
        storage = store.MemoryStore()
        window = timedelta(seconds=window_seconds)
        return cls(
            general=Throttled(
                using=RateLimiterType.FIXED_WINDOW.value,
                quota=rate_limiter.per_duration(window, limit=general_limit),
                store=storage,
            ),
            strict=Throttled(
                using=RateLimiterType.FIXED_WINDOW.value,
                quota=rate_limiter.per_duration(window, limit=strict_limit),
                store=storage,
            ),
        )

    def allow_request(self, client_ip: str) -> bool:
        """Count a request against the general limit."""
        return _consume(self.general, f"general:{client_ip}")

    def allow_mutation(self, client_ip: str) -> bool:
        """Count a request against the strict limit for admin operations."""
        return _consume(self.strict, f"strict:{client_ip}")


def _consume(throttle: Throttled, key: str) -> bool:
    result = throttle.limit(key, cost=1)
    if result.limited:
        _logger.info("Rate limit exceeded for %s", key)
        return False
    return True
