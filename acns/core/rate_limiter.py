"""
Rate Limiter - Control AI request frequency per client.

Every Gemini call costs quota on one of a handful of keys, so the AI
routes are limited per client IP with a sliding one-minute window.

For deployments with multiple instances, upgrade to a Redis-backed limiter.
"""
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Tuple
import threading

from acns.core.logging_config import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """
    Simple sliding window rate limiter.

    Tracks requests per identifier (client IP) within a time window.

    Example:
        >>> limiter = RateLimiter(requests_per_minute=20)
        >>> limiter.is_allowed("10.0.0.1")
        (True, 19)
    """

    def __init__(
        self,
        requests_per_minute: int = 20,
        cleanup_interval_minutes: int = 5,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        """
        Initialize the rate limiter.

        Args:
            requests_per_minute: Maximum requests allowed per minute
            cleanup_interval_minutes: How often to clean old entries
            clock: Source of the current time
        """
        self.limit = requests_per_minute
        self.window = timedelta(minutes=1)
        self.cleanup_interval = timedelta(minutes=cleanup_interval_minutes)
        self._clock = clock

        self._requests: Dict[str, List[datetime]] = {}
        self._lock = threading.RLock()
        self._last_cleanup = clock()

        logger.info(f"RateLimiter initialized: {requests_per_minute} requests/minute")

    def is_allowed(self, identifier: str) -> Tuple[bool, int]:
        """
        Check if a request is allowed for the given identifier.

        Returns:
            Tuple of (is_allowed, remaining_requests)
        """
        with self._lock:
            self._maybe_cleanup()

            now = self._clock()
            cutoff = now - self.window

            recent = [t for t in self._requests.get(identifier, []) if t > cutoff]
            self._requests[identifier] = recent

            if len(recent) >= self.limit:
                logger.warning(f"Rate limit exceeded for: {identifier}")
                return False, 0

            recent.append(now)
            return True, self.limit - len(recent)

    def get_reset_time(self, identifier: str) -> datetime:
        """
        Get when the rate limit resets for an identifier.

        Returns:
            Datetime when the oldest request in the window expires
        """
        with self._lock:
            if not self._requests.get(identifier):
                return self._clock()

            oldest = min(self._requests[identifier])
            return oldest + self.window

    def retry_after_seconds(self, identifier: str) -> int:
        """Whole seconds until the identifier may call again (at least 1)."""
        reset_time = self.get_reset_time(identifier)
        return max(1, int((reset_time - self._clock()).total_seconds()))

    def _maybe_cleanup(self) -> None:
        """Remove old entries periodically."""
        now = self._clock()

        if now - self._last_cleanup < self.cleanup_interval:
            return

        cutoff = now - self.window

        for identifier in list(self._requests.keys()):
            self._requests[identifier] = [
                t for t in self._requests[identifier] if t > cutoff
            ]
            if not self._requests[identifier]:
                del self._requests[identifier]

        self._last_cleanup = now
        logger.debug(f"Rate limiter cleanup: {len(self._requests)} active clients")
