"""Rate limiter for API endpoints - in-memory implementation"""
import threading
import time
from typing import Callable, Dict, Tuple


class FixedWindowRateLimiter:
    """
    In-memory fixed-window rate limiter keyed by client identifier.

    State lives in this process only: a restart clears it and several
    instances each keep their own counters. Running more than one instance
    needs a shared counter store instead.
    """

    def __init__(
        self,
        max_requests: int = 10,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize rate limiter.

        Args:
            max_requests: Max requests admitted per client per window (default: 10)
            window_seconds: Window length in seconds (default: 60)
            clock: Time source returning seconds, monotonic by default
        """
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        # client key -> (count, window reset time)
        self._windows: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()

    def allow(self, client_key: str) -> bool:
        """
        Check if a request from the client is allowed and record it.

        Args:
            client_key: Client identifier (usually the IP address)

        Returns:
            True if request is allowed, False if rate limit exceeded
        """
        with self._lock:
            now = self._clock()
            window = self._windows.get(client_key)

            # First request, or the previous window has elapsed
            if window is None or now > window[1]:
                self._windows[client_key] = (1, now + self.window_seconds)
                return True

            count, reset_at = window
            if count >= self.max_requests:
                return False

            self._windows[client_key] = (count + 1, reset_at)
            return True

    def get_remaining(self, client_key: str) -> int:
        """
        Get remaining requests for the client in the current window.

        Args:
            client_key: Client identifier

        Returns:
            Number of remaining requests
        """
        with self._lock:
            window = self._windows.get(client_key)
            if window is None or self._clock() > window[1]:
                return self.max_requests
            return max(0, self.max_requests - window[0])

    def reset(self) -> None:
        """Forget all tracked clients"""
        with self._lock:
            self._windows.clear()
