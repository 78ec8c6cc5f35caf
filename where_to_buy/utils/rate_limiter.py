"""
Rate Limiter for Where-to-Buy
Sliding window limit per API key, falling back to the client IP.
"""
import time
import threading
from collections import deque
from functools import wraps
from typing import Deque, Dict, Optional

from flask import current_app, has_app_context, jsonify, request


class RateLimiter:
    """Sliding-window request counter, one window per client."""

    def __init__(self, max_requests: int = 100, window_seconds: int = 900):
        """
        Args:
            max_requests: Requests a client may make inside one window
            window_seconds: Window length in seconds
        """
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._requests: Dict[str, Deque[float]] = {}
        self._last_sweep = time.time()
        self._lock = threading.RLock()

    def _window(self, client_id: str, now: float) -> Deque[float]:
        """Timestamps of the client's requests that are still inside the window."""
        stamps = self._requests.get(client_id)
        if stamps is None:
            return deque()

        cutoff = now - self.window_seconds
        while stamps and stamps[0] <= cutoff:
            stamps.popleft()
        if not stamps:
            del self._requests[client_id]
        return stamps

    def is_allowed(self, client_id: str) -> bool:
        """Count a request for the client; False means it is over the limit."""
        now = time.time()
        with self._lock:
            # Client ids are caller-chosen, so idle ones are swept once per window
            if now - self._last_sweep >= self.window_seconds:
                self.cleanup()

            stamps = self._window(client_id, now)
            if len(stamps) >= self.max_requests:
                return False
            stamps.append(now)
            self._requests[client_id] = stamps
            return True

    def get_remaining(self, client_id: str) -> int:
        with self._lock:
            used = len(self._window(client_id, time.time()))
            return max(0, self.max_requests - used)

    def get_reset_time(self, client_id: str) -> Optional[float]:
        """Unix time at which the client's oldest request leaves the window."""
        with self._lock:
            stamps = self._window(client_id, time.time())
            return stamps[0] + self.window_seconds if stamps else None

    def cleanup(self) -> int:
        """Forget clients without requests in the current window."""
        now = time.time()
        with self._lock:
            before = len(self._requests)
            for cid in list(self._requests):
                self._window(cid, now)
            self._last_sweep = now
            return before - len(self._requests)


_rate_limiter: Optional[RateLimiter] = None


def get_rate_limiter() -> RateLimiter:
    """Get the process-wide limiter, configured from the app config."""
    global _rate_limiter
    if _rate_limiter is None:
        settings = current_app.config if has_app_context() else {}
        _rate_limiter = RateLimiter(
            max_requests=settings.get('RATE_LIMIT_REQUESTS', 100),
            window_seconds=settings.get('RATE_LIMIT_WINDOW_SECONDS', 900),
        )
    return _rate_limiter


def get_client_id() -> str:
    """Identify the caller by API key, or by IP address when none is given."""
    api_key = request.args.get('api_key')
    if api_key:
        return f"key:{api_key}"

    # First hop of X-Forwarded-For when running behind a proxy
    forwarded = request.headers.get('X-Forwarded-For')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.remote_addr or 'unknown'


def _limit_exceeded(limiter: RateLimiter, client_id: str):
    reset_time = limiter.get_reset_time(client_id)
    retry_after = int(reset_time - time.time()) if reset_time else limiter.window_seconds

    response = jsonify({
        'success': False,
        'error': 'Rate Limit Exceeded',
        'message': 'Too many requests. Please try again later.',
        'retry_after': max(retry_after, 1),
    })
    response.status_code = 429
    response.headers['X-RateLimit-Limit'] = str(limiter.max_requests)
    response.headers['X-RateLimit-Remaining'] = '0'
    if reset_time:
        response.headers['X-RateLimit-Reset'] = str(int(reset_time))
    return response


def rate_limit(func):
    """Reject callers over the limit with 429 and report usage headers."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        limiter = get_rate_limiter()
        client_id = get_client_id()

        if not limiter.is_allowed(client_id):
            return _limit_exceeded(limiter, client_id)

        result = func(*args, **kwargs)
        response = result[0] if isinstance(result, tuple) else result
        if hasattr(response, 'headers'):
            response.headers['X-RateLimit-Limit'] = str(limiter.max_requests)
            response.headers['X-RateLimit-Remaining'] = str(limiter.get_remaining(client_id))
        return result

    return wrapper
