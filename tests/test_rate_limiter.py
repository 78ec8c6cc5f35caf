"""Tests for the sliding-window rate limiter."""

import time
from collections import deque

from where_to_buy.utils.rate_limiter import RateLimiter


class TestRateLimiter:
    def test_allows_up_to_limit(self):
        limiter = RateLimiter(max_requests=3, window_seconds=60)
        assert all(limiter.is_allowed("1.2.3.4") for _ in range(3))
        assert not limiter.is_allowed("1.2.3.4")

    def test_clients_are_independent(self):
        limiter = RateLimiter(max_requests=1, window_seconds=60)
        assert limiter.is_allowed("key:abc")
        assert limiter.is_allowed("key:def")
        assert not limiter.is_allowed("key:abc")

    def test_remaining(self):
        limiter = RateLimiter(max_requests=5, window_seconds=60)
        assert limiter.get_remaining("client") == 5
        limiter.is_allowed("client")
        limiter.is_allowed("client")
        assert limiter.get_remaining("client") == 3

    def test_old_requests_leave_the_window(self):
        limiter = RateLimiter(max_requests=1, window_seconds=60)
        limiter._requests["client"] = deque([time.time() - 120])
        assert limiter.is_allowed("client")

    def test_reset_time(self):
        limiter = RateLimiter(max_requests=1, window_seconds=60)
        assert limiter.get_reset_time("client") is None
        limiter.is_allowed("client")
        assert limiter.get_reset_time("client") > time.time()

    def test_cleanup_forgets_idle_clients(self):
        limiter = RateLimiter(max_requests=5, window_seconds=60)
        limiter._requests["idle"] = deque([time.time() - 120])
        limiter.is_allowed("active")
        assert limiter.cleanup() == 1
        assert limiter.get_remaining("idle") == 5
        assert limiter.get_remaining("active") == 4

    def test_idle_clients_swept_once_per_window(self):
        limiter = RateLimiter(max_requests=5, window_seconds=60)
        stale = time.time() - 120
        for i in range(200):
            limiter._requests[f"key:{i}"] = deque([stale])
        limiter._last_sweep = stale

        assert limiter.is_allowed("key:fresh")
        assert list(limiter._requests) == ["key:fresh"]

    def test_lookups_do_not_track_unknown_clients(self):
        limiter = RateLimiter(max_requests=5, window_seconds=60)
        assert limiter.get_remaining("nobody") == 5
        assert limiter.get_reset_time("nobody") is None
        assert limiter._requests == {}

    def test_expired_client_entry_removed_on_lookup(self):
        limiter = RateLimiter(max_requests=5, window_seconds=60)
        limiter._requests["client"] = deque([time.time() - 120])
        assert limiter.get_remaining("client") == 5
        assert "client" not in limiter._requests
