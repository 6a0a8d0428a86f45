"""Fixed-window limiter: boundary, reset after the window, sweeping and the 429 shape."""

import asyncio
import unittest

from app.core.ratelimit import FixedWindowRateLimiter, run_periodic_sweep
from support import ApiTestCase


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestFixedWindowRateLimiter(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.limiter = FixedWindowRateLimiter(clock=self.clock)

    def test_n_plus_one_request_is_rejected_with_retry_after(self) -> None:
        for i in range(5):
            decision = self.limiter.hit("1.2.3.4", 5, 60)
            self.assertTrue(decision.allowed)
            self.assertEqual(decision.remaining, 4 - i)
        decision = self.limiter.hit("1.2.3.4", 5, 60)
        self.assertFalse(decision.allowed)
        self.assertGreater(decision.retry_after, 0)
        self.assertLessEqual(decision.retry_after, 60)

    def test_counter_resets_after_window(self) -> None:
        for _ in range(6):
            self.limiter.hit("1.2.3.4", 5, 60)
        self.clock.now += 61
        decision = self.limiter.hit("1.2.3.4", 5, 60)
        self.assertTrue(decision.allowed)
        self.assertEqual(decision.remaining, 4)

    def test_keys_are_independent(self) -> None:
        for _ in range(5):
            self.limiter.hit("1.2.3.4", 5, 60)
        self.assertFalse(self.limiter.hit("1.2.3.4", 5, 60).allowed)
        self.assertTrue(self.limiter.hit("auth:1.2.3.4", 5, 60).allowed)
        self.assertTrue(self.limiter.hit("5.6.7.8", 5, 60).allowed)

    def test_sweep_removes_only_elapsed_windows(self) -> None:
        self.limiter.hit("old", 5, 10)
        self.limiter.hit("fresh", 5, 600)
        self.clock.now += 11
        self.assertEqual(self.limiter.sweep(), 1)
        self.assertEqual(len(self.limiter), 1)

    def test_periodic_sweep_runs_until_cancelled(self) -> None:
        self.limiter.hit("old", 5, 10)
        self.clock.now += 11

        async def run() -> None:
            task = asyncio.create_task(run_periodic_sweep(self.limiter, 0.01))
            await asyncio.sleep(0.05)
            task.cancel()
            with self.assertRaises(asyncio.CancelledError):
                await task

        asyncio.run(run())
        self.assertEqual(len(self.limiter), 0)


class TestGeneralRateLimitMiddleware(ApiTestCase):
    settings_overrides = {"RATE_LIMIT_MAX_REQUESTS": 3, "RATE_LIMIT_WINDOW_SECONDS": 60}

    def test_fourth_request_gets_429(self) -> None:
        for _ in range(3):
            response = self.client.get("/")
            self.assertEqual(response.status_code, 200)
            self.assertIn("X-RateLimit-Remaining", response.headers)
        response = self.client.get("/")
        self.assertEqual(response.status_code, 429)
        body = response.json()
        self.assertEqual(body["code"], "RATE_LIMITED")
        self.assertGreater(body["retryAfter"], 0)
        self.assertEqual(response.headers["Retry-After"], str(body["retryAfter"]))


class TestAuthRateLimit(ApiTestCase):
    settings_overrides = {"AUTH_RATE_LIMIT_MAX_REQUESTS": 5}

    def test_sixth_bad_login_is_rate_limited(self) -> None:
        self.create_member("victim@example.org")
        for _ in range(5):
            response = self.client.post(
                "/api/auth/login", json={"email": "victim@example.org", "password": "wrong!"}
            )
            self.assertEqual(response.status_code, 401)
        response = self.client.post(
            "/api/auth/login", json={"email": "victim@example.org", "password": "wrong!"}
        )
        self.assertEqual(response.status_code, 429)
        self.assertGreater(response.json()["retryAfter"], 0)

    def test_auth_limit_does_not_affect_other_routes(self) -> None:
        headers = self.resident_headers()
        for _ in range(6):
            self.client.post("/api/auth/login", json={"email": "x@example.org", "password": "x"})
        self.assertEqual(self.client.get("/api/messages", headers=headers).status_code, 200)

    def test_window_reset_allows_login_again(self) -> None:
        clock = FakeClock()
        self.app.state.rate_limiter._clock = clock
        for _ in range(6):
            self.client.post("/api/auth/login", json={"email": "x@example.org", "password": "x"})
        clock.now += self.settings.AUTH_RATE_LIMIT_WINDOW_SECONDS + 1
        response = self.client.post(
            "/api/auth/login", json={"email": "x@example.org", "password": "x"}
        )
        self.assertEqual(response.status_code, 401)
