import sys
import unittest
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_match.core.rate_limit import ProviderRateLimiter, UnknownProviderError  # noqa: E402
from resume_match.schemas.provider import RateLimits  # noqa: E402


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class ProviderRateLimiterTests(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.limiter = ProviderRateLimiter(clock=self.clock)

    def test_unlimited_windows_never_block(self):
        self.limiter.register("free", RateLimits())
        for _ in range(50):
            self.limiter.record_usage("free")
        self.assertTrue(self.limiter.check_limit("free"))

    def test_minute_limit_blocks_until_window_elapses(self):
        self.limiter.register("gemini", RateLimits(per_minute=3))
        for _ in range(3):
            self.assertTrue(self.limiter.check_limit("gemini"))
            self.limiter.record_usage("gemini")

        self.assertFalse(self.limiter.check_limit("gemini"))
        self.clock.now += 59
        self.assertFalse(self.limiter.check_limit("gemini"))
        self.clock.now += 1
        self.assertFalse(self.limiter.check_limit("gemini"))
        self.clock.now += 0.5
        self.assertTrue(self.limiter.check_limit("gemini"))

    def test_window_starts_at_first_counted_use(self):
        self.limiter.register("openai", RateLimits(per_minute=3))
        self.clock.now = 1500.0
        self.limiter.record_usage("openai")
        self.clock.now = 1555.0
        self.limiter.record_usage("openai")
        self.limiter.record_usage("openai")
        self.assertFalse(self.limiter.check_limit("openai"))

        self.clock.now = 1561.0
        self.assertTrue(self.limiter.check_limit("openai"))

    def test_check_limit_does_not_rewrite_expired_windows(self):
        self.limiter.register("claude", RateLimits(per_minute=2))
        self.limiter.record_usage("claude")
        self.limiter.record_usage("claude")
        self.clock.now += 120

        self.assertTrue(self.limiter.check_limit("claude"))
        self.assertEqual(self.limiter.snapshot("claude")["minute"], {"used": 0, "limit": 2})

        self.limiter.record_usage("claude")
        self.assertEqual(self.limiter.snapshot("claude")["minute"], {"used": 1, "limit": 2})

    def test_hour_limit_outlives_minute_window(self):
        self.limiter.register("openai", RateLimits(per_hour=2))
        self.limiter.record_usage("openai")
        self.limiter.record_usage("openai")

        self.clock.now += 61
        self.assertFalse(self.limiter.check_limit("openai"))
        self.clock.now += 3600
        self.assertTrue(self.limiter.check_limit("openai"))

    def test_snapshot_reports_all_windows(self):
        self.limiter.register("gemini", RateLimits(per_minute=15, per_hour=1500, per_day=50000))
        self.limiter.record_usage("gemini")
        self.assertEqual(
            self.limiter.snapshot("gemini"),
            {
                "minute": {"used": 1, "limit": 15},
                "hour": {"used": 1, "limit": 1500},
                "day": {"used": 1, "limit": 50000},
            },
        )

    def test_unknown_provider_raises(self):
        with self.assertRaises(UnknownProviderError):
            self.limiter.check_limit("missing")
        with self.assertRaises(UnknownProviderError):
            self.limiter.record_usage("missing")

    def test_concurrent_usage_is_counted_exactly(self):
        self.limiter.register("shared", RateLimits())
        with ThreadPoolExecutor(max_workers=8) as pool:
            for _ in range(800):
                pool.submit(self.limiter.record_usage, "shared")
        self.assertEqual(self.limiter.snapshot("shared")["day"]["used"], 800)


if __name__ == "__main__":
    unittest.main()
