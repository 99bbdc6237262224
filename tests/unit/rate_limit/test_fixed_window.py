"""Tests for the in-process fixed window rate limiter."""

import pytest

from qrhunt.core.rate_limit.backend import FixedWindowRateLimiter


pytestmark = pytest.mark.unit


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock: FakeClock) -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(clock=clock)


class TestFixedWindowRateLimiter:
    """Tests for FixedWindowRateLimiter.hit."""

    def test_first_hit_opens_window(self, limiter: FixedWindowRateLimiter):
        """An unseen key is allowed and starts counting at one."""
        result = limiter.hit("ip:1.2.3.4", limit=3, window=60)

        assert result.allowed is True
        assert result.remaining == 2
        assert len(limiter) == 1

    def test_denies_once_limit_reached(self, limiter: FixedWindowRateLimiter):
        """Hits beyond the limit inside the window are denied."""
        results = [limiter.hit("k", limit=3, window=60) for _ in range(4)]

        assert [r.allowed for r in results] == [True, True, True, False]
        assert results[-1].remaining == 0
        assert results[-1].retry_after == 60

    def test_retry_after_counts_down(
        self, limiter: FixedWindowRateLimiter, clock: FakeClock
    ):
        """Retry-After reflects the time left in the window, rounded up."""
        limiter.hit("k", limit=1, window=60)
        clock.advance(45.5)

        result = limiter.hit("k", limit=1, window=60)

        assert result.allowed is False
        assert result.retry_after == 15

    def test_expired_window_resets(
        self, limiter: FixedWindowRateLimiter, clock: FakeClock
    ):
        """The first hit after expiry is allowed with a fresh count."""
        for _ in range(2):
            limiter.hit("k", limit=2, window=10)
        assert limiter.hit("k", limit=2, window=10).allowed is False

        clock.advance(10)
        result = limiter.hit("k", limit=2, window=10)

        assert result.allowed is True
        assert result.remaining == 1

    def test_keys_are_independent(self, limiter: FixedWindowRateLimiter):
        """Exhausting one key does not affect another."""
        limiter.hit("user:a", limit=1, window=60)

        assert limiter.hit("user:a", limit=1, window=60).allowed is False
        assert limiter.hit("user:b", limit=1, window=60).allowed is True


class TestPrune:
    """Tests for dropping expired windows."""

    def test_prune_removes_only_expired(
        self, limiter: FixedWindowRateLimiter, clock: FakeClock
    ):
        limiter.hit("short", limit=5, window=10)
        limiter.hit("long", limit=5, window=100)
        clock.advance(50)

        removed = limiter.prune()

        assert removed == 1
        assert len(limiter) == 1

    def test_reset_forgets_everything(self, limiter: FixedWindowRateLimiter):
        limiter.hit("a", limit=1, window=60)
        limiter.hit("b", limit=1, window=60)

        limiter.reset()

        assert len(limiter) == 0
        assert limiter.hit("a", limit=1, window=60).allowed is True
