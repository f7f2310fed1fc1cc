from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Callable

from resume_match.schemas.provider import RateLimits

MINUTE_SECONDS = 60.0
HOUR_SECONDS = 3600.0
DAY_SECONDS = 86400.0


class UnknownProviderError(KeyError):
    pass


@dataclass
class RateLimitWindow:
    length_s: float
    limit: int | None
    count: int = 0
    window_start: float = 0.0

    def expired(self, now: float) -> bool:
        return now - self.window_start > self.length_s

    def effective_count(self, now: float) -> int:
        # An expired window reads as empty without being rewritten.
        if self.count <= 0 or self.expired(now):
            return 0
        return self.count

    def allows(self, now: float) -> bool:
        if self.limit is None:
            return True
        return self.effective_count(now) < self.limit

    def record(self, now: float) -> None:
        if self.count <= 0 or self.expired(now):
            self.count = 0
            self.window_start = now
        self.count += 1


@dataclass
class ProviderRateState:
    minute: RateLimitWindow
    hour: RateLimitWindow
    day: RateLimitWindow
    windows: dict[str, RateLimitWindow] = field(init=False)

    def __post_init__(self) -> None:
        self.windows = {"minute": self.minute, "hour": self.hour, "day": self.day}

    @classmethod
    def from_limits(cls, limits: RateLimits) -> "ProviderRateState":
        return cls(
            minute=RateLimitWindow(MINUTE_SECONDS, limits.per_minute),
            hour=RateLimitWindow(HOUR_SECONDS, limits.per_hour),
            day=RateLimitWindow(DAY_SECONDS, limits.per_day),
        )


class ProviderRateLimiter:
    """Per-provider minute/hour/day counters shared by every analysis call."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._states: dict[str, ProviderRateState] = {}
        self._lock = threading.Lock()

    def register(self, name: str, limits: RateLimits) -> None:
        with self._lock:
            self._states[name] = ProviderRateState.from_limits(limits)

    def is_registered(self, name: str) -> bool:
        return name in self._states

    def _state(self, name: str) -> ProviderRateState:
        state = self._states.get(name)
        if state is None:
            raise UnknownProviderError(name)
        return state

    def check_limit(self, name: str) -> bool:
        now = self._clock()
        state = self._state(name)
        return all(window.allows(now) for window in state.windows.values())

    def record_usage(self, name: str) -> None:
        now = self._clock()
        with self._lock:
            state = self._state(name)
            for window in state.windows.values():
                window.record(now)

    def snapshot(self, name: str) -> dict[str, dict[str, int | None]]:
        now = self._clock()
        state = self._state(name)
        return {
            label: {"used": window.effective_count(now), "limit": window.limit}
            for label, window in state.windows.items()
        }
