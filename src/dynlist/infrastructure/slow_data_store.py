"""Simulated backing store with slow, optionally unreliable reads."""

from __future__ import annotations

import random
import threading
import time
from typing import Any, Callable, Mapping, Optional

from dynlist.config import STORE_FAILURE_RATE, STORE_MAX_DELAY_SEC, STORE_MIN_DELAY_SEC
from dynlist.errors import InvalidConfigurationError, StoreUnavailableError


class SlowDataStore:
    """``FetchExecutor`` returning a random amount in ``[0, 1)`` per item.

    Each call sleeps for a uniform delay in ``[min_delay, max_delay)``.  With a
    non-zero ``failure_rate`` the call raises :class:`StoreUnavailableError`
    instead of returning.  ``rng`` and ``sleep`` are injectable so tests run
    instantly and deterministically.
    """

    def __init__(
        self,
        min_delay: float = STORE_MIN_DELAY_SEC,
        max_delay: float = STORE_MAX_DELAY_SEC,
        failure_rate: float = STORE_FAILURE_RATE,
        *,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if min_delay < 0 or max_delay < min_delay:
            raise InvalidConfigurationError(
                f"invalid delay range [{min_delay}, {max_delay})"
            )
        if not 0.0 <= failure_rate <= 1.0:
            raise InvalidConfigurationError(f"failure_rate must be within [0, 1], got {failure_rate}")
        self._min_delay = float(min_delay)
        self._max_delay = float(max_delay)
        self._failure_rate = float(failure_rate)
        self._rng = rng or random.Random()
        self._rng_lock = threading.Lock()
        self._sleep = sleep
        self._calls = 0

    @classmethod
    def from_settings(cls, store_settings: Mapping[str, Any], **kwargs: Any) -> "SlowDataStore":
        return cls(
            min_delay=store_settings.get("min_delay", STORE_MIN_DELAY_SEC),
            max_delay=store_settings.get("max_delay", STORE_MAX_DELAY_SEC),
            failure_rate=store_settings.get("failure_rate", STORE_FAILURE_RATE),
            **kwargs,
        )

    @property
    def call_count(self) -> int:
        with self._rng_lock:
            return self._calls

    def fetch(self, index: int) -> float:
        with self._rng_lock:
            self._calls += 1
            amount = self._rng.random()
            delay = self._rng.uniform(self._min_delay, self._max_delay)
            fails = self._failure_rate > 0 and self._rng.random() < self._failure_rate
        if delay > 0:
            self._sleep(delay)
        if fails:
            raise StoreUnavailableError(f"store did not answer for item {index}")
        return amount
