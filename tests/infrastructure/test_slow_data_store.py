import random

import pytest

from dynlist.errors import InvalidConfigurationError, StoreUnavailableError
from dynlist.infrastructure.slow_data_store import SlowDataStore


def test_returns_amount_in_unit_interval_after_delay():
    sleeps = []
    store = SlowDataStore(0.5, 2.0, rng=random.Random(7), sleep=sleeps.append)

    amounts = [store.fetch(index) for index in range(50)]

    assert all(0.0 <= amount < 1.0 for amount in amounts)
    assert len(sleeps) == 50
    assert all(0.5 <= delay <= 2.0 for delay in sleeps)
    assert store.call_count == 50


def test_zero_delay_does_not_sleep():
    store = SlowDataStore(0, 0, sleep=lambda delay: pytest.fail("slept"))
    store.fetch(0)


def test_failure_rate_one_always_raises():
    store = SlowDataStore(0, 0, failure_rate=1.0)
    with pytest.raises(StoreUnavailableError):
        store.fetch(3)


@pytest.mark.parametrize(
    "kwargs",
    [{"min_delay": -1}, {"min_delay": 2.0, "max_delay": 1.0}, {"failure_rate": 1.5}],
)
def test_invalid_parameters(kwargs):
    with pytest.raises(InvalidConfigurationError):
        SlowDataStore(**kwargs)


def test_from_settings():
    store = SlowDataStore.from_settings({"min_delay": 0, "max_delay": 0}, rng=random.Random(1))
    assert 0.0 <= store.fetch(0) < 1.0
