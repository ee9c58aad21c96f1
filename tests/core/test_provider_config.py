import pytest

from dynlist.config import DEFAULT_BATCH_SIZE, DEFAULT_PREFETCH_MARGIN
from dynlist.core.provider_config import ProviderConfig
from dynlist.errors import ConfigurationError, InvalidConfigurationError


def test_defaults():
    config = ProviderConfig()
    assert config.batch_size == DEFAULT_BATCH_SIZE == 20
    assert config.prefetch_margin == DEFAULT_PREFETCH_MARGIN == 3


def test_zero_margin_allowed():
    assert ProviderConfig(batch_size=1, prefetch_margin=0).prefetch_margin == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"batch_size": 0},
        {"batch_size": -5},
        {"batch_size": 10, "prefetch_margin": 10},
        {"batch_size": 10, "prefetch_margin": 11},
        {"prefetch_margin": -1},
        {"retry_limit": -1},
        {"batch_size": 2.5},
        {"batch_size": True},
    ],
)
def test_invalid_configuration_raises_at_construction(kwargs):
    with pytest.raises(InvalidConfigurationError):
        ProviderConfig(**kwargs)


def test_invalid_configuration_is_a_configuration_error():
    assert issubclass(InvalidConfigurationError, ConfigurationError)


def test_from_settings_fills_missing_keys():
    config = ProviderConfig.from_settings({"batch_size": 50})
    assert config.batch_size == 50
    assert config.prefetch_margin == DEFAULT_PREFETCH_MARGIN
