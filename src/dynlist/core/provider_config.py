from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from dynlist.config import DEFAULT_BATCH_SIZE, DEFAULT_PREFETCH_MARGIN, DEFAULT_RETRY_LIMIT
from dynlist.errors import InvalidConfigurationError


@dataclass(frozen=True)
class ProviderConfig:
    """Construction-time parameters of a :class:`ListDataProvider`.

    ``prefetch_margin`` must be smaller than ``batch_size`` so that one growth
    step fires comfortably before the rows run out, without firing again for
    every visible row of the fresh batch.
    """

    batch_size: int = DEFAULT_BATCH_SIZE
    prefetch_margin: int = DEFAULT_PREFETCH_MARGIN
    retry_limit: int = DEFAULT_RETRY_LIMIT

    def __post_init__(self) -> None:
        for name in ("batch_size", "prefetch_margin", "retry_limit"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.batch_size <= 0:
            raise InvalidConfigurationError(f"batch_size must be positive, got {self.batch_size}")
        if self.prefetch_margin < 0:
            raise InvalidConfigurationError(
                f"prefetch_margin must not be negative, got {self.prefetch_margin}"
            )
        if self.prefetch_margin >= self.batch_size:
            raise InvalidConfigurationError(
                f"prefetch_margin ({self.prefetch_margin}) must be smaller than "
                f"batch_size ({self.batch_size})"
            )
        if self.retry_limit < 0:
            raise InvalidConfigurationError(f"retry_limit must not be negative, got {self.retry_limit}")

    @classmethod
    def from_settings(cls, provider_settings: Mapping[str, Any]) -> "ProviderConfig":
        """Build a config from the ``provider`` section of the settings file."""

        return cls(
            batch_size=provider_settings.get("batch_size", DEFAULT_BATCH_SIZE),
            prefetch_margin=provider_settings.get("prefetch_margin", DEFAULT_PREFETCH_MARGIN),
            retry_limit=provider_settings.get("retry_limit", DEFAULT_RETRY_LIMIT),
        )
