"""Custom exception hierarchy for dynlist."""

from __future__ import annotations


class DynListError(Exception):
    """Base class for all custom errors raised by dynlist."""


# --- 3-layer hierarchy ---

class DomainError(DynListError):
    """Base class for domain-level errors."""


class InfrastructureError(DynListError):
    """Base class for infrastructure-level errors."""


class ConfigurationError(DynListError):
    """Base class for configuration errors."""


# --- Domain errors ---

class FetchFailedError(DomainError):
    """Raised when the data of one item could not be fetched.

    ``cause`` keeps the original exception raised by the executor.
    """

    def __init__(self, index: int, cause: BaseException | None = None) -> None:
        message = f"fetch failed for item {index}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.index = index
        self.cause = cause


# --- Infrastructure errors ---

class StoreUnavailableError(InfrastructureError):
    """Raised when the backing store cannot serve a request."""


# --- Configuration errors ---

class InvalidConfigurationError(ConfigurationError):
    """Raised when provider parameters violate their constraints."""


class SettingsError(ConfigurationError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""
