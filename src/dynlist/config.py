"""Default configuration values for dynlist."""

from __future__ import annotations

from typing import Final

# Number of rows appended by one growth step.  It should exceed the number of
# rows a view shows at once so a single batch fills the first screen.
DEFAULT_BATCH_SIZE: Final[int] = 20

# Distance from the end of the known rows at which the next batch is
# requested.  Must stay below ``DEFAULT_BATCH_SIZE``.
DEFAULT_PREFETCH_MARGIN: Final[int] = 3

# Additional executor calls made for one request before the item falls back to
# ``UNFETCHED``.
DEFAULT_RETRY_LIMIT: Final[int] = 1

# ---------------------------------------------------------------------------
# Simulated backing store
# ---------------------------------------------------------------------------

STORE_MIN_DELAY_SEC: Final[float] = 0.5
STORE_MAX_DELAY_SEC: Final[float] = 2.0
STORE_FAILURE_RATE: Final[float] = 0.0

# ---------------------------------------------------------------------------
# Background execution
# ---------------------------------------------------------------------------

# ``QueuedFetchScheduler`` worker count.  Fetches are I/O bound (they mostly
# sleep) so the pool is sized well above the CPU count.
FETCH_POOL_MAX_WORKERS: Final[int] = 32

# Upper bound for one ``simulate`` run before the CLI gives up waiting.
SIMULATE_TIMEOUT_SEC: Final[float] = 30.0

SETTINGS_SCHEMA_ID: Final[str] = "dynlist/settings@1"
SETTINGS_DIR_NAME: Final[str] = "dynlist"
