from __future__ import annotations

from dynlist.errors import FetchFailedError


def as_fetch_error(index: int, exc: BaseException) -> FetchFailedError:
    """Wrap an executor exception unless it already is a fetch failure."""

    if isinstance(exc, FetchFailedError):
        return exc
    return FetchFailedError(index, exc)
