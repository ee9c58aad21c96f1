"""Background execution of item fetches with hand-off to the observation context."""

from .queued_scheduler import QueuedFetchScheduler

__all__ = ["QueuedFetchScheduler"]
