"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from dynlist.config import SIMULATE_TIMEOUT_SEC
from dynlist.core.provider import ListDataProvider
from dynlist.core.provider_config import ProviderConfig
from dynlist.domain.item import DataItem, FetchStatus, data_item_factory
from dynlist.errors import DynListError, InvalidConfigurationError, SettingsError
from dynlist.errors.handler import ErrorHandler
from dynlist.events.bus import EventBus
from dynlist.events.list_events import ItemFetchFailedEvent
from dynlist.infrastructure.slow_data_store import SlowDataStore
from dynlist.scheduling.queued_scheduler import QueuedFetchScheduler
from dynlist.settings.manager import SettingsManager
from dynlist.utils.console_logger import ensure_console_logger

logger = logging.getLogger("dynlist")

app = typer.Typer(help="Incrementally growing list with background item fetches")
console = Console()


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (InvalidConfigurationError, SettingsError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except DynListError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _load_settings(path: Optional[Path]) -> dict[str, Any]:
    manager = SettingsManager(path)
    manager.load(create=False)
    return manager.as_dict()


def _configure_logging(verbose: bool) -> None:
    ensure_console_logger(logger, "dynlist-cli", level=logging.DEBUG if verbose else logging.WARNING)


def _render(provider: ListDataProvider[DataItem]) -> Table:
    snapshot = provider.snapshot()
    table = Table(title=f"generation {snapshot.generation}")
    table.add_column("Row", justify="right")
    table.add_column("Label")
    table.add_column("Status")
    table.add_column("Amount", justify="right")
    styles = {
        FetchStatus.FETCHED: "green",
        FetchStatus.FETCHING: "yellow",
        FetchStatus.UNFETCHED: "red",
    }
    for row, item in enumerate(snapshot):
        amount = "Loading..." if item.payload is None else f"{item.payload:.1f}"
        status = item.fetch_status
        table.add_row(str(row), item.label, f"[{styles[status]}]{status.value}", amount)
    return table


@app.command()
@_handle_errors
def simulate(
    batch_size: Optional[int] = typer.Option(None, "--batch-size", "-b", help="Rows per growth step"),
    prefetch_margin: Optional[int] = typer.Option(
        None, "--prefetch-margin", "-m", help="Rows before the end that trigger growth"
    ),
    scroll_to: List[int] = typer.Option(
        [], "--scroll-to", "-s", help="Read positions reported in order (repeatable)"
    ),
    reset: bool = typer.Option(False, "--reset", help="Reset the list after scrolling"),
    min_delay: Optional[float] = typer.Option(None, help="Minimum store delay in seconds"),
    max_delay: Optional[float] = typer.Option(None, help="Maximum store delay in seconds"),
    failure_rate: Optional[float] = typer.Option(None, help="Probability a store read fails"),
    timeout: float = typer.Option(SIMULATE_TIMEOUT_SEC, help="Seconds to wait for pending fetches"),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Settings JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Drive a provider headlessly against the simulated slow store."""

    _configure_logging(verbose)
    settings = _load_settings(settings_path)

    provider_settings = dict(settings["provider"])
    if batch_size is not None:
        provider_settings["batch_size"] = batch_size
    if prefetch_margin is not None:
        provider_settings["prefetch_margin"] = prefetch_margin
    store_settings = dict(settings["store"])
    for key, value in (("min_delay", min_delay), ("max_delay", max_delay), ("failure_rate", failure_rate)):
        if value is not None:
            store_settings[key] = value

    config = ProviderConfig.from_settings(provider_settings)
    store = SlowDataStore.from_settings(store_settings)
    scheduler = QueuedFetchScheduler(store)
    event_bus = EventBus(logger)
    failures: list[int] = []
    event_bus.subscribe(ItemFetchFailedEvent, lambda event: failures.append(event.index))

    provider: ListDataProvider[DataItem] = ListDataProvider(
        data_item_factory(scheduler, retry_limit=config.retry_limit),
        config,
        event_bus=event_bus,
        error_handler=ErrorHandler(logger, event_bus),
    )
    try:
        for index in scroll_to:
            scheduler.drain()
            provider.fetch_more_items_if_needed(index)
        if reset:
            provider.reset()
        finished = scheduler.wait_until_idle(timeout)

        console.print(_render(provider))
        snapshot = provider.snapshot()
        console.print(
            f"{len(snapshot)} items, {snapshot.fetched_count()} fetched, "
            f"{len(failures)} failed, {scheduler.pending_count()} pending"
        )
        if not finished:
            typer.echo(f"Timed out after {timeout:.1f}s waiting for fetches", err=True)
            raise typer.Exit(1)
    finally:
        provider.dispose()
        scheduler.shutdown()
        event_bus.shutdown()


@app.command()
@_handle_errors
def view(
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Settings JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Open the list in a Qt window."""

    from dynlist.gui.app import run_viewer

    _configure_logging(verbose)
    raise typer.Exit(run_viewer(_load_settings(settings_path)))


@app.command("settings")
@_handle_errors
def show_settings(
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Settings JSON file"),
) -> None:
    """Print the effective settings."""

    console.print_json(json.dumps(_load_settings(settings_path)))


def main() -> None:  # pragma: no cover - console script
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
