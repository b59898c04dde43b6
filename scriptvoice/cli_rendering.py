"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
task status rows, queue summaries, and stored item listings.
"""

from __future__ import annotations

from typing import Iterable, NoReturn

import typer

from .errors import PipelineStageError
from .models.datatypes import SpeakableItem
from .tasks import SpeakableItemGenerationTask


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, PipelineStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_generation_rows(tasks: Iterable[SpeakableItemGenerationTask]) -> None:
    """Print one status row per generation task in queue order."""

    for task in tasks:
        background = task.background_task
        typer.echo(
            f"{task.document.screenplay_id}: {background.status_label} "
            f"({background.progress_percentage}%) items={task.items_generated} "
            f"- {background.message}"
        )
        if background.error is not None:
            typer.echo(f"  error: {type(background.error).__name__}: {background.error}")


def echo_queue_summary(summary: dict[str, int]) -> None:
    """Print non-zero task counts per state."""

    parts = [f"{state}={count}" for state, count in summary.items() if count]
    typer.echo(f"Tasks: {', '.join(parts) if parts else 'none'}")


def echo_item_list(items: list[SpeakableItem]) -> None:
    """Print compact deterministic item rows ordered by `order_index`."""

    for item in sorted(items, key=lambda entry: entry.order_index):
        typer.echo(f"{item.order_index}. [{item.source_element_type}] {item.speakable_text}")
