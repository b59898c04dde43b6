"""Command-line interface for Scriptvoice.

Responsibilities:
- Expose user-facing commands for speakable-item generation and inspection.
- Convert CLI arguments into `ScriptvoiceConfig` and schedule generation tasks.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import (
    echo_generation_rows,
    echo_item_list,
    echo_queue_summary,
    exit_with_command_error,
)
from .config import ConfigLoader, ScriptvoiceConfig
from .errors import PersistenceError, PipelineStageError
from .io.documents import load_screenplay
from .io.storage import JsonItemStore
from .models.datatypes import ScreenplayDocument
from .speech import CharacterNormalizer, available_rule_versions, create_speech_rules
from .speech.rules import DEFAULT_RULE_VERSION
from .tasks import BackgroundTaskManager, SpeakableItemGenerationTask, TaskState
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="scriptvoice",
    no_args_is_help=True,
    help="Scriptvoice CLI.",
)


def _load_base_config(config_path: Path | None) -> ScriptvoiceConfig:
    """Load YAML config when requested, else environment defaults, as stage errors."""

    if config_path is None:
        try:
            return ConfigLoader.from_env()
        except ValueError as exc:
            raise PipelineStageError(
                stage="config",
                detail=f"Invalid environment configuration: {exc}",
                hint="Check `SCRIPTVOICE_*` environment variables.",
            ) from exc

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except OSError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Failed to load config file `{config_path}`: {exc}",
            hint="Verify file permissions.",
        ) from exc


def _resolve_command_config(
    config_file: Path | None,
    out: Path | None,
    rule_version: str | None,
    save_interval: int | None,
) -> ScriptvoiceConfig:
    """Resolve effective config from file or env defaults and explicit CLI overrides."""

    base = _load_base_config(config_file)
    config = ScriptvoiceConfig(
        output_dir=out if out is not None else base.output_dir,
        rule_version=rule_version if rule_version is not None else base.rule_version,
        save_interval=save_interval if save_interval is not None else base.save_interval,
        character_aliases=dict(base.character_aliases),
        extra=dict(base.extra),
    )
    try:
        config.validate()
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=str(exc),
            hint="Run `scriptvoice rules` to list supported rule versions.",
        ) from exc
    return config


def _build_generation_tasks(
    documents: list[ScreenplayDocument],
    config: ScriptvoiceConfig,
    run_logger: RunLogger,
) -> list[SpeakableItemGenerationTask]:
    """Create one generation task with its own item store per document."""

    tasks: list[SpeakableItemGenerationTask] = []
    for document in documents:
        rules = create_speech_rules(
            config.rule_version,
            normalizer=CharacterNormalizer(config.character_aliases),
        )
        tasks.append(
            SpeakableItemGenerationTask(
                document=document,
                store=JsonItemStore(config.output_dir),
                rules=rules,
                save_interval=config.save_interval,
                run_logger=run_logger,
            )
        )
    return tasks


async def _run_queue(manager: BackgroundTaskManager) -> None:
    await manager.run_until_idle()


@app.command("generate")
def generate_command(
    screenplays: Annotated[
        list[Path],
        typer.Argument(help="Screenplay files (`.fountain`, `.spmd`, `.txt`, or `.json`)."),
    ],
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Output directory (overrides config file value)."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file with command defaults."),
    ] = None,
    rule_version: Annotated[
        str | None,
        typer.Option("--rule-version", help="Speech rule version to apply."),
    ] = None,
    save_interval: Annotated[
        int | None,
        typer.Option(
            "--save-interval",
            help="Number of generated items between checkpoint commits.",
        ),
    ] = None,
) -> None:
    """Generate speakable items for one or more screenplays."""

    try:
        config = _resolve_command_config(config_file, out, rule_version, save_interval)
        documents = [load_screenplay(path) for path in screenplays]
    except PipelineStageError as exc:
        exit_with_command_error("generate", exc)

    run_logger = RunLogger()
    manager = BackgroundTaskManager(run_logger=run_logger)
    generation_tasks = _build_generation_tasks(documents, config, run_logger)
    for generation_task in generation_tasks:
        manager.enqueue(generation_task.background_task)

    asyncio.run(_run_queue(manager))

    echo_generation_rows(generation_tasks)
    summary = manager.summary()
    echo_queue_summary(summary)
    typer.echo(f"Output: {config.output_dir}")

    failed = summary[TaskState.FAILED.value]
    if failed:
        exit_with_command_error(
            "generate",
            PipelineStageError(
                stage="generate",
                detail=f"{failed} of {len(generation_tasks)} task(s) failed.",
                hint="Check output directory permissions and stored item files, then rerun.",
            ),
        )


@app.command("items")
def items_command(
    screenplay_id: Annotated[
        str, typer.Argument(help="Screenplay identifier (the source file stem).")
    ],
    out: Annotated[
        Path,
        typer.Option("--out", help="Output directory holding committed items."),
    ] = Path("out"),
) -> None:
    """List committed speakable items of one screenplay in order."""

    try:
        items = JsonItemStore(out).items_for(screenplay_id)
    except PersistenceError as exc:
        exit_with_command_error(
            "items",
            PipelineStageError(
                stage="items",
                detail=str(exc),
                hint="Regenerate items with `scriptvoice generate`.",
            ),
        )

    if not items:
        typer.echo(f"No items stored for `{screenplay_id}`.")
        return
    echo_item_list(items)


@app.command("rules")
def rules_command() -> None:
    """List available speech rule versions."""

    for version in available_rule_versions():
        marker = " (default)" if version == DEFAULT_RULE_VERSION else ""
        typer.echo(f"{version}{marker}")


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
