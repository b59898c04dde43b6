"""Structured task logging utilities.

Responsibilities:
- Emit concise, deterministic task lifecycle and checkpoint logs via `loguru`.
- Keep log lines free of screenplay text and error payloads.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger as _loguru_logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class RunLogger:
    """Emit deterministic task logs for CLI-observable scheduler activity."""

    def __init__(self, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Initialize logger sink and configure deterministic formatting."""

        self._sink = sink or sys.stderr
        _loguru_logger.remove()
        _loguru_logger.add(self._sink, format="{message}", level=level, colorize=False)

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Emit one structured runtime log line."""

        line = f"[task] level={level} stage={stage} event={event}{_format_context(context)}"
        _loguru_logger.log(level, line)

    def log_task_start(self, task_name: str, task_id: str) -> None:
        """Emit a task-start event."""

        self._emit("INFO", "start", "queue", task=task_name, task_id=task_id)

    def log_task_complete(self, task_name: str, task_id: str) -> None:
        """Emit a task-complete event."""

        self._emit("INFO", "complete", "queue", task=task_name, task_id=task_id)

    def log_task_cancelled(self, task_name: str, task_id: str) -> None:
        """Emit a task-cancelled event."""

        self._emit("WARNING", "cancelled", "queue", task=task_name, task_id=task_id)

    def log_task_failure(self, task_name: str, task_id: str, error_type: str) -> None:
        """Emit a task-failure event without sensitive payload details."""

        self._emit("ERROR", "failure", "queue", task=task_name, task_id=task_id, error_type=error_type)

    def log_checkpoint(self, screenplay_id: str, saved_items: int, element_index: int) -> None:
        """Emit a generation checkpoint event."""

        self._emit(
            "INFO",
            "checkpoint",
            "generate",
            screenplay=screenplay_id,
            saved_items=saved_items,
            element_index=element_index,
        )
