"""Background task state and progress tracking.

Responsibilities:
- Model one unit of cancellable work and its lifecycle state machine.
- Expose progress counters and a human-readable status message for UIs.

Key types:
- `TaskState`: lifecycle states (`queued` -> `running` -> terminal).
- `BackgroundTask`: observable task record carrying an async executor.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Callable
from uuid import uuid4


TaskExecutor = Callable[[], Awaitable[None]]


class TaskState(str, Enum):
    """Lifecycle state of a background task."""

    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES

    @property
    def label(self) -> str:
        return self.value.capitalize()


_TERMINAL_STATES = frozenset({TaskState.COMPLETED, TaskState.FAILED, TaskState.CANCELLED})


class BackgroundTask:
    """A queued unit of work with progress, message, and error reporting.

    Once a task reaches a terminal state it never leaves it: every transition
    helper is a no-op on terminal tasks.

    Attributes:
        id: Unique task identifier.
        name: Display name.
        is_blocking: Advisory flag for UIs that lock editing while it runs;
            the scheduler does not enforce it.
        state: Current lifecycle state.
        current_step: Progress numerator.
        total_steps: Progress denominator, `0` until known.
        message: Human-readable status.
        error: Exception recorded when the task failed.
        executor: Async callable performing the work.
    """

    def __init__(
        self,
        name: str,
        is_blocking: bool = False,
        executor: TaskExecutor | None = None,
    ) -> None:
        self.id = uuid4().hex
        self.name = name
        self.is_blocking = is_blocking
        self.state = TaskState.QUEUED
        self.current_step = 0
        self.total_steps = 0
        self.message = ""
        self.error: BaseException | None = None
        self.executor = executor
        self.created_at = datetime.now(timezone.utc).isoformat()

    def __repr__(self) -> str:
        return f"BackgroundTask(name={self.name!r}, state={self.state.value!r})"

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    @property
    def is_cancelled(self) -> bool:
        return self.state is TaskState.CANCELLED

    @property
    def progress_fraction(self) -> float:
        """Progress in `[0, 1]`; `0` while `total_steps` is unknown."""

        if self.total_steps <= 0:
            return 0.0
        fraction = self.current_step / self.total_steps
        return min(max(fraction, 0.0), 1.0)

    @property
    def progress_percentage(self) -> int:
        return int(self.progress_fraction * 100)

    @property
    def status_label(self) -> str:
        return self.state.label

    def cancel(self) -> None:
        """Request cancellation; ignored once the task is terminal.

        A running executor only stops when it next polls `state`.
        """

        if self.is_terminal:
            return
        self.state = TaskState.CANCELLED

    def mark_running(self) -> None:
        if self.is_terminal:
            return
        self.state = TaskState.RUNNING

    def mark_completed(self, message: str | None = None) -> None:
        if self.is_terminal:
            return
        self.state = TaskState.COMPLETED
        if message is not None:
            self.message = message

    def mark_failed(self, error: BaseException) -> None:
        if self.is_terminal:
            return
        self.state = TaskState.FAILED
        self.error = error
        self.message = f"Failed: {error}"
