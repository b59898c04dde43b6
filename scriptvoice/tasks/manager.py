"""Single-worker background task scheduling.

Responsibilities:
- Hold the ordered task list and run queued tasks one at a time on the
  running `asyncio` event loop.
- Translate executor outcomes into terminal task states.
- Keep processing the queue after a task fails or is cancelled.
"""

from __future__ import annotations

import asyncio

from loguru import logger

from ..telemetry.logger import RunLogger
from .background import BackgroundTask, TaskState


class BackgroundTaskManager:
    """Cooperative FIFO scheduler running at most one task at a time.

    Tasks are picked by state rather than position: the first task still
    `queued` runs next, so tasks cancelled while waiting are skipped.
    """

    def __init__(self, run_logger: RunLogger | None = None) -> None:
        self.tasks: list[BackgroundTask] = []
        self.running_task: BackgroundTask | None = None
        self.is_processing = False
        self._run_logger = run_logger
        self._worker: asyncio.Task[None] | None = None

    def enqueue(self, task: BackgroundTask) -> None:
        """Append a task to the queue; tasks already tracked are ignored."""

        if task in self.tasks:
            return
        self.tasks.append(task)
        logger.debug("Enqueued task {} ({}).", task.name, task.id)

    def run_next(self) -> asyncio.Task[None]:
        """Start the processing loop unless it is already active.

        Must be called from a running event loop. Returns the worker task.
        """

        if self._worker is not None and not self._worker.done():
            return self._worker
        self.is_processing = True
        self._worker = asyncio.get_running_loop().create_task(self._worker_loop())
        return self._worker

    async def wait_until_idle(self) -> None:
        if self._worker is not None:
            await self._worker

    async def run_until_idle(self) -> None:
        """Process every queued task and return once the queue is drained."""

        self.run_next()
        await self.wait_until_idle()

    def cancel_task(self, task: BackgroundTask) -> None:
        task.cancel()

    def clear_completed(self) -> None:
        """Drop completed tasks; failed and cancelled ones stay visible."""

        self.tasks = [task for task in self.tasks if task.state is not TaskState.COMPLETED]

    def summary(self) -> dict[str, int]:
        """Return task counts keyed by state value."""

        counts = {state.value: 0 for state in TaskState}
        for task in self.tasks:
            counts[task.state.value] += 1
        return counts

    def _next_queued(self) -> BackgroundTask | None:
        for task in self.tasks:
            if task.state is TaskState.QUEUED:
                return task
        return None

    async def _worker_loop(self) -> None:
        try:
            while True:
                task = self._next_queued()
                if task is None:
                    break
                await self._run_task(task)
        finally:
            self.running_task = None
            self.is_processing = False

    async def _run_task(self, task: BackgroundTask) -> None:
        self.running_task = task
        task.mark_running()
        if self._run_logger is not None:
            self._run_logger.log_task_start(task.name, task.id)

        try:
            if task.executor is not None:
                await task.executor()
        except asyncio.CancelledError:
            # Worker torn down mid-task; the task must still end terminal.
            task.cancel()
            self._log_outcome(task)
            raise
        except Exception as exc:
            if task.is_cancelled:
                logger.warning(
                    "Task {} raised {} after cancellation; it stays cancelled.",
                    task.id,
                    type(exc).__name__,
                )
            task.mark_failed(exc)
        else:
            if task.state is TaskState.RUNNING:
                task.mark_completed()
        finally:
            self.running_task = None

        self._log_outcome(task)

    def _log_outcome(self, task: BackgroundTask) -> None:
        if self._run_logger is None:
            return
        if task.state is TaskState.COMPLETED:
            self._run_logger.log_task_complete(task.name, task.id)
        elif task.is_cancelled:
            self._run_logger.log_task_cancelled(task.name, task.id)
        elif task.state is TaskState.FAILED:
            error_type = type(task.error).__name__ if task.error is not None else "unknown"
            self._run_logger.log_task_failure(task.name, task.id, error_type)
