"""Incremental speakable-item generation as a background task.

Responsibilities:
- Drive one screenplay pass element-at-a-time with progress reporting.
- Commit generated items in checkpoints so a cancelled or failed run keeps
  the work already done.
- Poll for cooperative cancellation before every element.
"""

from __future__ import annotations

import asyncio

from ..io.storage import ItemStore
from ..models.datatypes import ScreenplayDocument, SpeakableItem
from ..speech.processor import ScreenplayPass
from ..speech.rules import SpeechRules, create_speech_rules
from ..telemetry.logger import RunLogger
from .background import BackgroundTask


GENERATION_TASK_NAME = "Generate Speakable Items"
DEFAULT_SAVE_INTERVAL = 50


class ScreenplayTask:
    """Interface for screenplay work units schedulable by the task manager."""

    @property
    def background_task(self) -> BackgroundTask:
        """Return the observable task record driving this unit of work."""

        raise NotImplementedError

    async def execute(self) -> None:
        """Perform the work, reporting through `background_task`."""

        raise NotImplementedError

    def cancel(self) -> None:
        """Request cooperative cancellation."""

        self.background_task.cancel()


class SpeakableItemGenerationTask(ScreenplayTask):
    """Generate and persist speakable items for one screenplay document.

    Items are inserted and saved every `save_interval` produced items and once
    more at the end. On cancellation the buffered items are saved and the
    executor returns normally, leaving the task `cancelled` with no error.
    Persistence errors propagate to the caller.
    """

    def __init__(
        self,
        document: ScreenplayDocument,
        store: ItemStore,
        rules: SpeechRules | None = None,
        save_interval: int = DEFAULT_SAVE_INTERVAL,
        yield_every: int = 1,
        run_logger: RunLogger | None = None,
    ) -> None:
        if save_interval < 1:
            raise ValueError("`save_interval` must be a positive integer.")
        if yield_every < 1:
            raise ValueError("`yield_every` must be a positive integer.")

        self.document = document
        self.store = store
        self.rules = rules or create_speech_rules()
        self.save_interval = save_interval
        self.yield_every = yield_every
        self.run_logger = run_logger
        self.items_generated = 0
        self._background_task = BackgroundTask(
            name=GENERATION_TASK_NAME,
            is_blocking=True,
            executor=self.execute,
        )

    @property
    def background_task(self) -> BackgroundTask:
        return self._background_task

    async def execute(self) -> None:
        task = self._background_task
        task.mark_running()
        task.message = "Parsing screenplay..."

        elements = self.document.elements
        total = len(elements)
        task.total_steps = total
        task.current_step = 0
        task.message = f"Processing {total} elements..."

        screenplay_pass = ScreenplayPass(elements, self.document.screenplay_id, self.rules)
        buffer: list[SpeakableItem] = []
        steps = 0

        while screenplay_pass.has_more:
            index = screenplay_pass.index
            if task.is_cancelled:
                self._persist(buffer)
                self._report_cancelled(index, total)
                return

            task.current_step = index + 1
            task.message = f"Processing element {index + 1} of {total}"

            items = screenplay_pass.step()
            buffer.extend(items)
            self.items_generated += len(items)

            if len(buffer) >= self.save_interval:
                saved = len(buffer)
                self._persist(buffer)
                task.current_step = screenplay_pass.index
                task.message = f"Saved checkpoint at element {screenplay_pass.index} of {total}"
                if self.run_logger is not None:
                    self.run_logger.log_checkpoint(
                        self.document.screenplay_id, saved, screenplay_pass.index
                    )

            steps += 1
            if steps % self.yield_every == 0:
                await asyncio.sleep(0)

        self._persist(buffer)
        if task.is_cancelled:
            self._report_cancelled(total, total)
            return
        task.current_step = total
        task.mark_completed(f"Completed: {self.items_generated} items processed")

    def _persist(self, buffer: list[SpeakableItem]) -> None:
        """Insert and commit buffered items, then clear the buffer."""

        if not buffer:
            return
        for item in buffer:
            self.store.insert(item)
        self.store.save()
        buffer.clear()

    def _report_cancelled(self, index: int, total: int) -> None:
        self._background_task.message = f"Cancelled after processing {index} of {total} elements"
