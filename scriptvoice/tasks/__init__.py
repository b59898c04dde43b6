"""Background task scheduling for screenplay processing."""

from .background import BackgroundTask, TaskExecutor, TaskState
from .generation import (
    DEFAULT_SAVE_INTERVAL,
    GENERATION_TASK_NAME,
    ScreenplayTask,
    SpeakableItemGenerationTask,
)
from .manager import BackgroundTaskManager

__all__ = [
    "BackgroundTask",
    "BackgroundTaskManager",
    "DEFAULT_SAVE_INTERVAL",
    "GENERATION_TASK_NAME",
    "ScreenplayTask",
    "SpeakableItemGenerationTask",
    "TaskExecutor",
    "TaskState",
]
