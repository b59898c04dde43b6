"""Top-level package for Scriptvoice.

This package converts screenplay elements into ordered speakable items for
speech synthesis. The main entry points are `ScreenplayToSpeechProcessor` for
one-shot conversion and `BackgroundTaskManager` with
`SpeakableItemGenerationTask` for incremental, cancellable generation.
"""

from .speech import ScreenplayToSpeechProcessor
from .tasks import BackgroundTaskManager, SpeakableItemGenerationTask

__all__ = [
    "BackgroundTaskManager",
    "ScreenplayToSpeechProcessor",
    "SpeakableItemGenerationTask",
    "__version__",
]

__version__ = "0.1.0"
