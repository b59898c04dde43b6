"""Shared typed data models for Scriptvoice.

This package contains the screenplay input and speakable output records used
across speech, task, and storage modules to avoid circular imports.
"""

from .datatypes import (
    UNNAMED_SCREENPLAY_ID,
    ElementType,
    ProcessingStatus,
    ScreenplayDocument,
    ScreenplayElement,
    SpeakableItem,
    ToneHint,
)

__all__ = [
    "UNNAMED_SCREENPLAY_ID",
    "ElementType",
    "ProcessingStatus",
    "ScreenplayDocument",
    "ScreenplayElement",
    "SpeakableItem",
    "ToneHint",
]
