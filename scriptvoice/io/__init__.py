"""Input/output components for Scriptvoice.

This package contains screenplay document loading and the artifact and
speakable-item stores used by processors and tasks.
"""

from .storage import ArtifactStore, InMemoryItemStore, ItemStore, JsonItemStore

__all__ = ["ArtifactStore", "InMemoryItemStore", "ItemStore", "JsonItemStore"]
