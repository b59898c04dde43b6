"""Artifact and speakable-item storage.

Responsibilities:
- Provide deterministic filesystem storage for JSON artifacts.
- Define the buffered `insert` / `save` item store contract used by the
  processor and generation tasks.
- Offer in-memory and JSON-file item store implementations.

Key types:
- `ItemStore`: interface for speakable-item persistence.
- `InMemoryItemStore`: list-backed store for tests and embedding callers.
- `JsonItemStore`: one JSON file per screenplay under an output directory.
"""

from __future__ import annotations

import json
import re
import unicodedata
from pathlib import Path
from typing import Callable

from ..errors import PersistenceError
from ..models.datatypes import SpeakableItem


def slugify_identifier(value: str) -> str:
    """Return a deterministic filesystem-safe ASCII slug for an identifier."""

    normalized = unicodedata.normalize("NFKD", value)
    ascii_only = normalized.encode("ascii", "ignore").decode("ascii")
    lowered = ascii_only.lower().strip()
    collapsed = re.sub(r"[^a-z0-9]+", "-", lowered)
    slug = collapsed.strip("-")
    return slug or "screenplay"


class ArtifactStore:
    """Filesystem-backed JSON artifact store rooted at one directory."""

    def __init__(self, root: Path) -> None:
        """Initialize the store with a root output directory."""

        self.root = root

    def save_json(self, relative_path: Path, payload: dict[str, object]) -> Path:
        """Save JSON-serializable payload and return final path."""

        path = self.root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True),
            encoding="utf-8",
        )
        return path

    def load_json(self, relative_path: Path) -> object:
        """Load a JSON artifact."""

        path = self.root / relative_path
        return json.loads(path.read_text(encoding="utf-8"))

    def exists(self, relative_path: Path) -> bool:
        """Return whether the given artifact exists."""

        return (self.root / relative_path).exists()


class ItemStore:
    """Interface for speakable-item persistence.

    `insert` only buffers; nothing is visible to `items_for` until `save`
    commits. Readers may observe a store between two checkpoints of a running
    task and must treat what they see as valid but incomplete.
    """

    def insert(self, item: SpeakableItem) -> None:
        """Buffer one item for the next commit."""

        raise NotImplementedError

    def save(self) -> None:
        """Commit buffered items or raise `PersistenceError`."""

        raise NotImplementedError

    def items_for(self, screenplay_id: str) -> list[SpeakableItem]:
        """Return committed items of one screenplay ordered by `order_index`."""

        raise NotImplementedError


class InMemoryItemStore(ItemStore):
    """Item store holding committed items in memory.

    `save_hook` runs with the pending batch before each commit; raising from
    it rejects the commit and leaves the batch pending.
    """

    def __init__(
        self,
        save_hook: Callable[[list[SpeakableItem]], None] | None = None,
    ) -> None:
        self._pending: list[SpeakableItem] = []
        self._committed: list[SpeakableItem] = []
        self._save_hook = save_hook
        self.save_count = 0

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def committed_items(self) -> list[SpeakableItem]:
        return list(self._committed)

    def insert(self, item: SpeakableItem) -> None:
        self._pending.append(item)

    def save(self) -> None:
        if self._save_hook is not None:
            try:
                self._save_hook(list(self._pending))
            except PersistenceError:
                raise
            except Exception as exc:
                raise PersistenceError(f"Item store rejected commit: {exc}") from exc
        self._committed.extend(self._pending)
        self._pending.clear()
        self.save_count += 1

    def items_for(self, screenplay_id: str) -> list[SpeakableItem]:
        return sorted(
            (item for item in self._committed if item.screenplay_id == screenplay_id),
            key=lambda item: item.order_index,
        )


class JsonItemStore(ItemStore):
    """Item store writing one `items/<screenplay>.json` artifact per screenplay.

    Screenplay ids that slug to the same file share it; every entry keeps its
    `screenplay_id` and reads filter on it. Within one screenplay an item
    replaces any committed item with the same `order_index`, so regenerating
    a screenplay overwrites its earlier items.
    """

    def __init__(self, root: Path) -> None:
        self.artifacts = ArtifactStore(root)
        self._pending: list[SpeakableItem] = []

    @staticmethod
    def relative_path(screenplay_id: str) -> Path:
        """Return the artifact path for a screenplay's items."""

        return Path("items") / f"{slugify_identifier(screenplay_id)}.json"

    def insert(self, item: SpeakableItem) -> None:
        self._pending.append(item)

    def save(self) -> None:
        if not self._pending:
            return

        batches: dict[str, list[SpeakableItem]] = {}
        for item in self._pending:
            batches.setdefault(item.screenplay_id, []).append(item)

        for screenplay_id, batch in batches.items():
            stored = self._load_artifact(screenplay_id)
            others = [item for item in stored if item.screenplay_id != screenplay_id]
            merged = {
                item.order_index: item for item in stored if item.screenplay_id == screenplay_id
            }
            merged.update((item.order_index, item) for item in batch)
            ordered = sorted(merged.values(), key=lambda item: item.order_index)
            payload: dict[str, object] = {
                "screenplay_id": screenplay_id,
                "items": [item.as_payload() for item in [*others, *ordered]],
            }
            try:
                self.artifacts.save_json(self.relative_path(screenplay_id), payload)
            except OSError as exc:
                raise PersistenceError(
                    f"Failed to write items for screenplay `{screenplay_id}`: {exc}"
                ) from exc
        self._pending.clear()

    def items_for(self, screenplay_id: str) -> list[SpeakableItem]:
        return sorted(
            (
                item
                for item in self._load_artifact(screenplay_id)
                if item.screenplay_id == screenplay_id
            ),
            key=lambda item: item.order_index,
        )

    def _load_artifact(self, screenplay_id: str) -> list[SpeakableItem]:
        """Load every item in a screenplay's artifact file.

        Raises:
            PersistenceError: If the artifact exists but cannot be decoded.
        """

        relative_path = self.relative_path(screenplay_id)
        if not self.artifacts.exists(relative_path):
            return []
        try:
            payload = self.artifacts.load_json(relative_path)
            if not isinstance(payload, dict) or not isinstance(payload.get("items"), list):
                raise ValueError("artifact root must be an object with an `items` list")
            return [SpeakableItem.from_payload(entry) for entry in payload["items"]]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise PersistenceError(
                f"Stored items for screenplay `{screenplay_id}` are unreadable: {exc}"
            ) from exc
