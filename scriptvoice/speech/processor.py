"""Screenplay-to-speech processing.

Responsibilities:
- Walk a screenplay's elements in order, resetting speaker tracking at every
  scene heading and grouping dialogue blocks.
- Hand the generated items to the item store and commit them.

Key types:
- `ScreenplayPass`: one resumable, element-at-a-time pass over a document.
- `ScreenplayToSpeechProcessor`: full-document driver with persistence.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from loguru import logger

from ..io.storage import ItemStore
from ..models.datatypes import (
    UNNAMED_SCREENPLAY_ID,
    ElementType,
    ScreenplayDocument,
    ScreenplayElement,
    SpeakableItem,
)
from .rules import SpeechRules, create_speech_rules
from .scene_context import SceneContext


class ScreenplayPass:
    """Single forward pass over an ordered element sequence.

    Each `step()` consumes one element, or one whole dialogue block, and
    returns the items it produced. Items come out in non-decreasing
    `order_index`.
    """

    def __init__(
        self,
        elements: Sequence[ScreenplayElement],
        screenplay_id: str,
        rules: SpeechRules,
    ) -> None:
        self.elements = tuple(elements)
        self.screenplay_id = screenplay_id
        self.rules = rules
        self.scene_context = SceneContext()
        self.index = 0

    @property
    def total(self) -> int:
        return len(self.elements)

    @property
    def has_more(self) -> bool:
        return self.index < len(self.elements)

    def step(self) -> list[SpeakableItem]:
        """Process the element at the current index and advance past it."""

        index = self.index
        element = self.elements[index]

        if element.element_type is ElementType.SCENE_HEADING:
            self.scene_context = SceneContext(scene_id=element.scene_id or f"unknown-{index}")
            self.index += 1
            item = self.rules.process_scene_heading(element, index, self.screenplay_id)
            return [item] if item is not None else []

        if element.element_type is ElementType.CHARACTER:
            items, consumed = self.rules.process_dialogue_block(
                index,
                self.elements,
                self.scene_context,
                self.screenplay_id,
            )
            if not items:
                logger.debug(
                    "Skipped dialogue block without dialogue at index {} ({} element(s)).",
                    index,
                    consumed,
                )
            self.index += consumed
            return items

        self.index += 1
        item = self.rules.process_single_element(element, index, self.screenplay_id)
        return [item] if item is not None else []

    def __iter__(self) -> Iterator[SpeakableItem]:
        while self.has_more:
            yield from self.step()


class ScreenplayToSpeechProcessor:
    """Convert complete screenplays into persisted speakable items."""

    def __init__(self, store: ItemStore, rules: SpeechRules | None = None) -> None:
        self.store = store
        self.rules = rules or create_speech_rules()

    def start_pass(
        self,
        elements: Sequence[ScreenplayElement],
        screenplay_id: str = UNNAMED_SCREENPLAY_ID,
    ) -> ScreenplayPass:
        """Create a pass bound to this processor's rule set."""

        return ScreenplayPass(elements, screenplay_id, self.rules)

    def process_elements(
        self,
        elements: Sequence[ScreenplayElement],
        screenplay_id: str = UNNAMED_SCREENPLAY_ID,
    ) -> list[SpeakableItem]:
        """Return the items for `elements` without persisting them."""

        return list(self.start_pass(elements, screenplay_id))

    def iterate_items(self, document: ScreenplayDocument) -> Iterator[SpeakableItem]:
        """Lazily yield the items for `document` in source order."""

        return iter(self.start_pass(document.elements, document.screenplay_id))

    def process_screenplay(self, document: ScreenplayDocument) -> list[SpeakableItem]:
        """Generate, persist, and return all items for `document`.

        Raises:
            PersistenceError: If the store rejects the commit.
        """

        items = self.process_elements(document.elements, document.screenplay_id)
        for item in items:
            self.store.insert(item)
        self.store.save()
        logger.debug(
            "Persisted {} speakable item(s) for screenplay {}.",
            len(items),
            document.screenplay_id,
        )
        return items
