"""Versioned speech logic rules.

Responsibilities:
- Turn screenplay elements into speakable items, one rule version per class.
- Group character cues with their dialogue lines and decide when a speaker
  must be announced.
- Resolve rule versions to concrete rule sets at construction time.

Notes:
- Only version `1.0` exists today. New versions are added as new classes and
  registered in `RULE_SETS`; existing classes are never branched on version.
"""

from __future__ import annotations

from typing import Callable, Sequence

from ..models.datatypes import (
    ElementType,
    ScreenplayElement,
    SpeakableItem,
    ToneHint,
)
from .normalizer import CharacterNormalizer
from .scene_context import SceneContext


_UNKNOWN_SOURCE_ID = "unknown"
_LIGHTING_LABELS = {"INT": "Interior", "EXT": "Exterior"}


class SpeechRules:
    """Interface for one version of the element-to-speech rules."""

    version: str = ""

    def process_scene_heading(
        self,
        element: ScreenplayElement,
        order_index: int,
        screenplay_id: str,
    ) -> SpeakableItem | None:
        """Return the narrative item for a scene heading, or `None` to skip it."""

        raise NotImplementedError

    def process_dialogue_block(
        self,
        start_index: int,
        elements: Sequence[ScreenplayElement],
        scene_context: SceneContext,
        screenplay_id: str,
    ) -> tuple[list[SpeakableItem], int]:
        """Consume a dialogue block and return its items and consumed count."""

        raise NotImplementedError

    def process_single_element(
        self,
        element: ScreenplayElement,
        order_index: int,
        screenplay_id: str,
    ) -> SpeakableItem | None:
        """Return the item for a standalone element, or `None` when not spoken."""

        raise NotImplementedError


class SpeechLogicRulesV1(SpeechRules):
    """Speech logic rules version 1.0.

    - Scene headings are read as `Interior. PLACE. TIME.`.
    - A dialogue block (cue, optional parenthetical, dialogue lines) becomes one
      item; the first block of a character in a scene is prefixed with
      `NAME says:`.
    - Action lines are read verbatim; everything else is silent.
    """

    version = "1.0"
    announcement_format = "{name} says:"

    def __init__(self, normalizer: CharacterNormalizer | None = None) -> None:
        self.normalizer = normalizer or CharacterNormalizer()

    def process_scene_heading(
        self,
        element: ScreenplayElement,
        order_index: int,
        screenplay_id: str,
    ) -> SpeakableItem | None:
        if element.lighting_code is not None and element.scene_name is not None:
            lighting = _LIGHTING_LABELS.get(element.lighting_code, element.lighting_code)
            time_of_day = element.time_of_day or ""
            text = f"{lighting}. {element.scene_name}. {time_of_day}."
        else:
            text = element.element_text.replace("INT.", "Interior.").replace(
                "EXT.", "Exterior."
            )

        return SpeakableItem(
            order_index=order_index,
            screenplay_id=screenplay_id,
            source_element_id=element.scene_id or _UNKNOWN_SOURCE_ID,
            source_element_type=ElementType.SCENE_HEADING.label,
            scene_id=element.scene_id,
            speakable_text=text,
            rule_version=self.version,
            tone_hint=ToneHint.NARRATIVE,
        )

    def process_dialogue_block(
        self,
        start_index: int,
        elements: Sequence[ScreenplayElement],
        scene_context: SceneContext,
        screenplay_id: str,
    ) -> tuple[list[SpeakableItem], int]:
        index = start_index
        if not 0 <= index < len(elements) or (
            elements[index].element_type is not ElementType.CHARACTER
        ):
            return [], 1

        character_element = elements[index]
        raw_character_name = character_element.element_text
        normalized_name = self.normalizer.normalize(raw_character_name)
        index += 1

        # Parentheticals are stage directions, never spoken.
        if index < len(elements) and elements[index].element_type is ElementType.PARENTHETICAL:
            index += 1

        dialogue_lines: list[str] = []
        while index < len(elements) and elements[index].element_type is ElementType.DIALOGUE:
            dialogue_lines.append(elements[index].element_text)
            index += 1

        if not dialogue_lines:
            return [], index - start_index

        combined_dialogue = " ".join(dialogue_lines)
        is_first_time_in_scene = not scene_context.has_character_spoken(normalized_name)
        if is_first_time_in_scene:
            announcement = self.announcement_format.format(name=raw_character_name)
            speakable_text = f"{announcement} {combined_dialogue}"
        else:
            speakable_text = combined_dialogue

        item = SpeakableItem(
            order_index=start_index,
            screenplay_id=screenplay_id,
            source_element_id=character_element.scene_id or _UNKNOWN_SOURCE_ID,
            source_element_type=ElementType.DIALOGUE.label,
            scene_id=scene_context.scene_id,
            speakable_text=speakable_text,
            character_name=normalized_name,
            raw_character_name=raw_character_name,
            rule_version=self.version,
            includes_character_announcement=is_first_time_in_scene,
            tone_hint=ToneHint.CHARACTER,
        )
        scene_context.mark_character_spoken(normalized_name)
        return [item], index - start_index

    def process_single_element(
        self,
        element: ScreenplayElement,
        order_index: int,
        screenplay_id: str,
    ) -> SpeakableItem | None:
        match element.element_type:
            case (
                ElementType.PARENTHETICAL
                | ElementType.TRANSITION
                | ElementType.COMMENT
                | ElementType.BONEYARD
                | ElementType.SYNOPSIS
                | ElementType.SECTION_HEADING
                | ElementType.PAGE_BREAK
            ):
                return None
            case ElementType.ACTION:
                return SpeakableItem(
                    order_index=order_index,
                    screenplay_id=screenplay_id,
                    source_element_id=element.scene_id or _UNKNOWN_SOURCE_ID,
                    source_element_type=element.element_type.label,
                    scene_id=element.scene_id,
                    speakable_text=element.element_text,
                    rule_version=self.version,
                    tone_hint=ToneHint.NARRATIVE,
                )
            case (
                ElementType.SCENE_HEADING
                | ElementType.CHARACTER
                | ElementType.DIALOGUE
                | ElementType.CENTERED
                | ElementType.LYRICS
            ):
                # Reserved for later rule versions.
                return None


RULE_SETS: dict[str, Callable[[CharacterNormalizer | None], SpeechRules]] = {
    SpeechLogicRulesV1.version: SpeechLogicRulesV1,
}

DEFAULT_RULE_VERSION = SpeechLogicRulesV1.version


def available_rule_versions() -> list[str]:
    """Return registered rule versions in ascending order."""

    return sorted(RULE_SETS)


def create_speech_rules(
    version: str = DEFAULT_RULE_VERSION,
    normalizer: CharacterNormalizer | None = None,
) -> SpeechRules:
    """Create the rule set registered for `version`."""

    factory = RULE_SETS.get(version)
    if factory is None:
        supported = ", ".join(available_rule_versions())
        raise ValueError(f"Unsupported speech rule version `{version}`; supported: {supported}.")
    return factory(normalizer)
