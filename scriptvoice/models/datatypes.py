"""Core datatypes shared across Scriptvoice modules.

Responsibilities:
- Represent screenplay input elements and documents in one closed,
  exhaustively-matchable form.
- Represent speakable output items with explicit, serializable fields.

Key types:
- `ElementType`, `ScreenplayElement`, `ScreenplayDocument`, `ToneHint`,
  `ProcessingStatus`, and `SpeakableItem`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping
from uuid import uuid4


UNNAMED_SCREENPLAY_ID = "unnamed-screenplay"


class ElementType(str, Enum):
    """Closed set of screenplay element kinds."""

    SCENE_HEADING = "scene_heading"
    CHARACTER = "character"
    PARENTHETICAL = "parenthetical"
    DIALOGUE = "dialogue"
    ACTION = "action"
    TRANSITION = "transition"
    COMMENT = "comment"
    BONEYARD = "boneyard"
    SYNOPSIS = "synopsis"
    SECTION_HEADING = "section_heading"
    PAGE_BREAK = "page_break"
    CENTERED = "centered"
    LYRICS = "lyrics"

    @property
    def label(self) -> str:
        """Human-readable label used as `source_element_type` on items."""

        return _ELEMENT_LABELS[self]


_ELEMENT_LABELS = {
    ElementType.SCENE_HEADING: "Scene Heading",
    ElementType.CHARACTER: "Character",
    ElementType.PARENTHETICAL: "Parenthetical",
    ElementType.DIALOGUE: "Dialogue",
    ElementType.ACTION: "Action",
    ElementType.TRANSITION: "Transition",
    ElementType.COMMENT: "Note",
    ElementType.BONEYARD: "Boneyard",
    ElementType.SYNOPSIS: "Synopsis",
    ElementType.SECTION_HEADING: "Section Heading",
    ElementType.PAGE_BREAK: "Page Break",
    ElementType.CENTERED: "Centered",
    ElementType.LYRICS: "Lyrics",
}


@dataclass(frozen=True, slots=True)
class ScreenplayElement:
    """One element of a parsed screenplay.

    Attributes:
        element_type: Kind of element.
        element_text: Raw element text as written in the screenplay.
        scene_id: Optional identifier of the scene this element belongs to.
        lighting_code: Scene heading lighting prefix (`INT`, `EXT`, ...).
        scene_name: Scene heading location name.
        time_of_day: Scene heading time of day.
        section_depth: Outline depth, set only for section headings.
    """

    element_type: ElementType
    element_text: str
    scene_id: str | None = None
    lighting_code: str | None = None
    scene_name: str | None = None
    time_of_day: str | None = None
    section_depth: int | None = None

    def as_payload(self) -> dict[str, object]:
        """Return a JSON-safe mapping for element documents."""

        payload: dict[str, object] = {
            "type": self.element_type.value,
            "text": self.element_text,
        }
        for key in ("scene_id", "lighting_code", "scene_name", "time_of_day", "section_depth"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> ScreenplayElement:
        """Build an element from a JSON mapping, raising `ValueError` on bad types."""

        raw_type = payload.get("type")
        try:
            element_type = ElementType(raw_type)
        except ValueError as exc:
            raise ValueError(f"Unknown screenplay element type `{raw_type}`.") from exc
        section_depth = payload.get("section_depth")
        return cls(
            element_type=element_type,
            element_text=str(payload.get("text", "")),
            scene_id=_optional_text(payload.get("scene_id")),
            lighting_code=_optional_text(payload.get("lighting_code")),
            scene_name=_optional_text(payload.get("scene_name")),
            time_of_day=_optional_text(payload.get("time_of_day")),
            section_depth=int(section_depth) if section_depth is not None else None,
        )


@dataclass(frozen=True, slots=True)
class ScreenplayDocument:
    """An ordered, already-parsed screenplay.

    Attributes:
        elements: Elements in document order.
        filename: Optional source name, used as the screenplay identifier.
        raw_content: Optional source text the elements were derived from.
        title: Optional title page value.
    """

    elements: tuple[ScreenplayElement, ...]
    filename: str | None = None
    raw_content: str | None = None
    title: str | None = None

    @property
    def screenplay_id(self) -> str:
        """Stable identifier stamped on every item generated from this document."""

        return self.filename or UNNAMED_SCREENPLAY_ID


class ToneHint(str, Enum):
    """Coarse styling hint for downstream speech synthesis."""

    NARRATIVE = "narrative"
    CHARACTER = "character"
    EMPHASIS = "emphasis"
    PARENTHETICAL = "parenthetical"


class ProcessingStatus(str, Enum):
    """Lifecycle of a speakable item; only `TEXT_GENERATED` is set here."""

    TEXT_GENERATED = "text_generated"
    AUDIO_QUEUED = "audio_queued"
    AUDIO_GENERATING = "audio_generating"
    AUDIO_COMPLETE = "audio_complete"
    AUDIO_FAILED = "audio_failed"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return uuid4().hex


@dataclass(slots=True)
class SpeakableItem:
    """One unit of text ready for speech synthesis.

    Attributes:
        order_index: Position of the source element (the character cue for
            dialogue blocks) in the element sequence.
        screenplay_id: Identifier of the source screenplay.
        source_element_id: Identifier of the source element or its scene.
        source_element_type: Display label of the source element kind.
        speakable_text: Final rule-transformed text.
        rule_version: Version of the speech rules that produced this item.
        scene_id: Scene this item belongs to, when known.
        character_name: Normalized character name for dialogue.
        raw_character_name: Character cue exactly as written.
        includes_character_announcement: Whether `speakable_text` starts with
            a "says:" announcement.
        tone_hint: Styling hint for synthesis.
        status: Downstream audio lifecycle status.
        id: Unique item identifier.
        created_at: UTC ISO creation timestamp.
        updated_at: UTC ISO timestamp of the last status change.
    """

    order_index: int
    screenplay_id: str
    source_element_id: str
    source_element_type: str
    speakable_text: str
    rule_version: str
    scene_id: str | None = None
    character_name: str | None = None
    raw_character_name: str | None = None
    includes_character_announcement: bool = False
    tone_hint: ToneHint = ToneHint.NARRATIVE
    status: ProcessingStatus = ProcessingStatus.TEXT_GENERATED
    id: str = field(default_factory=_new_id)
    created_at: str = field(default_factory=_utc_timestamp)
    updated_at: str = field(default_factory=_utc_timestamp)

    def as_payload(self) -> dict[str, object]:
        """Return a JSON-safe mapping with stable key names."""

        return {
            "id": self.id,
            "order_index": self.order_index,
            "screenplay_id": self.screenplay_id,
            "source_element_id": self.source_element_id,
            "source_element_type": self.source_element_type,
            "scene_id": self.scene_id,
            "speakable_text": self.speakable_text,
            "character_name": self.character_name,
            "raw_character_name": self.raw_character_name,
            "rule_version": self.rule_version,
            "includes_character_announcement": self.includes_character_announcement,
            "tone_hint": self.tone_hint.value,
            "status": self.status.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> SpeakableItem:
        """Rebuild an item from `as_payload()` output."""

        return cls(
            id=str(payload["id"]),
            order_index=int(payload["order_index"]),
            screenplay_id=str(payload["screenplay_id"]),
            source_element_id=str(payload["source_element_id"]),
            source_element_type=str(payload["source_element_type"]),
            scene_id=_optional_text(payload.get("scene_id")),
            speakable_text=str(payload["speakable_text"]),
            character_name=_optional_text(payload.get("character_name")),
            raw_character_name=_optional_text(payload.get("raw_character_name")),
            rule_version=str(payload["rule_version"]),
            includes_character_announcement=bool(
                payload.get("includes_character_announcement", False)
            ),
            tone_hint=ToneHint(payload.get("tone_hint", ToneHint.NARRATIVE.value)),
            status=ProcessingStatus(
                payload.get("status", ProcessingStatus.TEXT_GENERATED.value)
            ),
            created_at=str(payload.get("created_at") or _utc_timestamp()),
            updated_at=str(payload.get("updated_at") or _utc_timestamp()),
        )


def _optional_text(value: object) -> str | None:
    if value is None:
        return None
    return str(value)
