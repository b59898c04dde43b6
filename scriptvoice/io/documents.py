"""Screenplay document loading.

Responsibilities:
- Read Fountain screenplays through `jouvence` and flatten them into ordered
  `ScreenplayElement` sequences with scene identifiers and parsed locations.
- Read pre-parsed element lists from JSON documents.

Key public functions:
- `parse_scene_location`: split a scene heading into lighting, place, and time.
- `load_screenplay`: load any supported document path.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Iterable

from jouvence.document import (
    TYPE_ACTION,
    TYPE_CENTEREDACTION,
    TYPE_CHARACTER,
    TYPE_DIALOG,
    TYPE_LYRICS,
    TYPE_PAGEBREAK,
    TYPE_PARENTHETICAL,
    TYPE_SECTION,
    TYPE_SYNOPSIS,
    TYPE_TRANSITION,
)
from jouvence.parser import JouvenceParser
from loguru import logger

from ..errors import DocumentLoadError
from ..models.datatypes import ElementType, ScreenplayDocument, ScreenplayElement


FOUNTAIN_SUFFIXES = frozenset({".fountain", ".spmd", ".txt"})
JSON_SUFFIXES = frozenset({".json"})

_SCENE_HEADING_PATTERN = re.compile(
    r"^(?P<lighting>INT\.?/EXT|INT|EXT|EST|I/E)\.?\s+(?P<rest>.+)$",
    re.IGNORECASE,
)
_BONEYARD_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)
_NOTE_PATTERN = re.compile(r"\[\[.*?\]\]", re.DOTALL)

_PARAGRAPH_TYPES = {
    TYPE_ACTION: ElementType.ACTION,
    TYPE_CENTEREDACTION: ElementType.CENTERED,
    TYPE_CHARACTER: ElementType.CHARACTER,
    TYPE_DIALOG: ElementType.DIALOGUE,
    TYPE_PARENTHETICAL: ElementType.PARENTHETICAL,
    TYPE_TRANSITION: ElementType.TRANSITION,
    TYPE_LYRICS: ElementType.LYRICS,
    TYPE_PAGEBREAK: ElementType.PAGE_BREAK,
    TYPE_SECTION: ElementType.SECTION_HEADING,
    TYPE_SYNOPSIS: ElementType.SYNOPSIS,
}


def parse_scene_location(heading: str) -> tuple[str | None, str | None, str | None]:
    """Split `INT. COFFEE SHOP - DAY` into (`INT`, `COFFEE SHOP`, `DAY`).

    Returns `(None, None, None)` when the heading has no recognized lighting
    prefix; the time of day is `None` when there is no ` - ` separator.
    """

    match = _SCENE_HEADING_PATTERN.match(heading.strip())
    if match is None:
        return None, None, None

    lighting = match.group("lighting").upper().replace(".", "")
    rest = match.group("rest").strip()
    if " - " in rest:
        scene_name, time_of_day = rest.rsplit(" - ", 1)
        return lighting, scene_name.strip(), time_of_day.strip() or None
    return lighting, rest, None


class FountainElementReader:
    """Flatten Fountain text into ordered screenplay elements."""

    def read(self, content: str) -> tuple[list[ScreenplayElement], str | None]:
        """Parse Fountain text and return its elements and optional title.

        Boneyard blocks are removed before parsing because `jouvence` can loop
        forever on some of them; they are never spoken anyway.
        """

        cleaned = _BONEYARD_PATTERN.sub("", content)
        document = JouvenceParser().parseString(cleaned)

        elements: list[ScreenplayElement] = []
        scene_number = 0
        for scene in document.scenes:
            scene_id: str | None = None
            if scene.header:
                scene_number += 1
                scene_id = f"scene-{scene_number}"
                lighting, scene_name, time_of_day = parse_scene_location(scene.header)
                elements.append(
                    ScreenplayElement(
                        element_type=ElementType.SCENE_HEADING,
                        element_text=scene.header.strip(),
                        scene_id=scene_id,
                        lighting_code=lighting,
                        scene_name=scene_name,
                        time_of_day=time_of_day,
                    )
                )
            elements.extend(self._paragraph_elements(scene.paragraphs, scene_id))

        title_values = document.title_values or {}
        return elements, title_values.get("title")

    def _paragraph_elements(
        self, paragraphs: Iterable[Any], scene_id: str | None
    ) -> list[ScreenplayElement]:
        elements: list[ScreenplayElement] = []
        for paragraph in paragraphs:
            element_type = _PARAGRAPH_TYPES.get(paragraph.type)
            if element_type is None:
                logger.debug("Ignoring unsupported Fountain paragraph type {}.", paragraph.type)
                continue

            raw_text = paragraph.text or ""
            if element_type is not ElementType.PAGE_BREAK and _NOTE_PATTERN.fullmatch(
                raw_text.strip()
            ):
                elements.append(
                    ScreenplayElement(
                        element_type=ElementType.COMMENT,
                        element_text=raw_text.strip(),
                        scene_id=scene_id,
                    )
                )
                continue

            text = _NOTE_PATTERN.sub("", raw_text).strip()
            if element_type is ElementType.DIALOGUE:
                for line in text.splitlines():
                    if line.strip():
                        elements.append(
                            ScreenplayElement(
                                element_type=ElementType.DIALOGUE,
                                element_text=line.strip(),
                                scene_id=scene_id,
                            )
                        )
                continue

            elements.append(
                ScreenplayElement(
                    element_type=element_type,
                    element_text=text,
                    scene_id=scene_id,
                    section_depth=getattr(paragraph, "depth", None)
                    if element_type is ElementType.SECTION_HEADING
                    else None,
                )
            )
        return elements


def parse_fountain(content: str, filename: str | None = None) -> ScreenplayDocument:
    """Build a screenplay document from Fountain text."""

    elements, title = FountainElementReader().read(content)
    return ScreenplayDocument(
        elements=tuple(elements),
        filename=filename,
        raw_content=content,
        title=title,
    )


def elements_from_payload(payload: object) -> list[ScreenplayElement]:
    """Build elements from a JSON list of element mappings."""

    if not isinstance(payload, list):
        raise ValueError("`elements` must be a list of element objects.")
    elements: list[ScreenplayElement] = []
    for position, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise ValueError(f"Element #{position} must be an object.")
        elements.append(ScreenplayElement.from_payload(entry))
    return elements


def load_screenplay(path: Path) -> ScreenplayDocument:
    """Load a Fountain or JSON element document from `path`.

    The file stem becomes the screenplay identifier unless a JSON document
    names its own `filename`.

    Raises:
        DocumentLoadError: If the file is missing, unsupported, or malformed.
    """

    suffix = path.suffix.lower()
    if suffix not in FOUNTAIN_SUFFIXES and suffix not in JSON_SUFFIXES:
        supported = ", ".join(sorted(FOUNTAIN_SUFFIXES | JSON_SUFFIXES))
        raise DocumentLoadError(
            detail=f"Unsupported screenplay file type `{path.suffix or path.name}`.",
            hint=f"Use one of: {supported}.",
        )

    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DocumentLoadError(
            detail=f"Screenplay file not found: `{path}`.",
            hint="Pass an existing `.fountain` or `.json` path.",
        ) from exc
    except OSError as exc:
        raise DocumentLoadError(detail=f"Failed to read `{path}`: {exc}") from exc

    if suffix in JSON_SUFFIXES:
        return _load_json_document(path, content)

    try:
        return parse_fountain(content, filename=path.stem)
    except (ValueError, TypeError, AttributeError, RuntimeError) as exc:
        raise DocumentLoadError(
            detail=f"Failed to parse Fountain file `{path}`: {exc}",
            hint="Check Fountain syntax (unclosed notes, invalid headings, bad title page).",
        ) from exc


def _load_json_document(path: Path, content: str) -> ScreenplayDocument:
    try:
        payload = json.loads(content)
        if isinstance(payload, list):
            return ScreenplayDocument(
                elements=tuple(elements_from_payload(payload)),
                filename=path.stem,
            )
        if not isinstance(payload, dict):
            raise ValueError("document root must be an object or a list of elements")
        return ScreenplayDocument(
            elements=tuple(elements_from_payload(payload.get("elements", []))),
            filename=payload.get("filename") or path.stem,
            title=payload.get("title"),
        )
    except (ValueError, TypeError) as exc:
        raise DocumentLoadError(
            detail=f"Invalid screenplay JSON `{path}`: {exc}",
            hint="Provide `{\"elements\": [{\"type\": ..., \"text\": ...}]}`.",
        ) from exc
