"""Unit tests for screenplay document loading from Fountain and JSON files."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from scriptvoice.errors import DocumentLoadError
from scriptvoice.io.documents import load_screenplay, parse_fountain, parse_scene_location
from scriptvoice.models.datatypes import ElementType
from scriptvoice.speech import ScreenplayToSpeechProcessor
from scriptvoice.io.storage import InMemoryItemStore
from tests.screenplay_fixtures import COFFEE_SHOP_FOUNTAIN, coffee_shop_elements


@pytest.mark.parametrize(
    ("heading", "expected"),
    [
        ("INT. COFFEE SHOP - DAY", ("INT", "COFFEE SHOP", "DAY")),
        ("ext. beach - late afternoon", ("EXT", "beach", "late afternoon")),
        ("INT./EXT. CAR - MOVING - NIGHT", ("INT/EXT", "CAR - MOVING", "NIGHT")),
        ("I/E. PORCH", ("I/E", "PORCH", None)),
        ("EST. SKYLINE - DAWN", ("EST", "SKYLINE", "DAWN")),
        ("THE END", (None, None, None)),
    ],
)
def test_parse_scene_location_splits_heading_parts(
    heading: str, expected: tuple[str | None, str | None, str | None]
) -> None:
    """Scene headings should split into lighting, place, and time of day."""

    assert parse_scene_location(heading) == expected


def test_parse_fountain_builds_coffee_shop_elements() -> None:
    """The coffee shop scene should parse into heading, cues, and dialogue lines."""

    document = parse_fountain(COFFEE_SHOP_FOUNTAIN, filename="coffee-shop")

    assert document.screenplay_id == "coffee-shop"
    assert document.raw_content == COFFEE_SHOP_FOUNTAIN
    assert [element.element_type for element in document.elements] == [
        element.element_type for element in coffee_shop_elements()
    ]
    heading = document.elements[0]
    assert heading.scene_id == "scene-1"
    assert heading.lighting_code == "INT"
    assert heading.scene_name == "COFFEE SHOP"
    assert heading.time_of_day == "DAY"
    assert document.elements[2].element_text == "Hello, how are you?"


def test_fountain_document_yields_three_speakable_items() -> None:
    """Parsing then processing the scene should give the expected three items."""

    document = parse_fountain(COFFEE_SHOP_FOUNTAIN, filename="coffee-shop")

    items = ScreenplayToSpeechProcessor(InMemoryItemStore()).process_screenplay(document)

    assert [item.speakable_text for item in items] == [
        "Interior. COFFEE SHOP. DAY.",
        "JOHN says: Hello, how are you?",
        "SARAH says: I'm doing great, thanks!",
    ]


def test_parse_fountain_drops_boneyard_blocks() -> None:
    """Boneyard content should never reach the element list."""

    content = "INT. ROOM - DAY\n\n/* cut this\nwhole bit */\n\nA clock ticks.\n"

    document = parse_fountain(content)

    texts = [element.element_text for element in document.elements]
    assert "A clock ticks." in texts
    assert not any("cut this" in text for text in texts)
    assert document.screenplay_id == "unnamed-screenplay"


def test_load_screenplay_reads_fountain_file(coffee_shop_fountain_path: Path) -> None:
    """Fountain files should load with the file stem as identifier."""

    document = load_screenplay(coffee_shop_fountain_path)

    assert document.filename == "coffee-shop"
    assert document.elements[0].element_type is ElementType.SCENE_HEADING


def test_load_screenplay_reads_json_element_documents(tmp_path: Path) -> None:
    """JSON documents should accept an object with elements or a bare element list."""

    payload = {
        "filename": "pilot",
        "title": "Pilot",
        "elements": [element.as_payload() for element in coffee_shop_elements()],
    }
    object_path = tmp_path / "object.json"
    object_path.write_text(json.dumps(payload), encoding="utf-8")
    list_path = tmp_path / "bare-list.json"
    list_path.write_text(json.dumps(payload["elements"]), encoding="utf-8")

    from_object = load_screenplay(object_path)
    from_list = load_screenplay(list_path)

    assert from_object.screenplay_id == "pilot"
    assert from_object.title == "Pilot"
    assert from_object.elements == tuple(coffee_shop_elements())
    assert from_list.screenplay_id == "bare-list"
    assert from_list.elements == from_object.elements


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("{broken", "Invalid screenplay JSON"),
        ('{"elements": [{"type": "montage", "text": "x"}]}', "Unknown screenplay element type"),
        ('{"elements": "JOHN"}', "must be a list"),
        ('"just text"', "document root"),
    ],
)
def test_load_screenplay_rejects_malformed_json(
    tmp_path: Path, content: str, message: str
) -> None:
    """Malformed JSON documents should raise stage-scoped load errors."""

    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(DocumentLoadError, match=message) as exc_info:
        load_screenplay(path)
    assert exc_info.value.stage == "load"


def test_load_screenplay_rejects_missing_and_unsupported_files(tmp_path: Path) -> None:
    """Missing paths and unknown suffixes should fail with hints."""

    with pytest.raises(DocumentLoadError, match="not found") as missing:
        load_screenplay(tmp_path / "absent.fountain")
    assert missing.value.hint is not None

    unsupported = tmp_path / "script.pdf"
    unsupported.write_bytes(b"%PDF")
    with pytest.raises(DocumentLoadError, match="Unsupported screenplay file type"):
        load_screenplay(unsupported)
