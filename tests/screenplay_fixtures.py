"""Shared builders for screenplay elements used across the test suite."""

from __future__ import annotations

from scriptvoice.models.datatypes import ElementType, ScreenplayDocument, ScreenplayElement


COFFEE_SHOP_FOUNTAIN = (
    "INT. COFFEE SHOP - DAY\n\n"
    "JOHN\nHello, how are you?\n\n"
    "SARAH\nI'm doing great, thanks!\n"
)


def scene_heading(
    text: str,
    scene_id: str | None,
    lighting_code: str | None = None,
    scene_name: str | None = None,
    time_of_day: str | None = None,
) -> ScreenplayElement:
    """Build a scene heading element with optional parsed location fields."""

    return ScreenplayElement(
        element_type=ElementType.SCENE_HEADING,
        element_text=text,
        scene_id=scene_id,
        lighting_code=lighting_code,
        scene_name=scene_name,
        time_of_day=time_of_day,
    )


def element(element_type: ElementType, text: str, scene_id: str | None = None) -> ScreenplayElement:
    """Build a plain element of any type."""

    return ScreenplayElement(element_type=element_type, element_text=text, scene_id=scene_id)


def character(name: str, scene_id: str | None = None) -> ScreenplayElement:
    return element(ElementType.CHARACTER, name, scene_id)


def dialogue(text: str, scene_id: str | None = None) -> ScreenplayElement:
    return element(ElementType.DIALOGUE, text, scene_id)


def parenthetical(text: str, scene_id: str | None = None) -> ScreenplayElement:
    return element(ElementType.PARENTHETICAL, text, scene_id)


def action(text: str, scene_id: str | None = None) -> ScreenplayElement:
    return element(ElementType.ACTION, text, scene_id)


def coffee_shop_elements() -> list[ScreenplayElement]:
    """Return the parsed elements of `COFFEE_SHOP_FOUNTAIN`."""

    return [
        scene_heading("INT. COFFEE SHOP - DAY", "scene-1", "INT", "COFFEE SHOP", "DAY"),
        character("JOHN", "scene-1"),
        dialogue("Hello, how are you?", "scene-1"),
        character("SARAH", "scene-1"),
        dialogue("I'm doing great, thanks!", "scene-1"),
    ]


def action_document(count: int, filename: str = "actions") -> ScreenplayDocument:
    """Return a document of `count` action lines, each producing one item."""

    return ScreenplayDocument(
        elements=tuple(action(f"Beat {index}.", "scene-1") for index in range(count)),
        filename=filename,
    )
