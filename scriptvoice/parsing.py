"""Shared parsing helpers for config, CLI, and stored payload values."""

from __future__ import annotations

from typing import Any, Mapping


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Args:
        value: Arbitrary input value.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def parse_positive_int(value: object, field_name: str) -> int:
    """Parse a strictly positive integer from an int or numeric string.

    Booleans are rejected even though they are `int` subclasses, so a YAML
    `true` never silently becomes `1`.

    Raises:
        ValueError: If the value is missing, non-numeric, or not positive.
    """

    if isinstance(value, bool):
        raise ValueError(f"`{field_name}` must be a positive integer.")
    if isinstance(value, int):
        parsed = value
    else:
        normalized = normalize_optional_string(value)
        if normalized is None:
            raise ValueError(f"`{field_name}` must be a positive integer.")
        try:
            parsed = int(normalized)
        except ValueError as exc:
            raise ValueError(f"`{field_name}` must be a positive integer.") from exc

    if parsed <= 0:
        raise ValueError(f"`{field_name}` must be a positive integer.")
    return parsed


def parse_string_map(value: Any, field_name: str) -> dict[str, str]:
    """Parse a mapping whose keys and values must all be non-blank strings.

    Values are stripped; keys are kept verbatim apart from the blank check
    because character alias keys must match raw screenplay spellings exactly.
    """

    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"`{field_name}` must be a mapping/object.")

    parsed: dict[str, str] = {}
    for raw_key, raw_value in value.items():
        if normalize_optional_string(raw_key) is None:
            raise ValueError(f"`{field_name}` contains a blank key.")
        normalized_value = normalize_optional_string(raw_value)
        if normalized_value is None:
            raise ValueError(f"`{field_name}` contains blank value for `{raw_key}`.")
        parsed[str(raw_key)] = normalized_value
    return parsed
