"""Character name normalization.

Responsibilities:
- Map screenplay character cues such as `JOHN (V.O.)` to one canonical name.
- Honor caller-supplied aliases for spellings the modifier rules cannot merge.
"""

from __future__ import annotations

import re
from typing import Mapping


_MODIFIER_PATTERN = re.compile(r"\s*\([^)]+\)\s*")


class CharacterNormalizer:
    """Normalize raw character cues into stable speaker identifiers.

    Aliases are looked up on the raw cue before any other rule applies, so an
    alias key must match the cue exactly as written in the screenplay.
    """

    def __init__(self, aliases: Mapping[str, str] | None = None) -> None:
        self.aliases: dict[str, str] = dict(aliases or {})

    def normalize(self, raw_name: str) -> str:
        """Return the canonical name for a raw character cue.

        Modifiers like `(V.O.)`, `(O.S.)`, and `(CONT'D)` are removed together
        with their surrounding whitespace, then the result is trimmed and
        lowercased. The result may be empty.
        """

        alias = self.aliases.get(raw_name)
        if alias is not None:
            return alias

        without_modifiers = _MODIFIER_PATTERN.sub("", raw_name)
        return without_modifiers.strip().lower()
