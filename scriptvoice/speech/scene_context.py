"""Per-scene speaker tracking used for character announcements."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class SceneContext:
    """Which normalized characters have spoken in the current scene."""

    scene_id: str = ""
    characters_who_have_spoken: set[str] = field(default_factory=set)
    last_speaker: str | None = None

    def mark_character_spoken(self, name: str) -> None:
        """Record that `name` has spoken and make it the last speaker."""

        self.characters_who_have_spoken.add(name)
        self.last_speaker = name

    def has_character_spoken(self, name: str) -> bool:
        """Return whether `name` has already spoken in this scene."""

        return name in self.characters_who_have_spoken
