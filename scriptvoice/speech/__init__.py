"""Screenplay-to-speech transformation components.

This package contains character normalization, scene speaker tracking,
versioned speech rules, and the document-level processor.
"""

from .normalizer import CharacterNormalizer
from .processor import ScreenplayPass, ScreenplayToSpeechProcessor
from .rules import (
    DEFAULT_RULE_VERSION,
    RULE_SETS,
    SpeechLogicRulesV1,
    SpeechRules,
    available_rule_versions,
    create_speech_rules,
)
from .scene_context import SceneContext

__all__ = [
    "CharacterNormalizer",
    "DEFAULT_RULE_VERSION",
    "RULE_SETS",
    "SceneContext",
    "ScreenplayPass",
    "ScreenplayToSpeechProcessor",
    "SpeechLogicRulesV1",
    "SpeechRules",
    "available_rule_versions",
    "create_speech_rules",
]
