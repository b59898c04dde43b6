"""Configuration model and loaders for Scriptvoice.

Responsibilities:
- Define generation settings as a typed dataclass.
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `ScriptvoiceConfig`: normalized settings for one generation run.
- `ConfigLoader`: static construction helpers for `ScriptvoiceConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .parsing import normalize_optional_string, parse_positive_int, parse_string_map
from .speech.rules import DEFAULT_RULE_VERSION, RULE_SETS


_DEFAULT_OUTPUT_DIR = Path("out")
_DEFAULT_SAVE_INTERVAL = 50


@dataclass(slots=True)
class ScriptvoiceConfig:
    """Settings for one speakable-item generation run.

    Attributes:
        output_dir: Directory receiving committed item artifacts.
        rule_version: Speech rule set identifier.
        save_interval: Number of generated items between checkpoint commits.
        character_aliases: Raw character cue to canonical name overrides.
        extra: Additional metadata for future extensions.
    """

    output_dir: Path = _DEFAULT_OUTPUT_DIR
    rule_version: str = DEFAULT_RULE_VERSION
    save_interval: int = _DEFAULT_SAVE_INTERVAL
    character_aliases: dict[str, str] = field(default_factory=dict)
    extra: dict[str, str] = field(default_factory=dict)

    def validate(self) -> None:
        """Validate configuration values before any task is scheduled."""

        if self.rule_version not in RULE_SETS:
            supported = ", ".join(sorted(RULE_SETS))
            raise ValueError(
                f"Unsupported `rule_version` value `{self.rule_version}`; supported: {supported}."
            )
        if isinstance(self.save_interval, bool) or self.save_interval <= 0:
            raise ValueError("`save_interval` must be a positive integer.")


class ConfigLoader:
    """Factory methods for creating `ScriptvoiceConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "output_dir",
            "rule_version",
            "save_interval",
            "character_aliases",
            "extra",
        }
    )

    @staticmethod
    def from_yaml(path: Path) -> ScriptvoiceConfig:
        """Create a validated config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)
        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> ScriptvoiceConfig:
        """Create a validated config from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        output_dir = ConfigLoader._optional_env_string(env_map, "SCRIPTVOICE_OUTPUT_DIR")
        rule_version = (
            ConfigLoader._optional_env_string(env_map, "SCRIPTVOICE_RULE_VERSION")
            or DEFAULT_RULE_VERSION
        )
        raw_interval = ConfigLoader._optional_env_string(env_map, "SCRIPTVOICE_SAVE_INTERVAL")
        save_interval = (
            _DEFAULT_SAVE_INTERVAL
            if raw_interval is None
            else parse_positive_int(raw_interval, "SCRIPTVOICE_SAVE_INTERVAL")
        )

        config = ScriptvoiceConfig(
            output_dir=Path(output_dir) if output_dir is not None else _DEFAULT_OUTPUT_DIR,
            rule_version=rule_version,
            save_interval=save_interval,
        )
        config.validate()
        return config

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` could not be parsed: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str
    ) -> ScriptvoiceConfig:
        """Build a validated config from a normalized mapping payload."""

        unknown = sorted(str(key) for key in set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        output_dir = normalize_optional_string(payload.get("output_dir"))
        rule_version = normalize_optional_string(payload.get("rule_version")) or DEFAULT_RULE_VERSION

        try:
            save_interval = (
                parse_positive_int(payload["save_interval"], "save_interval")
                if payload.get("save_interval") is not None
                else _DEFAULT_SAVE_INTERVAL
            )
            character_aliases = parse_string_map(
                payload.get("character_aliases"), "character_aliases"
            )
            extra = parse_string_map(payload.get("extra"), "extra")
        except ValueError as exc:
            raise ValueError(f"{source_label} field {exc}") from exc

        config = ScriptvoiceConfig(
            output_dir=Path(output_dir) if output_dir is not None else _DEFAULT_OUTPUT_DIR,
            rule_version=rule_version,
            save_interval=save_interval,
            character_aliases=character_aliases,
            extra=extra,
        )
        config.validate()
        return config

    @staticmethod
    def _optional_env_string(env: Mapping[str, str], key: str) -> str | None:
        """Read and normalize optional string environment variable values."""

        if key not in env:
            return None
        return normalize_optional_string(env.get(key))
