"""Unit tests for YAML/environment configuration loader behavior."""

from __future__ import annotations

from pathlib import Path

import pytest

from scriptvoice.config import ConfigLoader, ScriptvoiceConfig


def test_config_loader_from_yaml_loads_valid_config_and_normalizes_values(
    tmp_path: Path,
) -> None:
    """YAML loader should parse valid payloads and normalize typed/blank values."""

    config_path = tmp_path / "scriptvoice.yml"
    config_path.write_text(
        """
output_dir: " build/items "
rule_version: " 1.0 "
save_interval: " 25 "
character_aliases:
  "JOHNNY": " john "
  "BOB (V.O.)": robert
extra:
  profile: " nightly "
""".strip(),
        encoding="utf-8",
    )

    config = ConfigLoader.from_yaml(config_path)

    assert config.output_dir == Path("build/items")
    assert config.rule_version == "1.0"
    assert config.save_interval == 25
    assert config.character_aliases == {"JOHNNY": "john", "BOB (V.O.)": "robert"}
    assert config.extra == {"profile": "nightly"}


def test_config_loader_from_yaml_applies_defaults_for_empty_file(tmp_path: Path) -> None:
    """An empty YAML file should produce the default configuration."""

    config_path = tmp_path / "empty.yml"
    config_path.write_text("", encoding="utf-8")

    config = ConfigLoader.from_yaml(config_path)

    assert config == ScriptvoiceConfig()
    assert config.output_dir == Path("out")
    assert config.save_interval == 50


def test_config_loader_from_yaml_rejects_unknown_keys(tmp_path: Path) -> None:
    """YAML loader should fail clearly on unknown fields."""

    config_path = tmp_path / "unknown.yml"
    config_path.write_text("output_dir: out\nvoice: echo\n", encoding="utf-8")

    with pytest.raises(ValueError, match=r"unsupported key\(s\): voice"):
        ConfigLoader.from_yaml(config_path)


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ("save_interval: 0\n", r"field `save_interval` must be a positive integer"),
        ("save_interval: true\n", r"field `save_interval` must be a positive integer"),
        ("save_interval: many\n", r"field `save_interval` must be a positive integer"),
        ("character_aliases: [a, b]\n", r"`character_aliases` must be a mapping"),
        ("character_aliases:\n  JOHN: ' '\n", r"blank value for `JOHN`"),
        ("rule_version: '2.0'\n", r"Unsupported `rule_version` value `2.0`"),
    ],
)
def test_config_loader_from_yaml_rejects_invalid_values(
    tmp_path: Path, payload: str, message: str
) -> None:
    """Typed fields should raise errors that name the offending key."""

    config_path = tmp_path / "invalid.yml"
    config_path.write_text(payload, encoding="utf-8")

    with pytest.raises(ValueError, match=message):
        ConfigLoader.from_yaml(config_path)


def test_config_loader_from_yaml_rejects_non_mapping_root(tmp_path: Path) -> None:
    """A list at the YAML root should be rejected."""

    config_path = tmp_path / "list.yml"
    config_path.write_text("- output_dir\n", encoding="utf-8")

    with pytest.raises(ValueError, match="top-level mapping"):
        ConfigLoader.from_yaml(config_path)


def test_config_loader_from_yaml_reports_syntax_errors(tmp_path: Path) -> None:
    """Malformed YAML should surface as a `ValueError` naming the file."""

    config_path = tmp_path / "broken.yml"
    config_path.write_text("output_dir: [unclosed\n", encoding="utf-8")

    with pytest.raises(ValueError, match="could not be parsed"):
        ConfigLoader.from_yaml(config_path)


def test_config_loader_from_env_reads_scriptvoice_variables() -> None:
    """Environment loader should read and normalize `SCRIPTVOICE_*` values."""

    config = ConfigLoader.from_env(
        {
            "SCRIPTVOICE_OUTPUT_DIR": " /tmp/items ",
            "SCRIPTVOICE_RULE_VERSION": "1.0",
            "SCRIPTVOICE_SAVE_INTERVAL": "10",
            "UNRELATED": "ignored",
        }
    )

    assert config.output_dir == Path("/tmp/items")
    assert config.rule_version == "1.0"
    assert config.save_interval == 10


def test_config_loader_from_env_defaults_and_blank_values() -> None:
    """Missing or blank environment values should fall back to defaults."""

    config = ConfigLoader.from_env({"SCRIPTVOICE_OUTPUT_DIR": "  "})

    assert config.output_dir == Path("out")
    assert config.rule_version == "1.0"
    assert config.save_interval == 50


def test_config_loader_from_env_rejects_invalid_interval() -> None:
    """A non-positive interval in the environment should be rejected."""

    with pytest.raises(ValueError, match="SCRIPTVOICE_SAVE_INTERVAL"):
        ConfigLoader.from_env({"SCRIPTVOICE_SAVE_INTERVAL": "-3"})


def test_config_validate_rejects_bad_values() -> None:
    """Direct construction should still be validated before use."""

    with pytest.raises(ValueError, match="save_interval"):
        ScriptvoiceConfig(save_interval=0).validate()
    with pytest.raises(ValueError, match="rule_version"):
        ScriptvoiceConfig(rule_version="0.1").validate()
