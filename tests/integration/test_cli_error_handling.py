"""CLI error-handling tests for concise stage diagnostics."""

from pathlib import Path

from pytest import MonkeyPatch
from typer.testing import CliRunner

from scriptvoice.cli import app


def test_generate_command_reports_missing_screenplay(tmp_path: Path) -> None:
    """Generate should fail at the load stage when a screenplay path is missing."""

    result = CliRunner().invoke(
        app, ["generate", str(tmp_path / "absent.fountain"), "--out", str(tmp_path / "out")]
    )

    assert result.exit_code == 1
    assert "generate failed at stage `load`" in result.output
    assert "Hint: Pass an existing `.fountain` or `.json` path." in result.output


def test_generate_command_reports_unsupported_rule_version(
    tmp_path: Path, coffee_shop_fountain_path: Path
) -> None:
    """An unknown `--rule-version` should fail at the config stage with a hint."""

    result = CliRunner().invoke(
        app,
        [
            "generate",
            str(coffee_shop_fountain_path),
            "--out",
            str(tmp_path / "out"),
            "--rule-version",
            "2.0",
        ],
    )

    assert result.exit_code == 1
    assert "generate failed at stage `config`" in result.output
    assert "Unsupported `rule_version` value `2.0`" in result.output
    assert "Hint: Run `scriptvoice rules`" in result.output


def test_generate_command_reports_missing_config_file(
    tmp_path: Path, coffee_shop_fountain_path: Path
) -> None:
    """Generate should fail with stage-aware diagnostics when `--config` is missing."""

    result = CliRunner().invoke(
        app,
        ["generate", str(coffee_shop_fountain_path), "--config", str(tmp_path / "none.yml")],
    )

    assert result.exit_code == 1
    assert "generate failed at stage `config`: Config file not found" in result.output


def test_generate_command_reports_invalid_environment(
    monkeypatch: MonkeyPatch, tmp_path: Path, coffee_shop_fountain_path: Path
) -> None:
    """Invalid `SCRIPTVOICE_*` values should be reported when no config file is given."""

    monkeypatch.setenv("SCRIPTVOICE_SAVE_INTERVAL", "zero")

    result = CliRunner().invoke(
        app, ["generate", str(coffee_shop_fountain_path), "--out", str(tmp_path / "out")]
    )

    assert result.exit_code == 1
    assert "generate failed at stage `config`: Invalid environment configuration" in result.output


def test_items_command_reports_corrupt_artifact(tmp_path: Path) -> None:
    """Unreadable stored items should fail at the items stage."""

    artifact = tmp_path / "items" / "pilot.json"
    artifact.parent.mkdir(parents=True)
    artifact.write_text("[]", encoding="utf-8")

    result = CliRunner().invoke(app, ["items", "pilot", "--out", str(tmp_path)])

    assert result.exit_code == 1
    assert "items failed at stage `items`" in result.output
    assert "Hint: Regenerate items with `scriptvoice generate`." in result.output
