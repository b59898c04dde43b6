"""Integration-test fixtures for deterministic CLI environment."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _clear_scriptvoice_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove `SCRIPTVOICE_*` variables so host settings never leak into CLI runs."""

    for key in ("SCRIPTVOICE_OUTPUT_DIR", "SCRIPTVOICE_RULE_VERSION", "SCRIPTVOICE_SAVE_INTERVAL"):
        monkeypatch.delenv(key, raising=False)
