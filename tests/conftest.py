from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path: Path, monkeypatch) -> Path:
    """Keep settings files written by tests out of the real home directory."""
    config = tmp_path / "config"
    monkeypatch.setenv("TEXTPLATES_CONFIG_DIR", str(config))
    monkeypatch.delenv("TEXTPLATES_DEBUG", raising=False)
    return config
