"""Shared fixtures.

Every test that touches settings or records runs against isolated
directories via tmp_path and TAXPAL_CONFIG_PATH, never real user data.
"""

import json

import pytest

from taxpal.sdk import load_tax_rules


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Set up isolated config and data directories."""
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"

    config_dir.mkdir()
    data_dir.mkdir()

    monkeypatch.setenv("TAXPAL_CONFIG_PATH", str(config_dir))

    settings = {"data_dir": str(data_dir)}
    (config_dir / "settings.json").write_text(json.dumps(settings))

    return {
        "config_dir": config_dir,
        "data_dir": data_dir,
    }


@pytest.fixture
def rules_2024():
    return load_tax_rules(2024)
