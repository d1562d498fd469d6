"""Pytest configuration and fixtures for all tests."""

import pytest

from cattocol.core import config as config_module
from cattocol.core.config import ConfigManager


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point configuration at a throwaway global file.

    Keeps a developer's ``~/.cattocol.json`` from changing test results.
    """
    manager = ConfigManager(global_config_path=tmp_path / "global-config.json")
    monkeypatch.setattr(config_module, "config_manager", manager)
    return manager
