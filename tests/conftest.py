"""
Shared fixtures: an isolated configuration for every test.
"""

import pytest

from slipex.config.slipex_config import SlipEXConfig


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Fresh configuration per test, never reading the real ~/.slipex"""
    monkeypatch.setenv('HOME', str(tmp_path))
    SlipEXConfig.reset()
    yield
    SlipEXConfig.reset()
