# tests/conftest.py
"""Shared fixtures: every test gets its own AUTOPROMPT home directory."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point config, queue, usage ledger, and logs at a per-test directory."""
    from autoprompt.config import get_config

    home = tmp_path / "autoprompt_home"
    monkeypatch.setenv("AUTOPROMPT_HOME_DIR", str(home))
    monkeypatch.setenv("AUTOPROMPT_LOG_DIR", str(home / "logs"))
    get_config.cache_clear()
    yield home
    get_config.cache_clear()
    root = logging.getLogger("autoprompt")
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
