"""Shared fixtures: isolate every test from the user's home, cwd and env."""
from __future__ import annotations

import io
import logging

import pytest

from core.config import AppConfig
from core.environment import Environment


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Point APPSTART_HOME at a temp dir and run from an empty cwd."""
    home = tmp_path / "home"
    home.mkdir()
    workdir = tmp_path / "work"
    workdir.mkdir()

    monkeypatch.setenv("APPSTART_HOME", str(home))
    for var in ("APP_NAME", "APP_VERSION", "APP_TITLE", "BANNER_MODE", "BANNER_LOCATION"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(workdir)
    return home


@pytest.fixture
def environment():
    """Environment for an app named 'Inventory' at version 1.2.3."""
    config = AppConfig(app={"name": "Inventory", "version": "1.2.3"})
    return Environment.from_config(config)


@pytest.fixture
def broken_logger(request):
    """INFO logger whose only handler writes to a closed stream."""
    stream = io.StringIO()
    stream.close()
    handler = logging.StreamHandler(stream)

    logger = logging.getLogger(f"tests.broken.{request.node.name}")
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    yield logger
    logger.removeHandler(handler)
    logger.propagate = True
