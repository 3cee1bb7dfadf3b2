#!/usr/bin/env python3
"""Shared fixtures."""

import json

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks added by a test (the CLI installs its own stderr sink)."""
    yield
    logger.remove()


@pytest.fixture
def log_messages():
    """Collect loguru messages as (level, text) tuples."""
    messages = []
    handler_id = logger.add(
        lambda message: messages.append((message.record["level"].name, message.record["message"])),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def write_json(tmp_path):
    """Write a catalog (or raw text) into tmp_path and return its path."""
    def _write(name, content):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content, ensure_ascii=False), encoding="utf-8")
        return path
    return _write


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run in tmp_path with no TOLGEE_* variables set."""
    for var in ("TOLGEE_API_KEY", "TOLGEE_PROJECT_ID", "TOLGEE_BASE_URL"):
        # setenv first so teardown also undoes values loaded from a .env file
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    monkeypatch.chdir(tmp_path)
