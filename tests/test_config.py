#!/usr/bin/env python3
"""Tests for option resolution (flags > env > config file > defaults)."""

import pytest

from tgpull.config import DEFAULT_CONFIG_FILE, load_config_file, resolve_options
from tgpull.errors import ConfigError


def test_defaults():
    options = resolve_options({"api_key": "k", "project_id": "42"})

    assert options.base_url == "https://app.tolgee.io"
    assert options.format == "xml"
    assert options.output_dir == "i18n"
    assert options.tags == "android"
    assert options.exclude_tags == "deprecated"
    assert options.verbose is False


def test_missing_api_key():
    with pytest.raises(ConfigError, match="API key"):
        resolve_options({"project_id": "42"})


def test_missing_project_id():
    with pytest.raises(ConfigError, match="Project ID"):
        resolve_options({"api_key": "k"})


def test_environment(monkeypatch):
    monkeypatch.setenv("TOLGEE_API_KEY", "env-key")
    monkeypatch.setenv("TOLGEE_PROJECT_ID", "7")

    options = resolve_options({})

    assert options.api_key == "env-key"
    assert options.project_id == "7"


def test_dotenv_file(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("TOLGEE_API_KEY=dotenv-key\nTOLGEE_PROJECT_ID=9\n")

    options = resolve_options({})

    assert options.api_key == "dotenv-key"
    assert options.project_id == "9"


def test_config_file_and_precedence(tmp_path, monkeypatch):
    (tmp_path / DEFAULT_CONFIG_FILE).write_text(
        "project_id: 1234\n"
        "format: json\n"
        "output-dir: res/values\n"
        "tags: web\n"
    )
    monkeypatch.setenv("TOLGEE_API_KEY", "env-key")

    options = resolve_options({"tags": "mobile", "api_key": None})

    assert options.api_key == "env-key"
    assert options.project_id == "1234"
    assert options.format == "json"
    assert options.output_dir == "res/values"
    assert options.tags == "mobile"


def test_cli_beats_environment(monkeypatch):
    monkeypatch.setenv("TOLGEE_API_KEY", "env-key")
    options = resolve_options({"api_key": "cli-key", "project_id": "1"})
    assert options.api_key == "cli-key"


def test_empty_string_flag_kept():
    options = resolve_options({"api_key": "k", "project_id": "1", "tags": ""})
    assert options.tags == ""


def test_explicit_config_missing(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config_file(str(tmp_path / "nope.yaml"))


def test_config_must_be_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ConfigError, match="mapping"):
        load_config_file(str(path))


def test_unknown_config_key(tmp_path):
    path = tmp_path / "c.yaml"
    path.write_text("api_key: k\nproject_id: 1\ncolour: blue\n")
    with pytest.raises(ConfigError, match="colour"):
        resolve_options({}, config_path=str(path))


def test_no_default_config_file():
    assert load_config_file() == {}
