#!/usr/bin/env python3
"""
Tests for the Tolgee export client.

The HTTP session is replaced with a fake; no network access.
"""

import io
import zipfile

import pytest
import requests

from tgpull.errors import ExportError
from tgpull.service import ARCHIVE_NAME, TolgeeService


def make_zip(files: dict[str, str]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in files.items():
            archive.writestr(name, content)
    return buffer.getvalue()


class FakeResponse:
    def __init__(self, content=b"", status_code=200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


@pytest.fixture
def fake_get(monkeypatch):
    """Patch requests.Session.get; yields (recorded calls, mutable response state)."""
    calls = []
    state = {"response": FakeResponse(make_zip({"en.json": "{}"}))}

    def _get(self, url, params=None, timeout=None):
        calls.append({"url": url, "params": params, "headers": dict(self.headers)})
        if isinstance(state["response"], Exception):
            raise state["response"]
        return state["response"]

    monkeypatch.setattr(requests.Session, "get", _get)
    return calls, state


def test_export_request(fake_get):
    calls, _ = fake_get
    service = TolgeeService(api_key="tgpak_secret", base_url="https://tolgee.example.com/")

    service.export_data("42", tags="android", exclude_tags="deprecated")

    call = calls[0]
    assert call["url"] == "https://tolgee.example.com/v2/projects/42/export"
    assert call["headers"]["X-API-Key"] == "tgpak_secret"
    assert call["params"] == {
        "format": "JSON",
        "structureDelimiter": "",
        "messageFormat": "C_SPRINTF",
        "filterTagIn": "android",
        "filterTagNotIn": "deprecated",
    }


def test_empty_filters_omitted(fake_get):
    calls, _ = fake_get
    TolgeeService(api_key="k").export_data("1", tags="", exclude_tags=None)

    assert "filterTagIn" not in calls[0]["params"]
    assert "filterTagNotIn" not in calls[0]["params"]
    assert calls[0]["url"] == "https://app.tolgee.io/v2/projects/1/export"


def test_http_error_raises_export_error(fake_get):
    _, state = fake_get
    state["response"] = FakeResponse(status_code=403)

    with pytest.raises(ExportError, match="project 42"):
        TolgeeService(api_key="k").export_data("42")


def test_connection_error_raises_export_error(fake_get):
    _, state = fake_get
    state["response"] = requests.ConnectionError("refused")

    with pytest.raises(ExportError):
        TolgeeService(api_key="k").export_data("42")


def test_extract_and_save_files(fake_get, tmp_path):
    _, state = fake_get
    state["response"] = FakeResponse(make_zip({
        "en.json": '{"a": "hi"}',
        "de.json": '{"a": "hallo"}',
        "web/fr.json": '{"a": "salut"}',
    }))
    out = tmp_path / "i18n"

    result = TolgeeService(api_key="k").extract_and_save_files("42", str(out))

    assert result.extracted_path == out.absolute()
    names = {f.name: f.path for f in result.files}
    assert names == {
        "en": out.absolute() / "en.json",
        "de": out.absolute() / "de.json",
        "web/fr.json": out.absolute() / "web" / "fr.json",
    }
    for path in names.values():
        assert path.exists()
    assert not (out / ARCHIVE_NAME).exists()


def test_bad_archive(fake_get, tmp_path):
    _, state = fake_get
    state["response"] = FakeResponse(b"not a zip")

    with pytest.raises(ExportError, match="not a valid zip"):
        TolgeeService(api_key="k").extract_and_save_files("42", str(tmp_path))

    assert not (tmp_path / ARCHIVE_NAME).exists()
