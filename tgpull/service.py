#!/usr/bin/env python3
"""
Tolgee REST client.

Requests a project export (a zip of one JSON file per language) and
unpacks it into the output directory, returning descriptors for the
pipeline driver.
"""

import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import requests
from loguru import logger

from .errors import ExportError
from .pipeline import FileDescriptor

DEFAULT_BASE_URL = "https://app.tolgee.io"
ARCHIVE_NAME = "export.zip"


@dataclass
class ExportResult:
    """Extracted export: target directory and one descriptor per file."""
    extracted_path: Path
    files: list[FileDescriptor] = field(default_factory=list)


class TolgeeService:
    """
    Minimal Tolgee API v2 client.

    Authenticates every request with the project API key sent in the
    ``X-API-Key`` header.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            api_key: Tolgee project API key
            base_url: Tolgee server root (no /v2 suffix)
            timeout: Request timeout in seconds
            session: Optional pre-configured requests session
        """
        self.api_url = f"{base_url.rstrip('/')}/v2"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"X-API-Key": api_key})

    def export_data(
        self,
        project_id: str,
        tags: Optional[str] = None,
        exclude_tags: Optional[str] = None,
    ) -> bytes:
        """
        Download the project export as zip bytes.

        Args:
            project_id: Tolgee project id
            tags: Only keys with this tag
            exclude_tags: Skip keys with this tag

        Returns:
            Raw zip archive

        Raises:
            ExportError: request failed or returned a non-2xx status
        """
        params = {
            "format": "JSON",
            "structureDelimiter": "",
            "messageFormat": "C_SPRINTF",
        }
        if tags:
            params["filterTagIn"] = tags
        if exclude_tags:
            params["filterTagNotIn"] = exclude_tags

        url = f"{self.api_url}/projects/{project_id}/export"
        logger.debug("GET {} params={}", url, params)

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ExportError(f"Export request failed for project {project_id}: {e}") from e

        return response.content

    def extract_and_save_files(
        self,
        project_id: str,
        output_dir: str,
        tags: Optional[str] = None,
        exclude_tags: Optional[str] = None,
    ) -> ExportResult:
        """
        Export the project and unpack it into output_dir.

        Top-level ``en.json`` becomes descriptor name ``en``; files inside a
        directory keep their relative path (``web/en.json``).

        Returns:
            ExportResult with the extraction directory and file descriptors

        Raises:
            ExportError: request failed or the archive is not a valid zip
        """
        data = self.export_data(project_id, tags=tags, exclude_tags=exclude_tags)

        extract_dir = Path(output_dir).absolute()
        extract_dir.mkdir(parents=True, exist_ok=True)

        zip_path = extract_dir / ARCHIVE_NAME
        zip_path.write_bytes(data)

        try:
            with zipfile.ZipFile(zip_path) as archive:
                archive.extractall(extract_dir)
                names = [info.filename for info in archive.infolist() if not info.is_dir()]
        except zipfile.BadZipFile as e:
            raise ExportError(f"Export for project {project_id} is not a valid zip archive: {e}") from e
        finally:
            zip_path.unlink(missing_ok=True)

        result = ExportResult(extracted_path=extract_dir)
        for name in names:
            if "/" in name:
                logical_name = name
            else:
                logical_name = name[:-len(".json")] if name.endswith(".json") else name
            result.files.append(FileDescriptor(name=logical_name, path=extract_dir / name))

        return result
