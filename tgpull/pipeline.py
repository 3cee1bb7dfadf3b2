#!/usr/bin/env python3
"""
Pipeline driver for exported catalogs.

Takes the files extracted from a Tolgee export, converts each one with the
selected format handler and writes the result next to them. One file
failing never stops the others: failures are logged and collected in the
returned TransformReport.

Per file: read -> parse -> transform -> validate -> write -> remove source.
"""

import json
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from .errors import CatalogParseError, OutputCollisionError
from .format_handlers import Catalog, FormatHandler

if TYPE_CHECKING:
    from .config import PullOptions
    from .service import TolgeeService


SOURCE_EXTENSION = ".json"


@dataclass
class FileDescriptor:
    """
    One extracted source file.

    Attributes:
        name: Logical name (language tag, or "namespace/lang" for nested exports)
        path: Readable JSON file on disk
    """
    name: str
    path: Path

    def __post_init__(self):
        self.path = Path(self.path)


@dataclass
class FileFailure:
    """A source file that could not be converted."""
    name: str
    path: str
    stage: str  # read, parse, transform, validate, write, remove, collision, unexpected
    error: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": self.path,
            "stage": self.stage,
            "error": self.error,
        }


@dataclass
class TransformReport:
    """Outcome of one batch: written files in order, plus failures."""
    output_files: list[Path] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.output_files)

    @property
    def failed(self) -> int:
        return len(self.failures)


class FileStageError(Exception):
    """Wraps the cause of a per-file failure with the stage it happened in."""

    def __init__(self, stage: str, cause: Exception):
        super().__init__(f"{stage}: {cause}")
        self.stage = stage
        self.cause = cause


def output_path_for(name: str, output_dir: Path, handler: FormatHandler) -> Path:
    """
    Derive the output path for a logical file name.

    "en" -> output_dir/en.xml, "web/de.json" -> output_dir/de.xml
    """
    base_name = Path(name).name
    if base_name.lower().endswith(SOURCE_EXTENSION):
        base_name = base_name[:-len(SOURCE_EXTENSION)]
    return Path(output_dir) / f"{base_name}.{handler.file_extension}"


def parse_catalog(content: str) -> Catalog:
    """
    Parse one exported file.

    Raises:
        CatalogParseError: content is not JSON or not a JSON object
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise CatalogParseError(f"Invalid JSON: {e.msg} at line {e.lineno}") from e
    except RecursionError as e:
        raise CatalogParseError("Invalid JSON: nesting too deep") from e

    if not isinstance(data, dict):
        raise CatalogParseError(f"Root element must be an object, found {type(data).__name__}")

    return data


def _same_file(a: Path, b: Path) -> bool:
    return a.resolve() == b.resolve()


def write_atomic(path: Path, document: str) -> None:
    """
    Write document to path through a temp file in the same directory.

    Either the complete document lands at path or nothing changes there.

    Raises:
        UnicodeEncodeError: document holds unencodable text (lone surrogates)
        OSError: temp file could not be written or moved into place
    """
    data = document.encode("utf-8")

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def process_file(
    file: FileDescriptor,
    output_dir: Path,
    handler: FormatHandler,
    remove_source: bool = True,
) -> Path:
    """
    Convert a single source file.

    Args:
        file: Source descriptor
        output_dir: Directory to write into
        handler: Output format
        remove_source: Delete the source after a successful write

    Returns:
        Path of the written file

    Raises:
        FileStageError: any step failed; nothing after that step ran
    """
    try:
        content = file.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileStageError("read", e) from e

    try:
        catalog = parse_catalog(content)
    except CatalogParseError as e:
        raise FileStageError("parse", e) from e

    try:
        document = handler.transform(catalog)
    except (TypeError, ValueError, RecursionError) as e:
        raise FileStageError("transform", e) from e

    errors = handler.validate_content(document)
    if errors:
        raise FileStageError("validate", ValueError("; ".join(errors)))

    output_path = output_path_for(file.name, output_dir, handler)

    try:
        write_atomic(output_path, document)
    except (OSError, ValueError) as e:
        raise FileStageError("write", e) from e

    # JSON -> JSON overwrites the source in place
    if remove_source and not _same_file(file.path, output_path):
        try:
            file.path.unlink()
        except OSError as e:
            raise FileStageError("remove", e) from e

    return output_path


def find_collisions(
    files: list[FileDescriptor],
    output_dir: Path,
    handler: FormatHandler,
) -> dict[int, OutputCollisionError]:
    """
    Check every planned output path before anything is written.

    A file is rejected when its output would replace another file's source,
    or when an earlier file already maps to the same output.

    Returns:
        Index into files -> collision error, for rejected files only
    """
    sources = {file.path.resolve(): file.name for file in files}
    claimed: dict[Path, str] = {}
    collisions = {}

    for index, file in enumerate(files):
        target = output_path_for(file.name, output_dir, handler).resolve()
        owner = sources.get(target)

        if owner is not None and target != file.path.resolve():
            collisions[index] = OutputCollisionError(
                f"{file.name} maps to {target.name}, which is the source of {owner}"
            )
        elif target in claimed:
            collisions[index] = OutputCollisionError(
                f"{file.name} maps to {target.name}, already claimed by {claimed[target]}"
            )
        else:
            claimed[target] = file.name

    return collisions


def process_all_files(
    files: list[FileDescriptor],
    output_dir: Path,
    handler: FormatHandler,
    remove_source: bool = True,
) -> TransformReport:
    """
    Convert every source file, isolating failures per file.

    Output paths are checked for collisions up front, so a rejected file
    never overwrites anything and its claim holds even if the claiming file
    fails later.

    Args:
        files: Source descriptors, processed in order
        output_dir: Directory to write into (created if missing)
        handler: Output format
        remove_source: Delete each source after its output is written

    Returns:
        TransformReport with written paths (in input order) and failures
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    report = TransformReport()
    collisions = find_collisions(files, output_dir, handler)

    for index, file in enumerate(files):
        if index in collisions:
            error = collisions[index]
            logger.error("Failed to process {}: {}", file.name, error)
            report.failures.append(FileFailure(file.name, str(file.path), "collision", str(error)))
            continue

        try:
            output_path = process_file(file, output_dir, handler, remove_source=remove_source)
        except FileStageError as e:
            logger.error("Failed to process {} ({}): {}", file.name, e.stage, e.cause)
            report.failures.append(FileFailure(file.name, str(file.path), e.stage, str(e.cause)))
            continue
        except Exception as e:
            logger.exception("Unexpected error processing {}", file.name)
            report.failures.append(FileFailure(
                file.name, str(file.path), "unexpected", f"{type(e).__name__}: {e}"
            ))
            continue

        logger.debug("Wrote {} -> {}", file.name, output_path)
        report.output_files.append(output_path)

    logger.info(
        "Converted {} file(s) to {}, {} failed",
        report.succeeded, handler.name, report.failed,
    )
    return report


def pull(
    service: "TolgeeService",
    handler: FormatHandler,
    options: "PullOptions",
) -> TransformReport:
    """
    Export a project from Tolgee and convert every extracted file.

    Args:
        service: Authenticated Tolgee client
        handler: Output format (resolved before any network access)
        options: Project, filters and output directory

    Returns:
        TransformReport for the extracted files
    """
    export = service.extract_and_save_files(
        project_id=options.project_id,
        output_dir=options.output_dir,
        tags=options.tags,
        exclude_tags=options.exclude_tags,
    )
    logger.info("Extracted {} file(s) to {}", len(export.files), export.extracted_path)

    return process_all_files(export.files, export.extracted_path, handler)
