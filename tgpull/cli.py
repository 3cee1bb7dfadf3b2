#!/usr/bin/env python3
"""
tolgee-pull - export Tolgee translations as Android XML or JSON

Downloads a project export from Tolgee and converts each language file
into the format your app consumes.

Commands:
    pull     - Export from Tolgee and convert
    convert  - Convert already-downloaded JSON files
    formats  - List supported output formats

Example:
    tolgee-pull pull --api-key tgpak_xxx --project-id 42 --format xml --output-dir i18n
    → Writes i18n/en.xml, i18n/de.xml, ... and prints a JSON summary
"""

import argparse
import json
import os
import sys
from pathlib import Path

from .config import DEFAULTS, resolve_options
from .format_handlers import FormatRegistry
from .logger import setup_logger
from .pipeline import FileDescriptor, TransformReport, process_all_files, pull
from .service import TolgeeService


def _relative(path: Path) -> str:
    return os.path.relpath(path, Path.cwd())


def make_result(report: TransformReport, format_name: str, output_dir: str) -> dict:
    """Build the JSON summary printed on stdout."""
    return {
        "status": "ok",
        "format": format_name,
        "output_dir": output_dir,
        "files": [_relative(path) for path in report.output_files],
        "failures": [failure.to_dict() for failure in report.failures],
        "summary": f"{report.succeeded} files extracted"
                   + (f", {report.failed} failed" if report.failed else ""),
    }


def cmd_pull(args) -> dict:
    """Export from Tolgee and convert every file."""
    options = resolve_options(
        {
            "api_key": args.api_key,
            "project_id": args.project_id,
            "base_url": args.base_url,
            "format": args.format,
            "output_dir": args.output_dir,
            "tags": args.tags,
            "exclude_tags": args.exclude_tags,
            "verbose": args.verbose or None,
        },
        config_path=args.config,
    )
    setup_logger(options.verbose)

    # Resolve the format before touching the network
    handler = FormatRegistry.get_handler(options.format)

    service = TolgeeService(api_key=options.api_key, base_url=options.base_url)
    report = pull(service, handler, options)

    return make_result(report, handler.name, options.output_dir)


def cmd_convert(args) -> dict:
    """Convert local JSON export files."""
    setup_logger(args.verbose)
    handler = FormatRegistry.get_handler(args.format)

    files = [FileDescriptor(name=Path(p).name, path=Path(p)) for p in args.input]
    report = process_all_files(
        files,
        Path(args.output_dir),
        handler,
        remove_source=not args.keep_source,
    )

    return make_result(report, handler.name, args.output_dir)


def cmd_formats(args) -> dict:
    """List supported formats."""
    formats = FormatRegistry.list_formats()
    return {
        "status": "ok",
        "formats": formats,
        "summary": f"{len(formats)} formats supported: {', '.join(f['name'] for f in formats)}",
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tolgee-pull",
        description="tolgee-pull - export Tolgee translations as Android XML or JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Supported Formats:
  xml   - Android strings.xml (top-level string keys only)
  json  - Pretty-printed JSON, nulls replaced by empty strings

Options can also come from TOLGEE_API_KEY / TOLGEE_PROJECT_ID / TOLGEE_BASE_URL
(or a .env file) and from a YAML config file (--config, default .tolgee-pull.yaml).

Examples:
  # Pull Android resources for keys tagged "android"
  tolgee-pull pull -a tgpak_xxx -p 42 -f xml -o app/src/main/res/values

  # Pull JSON for everything not tagged "deprecated"
  tolgee-pull pull -p 42 -f json --tags "" --exclude-tags deprecated

  # Convert files you already downloaded, keeping the originals
  tolgee-pull convert -i en.json de.json -f xml -o out --keep-source
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    format_choices = FormatRegistry.names()

    # pull command (defaults applied in resolve_options so env/config can override)
    pull_parser = subparsers.add_parser("pull", help="Export from Tolgee and convert")
    pull_parser.add_argument("--api-key", "-a", help="Tolgee API key (or TOLGEE_API_KEY)")
    pull_parser.add_argument("--project-id", "-p", help="Tolgee project ID (or TOLGEE_PROJECT_ID)")
    pull_parser.add_argument("--base-url", "-b", help=f"Tolgee base URL (default: {DEFAULTS['base_url']})")
    pull_parser.add_argument("--format", "-f", help=f"Output format: {', '.join(format_choices)} (default: {DEFAULTS['format']})")
    pull_parser.add_argument("--output-dir", "-o", help=f"Output directory (default: {DEFAULTS['output_dir']})")
    pull_parser.add_argument("--tags", "-t", help=f"Only keys with this tag (default: {DEFAULTS['tags']})")
    pull_parser.add_argument("--exclude-tags", help=f"Skip keys with this tag (default: {DEFAULTS['exclude_tags']})")
    pull_parser.add_argument("--config", help="YAML config file")
    pull_parser.add_argument("--verbose", "-v", action="store_true", help="Log every file")

    # convert command
    convert_parser = subparsers.add_parser("convert", help="Convert local JSON export files")
    convert_parser.add_argument("--input", "-i", nargs="+", required=True, help="Exported JSON files")
    convert_parser.add_argument("--format", "-f", default=DEFAULTS["format"], choices=format_choices,
                                help=f"Output format (default: {DEFAULTS['format']})")
    convert_parser.add_argument("--output-dir", "-o", default=DEFAULTS["output_dir"],
                                help=f"Output directory (default: {DEFAULTS['output_dir']})")
    convert_parser.add_argument("--keep-source", action="store_true", help="Do not delete input files")
    convert_parser.add_argument("--verbose", "-v", action="store_true", help="Log every file")

    # formats command
    subparsers.add_parser("formats", help="List supported output formats")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == "pull":
            result = cmd_pull(args)
        elif args.command == "convert":
            result = cmd_convert(args)
        elif args.command == "formats":
            result = cmd_formats(args)
        print(json.dumps(result, indent=2, ensure_ascii=False))
    except Exception as e:
        print(json.dumps({
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
