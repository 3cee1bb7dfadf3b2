#!/usr/bin/env python3
"""
Exception types raised by tolgee-pull.

Per-file errors (parse, collision) are caught by the pipeline driver and
reported; the rest are fatal and surface at the CLI boundary.
"""


class TolgeePullError(Exception):
    """Base class for all tolgee-pull errors."""


class ConfigError(TolgeePullError):
    """Required option missing or config file unreadable."""


class ExportError(TolgeePullError):
    """The export request or archive extraction failed."""


class UnsupportedFormatError(TolgeePullError, ValueError):
    """Requested output format has no registered handler."""


class CatalogParseError(TolgeePullError):
    """Source file is not a JSON object."""


class OutputCollisionError(TolgeePullError):
    """Two sources in one batch map to the same output path."""
