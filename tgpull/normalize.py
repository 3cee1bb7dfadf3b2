#!/usr/bin/env python3
"""
Null handling for exported catalogs.

Tolgee exports untranslated keys as ``null``. Both output formats need an
explicit empty value instead.
"""

from typing import Any


def convert_null_to_empty(value: Any, default: str = "") -> Any:
    """
    Recursively replace ``None`` with ``default``.

    Dicts and lists are rebuilt (key order preserved); other leaves are
    returned unchanged.

    Args:
        value: Parsed catalog or any nested part of it
        default: Replacement for null leaves

    Returns:
        New structure with no ``None`` leaves
    """
    if value is None:
        return default

    if isinstance(value, dict):
        return {
            key: convert_null_to_empty(item, default)
            for key, item in value.items()
        }

    if isinstance(value, list):
        return [convert_null_to_empty(item, default) for item in value]

    return value


def coalesce_null(value: Any, default: str = "") -> Any:
    """Replace a single ``None`` with ``default`` without descending."""
    return default if value is None else value
