#!/usr/bin/env python3
"""
Output format handlers.

Supported formats:
- JSON: pretty-printed nested JSON
- XML: Android strings.xml resources
"""

from .base import Catalog, FormatHandler, FormatRegistry
from .json_handler import JsonHandler
from .android_xml import AndroidXmlHandler, ResourceEntry

# Register handlers (order is the order shown by `formats`)
FormatRegistry.register(JsonHandler)
FormatRegistry.register(AndroidXmlHandler)

__all__ = [
    'Catalog',
    'FormatHandler',
    'FormatRegistry',
    'JsonHandler',
    'AndroidXmlHandler',
    'ResourceEntry',
]
