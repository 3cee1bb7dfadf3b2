#!/usr/bin/env python3
"""
JSON output format.

Writes the exported catalog back out as pretty-printed JSON with every
null replaced by an empty string. Values are not otherwise touched.
"""

import json

from .base import Catalog, FormatHandler
from ..normalize import convert_null_to_empty


class JsonHandler(FormatHandler):
    """
    Handler for structured JSON output.

    ```json
    {
      "welcome": "Welcome",
      "user": {
        "greeting": "Hello %s",
        "untranslated": ""
      }
    }
    ```

    Nesting, arrays, key order and non-string leaves (numbers, booleans)
    are kept as exported.
    """

    @property
    def name(self) -> str:
        return "json"

    @property
    def file_extension(self) -> str:
        return "json"

    @property
    def description(self) -> str:
        return "Pretty-printed JSON, nulls replaced by empty strings"

    def transform(self, catalog: Catalog) -> str:
        processed = convert_null_to_empty(catalog)
        return json.dumps(processed, indent=2, ensure_ascii=False) + "\n"

    def validate_content(self, content: str) -> list[str]:
        """
        Validate JSON file format.

        Args:
            content: Raw JSON content

        Returns:
            List of validation error messages
        """
        errors = []

        try:
            data = json.loads(content)
            if not isinstance(data, dict):
                errors.append("Root element must be an object")
        except json.JSONDecodeError as e:
            errors.append(f"Invalid JSON syntax: {e.msg} at line {e.lineno}")

        return errors
