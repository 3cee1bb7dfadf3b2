#!/usr/bin/env python3
"""
Android XML strings.xml output format.

Converts a flat catalog into an Android ``<resources>`` document, escaping
values the way the Android resource compiler expects.
"""

from dataclasses import dataclass
from typing import Optional
from xml.etree import ElementTree as ET

from .base import Catalog, FormatHandler
from ..normalize import coalesce_null
from ..strings import escape_str, includes_format_string_more_than_one, includes_html_tag


@dataclass
class ResourceEntry:
    """
    One ``<string>`` element.

    Attributes:
        name: Resource name (catalog key)
        text: Escaped value
        cdata: Emit text as a CDATA section instead of escaped text
        formatted: ``"false"`` to disable format reordering, None to omit
    """
    name: str
    text: str
    cdata: bool = False
    formatted: Optional[str] = None


class AndroidXmlHandler(FormatHandler):
    """
    Handler for Android strings.xml resource files.

    Android XML structure:
    ```xml
    <?xml version="1.0" encoding="UTF-8"?>
    <resources>
      <string name="app_name">My App</string>
      <string name="greeting" formatted="false">%s and %s</string>
      <string name="styled"><![CDATA[Hello <b>World</b>]]></string>
    </resources>
    ```

    Only top-level string values are written. Nested objects and arrays
    have no ``<string>`` equivalent and are skipped; null values become
    empty strings.
    """

    @property
    def name(self) -> str:
        return "xml"

    @property
    def file_extension(self) -> str:
        return "xml"

    @property
    def description(self) -> str:
        return "Android strings.xml resources"

    def build_entries(self, catalog: Catalog) -> list[ResourceEntry]:
        """
        Build resource entries from the top level of a catalog.

        Args:
            catalog: Parsed JSON object from the export

        Returns:
            One ResourceEntry per string (or null) value, in catalog order
        """
        entries = []

        for key, value in catalog.items():
            value = coalesce_null(value)
            if not isinstance(value, str):
                continue

            escaped = escape_str(value)
            entries.append(ResourceEntry(
                name=key,
                text=escaped,
                cdata=includes_html_tag(escaped),
                formatted="false" if includes_format_string_more_than_one(escaped) else None,
            ))

        return entries

    def _escape_text(self, text: str) -> str:
        """Escape special XML characters in element text."""
        text = text.replace('&', '&amp;')
        text = text.replace('<', '&lt;')
        text = text.replace('>', '&gt;')
        return text

    def _escape_attribute(self, text: str) -> str:
        return self._escape_text(text).replace('"', '&quot;')

    def _cdata(self, text: str) -> str:
        # "]]>" cannot appear inside a CDATA section; split it across two
        return '<![CDATA[' + text.replace(']]>', ']]]]><![CDATA[>') + ']]>'

    def render_entry(self, entry: ResourceEntry) -> str:
        attributes = f'name="{self._escape_attribute(entry.name)}"'
        if entry.formatted is not None:
            attributes += f' formatted="{entry.formatted}"'

        body = self._cdata(entry.text) if entry.cdata else self._escape_text(entry.text)
        return f'  <string {attributes}>{body}</string>'

    def transform(self, catalog: Catalog) -> str:
        lines = ['<?xml version="1.0" encoding="UTF-8"?>', '<resources>']

        for entry in self.build_entries(catalog):
            lines.append(self.render_entry(entry))

        lines.append('</resources>')
        return '\n'.join(lines) + '\n'

    def validate_content(self, content: str) -> list[str]:
        """Validate Android XML format."""
        errors = []

        try:
            data = content.encode('utf-8')
        except UnicodeEncodeError as e:
            return [f"Cannot encode as UTF-8: {e.reason} at position {e.start}"]

        try:
            root = ET.fromstring(data)
            if root.tag != 'resources':
                errors.append(f"Root element must be 'resources', found '{root.tag}'")
        except ET.ParseError as e:
            errors.append(f"Invalid XML syntax: {e}")

        return errors
