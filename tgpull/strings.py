#!/usr/bin/env python3
"""
String helpers for translation values.

Decodes the HTML entities Tolgee emits, escapes quotes and newlines the way
Android string resources expect, and detects markup and multi-placeholder
format strings.
"""

import re
import sys

# Checked in order, before the generic numeric pass
HTML_ENTITIES = {
    '&#160;': ' ',
    '&nbsp;': ' ',
    '&lt;': '<',
    '&gt;': '>',
    '&quot;': '"',
    '&#39;': "'",
    '&apos;': "'",
}

NUMERIC_ENTITY_PATTERN = re.compile(r'&#(\d+);')
HTML_TAG_PATTERN = re.compile(r'<[a-zA-Z][^>]*>')
PRINTF_PLACEHOLDER_PATTERN = re.compile(r'%[sd]')


def _decode_numeric(match: re.Match) -> str:
    code = int(match.group(1))
    # non-breaking space becomes a plain space
    if code == 160:
        return ' '
    # Surrogates cannot be written as UTF-8 and code points past U+10FFFF do
    # not exist; both stay as the literal entity. Unlike JS fromCharCode,
    # codes above 0xFFFF are not wrapped to 16 bits.
    if 0xD800 <= code <= 0xDFFF or code > sys.maxunicode:
        return match.group(0)
    return chr(code)


def decode_html_entities(text: str) -> str:
    """
    Decode the HTML entities found in exported values.

    Only the named entities in HTML_ENTITIES are handled; ``&amp;`` and
    friends are left untouched. Any ``&#N;`` decodes by code point.
    """
    result = text
    for entity, replacement in HTML_ENTITIES.items():
        result = result.replace(entity, replacement)
    return NUMERIC_ENTITY_PATTERN.sub(_decode_numeric, result)


def escape_quote(text: str) -> str:
    return text.replace("'", "\\'")


def escape_double_quote(text: str) -> str:
    return text.replace('"', '\\"')


def escape_new_line(text: str) -> str:
    return text.replace('\n', '\\n')


def escape_str(text: str) -> str:
    """
    Decode entities, then escape quotes and newlines for a resource body.

    Args:
        text: Raw value from the export

    Returns:
        Text with ``'``, ``"`` backslash-escaped and newlines as literal ``\\n``
    """
    decoded = decode_html_entities(text)
    return escape_new_line(escape_double_quote(escape_quote(decoded)))


def includes_html_tag(text: str) -> bool:
    """True if text contains something shaped like an opening HTML tag."""
    return HTML_TAG_PATTERN.search(text) is not None


def includes_format_string_more_than_one(text: str) -> bool:
    """True if text holds two or more ``%s``/``%d`` placeholders combined."""
    return len(PRINTF_PLACEHOLDER_PATTERN.findall(text)) > 1
