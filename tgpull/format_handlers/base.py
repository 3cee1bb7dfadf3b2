#!/usr/bin/env python3
"""
Base classes for output format handlers.

FormatHandler is the abstract base class every output format implements.
A handler turns one parsed catalog (the JSON object Tolgee exports for a
single language) into the serialized document written to disk.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..errors import UnsupportedFormatError

# One exported language file: key -> str | None | nested dict | list
Catalog = dict[str, Any]


class FormatHandler(ABC):
    """
    Abstract base class for output format handlers.

    Handlers are stateless: the same catalog always produces the same
    document, so a single instance can be shared across a whole batch.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Format name used on the command line."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Extension of the written files (without dot)."""
        pass

    @property
    def description(self) -> str:
        return ""

    @abstractmethod
    def transform(self, catalog: Catalog) -> str:
        """
        Serialize a parsed catalog.

        Args:
            catalog: Parsed JSON object from the export

        Returns:
            Complete file content, ending with a newline
        """
        pass

    def validate_content(self, content: str) -> list[str]:
        """
        Validate that content is a well-formed document of this format.

        Args:
            content: Serialized document

        Returns:
            List of validation error messages (empty if valid)
        """
        return []


class FormatRegistry:
    """Registry of available output formats."""

    _handlers: dict[str, type[FormatHandler]] = {}

    @classmethod
    def register(cls, handler_class: type[FormatHandler]) -> None:
        """Register a format handler class."""
        handler = handler_class()
        cls._handlers[handler.name.lower()] = handler_class

    @classmethod
    def get_handler(cls, name: str) -> FormatHandler:
        """Get handler instance by name."""
        name_lower = name.lower()
        if name_lower not in cls._handlers:
            available = ', '.join(cls.names())
            raise UnsupportedFormatError(f"Unsupported format: {name}. Available: {available}")
        return cls._handlers[name_lower]()

    @classmethod
    def names(cls) -> list[str]:
        return list(cls._handlers.keys())

    @classmethod
    def list_formats(cls) -> list[dict[str, Any]]:
        """List all registered formats with their extensions."""
        result = []
        for handler_class in cls._handlers.values():
            handler = handler_class()
            result.append({
                'name': handler.name,
                'extension': handler.file_extension,
                'description': handler.description,
            })
        return result
