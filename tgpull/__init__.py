"""
tgpull - export Tolgee translations as Android XML or JSON

Downloads a Tolgee project export and converts each language file into
Android strings.xml resources or cleaned-up JSON.

Quick start:
    tolgee-pull pull --api-key tgpak_xxx --project-id 42 --format xml
    tolgee-pull convert --input en.json --format xml --output-dir res/values
"""

__version__ = "1.0.0"

from .format_handlers import AndroidXmlHandler, FormatRegistry, JsonHandler
from .pipeline import FileDescriptor, TransformReport, process_all_files
from .service import TolgeeService

__all__ = [
    "AndroidXmlHandler",
    "FormatRegistry",
    "JsonHandler",
    "FileDescriptor",
    "TransformReport",
    "process_all_files",
    "TolgeeService",
]
