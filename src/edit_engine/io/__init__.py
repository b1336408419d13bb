"""File persistence, project configuration, and external tools."""

from .persistence import DEFAULT_ENCODING, file_extension, load_text, save_text
from .project import (
    DEFAULT_CONFIG_NAME,
    DEFAULT_FORMAT_EXTENSIONS,
    FormatterConfig,
    ProjectConfig,
)
from .tools import BuildRunner, Formatter

__all__ = [
    "BuildRunner",
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_ENCODING",
    "DEFAULT_FORMAT_EXTENSIONS",
    "Formatter",
    "FormatterConfig",
    "ProjectConfig",
    "file_extension",
    "load_text",
    "save_text",
]
