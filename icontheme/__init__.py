"""Resolve freedesktop icon theme names to icon files on disk."""

from icontheme.core.icon_theme import IconTheme
from icontheme.core.models import DirectoryType, IconDirectoryDescriptor, IconQuery, Theme, ThemeDescription
from icontheme.errors import IconThemeError, InvalidThemeError

__version__ = "0.3.0"

__all__ = [
    "DirectoryType",
    "IconDirectoryDescriptor",
    "IconQuery",
    "IconTheme",
    "IconThemeError",
    "InvalidThemeError",
    "Theme",
    "ThemeDescription",
    "__version__",
]
