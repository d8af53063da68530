"""Error codes and error handling utilities for icontheme."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for icon theme operations."""

    # Theme metadata errors
    THEME_NOT_FOUND = auto()
    THEME_INDEX_MISSING = auto()
    THEME_INDEX_UNREADABLE = auto()
    THEME_INDEX_INVALID = auto()
    THEME_SECTION_MISSING = auto()
    THEME_DIRECTORIES_MISSING = auto()

    # File system errors
    DIRECTORY_NOT_FOUND = auto()
    DIRECTORY_ACCESS_DENIED = auto()

    # Operation errors
    OPERATION_CANCELLED = auto()
    OPERATION_FAILED = auto()
    INDEXING_FAILED = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.THEME_NOT_FOUND: "The icon theme is not installed in any icon directory.",
    ErrorCode.THEME_INDEX_MISSING: "The icon theme has no index.theme file.",
    ErrorCode.THEME_INDEX_UNREADABLE: "The index.theme file could not be read. Check file permissions.",
    ErrorCode.THEME_INDEX_INVALID: "The index.theme file is malformed.",
    ErrorCode.THEME_SECTION_MISSING: "The index.theme file has no [Icon Theme] section.",
    ErrorCode.THEME_DIRECTORIES_MISSING: "The index.theme file does not list any Directories.",

    ErrorCode.DIRECTORY_NOT_FOUND: "The icon directory was not found. It may have been moved or deleted.",
    ErrorCode.DIRECTORY_ACCESS_DENIED: "Access denied. Check the icon directory permissions.",

    ErrorCode.OPERATION_CANCELLED: "Operation was cancelled.",
    ErrorCode.OPERATION_FAILED: "Operation failed. See details for more information.",
    ErrorCode.INDEXING_FAILED: "Indexing the icon theme failed. See details for more information.",
}


@dataclass
class IconThemeError(Exception):
    """Base exception for icontheme with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion and self.code in ERROR_MESSAGES:
            self.suggestion = ERROR_MESSAGES[self.code]

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f"\nPath: {self.path}")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "details": self.details,
            "suggestion": self.suggestion,
        }


@dataclass
class InvalidThemeError(IconThemeError):
    """Raised when a theme's index.theme cannot be used."""

    code: ErrorCode = ErrorCode.THEME_INDEX_INVALID


def classify_exception(exc: Exception, path: Path | None = None) -> IconThemeError:
    """Classify a generic exception into an IconThemeError with appropriate code."""
    if isinstance(exc, IconThemeError):
        return exc

    exc_name = type(exc).__name__
    exc_str = str(exc).lower()

    if isinstance(exc, FileNotFoundError) or "no such file" in exc_str:
        return IconThemeError(ErrorCode.DIRECTORY_NOT_FOUND, path=path, details={"original": exc_str})
    if isinstance(exc, PermissionError) or "permission denied" in exc_str:
        return IconThemeError(ErrorCode.DIRECTORY_ACCESS_DENIED, path=path, details={"original": exc_str})
    if isinstance(exc, OSError):
        return IconThemeError(
            ErrorCode.INDEXING_FAILED,
            path=path,
            details={"original": exc_str},
        )

    return IconThemeError(
        ErrorCode.OPERATION_FAILED,
        message=f"{exc_name}: {exc}",
        path=path,
        details={"original": exc_str},
    )


def format_error_for_user(error: IconThemeError | Exception) -> str:
    """Format an error for display with an actionable suggestion."""
    if isinstance(error, IconThemeError):
        parts = [error.message]
        if error.suggestion and error.suggestion != error.message:
            parts.append(f" {error.suggestion}")
        if error.path:
            parts.append(f" ({error.path})")
        return "".join(parts)

    classified = classify_exception(error)
    return format_error_for_user(classified)
