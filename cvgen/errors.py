"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from CvgenUserError.

Programming errors and bugs should NOT inherit from CvgenUserError —
they will propagate with full tracebacks.
"""

from __future__ import annotations

from pathlib import Path


class CvgenUserError(Exception):
    """
    Base class for all user-facing errors in cvgen.

    These errors indicate problems that the user can fix:
    unreadable directories, broken templates, invalid configuration, etc.
    The original cause (if any) is available via __cause__.
    """
    pass


class DirectoryListError(CvgenUserError):
    """Raised when a scan directory or a version directory cannot be enumerated."""
    def __init__(self, path: Path, purpose: str):
        self.path = path
        self.purpose = purpose
        super().__init__(
            f"Cannot list the directory entries for the source folder {path} while {purpose}"
        )


class RenderError(CvgenUserError):
    """Raised when a manifest cannot be rendered for the target file."""
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot render the conversion functions file {path}: {reason}")


class WriteError(CvgenUserError):
    """Raised when generated bytes cannot be persisted to the target file."""
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write the generated conversion functions file {path}: {reason}")


class ConfigError(CvgenUserError):
    """Raised when the project configuration is missing or invalid."""
    def __init__(self, path: Path | None, message: str):
        self.path = path
        where = f" ({path})" if path is not None else ""
        super().__init__(f"Invalid configuration{where}: {message}")


__all__ = [
    "CvgenUserError",
    "DirectoryListError",
    "RenderError",
    "WriteError",
    "ConfigError",
]
