"""
Exception hierarchy for mediasort.

Only ConfigurationError aborts a run. Every other error is scoped to the
file being processed: it is logged and the run moves on to the next file.
"""

from pathlib import Path
from typing import Optional


class MediaSortError(Exception):
    """Base exception for all mediasort errors."""
    pass


class ConfigurationError(MediaSortError):
    """Raised for bad command-line arguments or an unusable source/target folder."""
    pass


class DateUndeterminable(MediaSortError):
    """Raised when no capture date can be determined for a file."""

    def __init__(self, path: Path):
        super().__init__("Could not determine a media file creation date.")
        self.path = path


class FilesystemError(MediaSortError):
    """Raised when a filesystem operation fails; carries the offending path."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None, message: str = ""):
        self.path = path
        self.cause = cause
        super().__init__(message or f"{path}: {cause}")


class MetadataError(MediaSortError):
    """Raised when embedded metadata cannot be read or parsed."""
    pass
