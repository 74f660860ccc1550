"""
Data model shared by the date, placement and relocation steps.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union

from .constants import IMAGE_EXTENSIONS, VIDEO_EXTENSIONS


class MediaKind(Enum):
    IMAGE = "image"
    VIDEO = "video"
    UNSUPPORTED = "unsupported"


class RunMode(Enum):
    DRY_RUN = "dry-run"
    MOVE = "move"
    COPY = "copy"


class ConflictMode(Enum):
    """How to resolve a destination that exists with a different size."""
    CHOOSE = "choose"
    KEEP_SOURCE = "source"
    KEEP_TARGET = "target"
    KEEP_BOTH = "both"


class SkipReason(Enum):
    DUPLICATE = "same size file already at target"
    KEEP_TARGET = "keeping existing target file"
    OPERATOR = "skipped by operator"
    IN_PLACE = "already at target"


@dataclass(frozen=True)
class MediaFile:
    path: Path
    kind: MediaKind

    @classmethod
    def from_path(cls, path: Path) -> "MediaFile":
        ext = path.suffix.lower()
        if ext in IMAGE_EXTENSIONS:
            kind = MediaKind.IMAGE
        elif ext in VIDEO_EXTENSIONS:
            kind = MediaKind.VIDEO
        else:
            kind = MediaKind.UNSUPPORTED
        return cls(path=path, kind=kind)

    @property
    def is_supported(self) -> bool:
        return self.kind is not MediaKind.UNSUPPORTED


@dataclass(frozen=True)
class Place:
    """Placement outcome: write the source file to destination."""
    destination: Path


@dataclass(frozen=True)
class Skip:
    """Placement outcome: leave the target tree untouched."""
    reason: SkipReason


PlacementOutcome = Union[Place, Skip]


class _SkipFile:
    """Sentinel for an operator skipping a file while resolving its date."""

    def __repr__(self) -> str:
        return "SKIP_FILE"


SKIP_FILE = _SkipFile()
