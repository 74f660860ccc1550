"""
Destination path computation with conflict-safe collision handling.
"""

from datetime import datetime
from pathlib import Path

from rich.filesize import decimal

from .constants import ALTERNATE_SUFFIX, get_logger
from .errors import FilesystemError
from .file_operations import Relocator
from .models import ConflictMode, Place, PlacementOutcome, Skip, SkipReason
from .prompts import DecisionProvider

OVERRIDE = "1"
KEEP_TARGET = "2"
KEEP_BOTH = "3"


def destination_for(target_root: Path, creation_date: datetime, file_name: str) -> Path:
    """target/<year>/<month>/<file name>, month without zero padding."""
    return target_root / str(creation_date.year) / str(creation_date.month) / file_name


def alternate_path(path: Path) -> Path:
    """Sibling path with the suffix appended to the stem, e.g. a.jpg -> a_new.jpg."""
    return path.with_name(f"{path.stem}{ALTERNATE_SUFFIX}{path.suffix}")


class PlacementResolver:
    """Resolves where a source file goes, or that it should be skipped."""

    def __init__(self, target_root: Path, conflict_mode: ConflictMode,
                 file_ops: Relocator, prompter: DecisionProvider):
        self.target_root = target_root
        self.conflict_mode = conflict_mode
        self.file_ops = file_ops
        self.prompter = prompter
        self.logger = get_logger("mediasort.placement")

    def resolve(self, source: Path, creation_date: datetime) -> PlacementOutcome:
        candidate = destination_for(self.target_root, creation_date, source.name)
        source_size = None

        # Every rename lengthens the stem, so no candidate is visited twice
        while self.file_ops.path_exists(candidate):
            self.logger.info(f"Filename collision: {source} already exists at target {candidate}")

            # Only a regular file can be a duplicate or be overridden
            if not self.file_ops.is_regular_file(candidate):
                raise FilesystemError(candidate, message=f"{candidate} exists and is not a file")

            if self.file_ops.is_same_file(source, candidate):
                return Skip(SkipReason.IN_PLACE)

            if source_size is None:
                source_size = self.file_ops.file_size(source)
            target_size = self.file_ops.file_size(candidate)

            if source_size == target_size:
                self.logger.debug(f"Skipping {source}: the existing file has the same size "
                                  f"and is likely the same")
                return Skip(SkipReason.DUPLICATE)

            resolution = self._resolve_conflict(candidate, source_size, target_size)
            if resolution is None:
                return Place(candidate)
            if isinstance(resolution, Skip):
                return resolution
            candidate = resolution

        return Place(candidate)

    def _resolve_conflict(self, candidate: Path, source_size: int, target_size: int):
        """None keeps the candidate (override), a Skip skips, a Path renames."""
        mode = self.conflict_mode
        if mode is ConflictMode.KEEP_SOURCE:
            return None
        if mode is ConflictMode.KEEP_TARGET:
            return Skip(SkipReason.KEEP_TARGET)
        if mode is ConflictMode.KEEP_BOTH:
            return alternate_path(candidate)

        alternative = alternate_path(candidate)
        answer = self.prompter.choose("Choose a resolution:", [
            (OVERRIDE, f"Override the target file with the source file "
                       f"(Size {decimal(source_size)})."),
            (KEEP_TARGET, f"Skip the source file and keep the file (Size: {decimal(target_size)}) "
                          f"at the target location. (will delete source file if "
                          f"delete-skipped-source-duplicates flag is set)"),
            (KEEP_BOTH, f"Both files. The source file would be renamed to {alternative.name}"),
        ])

        if answer == OVERRIDE:
            return None
        if answer == KEEP_TARGET:
            return Skip(SkipReason.OPERATOR)
        return alternative
