"""
Filesystem reads and the move/copy/delete effects of a sorting run.
"""

import os
import shutil
import stat
from datetime import datetime
from pathlib import Path
from typing import Optional, Set

from .constants import get_logger
from .errors import FilesystemError
from .models import RunMode, Skip, SkipReason


class Relocator:
    """Performs filesystem effects for confirmed placements, honoring the run mode."""

    def __init__(self, run_mode: RunMode = RunMode.MOVE, delete_skipped_duplicates: bool = False):
        self.run_mode = run_mode
        self.delete_skipped_duplicates = delete_skipped_duplicates
        self.logger = get_logger()

    @property
    def dry_run(self) -> bool:
        return self.run_mode is RunMode.DRY_RUN

    @staticmethod
    def file_size(path: Path) -> int:
        """Size of a file in bytes."""
        try:
            return path.stat().st_size
        except OSError as e:
            raise FilesystemError(path, e) from e

    @staticmethod
    def file_timestamp(path: Path) -> Optional[datetime]:
        """Modification time, or creation time where modification time is missing."""
        try:
            file_stat = path.stat()
        except OSError:
            return None

        seconds = getattr(file_stat, "st_mtime", None)
        if seconds is None:
            seconds = getattr(file_stat, "st_birthtime", None)
        if seconds is None:
            return None

        try:
            return datetime.fromtimestamp(seconds)
        except (OverflowError, OSError, ValueError):
            return None

    @staticmethod
    def path_exists(path: Path) -> bool:
        try:
            os.stat(path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise FilesystemError(path, e) from e
        return True

    @staticmethod
    def is_regular_file(path: Path) -> bool:
        try:
            return stat.S_ISREG(os.stat(path).st_mode)
        except OSError as e:
            raise FilesystemError(path, e) from e

    @staticmethod
    def is_same_file(first: Path, second: Path) -> bool:
        try:
            return os.path.samefile(first, second)
        except OSError as e:
            raise FilesystemError(second, e) from e

    def ensure_parent(self, destination: Path, known_parents: Set[Path]) -> None:
        """Create the parent of destination once per run; record it after it exists."""
        parent = destination.parent
        if parent in known_parents:
            return

        self.logger.debug(f"Creating folder {parent}")
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(parent, e) from e
        known_parents.add(parent)

    def relocate(self, source: Path, destination: Path, known_parents: Set[Path]) -> None:
        """Move or copy source to destination, or describe it in a dry run."""
        if self.dry_run:
            self.logger.info(f"Dry run: Copy/Move source file {source} to target {destination}")
            return

        self.ensure_parent(destination, known_parents)

        try:
            if self.run_mode is RunMode.MOVE:
                self.logger.debug(f"Moving source file {source} to target {destination}")
                shutil.move(str(source), str(destination))
            else:
                self.logger.debug(f"Copying source file {source} to target {destination}")
                shutil.copy2(str(source), str(destination))
        except OSError as e:
            raise FilesystemError(source, e) from e

        self.logger.info(f"{source} -> {destination}")

    def discard_skipped(self, source: Path, skip: Skip) -> bool:
        """Delete a skipped source file if configured. Returns True if it was (or would be) deleted."""
        if not self.delete_skipped_duplicates or skip.reason is SkipReason.IN_PLACE:
            return False

        if self.dry_run:
            self.logger.info(f"Dry run: Deleting skipped source file {source}")
            return True

        self.logger.debug(f"Deleting skipped source file {source}")
        try:
            source.unlink()
        except OSError as e:
            raise FilesystemError(source, e) from e
        return True
