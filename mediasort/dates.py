"""
Capture date resolution with a layered fallback chain.

Embedded metadata is authoritative but often missing or stripped, so the
chain falls back to a date stamp in the file name, then to the filesystem
timestamp, and finally to the operator so no file is silently lost:

    metadata -> filename -> filesystem timestamp -> operator
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, Pattern, Union

from .constants import FILENAME_DATE_PATTERN, get_logger
from .errors import DateUndeterminable, MetadataError
from .file_operations import Relocator
from .models import SKIP_FILE, MediaFile, MediaKind
from .prompts import DecisionProvider, parse_month, parse_year
from .timestamps import MetadataReader, date_from_filename

DateResolution = Union[datetime, type(SKIP_FILE)]

USE_TIMESTAMP = "1"
ENTER_MANUALLY = "2"
SKIP = "3"


class DateResolver:
    """Produces one best-guess capture timestamp per media file."""

    def __init__(self, metadata_reader: MetadataReader, file_ops: Relocator,
                 prompter: DecisionProvider, filename_pattern: Pattern = FILENAME_DATE_PATTERN,
                 file_creation_fallback: bool = False):
        self.metadata_reader = metadata_reader
        self.file_ops = file_ops
        self.prompter = prompter
        self.filename_pattern = filename_pattern
        self.file_creation_fallback = file_creation_fallback
        self.logger = get_logger("mediasort.dates")

    def resolve(self, media_file: MediaFile) -> DateResolution:
        """Return the capture date, or SKIP_FILE if the operator skips the file.

        Raises DateUndeterminable when every source fails.
        """
        path = media_file.path
        for source, resolver in (("metadata", self.from_metadata),
                                 ("filename", self.from_filename)):
            date = resolver(media_file)
            if date is not None:
                self.logger.debug(f"{path.name} was taken at {date} ({source})")
                return date

        return self.from_filesystem(path)

    def from_metadata(self, media_file: MediaFile) -> Optional[datetime]:
        try:
            if media_file.kind is MediaKind.IMAGE:
                return self.metadata_reader.image_date(media_file.path)
            if media_file.kind is MediaKind.VIDEO:
                return self.metadata_reader.video_date(media_file.path)
        except MetadataError as e:
            self.logger.debug(f"No embedded date in {media_file.path}: {e}")
        return None

    def from_filename(self, media_file: MediaFile) -> Optional[datetime]:
        return date_from_filename(media_file.path.name, self.filename_pattern)

    def from_filesystem(self, path: Path) -> DateResolution:
        file_date = self.file_ops.file_timestamp(path)
        if file_date is None:
            raise DateUndeterminable(path)

        if self.file_creation_fallback:
            self.logger.debug(f"{path.name} was taken at {file_date} (filesystem)")
            return file_date

        answer = self.prompter.choose(
            f"Could not determine creation time of media file {path}\nChoose a resolution:",
            [
                (USE_TIMESTAMP, f"Use the file creation time: {file_date}"),
                (ENTER_MANUALLY, "Enter year and month manually."),
                (SKIP, "Skip file. (it will not be deleted if the "
                       "delete-skipped-source-duplicates flag is set.)"),
            ],
        )

        if answer == USE_TIMESTAMP:
            self.logger.debug(f"{path.name} was taken at {file_date} (operator)")
            return file_date
        if answer == ENTER_MANUALLY:
            year = self.prompter.ask("Enter the year as number, e.g. 2022", parse_year)
            month = self.prompter.ask("Enter the month as number, e.g. 12", parse_month)
            entered = datetime(year, month, 1, 0, 0, 0)
            self.logger.debug(f"{path.name} was taken at {entered} (operator)")
            return entered
        return SKIP_FILE
