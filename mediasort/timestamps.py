"""Embedded metadata readers and shared date-time parsing."""

import json
import re
import subprocess
import zoneinfo
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional, Pattern

import exifread

from . import constants
from .constants import EXIF_DATE_FORMATS, EXIF_DATE_TAGS, FILENAME_DATE_PATTERN, get_logger
from .errors import MetadataError


logger = get_logger("mediasort.timestamps")


def parse_exif_datetime(value: str) -> datetime:
    """Parse a fixed-format EXIF date-time string as a naive local date-time."""
    value = value.strip()
    for fmt in EXIF_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise MetadataError(f"Unrecognized EXIF date-time: {value!r}")


def parse_iso8601_datetime(timestamp_str: str) -> datetime:
    """Parse an RFC 3339 / ISO 8601 timestamp into an aware datetime.

    Accepts the variants ffprobe emits for container tags, e.g.
    ``2023-07-15T10:00:00.000000Z`` or ``2023-07-15T10:00:00+0200``.
    A missing offset is read as UTC.
    """
    pattern = r'(\d{4}-\d{2}-\d{2})[T ](\d{2}:\d{2}:\d{2})(?:\.(\d+))?\s*(Z|[+-]\d{2}:?\d{2})?$'
    match = re.match(pattern, timestamp_str.strip())
    if not match:
        raise MetadataError(f"Unrecognized timestamp: {timestamp_str!r}")

    date_part, time_part, fractional_part, timezone_part = match.groups()
    try:
        base_dt = datetime.strptime(f"{date_part} {time_part}", "%Y-%m-%d %H:%M:%S")
    except ValueError as e:
        raise MetadataError(f"Invalid timestamp {timestamp_str!r}: {e}") from e

    if fractional_part:
        base_dt = base_dt.replace(microsecond=int(fractional_part.ljust(6, '0')[:6]))

    if not timezone_part or timezone_part == 'Z':
        return base_dt.replace(tzinfo=timezone.utc)

    # Offsets like "-0400" or "+05:00"
    tz_str = timezone_part.replace(':', '')
    sign = 1 if tz_str[0] == '+' else -1
    try:
        offset = timedelta(hours=int(tz_str[1:3]), minutes=int(tz_str[3:5]))
        return base_dt.replace(tzinfo=timezone(sign * offset))
    except ValueError as e:
        raise MetadataError(f"Invalid offset in timestamp {timestamp_str!r}: {e}") from e


def to_local(aware_dt: datetime, tz_name: Optional[str] = None) -> datetime:
    """Convert an aware datetime to naive wall-clock time.

    Uses the named IANA zone if given, otherwise the system local zone.
    """
    tz = zoneinfo.ZoneInfo(tz_name) if tz_name else None
    try:
        return aware_dt.astimezone(tz).replace(tzinfo=None)
    except (OverflowError, ValueError, OSError) as e:
        raise MetadataError(f"Cannot convert {aware_dt} to local time: {e}") from e


def date_from_filename(file_name: str, pattern: Pattern = FILENAME_DATE_PATTERN) -> Optional[datetime]:
    """Extract year and month from a file name holding exactly one date stamp.

    Zero or several matches are ambiguous and yield None, as does a match
    whose month cannot exist. The day and time are zero-filled to the first
    of the month at midnight.
    """
    matches = list(pattern.finditer(file_name))
    if len(matches) != 1:
        return None

    try:
        year = int(matches[0].group("y"))
        month = int(matches[0].group("m"))
        return datetime(year, month, 1, 0, 0, 0)
    except (IndexError, ValueError):
        return None


class MetadataReader:
    """Reads capture dates embedded in image and video containers."""

    def __init__(self, timezone: Optional[str] = None):
        self.timezone = timezone

    def read_image_date(self, path: Path) -> str:
        """Return the first EXIF date tag present, in priority order."""
        try:
            with open(path, 'rb') as f:
                tags = exifread.process_file(f, details=False)
        except OSError as e:
            raise MetadataError(f"Cannot read {path}: {e}") from e
        except Exception as e:
            # exifread raises assorted errors on truncated or corrupt containers
            raise MetadataError(f"ExifRead failed for {path}: {e}") from e

        for tag in EXIF_DATE_TAGS:
            if tag in tags:
                value = str(tags[tag]).strip()
                if value:
                    return value

        raise MetadataError("DateTime tag is missing.")

    def read_video_creation_time(self, path: Path) -> datetime:
        """Return the container creation_time tag as an aware datetime."""
        if not constants.ffprobe_available:
            raise MetadataError("ffprobe unavailable")

        try:
            result = subprocess.run([
                "ffprobe", "-v", "quiet",
                "-print_format", "json",
                "-show_format",
                str(path)
            ], capture_output=True, text=True, check=True)
            data = json.loads(result.stdout)
        except subprocess.CalledProcessError as e:
            raise MetadataError(f"ffprobe failed for {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise MetadataError(f"Failed to parse ffprobe output for {path}: {e}") from e

        tags = data.get("format", {}).get("tags") or {}
        date_str = tags.get("creation_time")
        if not date_str:
            raise MetadataError("Can't read video creation date time.")

        return parse_iso8601_datetime(date_str)

    def image_date(self, path: Path) -> datetime:
        return parse_exif_datetime(self.read_image_date(path))

    def video_date(self, path: Path) -> datetime:
        return to_local(self.read_video_creation_time(path), self.timezone)
