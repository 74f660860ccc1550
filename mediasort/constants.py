"""
File extension constants, shared console and logger for mediasort.
"""

import logging
import re
import subprocess
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PROGRAM = "mediasort"

# File extension constants
IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".tif")
VIDEO_EXTENSIONS = (".mp4", ".mov")
SUPPORTED_EXTENSIONS = IMAGE_EXTENSIONS + VIDEO_EXTENSIONS

# EXIF date tags in priority order (exifread tag names)
EXIF_DATE_TAGS = (
    "EXIF DateTimeOriginal",
    "EXIF DateTimeDigitized",
    "Image DateTime",
)
EXIF_DATE_FORMATS = ("%Y:%m:%d %H:%M:%S", "%Y-%m-%d %H:%M:%S")

# Year-month(-day) stamp found in camera and export tool file names
FILENAME_DATE_PATTERN = re.compile(r"(?P<y>20[012]\d)-?(?P<m>[01]\d)-?(?P<d>\d{2})")

# Appended to the file stem when both conflicting files are kept
ALTERNATE_SUFFIX = "_new"

_console: Optional[Console] = None


def get_console() -> Console:
    """Return the console shared by logging and operator prompts."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def get_logger(name: str = PROGRAM) -> logging.Logger:
    """Return the program logger or one of its children."""
    return logging.getLogger(name)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a rich console handler to the program logger (once)."""
    logger = get_logger()
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    for handler in logger.handlers:
        if isinstance(handler, RichHandler):
            handler.setLevel(level)
            return logger

    handler = RichHandler(console=get_console(), rich_tracebacks=True, show_path=False)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    return logger


def check_tool_availability(cmd: str, version_flag: str = "-h") -> bool:
    """Check whether an external command can be executed."""
    try:
        subprocess.run([cmd, version_flag], capture_output=True, check=True)
        return True
    except (FileNotFoundError, PermissionError, subprocess.CalledProcessError):
        return False


ffprobe_available = check_tool_availability("ffprobe", "-version")
