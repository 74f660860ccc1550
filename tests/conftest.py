"""
pytest configuration and fixtures for mediasort tests.
"""

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import pytest

from mediasort.core import MediaSorter
from mediasort.errors import MetadataError
from mediasort.prompts import DecisionProvider
from mediasort.timestamps import MetadataReader


@dataclass
class CliResult:
    """Result from running CLI command."""
    exit_code: int
    output: str
    error: str


class ScriptedPrompter(DecisionProvider):
    """Decision provider answering from a fixed script and recording what it showed."""

    def __init__(self, answers: Iterable[str] = ()):
        self.answers = list(answers)
        self.messages: List[str] = []

    def show(self, message: str) -> None:
        self.messages.append(message)

    def read(self) -> str:
        if not self.answers:
            raise AssertionError(f"Unexpected prompt; shown so far: {self.messages}")
        return self.answers.pop(0)

    @property
    def transcript(self) -> str:
        return "\n".join(self.messages)


class FakeMetadataReader(MetadataReader):
    """Metadata reader serving embedded dates by file name."""

    def __init__(self, image_dates: Optional[Dict[str, str]] = None,
                 video_dates: Optional[Dict[str, datetime]] = None,
                 timezone: Optional[str] = None):
        super().__init__(timezone=timezone)
        self.image_dates = image_dates or {}
        self.video_dates = video_dates or {}
        self.calls: List[Path] = []

    def read_image_date(self, path: Path) -> str:
        self.calls.append(path)
        if path.name not in self.image_dates:
            raise MetadataError("DateTime tag is missing.")
        return self.image_dates[path.name]

    def read_video_creation_time(self, path: Path) -> datetime:
        self.calls.append(path)
        if path.name not in self.video_dates:
            raise MetadataError("Can't read video creation date time.")
        return self.video_dates[path.name]


@pytest.fixture
def source_dir(tmp_path):
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture
def target_dir(tmp_path):
    path = tmp_path / "target"
    path.mkdir()
    return path


@pytest.fixture
def create_test_files():
    """Helper to create test files with specific properties."""

    def create_files(base: Path, file_specs: List[dict]) -> List[Path]:
        """Create test files based on specifications.

        Args:
            base: Directory the names are relative to
            file_specs: List of dicts with keys:
                - name: relative file name
                - content: file content (optional)
                - mtime: modification time as datetime (optional)

        Returns:
            Paths of the created files, in the given order
        """
        created = []
        for spec in file_specs:
            file_path = base / spec['name']
            file_path.parent.mkdir(parents=True, exist_ok=True)

            content = spec.get('content', b'test file content')
            if isinstance(content, str):
                file_path.write_text(content)
            else:
                file_path.write_bytes(content)

            if 'mtime' in spec:
                mtime = spec['mtime'].timestamp()
                os.utime(file_path, (mtime, mtime))

            created.append(file_path)

        return created

    return create_files


@pytest.fixture
def make_sorter(source_dir, target_dir):
    """Build a MediaSorter over source_dir/target_dir with scripted collaborators."""

    def build(answers: Iterable[str] = (), image_dates: Optional[Dict[str, str]] = None,
              video_dates: Optional[Dict[str, datetime]] = None, **options) -> MediaSorter:
        prompter = ScriptedPrompter(answers)
        reader = FakeMetadataReader(image_dates, video_dates, timezone=options.pop("timezone", None))
        return MediaSorter(source=source_dir, target=target_dir, prompter=prompter,
                           metadata_reader=reader, **options)

    return build


@pytest.fixture
def tree_snapshot():
    """Map of relative path -> bytes for every file below a folder."""

    def snapshot(*roots: Path) -> Dict[str, bytes]:
        files = {}
        for root in roots:
            for path in sorted(root.rglob("*")):
                if path.is_file():
                    files[str(path)] = path.read_bytes()
        return files

    return snapshot


@pytest.fixture
def cli_runner(capsys, tmp_path):
    """Create a CLI runner that captures output and uses a test config."""

    def run_cli(*args, config_path=None) -> CliResult:
        from mediasort.cli import main

        # Never pick up the user's own ~/.mediasort/config.yml
        config_path = config_path or tmp_path / "unused-config.yml"

        try:
            exit_code = main([str(a) for a in args], config_path=config_path)
        except SystemExit as e:
            exit_code = e.code if e.code is not None else 0

        captured = capsys.readouterr()
        return CliResult(exit_code=exit_code, output=captured.out, error=captured.err)

    return run_cli


@pytest.fixture
def test_config_path(tmp_path):
    """Config path that does not exist yet."""
    return tmp_path / "config" / "config.yml"
