"""
Core media sorting: one file at a time from source tree to target/year/month.
"""

from pathlib import Path
from typing import List, Optional, Set

from rich.table import Table
from rich.text import Text

from .constants import configure_logging, get_console
from .dates import DateResolver
from .errors import MediaSortError
from .file_operations import Relocator
from .models import SKIP_FILE, ConflictMode, MediaFile, Place, RunMode
from .placement import PlacementResolver
from .prompts import ConsolePrompter, DecisionProvider
from .stats import StatsManager
from .timestamps import MetadataReader


class MediaSorter:
    """Main class for sorting photos and videos."""

    def __init__(self, source: Path, target: Path,
                 run_mode: RunMode = RunMode.MOVE,
                 conflict_mode: ConflictMode = ConflictMode.CHOOSE,
                 file_creation_fallback: bool = False,
                 delete_skipped_duplicates: bool = False,
                 include_unsupported: bool = False,
                 timezone: Optional[str] = None,
                 verbose: bool = False,
                 prompter: Optional[DecisionProvider] = None,
                 metadata_reader: Optional[MetadataReader] = None):
        self.source = source
        self.target = target
        self.run_mode = run_mode
        self.include_unsupported = include_unsupported
        self.stats_manager = StatsManager()

        self.console = get_console()
        self.logger = configure_logging(verbose)

        prompter = prompter or ConsolePrompter(self.console)
        self.file_ops = Relocator(run_mode=run_mode,
                                  delete_skipped_duplicates=delete_skipped_duplicates)
        self.date_resolver = DateResolver(
            metadata_reader=metadata_reader or MetadataReader(timezone=timezone),
            file_ops=self.file_ops, prompter=prompter,
            file_creation_fallback=file_creation_fallback)
        self.placement_resolver = PlacementResolver(
            target_root=target, conflict_mode=conflict_mode,
            file_ops=self.file_ops, prompter=prompter)

        self.logger.debug(f"Starting session: {self.source} -> {self.target}")
        self.logger.debug(f"Mode: {run_mode.name}, conflicts: {conflict_mode.value}")

    def find_source_files(self) -> List[Path]:
        """Recursively list every regular file below the source folder."""
        return sorted(p for p in self.source.rglob("*") if p.is_file())

    def process_files(self, files: List[Path]) -> None:
        """Process files sequentially; per-file failures never stop the run."""
        known_parents: Set[Path] = set()
        for file_path in files:
            try:
                self.process_file(file_path, known_parents)
            except MediaSortError as e:
                self.logger.error(f"Error in {file_path}: {e}")
                self.stats_manager.increment_errors()

    def process_file(self, file_path: Path, known_parents: Set[Path]) -> Optional[Path]:
        """Sort a single file. Returns its destination, or None if it was not placed."""
        media_file = MediaFile.from_path(file_path)
        if not media_file.is_supported and not self.include_unsupported:
            self.logger.debug(f"File {file_path} is not a supported file type")
            self.stats_manager.increment_unsupported()
            return None

        self.console.rule(Text(str(file_path)), style="dim")

        creation_date = self.date_resolver.resolve(media_file)
        if creation_date is SKIP_FILE:
            self.logger.info(f"Skipped {file_path} (skipped by operator)")
            self.stats_manager.increment_operator_skips()
            return None

        outcome = self.placement_resolver.resolve(file_path, creation_date)
        if not isinstance(outcome, Place):
            self.logger.info(f"Skipped {file_path} ({outcome.reason.value})")
            self.stats_manager.record_skip(outcome.reason)
            if self.file_ops.discard_skipped(file_path, outcome):
                self.stats_manager.increment_deleted_sources()
            return None

        file_size = self.file_ops.file_size(file_path)
        self.file_ops.relocate(file_path, outcome.destination, known_parents)
        self.stats_manager.record_placed(media_file.kind, file_size)
        return outcome.destination

    def run(self) -> None:
        files = self.find_source_files()
        self.logger.info(f"Found {len(files)} files in {self.source}")
        self.process_files(files)

    def print_summary(self) -> None:
        """Print processing summary."""
        title = "Processing Summary"
        if self.run_mode is RunMode.DRY_RUN:
            title += " (dry run)"
        table = Table(title=title)
        table.add_column("Category", style="cyan")
        table.add_column("Count", style="green")

        stats = self.stats_manager
        table.add_row("Images", str(stats.get('images')))
        table.add_row("Videos", str(stats.get('videos')))
        if stats.get('other'):
            table.add_row("Other Files", str(stats.get('other')))
        table.add_row("Duplicates Skipped", str(stats.get('duplicates')))
        table.add_row("Conflicts Skipped", str(stats.get('conflicts_skipped')))
        table.add_row("Skipped by Operator", str(stats.get('operator_skips')))
        table.add_row("Skipped Sources Deleted", str(stats.get('deleted_sources')))
        table.add_row("Unsupported", str(stats.get('unsupported')))
        table.add_row("Errors", str(stats.get('errors')))

        size_mb = stats.get_total_size_mb()
        if size_mb > 1024:
            size_str = f"{size_mb/1024:.1f} GB"
        else:
            size_str = f"{size_mb:.1f} MB"
        table.add_row("Total Size", size_str)

        self.console.print(table)

        if stats.has_errors():
            self.console.print(f"\n[red]{stats.get('errors')} files could not be sorted; "
                               f"see the errors above[/red]")
