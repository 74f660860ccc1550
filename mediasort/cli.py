"""
Command-line interface for mediasort.
"""

import argparse
import sys
import zoneinfo
from pathlib import Path
from typing import List, Optional, Tuple

from rich.console import Console

from .config import Config
from .constants import PROGRAM, get_console
from .core import MediaSorter
from .errors import ConfigurationError
from .models import ConflictMode, RunMode


def create_parser(config: Config) -> argparse.ArgumentParser:
    """Create argument parser with dynamic defaults from config."""
    target = config.get_target()
    conflict_mode = config.get_conflict_mode()
    timezone = config.get_timezone()

    target_help = "Target directory for the year/month tree (must exist)"
    timezone_help = "Timezone video creation times are converted to"
    if target:
        target_help += f" (default: {target})"
    if timezone:
        timezone_help += f" (default: {timezone})"
    else:
        timezone_help += " (default: system local time)"

    parser = argparse.ArgumentParser(
        prog=PROGRAM,
        description="Sort photos and videos into a target/year/month folder structure",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  {PROGRAM} ~/Downloads/Photos --target ~/Pictures/Sorted
  {PROGRAM} --dry-run --target ~/Pictures/Sorted
  {PROGRAM} --copy -k both -t ~/Pictures/Sorted ~/Desktop/NewPhotos
        """
    )

    parser.add_argument(
        "source", nargs="?", default=".",
        help="Source directory containing media to sort (default: current directory)"
    )
    parser.add_argument(
        "--target", "-t", default=target,
        help=target_help
    )

    modes = parser.add_mutually_exclusive_group()
    modes.add_argument(
        "--dry-run", "-d", dest="run_mode", action="store_const", const=RunMode.DRY_RUN,
        help="Report intended actions without changing any files"
    )
    modes.add_argument(
        "--copy", "-c", dest="run_mode", action="store_const", const=RunMode.COPY,
        help="Copy files into the target tree"
    )
    modes.add_argument(
        "--move", "-m", dest="run_mode", action="store_const", const=RunMode.MOVE,
        help="Move files into the target tree (default)"
    )

    parser.add_argument(
        "--conflict-mode", "-k", default=conflict_mode,
        choices=[mode.value for mode in ConflictMode],
        help="How to resolve a different file with the same name at the target: "
             "choose interactively, keep the source, keep the target, or keep both "
             f"(default: {conflict_mode})"
    )
    parser.add_argument(
        "--file-creation-fallback", "-s", action="store_true",
        default=config.get_file_creation_fallback(),
        help="Use the filesystem timestamp without asking when no better date is found"
    )
    parser.add_argument(
        "--delete-skipped-source-duplicates", "-q", dest="delete_skipped_duplicates",
        action="store_true", default=config.get_delete_skipped_duplicates(),
        help="Delete source files that are skipped because of a file at the target"
    )
    parser.add_argument(
        "--include-unsupported-file-types", "-u", dest="include_unsupported",
        action="store_true", default=config.get_include_unsupported(),
        help="Also sort files that are neither supported images nor videos"
    )
    parser.add_argument(
        "--timezone", "--tz", type=str, metavar="TIMEZONE", default=timezone,
        help=timezone_help
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--version", "-V", action="store_true",
        help=f"Display the version number of {PROGRAM} and exit"
    )

    return parser


def validate_paths(source_arg: str, target_arg: Optional[str]) -> Tuple[Path, Path]:
    """Resolve source and target folders, raising ConfigurationError if unusable."""
    if not target_arg:
        raise ConfigurationError("No target folder supplied.")

    source = Path(source_arg).expanduser().resolve()
    target = Path(target_arg).expanduser().resolve()

    if not source.is_dir():
        raise ConfigurationError(f"Source directory does not exist: {source}")
    if not target.is_dir():
        raise ConfigurationError(
            "Target folder does not exists or you are missing the required permissions.")
    return source, target


def validate_timezone(timezone: Optional[str]) -> Optional[str]:
    if not timezone:
        return None
    try:
        zoneinfo.ZoneInfo(timezone)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Unknown timezone: {timezone}") from e
    return timezone


def validate_conflict_mode(value: str) -> ConflictMode:
    try:
        return ConflictMode(value)
    except ValueError as e:
        choices = ", ".join(mode.value for mode in ConflictMode)
        raise ConfigurationError(f"Unknown conflict mode {value!r} (choose from {choices})") from e


def show_processing_plan(source: Path, target: Path, run_mode: RunMode,
                         args: argparse.Namespace, console: Console) -> None:
    """Display the processing plan before execution."""
    console.print("\n[bold]Processing Plan:[/bold]")
    console.print(f"  Source:          [blue]{source}[/blue]")
    console.print(f"  Target:          [blue]{target}[/blue]")
    console.print(f"  Processing Mode: [cyan]{run_mode.name.replace('_', ' ')}[/cyan]")
    console.print(f"  Conflict Mode:   [cyan]{args.conflict_mode}[/cyan]")
    console.print(f"  Date Fallback:   [cyan]"
                  f"{'filesystem timestamp' if args.file_creation_fallback else 'ask'}[/cyan]")
    if args.delete_skipped_duplicates:
        console.print("  Delete Skipped:  [cyan]Yes[/cyan]")
    if args.include_unsupported:
        console.print("  Unsupported:     [cyan]Included[/cyan]")
    if args.timezone:
        console.print(f"  Timezone:        [cyan]{args.timezone}[/cyan]")
    console.print()


def main(argv: Optional[List[str]] = None, config_path: Optional[Path] = None) -> int:
    """Main entry point.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])
        config_path: Optional path to config file (for testing)
    """
    config = Config(config_path=config_path)
    parser = create_parser(config)
    args = parser.parse_args(argv)

    if args.version:
        from . import __version__, __copyright__
        if args.verbose:
            print(f"{PROGRAM} version {__version__} {__copyright__}")
            print(f"Config:  {config.config_path}")
            return 0
        print(__version__)
        return 0

    console = get_console()
    run_mode = args.run_mode or RunMode.MOVE

    try:
        source, target = validate_paths(args.source, args.target)
        timezone = validate_timezone(args.timezone)
        conflict_mode = validate_conflict_mode(args.conflict_mode)
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    show_processing_plan(source, target, run_mode, args, console)

    sorter = MediaSorter(
        source=source,
        target=target,
        run_mode=run_mode,
        conflict_mode=conflict_mode,
        file_creation_fallback=args.file_creation_fallback,
        delete_skipped_duplicates=args.delete_skipped_duplicates,
        include_unsupported=args.include_unsupported,
        timezone=timezone,
        verbose=args.verbose,
    )

    try:
        sorter.run()
    except KeyboardInterrupt:
        console.print("\n[red]Operation cancelled by user[/red]")
        return 1
    except EOFError:
        console.print("\n[red]Input closed while waiting for an answer; run interactively "
                      "or pass --file-creation-fallback and --conflict-mode[/red]")
        return 1

    sorter.print_summary()
    console.print("\n[green]✓ Processing completed![/green]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
