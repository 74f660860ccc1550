"""
Statistics tracking for a sorting run.
"""

from typing import Dict

from .models import MediaKind, SkipReason


class StatsManager:
    """Encapsulates per-run counters reported in the summary table."""

    def __init__(self):
        self._stats = {
            'images': 0,
            'videos': 0,
            'other': 0,
            'duplicates': 0,
            'conflicts_skipped': 0,
            'operator_skips': 0,
            'deleted_sources': 0,
            'unsupported': 0,
            'errors': 0,
            'total_size': 0,
        }

    def record_placed(self, kind: MediaKind, file_size: int) -> None:
        """Record a file written to (or planned for) its destination."""
        if kind is MediaKind.IMAGE:
            self._stats['images'] += 1
        elif kind is MediaKind.VIDEO:
            self._stats['videos'] += 1
        else:
            self._stats['other'] += 1
        self._stats['total_size'] += file_size

    def record_skip(self, reason: SkipReason) -> None:
        if reason is SkipReason.DUPLICATE:
            self._stats['duplicates'] += 1
        elif reason in (SkipReason.KEEP_TARGET, SkipReason.OPERATOR):
            self._stats['conflicts_skipped'] += 1

    def increment_operator_skips(self) -> None:
        """A file skipped by the operator while resolving its date."""
        self._stats['operator_skips'] += 1

    def increment_deleted_sources(self) -> None:
        self._stats['deleted_sources'] += 1

    def increment_unsupported(self) -> None:
        self._stats['unsupported'] += 1

    def increment_errors(self) -> None:
        self._stats['errors'] += 1

    def get_stats(self) -> Dict[str, int]:
        """Get a copy of current statistics."""
        return self._stats.copy()

    def get_total_placed(self) -> int:
        return self._stats['images'] + self._stats['videos'] + self._stats['other']

    def get_total_size_mb(self) -> float:
        return self._stats['total_size'] / (1024 * 1024)

    def has_errors(self) -> bool:
        return self._stats['errors'] > 0

    def get(self, key: str) -> int:
        return self._stats[key]
