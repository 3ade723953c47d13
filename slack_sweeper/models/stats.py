"""
Counters collected over a single sweep run.
"""

from dataclasses import dataclass


@dataclass
class SweepStats:
    """Tracks what a sweep found and what it actually did."""

    dry_run: bool = True
    pages_fetched: int = 0
    candidates_found: int = 0
    files_announced: int = 0
    files_downloaded: int = 0
    files_deleted: int = 0
    bytes_downloaded: int = 0
    files_skipped: int = 0
    aborted_by: str | None = None

    @property
    def aborted(self) -> bool:
        return self.aborted_by is not None
