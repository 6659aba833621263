from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Batch processing result models (one reconcile run per response file)."""


@dataclass(frozen=True)
class FileStat:
    """Per-file outcome. Counts are 0 for failed files."""
    file_name: str
    status: str  # success/failed
    exact: int = 0
    partial: int = 0
    missing: int = 0  # canonical questions without a column
    new: int = 0  # columns without a canonical question
    duplicates: int = 0  # duplicate header groups
    respondents: int = 0
    report_path: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    success_files: int
    failed_files: int
    total_canonical: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None
    error_log_path: str | None = None

    def _sum(self, attr: str) -> int:
        return sum(getattr(s, attr) for s in self.file_stats or [])

    @property
    def total_exact(self) -> int:
        return self._sum("exact")

    @property
    def total_partial(self) -> int:
        return self._sum("partial")

    @property
    def total_missing(self) -> int:
        return self._sum("missing")

    @property
    def total_new(self) -> int:
        return self._sum("new")

    @property
    def total_duplicates(self) -> int:
        return self._sum("duplicates")
