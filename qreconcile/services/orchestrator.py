from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..config.loader import ReconcileConfig
from ..excel.reader import (
    SUPPORTED_SUFFIXES,
    ResponseFileError,
    ResponseSheet,
    SheetHeaderError,
    read_response_file,
)
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.processing_result import FileStat, ProcessingResult
from ..models.question import CanonicalQuestion, ReconciliationReport
from .completeness import (
    ColumnAnalysis,
    CompletenessSummary,
    RespondentCompleteness,
    analyze_columns,
    analyze_respondents,
    summarize_completeness,
)
from .matcher import reconcile
from .progress import ProgressTracker

"""Batch orchestration: reconcile every response export in a directory.

Each file is independent: a file that cannot be read is recorded as failed
(error log + FileStat) and the run continues with the next one. The question
bank is loaded once by the caller and shared read-only across files.
"""

logger = logging.getLogger(__name__)

REPORT_SUFFIX = ".reconcile.json"


class ProcessingError(Exception):
    """Fatal error that stops the whole run."""


@dataclass(frozen=True)
class SheetReport:
    """Everything computed for one response sheet."""
    source_name: str
    reconciliation: ReconciliationReport
    columns: ColumnAnalysis
    respondents: list[RespondentCompleteness]
    completeness: CompletenessSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source_name,
            "reconciliation": self.reconciliation.to_dict(),
            "column_analysis": self.columns.to_dict(),
            "respondents": [r.to_dict() for r in self.respondents],
            "completeness": self.completeness.to_dict(),
        }


def scan_response_files(directory: Path) -> list[Path]:
    """Non-recursive .csv / .xlsx scan, sorted by name.

    Raises:
        ProcessingError: directory missing, not a directory, or unreadable
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES),
            key=lambda p: p.name,
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def build_sheet_report(
    sheet: ResponseSheet, canonical: Sequence[CanonicalQuestion], config: ReconcileConfig
) -> SheetReport:
    imported = sheet.to_imported_columns(config.standard_columns)
    report = reconcile(
        canonical,
        imported,
        config.confirmed_matches,
        threshold=config.similarity_threshold,
    )
    respondents = analyze_respondents(sheet, config.standard_columns, config.email_columns)
    return SheetReport(
        source_name=sheet.source_name,
        reconciliation=report,
        columns=analyze_columns(sheet, config.standard_columns),
        respondents=respondents,
        completeness=summarize_completeness(respondents),
    )


def write_sheet_report(sheet_report: SheetReport, directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    # march.csv -> march.csv.reconcile.json
    target = directory / f"{Path(sheet_report.source_name).name}{REPORT_SUFFIX}"
    target.write_text(
        json.dumps(sheet_report.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8"
    )
    return target


def process_all(
    config: ReconcileConfig, canonical: Sequence[CanonicalQuestion]
) -> ProcessingResult:
    """Reconcile each response file of config.source_directory against `canonical`.

    Raises:
        ProcessingError: when the source directory cannot be scanned
    """
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer()
    file_paths = scan_response_files(Path(config.source_directory))
    report_dir = Path(config.report_directory) if config.report_directory else None

    file_stats: list[FileStat] = []
    with ProgressTracker(len(file_paths)) as progress:
        for path in file_paths:
            progress.start_file(path)
            try:
                sheet = read_response_file(path)
            except (ResponseFileError, SheetHeaderError) as e:
                error_type = "HEADER_ERROR" if isinstance(e, SheetHeaderError) else "READ_ERROR"
                logger.warning(f"{path.name}: {e}")
                error_log.append(ErrorRecord.create(path.name, error_type, str(e)))
                file_stats.append(FileStat(file_name=path.name, status="failed", error=str(e)))
                progress.finish_file(status="failed")
                continue

            sheet_report = build_sheet_report(sheet, canonical, config)
            try:
                report_path = write_sheet_report(sheet_report, report_dir) if report_dir else None
            except OSError as e:
                logger.warning(f"{path.name}: cannot write report: {e}")
                error_log.append(ErrorRecord.create(path.name, "WRITE_ERROR", str(e)))
                file_stats.append(FileStat(file_name=path.name, status="failed", error=str(e)))
                progress.finish_file(status="failed")
                continue
            rec = sheet_report.reconciliation
            stat = FileStat(
                file_name=path.name,
                status="success",
                exact=len(rec.exact_matches),
                partial=len(rec.partial_matches),
                missing=len(rec.missing_in_import),
                new=len(rec.unmatched),
                duplicates=len(rec.duplicate_groups),
                respondents=sheet_report.completeness.total_respondents,
                report_path=str(report_path) if report_path else None,
            )
            file_stats.append(stat)
            logger.info(
                f"{path.name}: exact={stat.exact} partial={stat.partial} "
                f"missing={stat.missing} new={stat.new} duplicates={stat.duplicates}"
            )
            progress.finish_file(status="ok")

    error_log_path = error_log.flush()
    end_time = datetime.now(UTC)
    success = sum(1 for s in file_stats if s.status == "success")
    return ProcessingResult(
        success_files=success,
        failed_files=len(file_stats) - success,
        total_canonical=len(canonical),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
        error_log_path=str(error_log_path) if error_log_path else None,
    )
