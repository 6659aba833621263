from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering for a batch reconcile run."""


def _format_number(value: float) -> str:
    """Integers without decimal point, small floats without scientific notation."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY files={n}/{n} success={s} failed={f} exact={e} partial={p}
    missing={m} new={w} duplicates={d} elapsed_sec={x}

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=0, failed_files=0, total_canonical=3,
        ...     start_time=t, end_time=t, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(0, result)
        'SUMMARY files=0/0 success=0 failed=0 exact=0 partial=0 missing=0 new=0 duplicates=0 elapsed_sec=2'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"exact={result.total_exact} "
        f"partial={result.total_partial} "
        f"missing={result.total_missing} "
        f"new={result.total_new} "
        f"duplicates={result.total_duplicates} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)}"
    )
