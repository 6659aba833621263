from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass
from typing import Any

from ..excel.reader import ResponseSheet
from ..text.duplicates import find_duplicates

"""Column and respondent completeness statistics for one response sheet.

These numbers use the cell values only (ImportedColumn.row_values), never the
matching result. Percentages are rounded half-up.
"""

__all__ = [
    "DEFAULT_EMAIL_COLUMNS",
    "ColumnAnalysis",
    "RespondentCompleteness",
    "CompletenessSummary",
    "analyze_columns",
    "analyze_respondents",
    "summarize_completeness",
]

DEFAULT_EMAIL_COLUMNS = ("Email Address", "email", "Email")

# data row i (0-based) is spreadsheet row i + 2 (row 1 = header)
_FIRST_DATA_ROW = 2


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _answered(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


@dataclass(frozen=True)
class ColumnAnalysis:
    total_columns: int
    standard_columns: list[str]
    question_columns: int
    empty_columns: list[str]  # question columns without a single answer
    duplicate_questions: list[str]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RespondentCompleteness:
    row_number: int
    email: str
    total_responses: int
    total_questions: int
    completeness: int  # percent
    missing_responses: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CompletenessSummary:
    total_respondents: int
    average_completeness: int
    fully_complete: int
    partially_complete: int
    no_responses: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def analyze_columns(
    sheet: ResponseSheet, standard_columns: Iterable[str] | None = None
) -> ColumnAnalysis:
    standard_columns = list(standard_columns) if standard_columns is not None else None
    imported = sheet.to_imported_columns(standard_columns)
    return ColumnAnalysis(
        total_columns=len(sheet.columns),
        standard_columns=[c for c in sheet.columns if sheet.is_standard(c, standard_columns)],
        question_columns=len(imported),
        empty_columns=[c.header_text for c in imported if c.is_empty],
        duplicate_questions=find_duplicates([c.header_text for c in imported]),
    )


def _email_of(sheet: ResponseSheet, row: Sequence[Any], email_columns: Sequence[str]) -> str | None:
    # first configured column present and filled wins
    for name in email_columns:
        for i, header in enumerate(sheet.columns):
            if header == name and i < len(row) and _answered(row[i]):
                return str(row[i]).strip()
    return None


def analyze_respondents(
    sheet: ResponseSheet,
    standard_columns: Iterable[str] | None = None,
    email_columns: Sequence[str] = DEFAULT_EMAIL_COLUMNS,
) -> list[RespondentCompleteness]:
    """One entry per data row that carries an email address."""
    standard_columns = list(standard_columns) if standard_columns is not None else None
    question_indexes = [
        i for i, c in enumerate(sheet.columns) if not sheet.is_standard(c, standard_columns)
    ]
    total_questions = len(question_indexes)
    results: list[RespondentCompleteness] = []
    for pos, row in enumerate(sheet.rows):
        email = _email_of(sheet, row, email_columns)
        if email is None:
            continue
        answered = sum(1 for i in question_indexes if i < len(row) and _answered(row[i]))
        pct = _round_half_up(answered / total_questions * 100) if total_questions else 0
        results.append(
            RespondentCompleteness(
                row_number=pos + _FIRST_DATA_ROW,
                email=email,
                total_responses=answered,
                total_questions=total_questions,
                completeness=pct,
                missing_responses=total_questions - answered,
            )
        )
    return results


def summarize_completeness(respondents: Sequence[RespondentCompleteness]) -> CompletenessSummary:
    total = len(respondents)
    average = _round_half_up(sum(r.completeness for r in respondents) / total) if total else 0
    return CompletenessSummary(
        total_respondents=total,
        average_completeness=average,
        fully_complete=sum(1 for r in respondents if r.completeness == 100),
        partially_complete=sum(1 for r in respondents if 0 < r.completeness < 100),
        no_responses=sum(1 for r in respondents if r.completeness == 0),
    )
