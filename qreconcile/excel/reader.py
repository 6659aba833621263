from __future__ import annotations

import zipfile
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.question import CanonicalQuestion, ImportedColumn

"""Spreadsheet readers for questionnaire response exports and question banks.

Response exports (Google Forms style): row 1 = header (one question per
column), rows 2.. = one respondent each. The sheet is read with header=None
and the header applied by hand so duplicate column names survive (pandas
would otherwise rename them "X.1").

Question banks: columns section / question / order (+ optional id).
"""

__all__ = [
    "ResponseFileError",
    "SheetHeaderError",
    "MissingColumnsError",
    "ResponseSheet",
    "DEFAULT_STANDARD_COLUMNS",
    "SUPPORTED_SUFFIXES",
    "read_raw_frame",
    "read_response_file",
    "read_question_bank",
]

SUPPORTED_SUFFIXES = (".csv", ".xlsx")

# Columns every export carries that are not questions (compared lower-cased)
DEFAULT_STANDARD_COLUMNS = ("timestamp", "email", "email address", "name")

QUESTION_BANK_COLUMNS = ("section", "question", "order")


class ResponseFileError(Exception):
    """Raised when a file cannot be read as a spreadsheet."""

class SheetHeaderError(Exception):
    """Raised when the header row is missing or empty."""

class MissingColumnsError(Exception):
    """Raised when required columns are missing in the sheet header."""


def _standard_set(standard_columns: Iterable[str] | None) -> set[str]:
    cols = DEFAULT_STANDARD_COLUMNS if standard_columns is None else standard_columns
    return {c.strip().lower() for c in cols}


def _clean_cell(val: Any) -> Any:
    if val is None:
        return None
    if isinstance(val, str):
        stripped = val.strip()
        return stripped if stripped else None
    if pd.isna(val):
        return None
    return val


@dataclass
class ResponseSheet:
    source_name: str
    columns: list[str]
    rows: list[list[Any]]  # aligned with columns; blank cells are None

    def column_values(self, index: int) -> tuple[Any, ...]:
        return tuple(row[index] if index < len(row) else None for row in self.rows)

    def is_standard(self, header: str, standard_columns: Iterable[str] | None = None) -> bool:
        return header.strip().lower() in _standard_set(standard_columns)

    def question_columns(self, standard_columns: Iterable[str] | None = None) -> list[str]:
        standard = _standard_set(standard_columns)
        return [c for c in self.columns if c.strip().lower() not in standard]

    def to_imported_columns(
        self, standard_columns: Iterable[str] | None = None
    ) -> list[ImportedColumn]:
        """Question columns as ImportedColumn (standard columns filtered out)."""
        standard = _standard_set(standard_columns)
        return [
            ImportedColumn(header_text=header, row_values=self.column_values(i), column_index=i)
            for i, header in enumerate(self.columns)
            if header.strip().lower() not in standard
        ]


def read_raw_frame(path: Path) -> pd.DataFrame:
    """Read a .csv / .xlsx file without header interpretation.

    Raises:
        ResponseFileError: unsupported suffix, empty or unreadable file
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ResponseFileError(f"unsupported file type: {path.name}")
    try:
        if suffix == ".csv":
            # keep "NA"/"None" answers as text; BOM from Excel exports stripped
            return pd.read_csv(
                path,
                header=None,
                dtype=str,
                keep_default_na=False,
                encoding="utf-8-sig",
                skip_blank_lines=True,
            )
        return pd.read_excel(path, header=None, dtype=object)
    except pd.errors.EmptyDataError as e:
        raise ResponseFileError(f"empty file: {path.name}") from e
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        raise ResponseFileError(f"cannot read {path.name}: {e}") from e


def _split_header(df: pd.DataFrame, name: str) -> tuple[list[str], list[list[Any]]]:
    if df.shape[0] < 1:
        raise SheetHeaderError(f"sheet '{name}' has no header row")
    header = [_clean_cell(c) for c in df.iloc[0].tolist()]
    if all(h is None for h in header):
        raise SheetHeaderError(f"sheet '{name}' has an empty header row")
    columns = ["" if h is None else str(h) for h in header]
    rows: list[list[Any]] = []
    for _, raw in df.iloc[1:].iterrows():
        cells = [_clean_cell(v) for v in raw.tolist()]
        if all(v is None for v in cells):
            continue
        rows.append(cells)
    return columns, rows


def read_response_file(path: Path) -> ResponseSheet:
    """Read one response export into a ResponseSheet."""
    df = read_raw_frame(path)
    columns, rows = _split_header(df, path.name)
    return ResponseSheet(source_name=path.name, columns=columns, rows=rows)


def _parse_order(val: Any) -> int:
    try:
        return int(float(val))
    except (TypeError, ValueError):
        return 0


def read_question_bank(path: Path) -> list[CanonicalQuestion]:
    """Read a question bank file into CanonicalQuestion list (file order).

    Rows without section or question are skipped. A missing `id` column or a
    blank id cell gives q<position> over the kept rows, skipping ids the file
    already uses.
    """
    df = read_raw_frame(path)
    columns, rows = _split_header(df, path.name)
    lookup = {c.strip().lower(): i for i, c in enumerate(columns)}
    missing = [c for c in QUESTION_BANK_COLUMNS if c not in lookup]
    if missing:
        raise MissingColumnsError(f"question bank '{path.name}' missing columns: {missing}")

    def cell(row: list[Any], key: str) -> Any:
        i = lookup.get(key)
        return row[i] if i is not None and i < len(row) else None

    kept = []
    for row in rows:
        section = cell(row, "section")
        text = cell(row, "question")
        if section is None or text is None:
            continue
        kept.append((section, text, cell(row, "id"), cell(row, "order")))

    # generated ids never reuse an explicit id from the file
    taken = {str(raw_id) for _, _, raw_id, _ in kept if raw_id is not None}
    questions: list[CanonicalQuestion] = []
    for position, (section, text, raw_id, order) in enumerate(kept, start=1):
        if raw_id is not None:
            qid = str(raw_id)
        else:
            n = position
            while f"q{n}" in taken:
                n += 1
            qid = f"q{n}"
            taken.add(qid)
        questions.append(
            CanonicalQuestion(
                id=qid,
                text=str(text),
                section_title=str(section),
                order=_parse_order(order),
            )
        )
    return questions
