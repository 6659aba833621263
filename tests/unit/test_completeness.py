from __future__ import annotations

from pathlib import Path

import pytest

from qreconcile.excel.reader import ResponseSheet, read_response_file
from qreconcile.services.completeness import (
    RespondentCompleteness,
    analyze_columns,
    analyze_respondents,
    summarize_completeness,
)


@pytest.fixture()
def sheet(response_xlsx: Path) -> ResponseSheet:
    return read_response_file(response_xlsx)


def test_analyze_columns(sheet: ResponseSheet):
    analysis = analyze_columns(sheet)
    assert analysis.total_columns == 5
    assert analysis.standard_columns == ["Timestamp", "Email Address"]
    assert analysis.question_columns == 3
    assert analysis.empty_columns == []
    assert analysis.duplicate_questions == []


def test_analyze_columns_empty_and_duplicate_questions():
    sheet = ResponseSheet(
        source_name="x.csv",
        columns=["Email", "Budget?", "budget", "Never answered"],
        rows=[["a@example.com", "1M", None, None], ["b@example.com", None, "2M", None]],
    )
    analysis = analyze_columns(sheet)
    assert analysis.empty_columns == ["Never answered"]
    assert analysis.duplicate_questions == ["Budget?"]


def test_analyze_respondents(sheet: ResponseSheet):
    respondents = analyze_respondents(sheet)
    # third data row has no email and is left out
    assert respondents == [
        RespondentCompleteness(2, "ann@example.com", 3, 3, 100, 0),
        RespondentCompleteness(3, "bob@example.com", 1, 3, 33, 2),
    ]


def test_analyze_respondents_email_column_fallback():
    sheet = ResponseSheet(
        source_name="x.csv",
        columns=["email", "Email Address", "Q1"],
        rows=[[None, "late@example.com", "yes"], ["first@example.com", "x@example.com", None]],
    )
    respondents = analyze_respondents(sheet, email_columns=("Email Address", "email"))
    assert [r.email for r in respondents] == ["late@example.com", "x@example.com"]
    assert respondents[1].completeness == 0


def test_analyze_respondents_without_question_columns():
    sheet = ResponseSheet(source_name="x.csv", columns=["Email"], rows=[["a@example.com"]])
    (only,) = analyze_respondents(sheet)
    assert only.total_questions == 0
    assert only.completeness == 0


def test_summarize_completeness_rounds_half_up(sheet: ResponseSheet):
    summary = summarize_completeness(analyze_respondents(sheet))
    assert summary.total_respondents == 2
    assert summary.average_completeness == 67  # (100 + 33) / 2 = 66.5
    assert summary.fully_complete == 1
    assert summary.partially_complete == 1
    assert summary.no_responses == 0


def test_summarize_completeness_empty():
    summary = summarize_completeness([])
    assert summary.total_respondents == 0
    assert summary.average_completeness == 0
