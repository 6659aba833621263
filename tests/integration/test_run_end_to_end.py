from __future__ import annotations

import json
from pathlib import Path

import pytest

from qreconcile.cli.__main__ import main as cli_main

"""End-to-end run: one CSV and one XLSX export through the CLI."""


def test_run_reconciles_csv_and_xlsx(write_config, response_xlsx, temp_workdir: Path, capsys):
    (temp_workdir / "responses" / "april.csv").write_text(
        "Timestamp,Email Address,What's your budget range,Do you need parking,Do you need parking?\n"
        "2024/04/01,cy@example.com,800k,yes,\n"
        "2024/04/02,dee@example.com,,,no\n",
        encoding="utf-8",
    )

    code = cli_main([])
    out = capsys.readouterr().out

    assert code == 0
    assert (
        "SUMMARY files=2/2 success=2 failed=0 exact=3 partial=1 missing=2 new=2 duplicates=1"
        in out
    )

    report = json.loads((temp_workdir / "reports" / "april.csv.reconcile.json").read_text(encoding="utf-8"))
    budget, bedrooms, parking = report["reconciliation"]["matches"]
    assert budget["match_kind"] == "partial"
    assert budget["matched_header_text"] == "What's your budget range"
    assert budget["similarity"] == pytest.approx(0.92)
    assert bedrooms["match_kind"] == "none"
    assert parking == {
        "canonical_id": "q3",
        "canonical_text": "Do you need parking?",
        "section_title": "Home",
        "match_kind": "exact",
        "matched_header_text": "Do you need parking",
        "matched_column_index": 3,
    }
    assert report["reconciliation"]["unmatched"] == [
        {"header_text": "Do you need parking?", "column_index": 4}
    ]
    assert report["reconciliation"]["duplicate_groups"] == [
        {
            "normalized_text": "do you need parking",
            "headers": ["Do you need parking", "Do you need parking?"],
            "column_indexes": [3, 4],
        }
    ]
    assert [r["completeness"] for r in report["respondents"]] == [67, 33]
    assert report["completeness"]["average_completeness"] == 50
