from __future__ import annotations

import json
from pathlib import Path

from qreconcile.logging.error_log import ErrorLogBuffer
from qreconcile.models.error_record import ErrorRecord


def test_error_record_json_line_has_fixed_keys():
    rec = ErrorRecord.create("march.csv", "READ_ERROR", "empty file: march.csv")
    data = json.loads(rec.to_json_line())
    assert set(data) == {"timestamp", "file", "error_type", "message"}
    assert data["timestamp"].endswith("Z")


def test_flush_without_records_creates_nothing(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_flush_appends_json_lines(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path / "logs")
    buf.append(ErrorRecord.create("a.csv", "READ_ERROR", "x"))
    buf.append(ErrorRecord.create("b.xlsx", "HEADER_ERROR", "ü"))
    assert len(buf) == 2
    path = buf.flush()
    assert path is not None and path.name.startswith("errors-") and path.suffix == ".log"
    assert len(buf) == 0
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["file"] for line in lines] == ["a.csv", "b.xlsx"]
    assert "ü" in lines[1]

    buf.append(ErrorRecord.create("c.csv", "READ_ERROR", "y"))
    assert buf.flush() == path
    assert len(path.read_text(encoding="utf-8").splitlines()) == 3
