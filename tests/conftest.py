# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pandas as pd
import pytest

from qreconcile.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "responses").mkdir()
        monkeypatch.chdir(p)
        # keep a developer's .env / DATABASE_URL out of the tests
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("PGDSN", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./responses
question_bank: ./config/questions.csv
similarity_threshold: 0.8
standard_columns: [timestamp, email, email address, name]
email_columns: [Email Address]
confirmed_matches:
  - canonical: "How many bedrooms do you need?"
    imported: "Bedroom count"
report_directory: ./reports
database:
  host: localhost
  port: 5432
  user: appuser
  password: secret
  database: appdb
"""


@pytest.fixture()
def sample_question_bank_csv() -> str:
    return (
        "section,question,order\n"
        "Budget,What is your budget range?,1\n"
        "Home,How many bedrooms do you need?,1\n"
        "Home,Do you need parking?,2\n"
    )


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str, sample_question_bank_csv: str) -> Path:
    cfg = temp_workdir / "config" / "reconcile.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    (temp_workdir / "config" / "questions.csv").write_text(sample_question_bank_csv, encoding="utf-8")
    return cfg


def write_xlsx(path: Path, rows: list[list[object]], sheet: str = "Form Responses 1") -> Path:
    with pd.ExcelWriter(path) as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def response_rows() -> list[list[object]]:
    return [
        ["Timestamp", "Email Address", "What is your Budget Range?", "Bedroom count", "Full Name"],
        ["2024/03/01 10:00", "ann@example.com", "500k-600k", "3", "Ann"],
        ["2024/03/02 11:30", "bob@example.com", "", "2", None],
        ["2024/03/03 09:15", None, "1M", "4", "Anonymous"],
    ]


@pytest.fixture()
def response_xlsx(temp_workdir: Path, response_rows) -> Path:
    return write_xlsx(temp_workdir / "responses" / "march.xlsx", response_rows)


@pytest.fixture()
def make_xlsx():
    return write_xlsx
