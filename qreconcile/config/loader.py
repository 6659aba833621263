from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..excel.reader import DEFAULT_STANDARD_COLUMNS
from ..services.completeness import DEFAULT_EMAIL_COLUMNS
from ..services.matcher import PARTIAL_MATCH_THRESHOLD

"""Config loader.

Responsibilities:
- Load YAML (config/reconcile.yml by default)
- Validate against the packaged config_schema.json
- Apply defaults (threshold 0.8, standard/email columns, ./reports)
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/reconcile.yml")
DEFAULT_REPORT_DIRECTORY = "./reports"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class DatabaseConfig:
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None


@dataclass(frozen=True)
class ReconcileConfig:
    source_directory: str
    question_bank: str | None = None  # file source, takes precedence over owner_id
    owner_id: str | None = None  # database source
    similarity_threshold: float = PARTIAL_MATCH_THRESHOLD
    standard_columns: tuple[str, ...] = DEFAULT_STANDARD_COLUMNS
    email_columns: tuple[str, ...] = DEFAULT_EMAIL_COLUMNS
    confirmed_matches: tuple[tuple[str, str], ...] = ()  # (canonical, imported)
    report_directory: str | None = DEFAULT_REPORT_DIRECTORY
    database: DatabaseConfig = field(default_factory=DatabaseConfig)


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / invalid, or data fails validation
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ReconcileConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    db_raw = data.get("database") or {}
    db = DatabaseConfig(
        host=db_raw.get("host"),
        port=db_raw.get("port"),
        user=db_raw.get("user"),
        password=db_raw.get("password"),
        database=db_raw.get("database"),
        dsn=db_raw.get("dsn"),
    )
    return ReconcileConfig(
        source_directory=data["source_directory"],
        question_bank=data.get("question_bank"),
        owner_id=data.get("owner_id"),
        similarity_threshold=float(data.get("similarity_threshold", PARTIAL_MATCH_THRESHOLD)),
        standard_columns=tuple(data.get("standard_columns", DEFAULT_STANDARD_COLUMNS)),
        email_columns=tuple(data.get("email_columns", DEFAULT_EMAIL_COLUMNS)),
        confirmed_matches=tuple(
            (m["canonical"], m["imported"]) for m in data.get("confirmed_matches", [])
        ),
        report_directory=data.get("report_directory", DEFAULT_REPORT_DIRECTORY),
        database=db,
    )
