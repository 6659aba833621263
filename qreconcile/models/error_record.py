from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the per-run error log (JSON Lines, fixed keys)."""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """One failed response file.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: response file name
        error_type: UPPER_SNAKE_CASE classification (e.g. READ_ERROR)
        message: human readable reason
    """
    timestamp: str
    file: str
    error_type: str
    message: str

    @staticmethod
    def create(file: str, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(timestamp=ts, file=file, error_type=error_type, message=message)

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
