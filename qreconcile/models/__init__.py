"""Domain models for questionnaire reconciliation.

Engine inputs/outputs live in `question`, batch run bookkeeping in
`processing_result` and `error_record`.
"""

from .error_record import ErrorRecord
from .processing_result import FileStat, ProcessingResult
from .question import (
    CanonicalQuestion,
    DuplicateGroup,
    ImportedColumn,
    MatchKind,
    MatchRecord,
    ReconciliationReport,
    UnmatchedImportRecord,
)

__all__ = [
    # Engine models
    "CanonicalQuestion",
    "ImportedColumn",
    "MatchKind",
    "MatchRecord",
    "UnmatchedImportRecord",
    "DuplicateGroup",
    "ReconciliationReport",
    # Run models
    "ErrorRecord",
    "FileStat",
    "ProcessingResult",
]
