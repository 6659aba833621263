"""Questionnaire reconciliation: match imported response-sheet headers to a question bank."""

from .models.question import (
    CanonicalQuestion,
    ImportedColumn,
    MatchKind,
    MatchRecord,
    ReconciliationReport,
)
from .services.matcher import reconcile
from .text import find_duplicates, normalize, similarity

__version__ = "0.1.0"

__all__ = [
    "CanonicalQuestion",
    "ImportedColumn",
    "MatchKind",
    "MatchRecord",
    "ReconciliationReport",
    "find_duplicates",
    "normalize",
    "reconcile",
    "similarity",
]
