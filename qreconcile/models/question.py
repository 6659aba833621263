from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

"""Question reconciliation domain models.

CanonicalQuestion / ImportedColumn are the engine inputs, MatchRecord /
UnmatchedImportRecord / DuplicateGroup its outputs, and ReconciliationReport
aggregates one run. All of them are immutable snapshots; the engine never
mutates its inputs.
"""

__all__ = [
    "CanonicalQuestion",
    "ImportedColumn",
    "MatchKind",
    "MatchRecord",
    "UnmatchedImportRecord",
    "DuplicateGroup",
    "ReconciliationReport",
]


@dataclass(frozen=True)
class CanonicalQuestion:
    """A question already stored for a tenant.

    `id` is unique within a tenant. Empty `text` is accepted but never matched.
    """
    id: str
    text: str
    section_title: str = ""
    order: int = 0


@dataclass(frozen=True)
class ImportedColumn:
    """One column of an uploaded response sheet, header = candidate question.

    row_values are only used for completeness statistics, never for matching.
    """
    header_text: str
    row_values: tuple[Any, ...] = ()
    column_index: int | None = None  # position in the source sheet

    @property
    def answered_count(self) -> int:
        return sum(1 for v in self.row_values if v is not None and str(v).strip() != "")

    @property
    def is_empty(self) -> bool:
        return self.answered_count == 0


class MatchKind(Enum):
    """How an imported header relates to a canonical question."""
    EXACT = "exact"
    PARTIAL = "partial"
    NONE = "none"


@dataclass(frozen=True)
class MatchRecord:
    """Result for one canonical question (exactly one per question per run).

    matched_header_text / matched_column_index are set iff match_kind != NONE,
    similarity iff match_kind == PARTIAL. `confirmed` marks an EXACT produced
    by a user-confirmed override rather than by text equality.
    """
    canonical_id: str
    canonical_text: str
    section_title: str
    match_kind: MatchKind
    matched_header_text: str | None = None
    matched_column_index: int | None = None
    similarity: float | None = None
    confirmed: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "canonical_id": self.canonical_id,
            "canonical_text": self.canonical_text,
            "section_title": self.section_title,
            "match_kind": self.match_kind.value,
        }
        if self.match_kind is not MatchKind.NONE:
            data["matched_header_text"] = self.matched_header_text
            data["matched_column_index"] = self.matched_column_index
        if self.match_kind is MatchKind.PARTIAL:
            data["similarity"] = self.similarity
        if self.confirmed:
            data["confirmed"] = True
        return data


@dataclass(frozen=True)
class UnmatchedImportRecord:
    header_text: str
    column_index: int

    def to_dict(self) -> dict[str, Any]:
        return {"header_text": self.header_text, "column_index": self.column_index}


@dataclass(frozen=True)
class DuplicateGroup:
    """Two or more imported headers sharing one normalized form."""
    normalized_text: str
    headers: tuple[str, ...]
    column_indexes: tuple[int, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "normalized_text": self.normalized_text,
            "headers": list(self.headers),
            "column_indexes": list(self.column_indexes),
        }


@dataclass(frozen=True)
class ReconciliationReport:
    """Outcome of one reconcile() call."""
    total_canonical: int
    total_imported: int
    matches: list[MatchRecord] = field(default_factory=list)
    unmatched: list[UnmatchedImportRecord] = field(default_factory=list)
    duplicate_groups: list[DuplicateGroup] = field(default_factory=list)

    @property
    def exact_matches(self) -> list[MatchRecord]:
        return [m for m in self.matches if m.match_kind is MatchKind.EXACT]

    @property
    def partial_matches(self) -> list[MatchRecord]:
        return [m for m in self.matches if m.match_kind is MatchKind.PARTIAL]

    @property
    def missing_in_import(self) -> list[MatchRecord]:
        """Canonical questions the sheet does not cover."""
        return [m for m in self.matches if m.match_kind is MatchKind.NONE]

    @property
    def new_headers(self) -> list[str]:
        return [u.header_text for u in self.unmatched]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_canonical": self.total_canonical,
            "total_imported": self.total_imported,
            "counts": {
                "exact": len(self.exact_matches),
                "partial": len(self.partial_matches),
                "none": len(self.missing_in_import),
                "unmatched_imported": len(self.unmatched),
                "duplicate_groups": len(self.duplicate_groups),
            },
            "matches": [m.to_dict() for m in self.matches],
            "unmatched": [u.to_dict() for u in self.unmatched],
            "duplicate_groups": [g.to_dict() for g in self.duplicate_groups],
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)
