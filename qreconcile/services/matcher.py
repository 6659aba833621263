from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from ..models.question import (
    CanonicalQuestion,
    ImportedColumn,
    MatchKind,
    MatchRecord,
    ReconciliationReport,
    UnmatchedImportRecord,
)
from ..text.duplicates import group_duplicates
from ..text.normalizer import normalize
from ..text.similarity import similarity

"""Reconciliation of a tenant's question bank against imported sheet headers.

Per canonical question, in input order:
1. exact pass    - first unconsumed header with an equal normalized form
2. override pass - user-confirmed (canonical, imported) pair, reported as EXACT
3. partial pass  - best-scoring unconsumed header, kept only if > threshold
4. otherwise NONE

Every match (exact, override or partial) consumes its header so one column can
never back two canonical questions. Consumption is per column, not per string:
two identical headers are two columns. State lives only for one call.
"""

__all__ = [
    "PARTIAL_MATCH_THRESHOLD",
    "reconcile",
]

logger = logging.getLogger(__name__)

PARTIAL_MATCH_THRESHOLD = 0.8  # strict: similarity must be > this value


def _column_index(column: ImportedColumn, position: int) -> int:
    return column.column_index if column.column_index is not None else position


def _override_targets(
    normalized_question: str, overrides: Sequence[tuple[str, str]]
) -> list[str]:
    """Normalized imported texts confirmed for this canonical question, in order."""
    return [
        normalize(imported_text)
        for canonical_text, imported_text in overrides
        if normalize(canonical_text) == normalized_question
    ]


def reconcile(
    canonical: Sequence[CanonicalQuestion],
    imported: Sequence[ImportedColumn],
    confirmed_overrides: Iterable[tuple[str, str]] | None = None,
    *,
    threshold: float = PARTIAL_MATCH_THRESHOLD,
) -> ReconciliationReport:
    """Compare canonical questions with imported columns and build the report.

    Never raises for empty inputs: no canonical questions -> every header is
    unmatched; no headers -> every canonical question is NONE.
    """
    overrides = list(confirmed_overrides or [])
    headers = [c.header_text for c in imported]
    normalized_headers = [normalize(h) for h in headers]
    consumed = [False] * len(imported)

    def consume(position: int) -> tuple[str, int]:
        consumed[position] = True
        return headers[position], _column_index(imported[position], position)

    matches: list[MatchRecord] = []
    for question in canonical:
        target = normalize(question.text)
        base = dict(
            canonical_id=question.id,
            canonical_text=question.text,
            section_title=question.section_title,
        )
        if not target:
            matches.append(MatchRecord(match_kind=MatchKind.NONE, **base))
            continue

        # 1. exact
        exact = next(
            (p for p, h in enumerate(normalized_headers) if not consumed[p] and h == target),
            None,
        )
        if exact is not None:
            header, index = consume(exact)
            matches.append(
                MatchRecord(
                    match_kind=MatchKind.EXACT,
                    matched_header_text=header,
                    matched_column_index=index,
                    **base,
                )
            )
            continue

        # 2. confirmed override
        confirmed = None
        for wanted in _override_targets(target, overrides):
            confirmed = next(
                (p for p, h in enumerate(normalized_headers) if not consumed[p] and h == wanted),
                None,
            )
            if confirmed is not None:
                break
        if confirmed is not None:
            header, index = consume(confirmed)
            matches.append(
                MatchRecord(
                    match_kind=MatchKind.EXACT,
                    matched_header_text=header,
                    matched_column_index=index,
                    confirmed=True,
                    **base,
                )
            )
            continue

        # 3. partial (strict > keeps the earliest header on ties)
        best_position: int | None = None
        best_score = 0.0
        for p, h in enumerate(normalized_headers):
            if consumed[p]:
                continue
            score = similarity(target, h)
            if best_position is None or score > best_score:
                best_position, best_score = p, score
        if best_position is not None and best_score > threshold:
            header, index = consume(best_position)
            matches.append(
                MatchRecord(
                    match_kind=MatchKind.PARTIAL,
                    matched_header_text=header,
                    matched_column_index=index,
                    similarity=best_score,
                    **base,
                )
            )
            continue

        matches.append(MatchRecord(match_kind=MatchKind.NONE, **base))

    unmatched = [
        UnmatchedImportRecord(header_text=headers[p], column_index=_column_index(col, p))
        for p, col in enumerate(imported)
        if not consumed[p]
    ]
    duplicate_groups = group_duplicates(
        headers, [_column_index(col, p) for p, col in enumerate(imported)]
    )

    report = ReconciliationReport(
        total_canonical=len(canonical),
        total_imported=len(imported),
        matches=matches,
        unmatched=unmatched,
        duplicate_groups=duplicate_groups,
    )
    logger.debug(
        "reconcile canonical=%d imported=%d exact=%d partial=%d none=%d unmatched=%d",
        report.total_canonical,
        report.total_imported,
        len(report.exact_matches),
        len(report.partial_matches),
        len(report.missing_in_import),
        len(report.unmatched),
    )
    return report
