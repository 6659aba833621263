from __future__ import annotations

from collections.abc import Sequence

from ..models.question import DuplicateGroup
from .normalizer import normalize

"""Duplicate header detection within one imported sheet."""

__all__ = [
    "find_duplicates",
    "group_duplicates",
]


def find_duplicates(headers: Sequence[str]) -> list[str]:
    """Return original headers that have a later header with the same normalized form.

    Single i<j pass: the header at i is recorded once as soon as any later
    header matches. Each original string appears at most once, first-seen order.

    >>> find_duplicates(["Email Address", "email address", "Name"])
    ['Email Address']
    """
    normalized = [normalize(h) for h in headers]
    duplicates: list[str] = []
    seen: set[str] = set()
    for i, current in enumerate(normalized):
        for j in range(i + 1, len(normalized)):
            if normalized[j] == current:
                if headers[i] not in seen:
                    seen.add(headers[i])
                    duplicates.append(headers[i])
                break
    return duplicates


def group_duplicates(
    headers: Sequence[str], column_indexes: Sequence[int] | None = None
) -> list[DuplicateGroup]:
    """Group headers by normalized form, keeping groups of 2+.

    column_indexes: sheet position of each header (defaults to list position).
    """
    if column_indexes is None:
        column_indexes = range(len(headers))
    buckets: dict[str, list[int]] = {}
    for pos, header in enumerate(headers):
        buckets.setdefault(normalize(header), []).append(pos)
    # dict preserves insertion order -> groups ordered by first appearance
    return [
        DuplicateGroup(
            normalized_text=key,
            headers=tuple(headers[p] for p in positions),
            column_indexes=tuple(column_indexes[p] for p in positions),
        )
        for key, positions in buckets.items()
        if len(positions) > 1
    ]
