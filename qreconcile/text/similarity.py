from __future__ import annotations

from rapidfuzz.distance import Levenshtein

"""Edit-distance similarity between two (already normalized) strings.

similarity = (max_len - levenshtein) / max_len, 1.0 for two empty strings.
Insert / delete / substitute all cost 1. The scorer puts no bound on input
length; callers keep question lists to realistic sizes.
"""

__all__ = [
    "edit_distance",
    "similarity",
]


def edit_distance(a: str, b: str) -> int:
    """Classic Levenshtein distance (unit weights)."""
    return Levenshtein.distance(a, b, weights=(1, 1, 1))


def similarity(a: str, b: str) -> float:
    """Return a symmetric score in [0, 1]; 1.0 means identical."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - edit_distance(a, b)) / longest
