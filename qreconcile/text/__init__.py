"""Pure text helpers: normalization, edit-distance similarity, duplicate detection."""

from .duplicates import find_duplicates, group_duplicates
from .normalizer import normalize
from .similarity import edit_distance, similarity

__all__ = [
    "edit_distance",
    "find_duplicates",
    "group_duplicates",
    "normalize",
    "similarity",
]
