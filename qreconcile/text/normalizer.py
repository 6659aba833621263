from __future__ import annotations

import re

"""Text normalization for question comparison.

Turns a raw question / header string into its comparison form so that
superficially different spellings ("Don’t", "DON'T", "don't.") compare equal.
Pure function: no I/O, no locale, same input -> same output, idempotent.
"""

__all__ = [
    "normalize",
]

# UTF-8 punctuation (E2 80 xx) decoded as cp1252. The bare "â€" must come
# last: it is what is left of a right double quote once 0x9d was dropped.
_MOJIBAKE = (
    ("â€™", "’"),  # â€™ -> ’
    ("â€˜", "‘"),  # â€˜ -> ‘
    ("â€œ", "“"),  # â€œ -> “
    ("â€\x9d", "”"),    # â€<9d> -> ”
    ("â€”", "—"),  # â€” -> em dash
    ("â€“", "–"),  # â€“ -> en dash
    ("â€", "”"),
)

_APOSTROPHES_RE = re.compile("[‘’`]")
_DOUBLE_QUOTES_RE = re.compile("[“”„]")
_DASHES_RE = re.compile("[—–]")

_ABBREVIATIONS = (
    (re.compile(r"\beg\b"), "e.g."),
    (re.compile(r"\bie\b"), "i.e."),
    # "etc." already punctuated must stay as is
    (re.compile(r"\betc\b(?!\.)"), "etc."),
)

_WHITESPACE_RE = re.compile(r"\s+")
_TRAILING_CHARS = ".,;:!? "


def normalize(raw: str | None) -> str:
    """Return the comparison form of `raw`. Never raises; None -> ""."""
    if not raw:
        return ""
    text = str(raw).lower().strip()

    for garbled, fixed in _MOJIBAKE:
        if garbled in text:
            text = text.replace(garbled, fixed)

    text = _APOSTROPHES_RE.sub("'", text)
    text = _DOUBLE_QUOTES_RE.sub('"', text)
    text = _DASHES_RE.sub("-", text)

    for pattern, replacement in _ABBREVIATIONS:
        text = pattern.sub(replacement, text)

    text = _WHITESPACE_RE.sub(" ", text)
    # whitespace is already collapsed to single spaces, so "foo ?" loses both
    return text.rstrip(_TRAILING_CHARS).strip()
