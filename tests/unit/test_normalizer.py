from __future__ import annotations

import pytest

from qreconcile.text.normalizer import normalize


def test_normalize_case_and_quote_insensitive():
    assert normalize("Don't") == normalize("DON'T") == normalize("don't") == "don't"
    assert normalize("Don’t") == "don't"
    assert normalize("Don‘t") == "don't"
    assert normalize("Don`t") == "don't"


def test_normalize_trims_and_collapses_whitespace():
    assert normalize("  What   is your\tbudget\n range?? ") == "what is your budget range"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Donâ€™t", "don't"),  # â€™
        ("â€œHomeâ€\x9d", '"home"'),  # â€œ...â€<9d>
        ("Sayâ€", 'say"'),  # right quote with the 0x9d byte dropped
        ("Move-in â€” date", "move-in - date"),  # em dash
        ("1â€“2 weeks", "1-2 weeks"),  # en dash
        ("â€˜single quotesâ€™", "'single quotes'"),
    ],
)
def test_normalize_repairs_mojibake(raw: str, expected: str):
    assert normalize(raw) == expected


def test_normalize_quote_and_dash_variants():
    assert normalize("“Quoted” and „low“") == '"quoted" and "low"'
    assert normalize("Prefer – or —?") == "prefer - or -"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Pets eg dogs", "pets e.g. dogs"),
        ("Pets, ie dogs", "pets, i.e. dogs"),
        ("Tools etc and more", "tools etc. and more"),
        ("Furniture, etc. included", "furniture, etc. included"),
        ("Tools etc", "tools etc"),
        ("Beige walls", "beige walls"),
        ("Tie-in offers", "tie-in offers"),
    ],
)
def test_normalize_abbreviations_whole_words(raw: str, expected: str):
    assert normalize(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Budget?", "budget"),
        ("Budget...", "budget"),
        ("Budget ?!", "budget"),
        ("Budget: yes;", "budget: yes"),
        ("?!.", ""),
        ("Budget (approx.)", "budget (approx.)"),
    ],
)
def test_normalize_strips_trailing_punctuation(raw: str, expected: str):
    assert normalize(raw) == expected


def test_normalize_empty_and_none():
    assert normalize("") == ""
    assert normalize("   ") == ""
    assert normalize(None) == ""


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "Don’t you LOVE it?",
        "Tools etc.",
        "Tools etc .",
        "eg.",
        "ie?",
        "What is your budget ?  !",
        "â€œHomeâ€\x9d ,",
        "a  b\t\tc ...",
        "Price – range — etc",
    ],
)
def test_normalize_idempotent(raw: str):
    once = normalize(raw)
    assert normalize(once) == once
