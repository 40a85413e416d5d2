from __future__ import annotations

import pytest

from processing.errors import ConfigurationError
from processing.text import ExtractionPattern, Preprocessor, snippet, tokenize


def test_compound_number_is_one_token():
    assert tokenize("call 0221-4701751 now") == ["0221-4701751", "call", "now"]


def test_email_is_one_token():
    assert tokenize("a@b.de") == ["a@b.de"]
    assert tokenize("Mail: A@B.DE") == ["a@b.de", "mail"]


def test_email_with_dots_in_domain():
    assert tokenize("fsteeg@spinfo.uni-koeln.de") == ["fsteeg@spinfo.uni-koeln.de"]


def test_email_without_known_domain_is_split():
    tokens = tokenize("mail a@home now")
    assert "a@home" not in tokens
    assert tokens == ["mail", "a", "home", "now"]


def test_empty_input():
    assert tokenize("") == []
    assert tokenize("  ,.; ") == []


def test_lower_cases_everything():
    assert tokenize("Brutus BRUTUS brutus") == ["brutus", "brutus", "brutus"]


def test_unicode_letters_are_kept():
    assert tokenize("Schöne Grüße aus Köln") == ["schöne", "grüße", "aus", "köln"]
    assert tokenize("Ελλάδα και Россия") == ["ελλάδα", "και", "россия"]


def test_every_non_letter_separates():
    # superscripts, fractions and roman numerals are numerics, not letters
    assert tokenize("x²y") == ["x", "y"]
    assert tokenize("x½y") == ["x", "y"]
    assert tokenize("henry\u216bking") == ["henry", "king"]
    assert tokenize("a_b") == ["a", "b"]


def test_patterns_apply_in_declaration_order():
    # the compound number is taken before the simple number pattern sees it
    assert tokenize("Version 8.04 und 42") == ["8.04", "42", "version", "und"]


def test_repeated_special_case_counts_every_occurrence():
    assert tokenize("3,50 und 3,50") == ["3,50", "3,50", "und"]


def test_special_case_removed_literally():
    # a literal containing regex metacharacters must not be reinterpreted
    pre = Preprocessor(special_cases=[r"\d+\.\d+"])
    assert pre.tokenize("1.5 or 1x5") == ["1.5", "or", "x"]


def test_custom_configuration():
    pre = Preprocessor(special_cases=[], delimiter=r"\s+")
    assert pre.tokenize("0221-4701751 X") == ["0221-4701751", "x"]
    only_numbers = Preprocessor(special_cases=[ExtractionPattern.SIMPLE_NUMBER])
    assert only_numbers.tokenize("room 12b") == ["12", "room", "b"]


@pytest.mark.parametrize("kwargs", [{"special_cases": ["[("]}, {"delimiter": "["}])
def test_malformed_pattern_is_a_configuration_error(kwargs):
    with pytest.raises(ConfigurationError):
        Preprocessor(**kwargs)


def test_snippet_normalizes_whitespace():
    assert snippet("  a\n\n b\tc  ", length=3) == "a b"
