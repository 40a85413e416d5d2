from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum

from processing.errors import ConfigurationError

_WS = re.compile(r"\s+")


def _norm(s: str) -> str:
    return _WS.sub(" ", s).strip()


def snippet(text: str, length: int = 220) -> str:
    return _norm(text)[:length]


def split_non_letters(text: str) -> list[str]:
    """Fragments between characters that are not letters (Unicode category L*).

    Digits of every script, superscripts, fractions and Roman numerals all
    separate; accented and non-Latin letters do not.
    """
    return "".join(ch if ch.isalpha() else " " for ch in text).split()


class ExtractionPattern(Enum):
    """Special cases pulled out of the text before it is split.

    Declaration order is the extraction priority.
    """

    # phone numbers (0221-4701751), versions (8.04), money (3,50), times (15:15)
    COMPOUND_NUMBER = r"\d+[-.,:]\d+"
    SIMPLE_NUMBER = r"\d+"
    # a few top-level domains only; dots inside the domain are fine
    EMAIL = r"[^@\s]+@.+?\.(de|com|eu|org|net)"


class Preprocessor:
    """Lower-cases, extracts special patterns, then splits the rest on non-letters.

    Each special-case match becomes one token and is removed from the text with
    a literal replace, so e.g. ``0221-4701751`` is never re-split on ``-``.
    """

    def __init__(
        self,
        special_cases: Iterable[ExtractionPattern | str] | None = None,
        delimiter: str | None = None,
    ) -> None:
        cases = list(ExtractionPattern) if special_cases is None else list(special_cases)
        self.special_cases: list[re.Pattern[str]] = []
        for case in cases:
            regex = case.value if isinstance(case, ExtractionPattern) else case
            self.special_cases.append(_compile(regex))
        # None splits on every non-letter
        self.delimiter = None if delimiter is None else _compile(delimiter)

    def tokenize(self, text: str) -> list[str]:
        text = text.lower()
        tokens: list[str] = []
        for pattern in self.special_cases:
            # matches come from the text as it was before this pattern's removals
            for m in list(pattern.finditer(text)):
                group = m.group()
                if not group:
                    continue
                tokens.append(group)
                text = text.replace(group, "")
        if self.delimiter is None:
            tokens.extend(split_non_letters(text))
            return tokens
        for fragment in self.delimiter.split(text):
            fragment = fragment.strip()
            if fragment:
                tokens.append(fragment)
        return tokens

    def __repr__(self) -> str:
        patterns = [p.pattern for p in self.special_cases]
        delimiter = None if self.delimiter is None else self.delimiter.pattern
        return f"Preprocessor(special_cases={patterns!r}, delimiter={delimiter!r})"


def _compile(regex: str) -> re.Pattern[str]:
    try:
        return re.compile(regex)
    except re.error as e:
        raise ConfigurationError(f"Invalid regular expression {regex!r}: {e}") from e


_DEFAULT = Preprocessor()


def tokenize(text: str) -> list[str]:
    return _DEFAULT.tokenize(text)
