from __future__ import annotations

import os
from dataclasses import dataclass, field

# Shakespeare's collected works: every work starts after a line holding its year.
DEFAULT_DOCUMENT_PATTERN = r"1[56][0-9]{2}\n"
DEFAULT_TITLE_DELIMITER = "\n"


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(f"TEXTBOOK_IR_{name}", default)


@dataclass
class SearchConfig:
    corpus_path: str | None = field(default_factory=lambda: _env("CORPUS"))
    document_pattern: str = field(
        default_factory=lambda: _env("DOCUMENT_PATTERN") or DEFAULT_DOCUMENT_PATTERN
    )
    title_delimiter: str | None = field(
        default_factory=lambda: _env("TITLE_DELIMITER", DEFAULT_TITLE_DELIMITER)
    )
    preamble: bool = True
    top_k: int = field(default_factory=lambda: int(_env("TOP_K") or 10))
    intersection: str = field(default_factory=lambda: (_env("INTERSECTION") or "book").lower())
    # inverted | linear | matrix
    strategy: str = field(default_factory=lambda: (_env("STRATEGY") or "inverted").lower())
