from __future__ import annotations

from pathlib import Path

import pytest

from ingestion.corpus import Corpus
from search.config import DEFAULT_DOCUMENT_PATTERN, DEFAULT_TITLE_DELIMITER
from search.pipeline import SearchEngine

DATA = Path(__file__).parent / "data" / "shakespeare_sample.txt"


@pytest.fixture(scope="session")
def corpus() -> Corpus:
    return Corpus.from_file(DATA, DEFAULT_DOCUMENT_PATTERN, DEFAULT_TITLE_DELIMITER)


@pytest.fixture(scope="session")
def engine(corpus: Corpus) -> SearchEngine:
    return SearchEngine(corpus)
