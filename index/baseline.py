from __future__ import annotations

import logging
import time
from typing import Protocol

import numpy as np

from ingestion.corpus import Corpus
from processing.errors import EmptyQuery
from processing.text import Preprocessor

logger = logging.getLogger(__name__)

_MODES = ("AND", "OR")


class BooleanSearch(Protocol):
    """Conjunctive search returning ascending document IDs."""

    def search(self, query: str) -> list[int]: ...


def _check_mode(mode: str) -> str:
    mode = mode.upper()
    if mode not in _MODES:
        raise ValueError(f"mode must be one of {_MODES}, got {mode!r}")
    return mode


class LinearSearch:
    """Scans every token of every document for every query term: O(p * q)."""

    def __init__(self, corpus: Corpus, *, preprocessor: Preprocessor | None = None) -> None:
        self.corpus = corpus
        self.preprocessor = preprocessor or corpus.preprocessor

    def search(self, query: str, mode: str = "AND") -> list[int]:
        mode = _check_mode(mode)
        terms = set(self.preprocessor.tokenize(query))
        if not terms:
            raise EmptyQuery(query)
        start = time.perf_counter()
        result: list[int] = []
        for doc_id, doc in enumerate(self.corpus):
            found: set[str] = set()
            for token in doc.tokens:
                if token in terms:
                    found.add(token)
                    if mode == "OR":
                        break
            if (mode == "OR" and found) or found == terms:
                result.append(doc_id)
        logger.debug("Linear search took %.3f ms", (time.perf_counter() - start) * 1000)
        return result


class TermDocumentMatrix:
    """Boolean terms x documents matrix; a query is a row-wise AND / OR."""

    def __init__(self, corpus: Corpus, *, preprocessor: Preprocessor | None = None) -> None:
        self.corpus = corpus
        self.preprocessor = preprocessor or corpus.preprocessor
        self.rows = corpus.positions
        start = time.perf_counter()
        self.matrix = np.zeros((len(corpus.vocabulary), len(corpus)), dtype=bool)
        for doc_id, doc in enumerate(corpus):
            for term in doc.tf:
                self.matrix[self.rows[term], doc_id] = True
        logger.info(
            "Built %dx%d term-document matrix in %.1f ms",
            self.matrix.shape[0],
            self.matrix.shape[1],
            (time.perf_counter() - start) * 1000,
        )

    def _row(self, term: str) -> np.ndarray:
        row = self.rows.get(term)
        if row is None:
            return np.zeros(self.matrix.shape[1], dtype=bool)
        return self.matrix[row]

    def search(self, query: str, mode: str = "AND") -> list[int]:
        mode = _check_mode(mode)
        terms = self.preprocessor.tokenize(query)
        if not terms:
            raise EmptyQuery(query)
        rows = np.stack([self._row(t) for t in terms], axis=0)
        hits = rows.all(axis=0) if mode == "AND" else rows.any(axis=0)
        return [int(i) for i in np.flatnonzero(hits)]


# selectable alternatives to the inverted index, keyed by config name
BASELINES: dict[str, type[LinearSearch] | type[TermDocumentMatrix]] = {
    "linear": LinearSearch,
    "matrix": TermDocumentMatrix,
}
