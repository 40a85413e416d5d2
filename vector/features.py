from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

import numpy as np

from ingestion.corpus import Corpus, Document
from processing.errors import ConfigurationError, NumericInvariantError

if TYPE_CHECKING:
    from vector.similarity import VectorComparison

logger = logging.getLogger(__name__)


class FeatureVector:
    """One float per vocabulary term, in the corpus' vocabulary order."""

    __slots__ = ("values",)

    def __init__(self, values: Iterable[float] | np.ndarray) -> None:
        if isinstance(values, np.ndarray):
            arr = values.astype(np.float64, copy=True)
        else:
            arr = np.fromiter(values, dtype=np.float64)
        arr.setflags(write=False)
        self.values = arr

    def __len__(self) -> int:
        return int(self.values.shape[0])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FeatureVector):
            return NotImplemented
        return bool(np.array_equal(self.values, other.values))

    def __hash__(self) -> int:
        # -0.0 + 0.0 is 0.0, so equal vectors hash alike
        return hash((self.values + 0.0).tobytes())

    def __repr__(self) -> str:
        active = int(np.count_nonzero(self.values))
        return f"FeatureVector with {len(self)} values ({active} active)"

    def similarity(
        self, other: FeatureVector, comparison: VectorComparison | None = None
    ) -> float:
        from vector.similarity import CosineSimilarity

        return (comparison or CosineSimilarity()).similarity(self, other)


class NumericalRepresentation(Protocol):
    corpus: Corpus

    def value(self, term: str, document: Document) -> float: ...

    def vector(self, document: Document) -> FeatureVector: ...


class TfIdf:
    """tf(t, d) * ln(N / df(t)) over the corpus vocabulary.

    Terms the corpus has never seen (df == 0) contribute 0; the query is
    vectorized with the corpus statistics, never its own.
    """

    def __init__(self, corpus: Corpus) -> None:
        if not corpus.vocabulary:
            raise ConfigurationError("Cannot build TF-IDF features over an empty vocabulary")
        self.corpus = corpus
        self._idf = np.array([self.idf(t) for t in corpus.vocabulary], dtype=np.float64)

    def idf(self, term: str) -> float:
        df = self.corpus.document_frequency(term)
        if df == 0:
            return 0.0
        value = math.log(self.corpus.n / df)
        if not math.isfinite(value):
            logger.error("Non-finite idf for %r: N=%d df=%d", term, self.corpus.n, df)
            raise NumericInvariantError(f"idf({term!r}) = {value}")
        return value

    def value(self, term: str, document: Document) -> float:
        return document.term_frequency(term) * self.idf(term)

    def vector(self, document: Document) -> FeatureVector:
        values = np.zeros(len(self.corpus.vocabulary), dtype=np.float64)
        positions = self.corpus.positions
        for term, tf in document.tf.items():
            pos = positions.get(term)
            if pos is None:
                continue
            values[pos] = tf * self._idf[pos]
        return FeatureVector(values)

    def query_vector(self, query: str) -> FeatureVector:
        return self.vector(Document.create("Query", query, self.corpus.preprocessor))
