from __future__ import annotations

from collections.abc import Iterable

from ingestion.corpus import Corpus, Document
from processing.errors import EmptyQuery
from vector.features import FeatureVector, NumericalRepresentation, TfIdf
from vector.similarity import CosineSimilarity, VectorComparison


class VectorRanker:
    """Orders documents by similarity of their vectors to a query document.

    The query is a pseudo-document vectorized over the same corpus, so both
    sides share vocabulary order and df values.
    """

    def __init__(
        self,
        query: Document,
        corpus: Corpus,
        *,
        representation: NumericalRepresentation | None = None,
        comparison: VectorComparison | None = None,
    ) -> None:
        self.corpus = corpus
        self.representation = representation or TfIdf(corpus)
        self.comparison = comparison or CosineSimilarity()
        self.query = query
        self.query_vector = self.representation.vector(query)
        self._vectors: dict[Document, FeatureVector] = {}

    def _vector(self, doc: Document) -> FeatureVector:
        vec = self._vectors.get(doc)
        if vec is None:
            vec = self.representation.vector(doc)
            self._vectors[doc] = vec
        return vec

    def score(self, doc: Document) -> float:
        return self.comparison.similarity(self._vector(doc), self.query_vector)

    def scored(self, documents: Iterable[Document]) -> list[tuple[Document, float]]:
        pairs = [(d, self.score(d)) for d in documents]
        # stable: equal scores keep their input order
        pairs.sort(key=lambda p: p[1], reverse=True)
        return pairs

    def rank(self, documents: Iterable[Document]) -> list[Document]:
        return [d for d, _ in self.scored(documents)]


def rank(
    documents: Iterable[Document],
    query: str,
    corpus: Corpus,
    *,
    representation: NumericalRepresentation | None = None,
    comparison: VectorComparison | None = None,
) -> list[Document]:
    """Documents sorted by descending cosine similarity to ``query``."""
    query_doc = Document.create("Query", query, corpus.preprocessor)
    if not query_doc.tokens:
        raise EmptyQuery(query)
    ranker = VectorRanker(
        query_doc, corpus, representation=representation, comparison=comparison
    )
    return ranker.rank(documents)
