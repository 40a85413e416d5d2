from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from vector.features import FeatureVector, NumericalRepresentation
from vector.similarity import CosineSimilarity, VectorComparison


@dataclass
class Item:
    id: int
    vec: FeatureVector


class InMemoryVectorStore:
    """Document vectors of one corpus, computed on first use and kept.

    The corpus is read-only, so a cached vector never goes stale.
    """

    def __init__(
        self,
        representation: NumericalRepresentation,
        comparison: VectorComparison | None = None,
    ) -> None:
        self.representation = representation
        self.comparison = comparison or CosineSimilarity()
        self.corpus = representation.corpus
        self._items: dict[int, Item] = {}

    @property
    def dim(self) -> int:
        return len(self.corpus.vocabulary)

    def __len__(self) -> int:
        return len(self._items)

    def vector(self, doc_id: int) -> FeatureVector:
        item = self._items.get(doc_id)
        if item is None:
            item = Item(doc_id, self.representation.vector(self.corpus[doc_id]))
            self._items[doc_id] = item
        return item.vec

    def add(self, ids: Iterable[int]) -> None:
        for doc_id in ids:
            self.vector(doc_id)

    def search(
        self,
        vector: FeatureVector,
        ids: Iterable[int] | None = None,
        top_k: int | None = None,
    ) -> list[tuple[int, float]]:
        """(doc_id, similarity) pairs, best first; ties keep candidate order."""
        if top_k is not None and top_k < 1:
            raise ValueError(f"top_k must be positive, got {top_k}")
        candidates = range(len(self.corpus)) if ids is None else ids
        scored = [(i, self.comparison.similarity(self.vector(i), vector)) for i in candidates]
        scored.sort(key=lambda x: x[1], reverse=True)
        return scored if top_k is None else scored[:top_k]
