from __future__ import annotations

import logging
import time
from functools import reduce

from index.intersection import Intersection, merge_intersection, merge_union
from ingestion.corpus import Corpus, Document
from processing.errors import EmptyQuery
from processing.text import Preprocessor

logger = logging.getLogger(__name__)


class InvertedIndex:
    """Term -> ascending list of IDs of the documents containing the term.

    Built once from a corpus. Queries are tokenized with the same preprocessor
    as the documents, so case-folding and special cases line up.
    """

    def __init__(
        self,
        corpus: Corpus,
        *,
        preprocessor: Preprocessor | None = None,
        intersection: Intersection = merge_intersection,
    ) -> None:
        self.corpus = corpus
        self.preprocessor = preprocessor or corpus.preprocessor
        self.intersection = intersection
        start = time.perf_counter()
        self._postings = self._build(corpus)
        logger.info(
            "Built index with %d terms over %d documents in %.1f ms",
            len(self._postings),
            len(corpus),
            (time.perf_counter() - start) * 1000,
        )

    @staticmethod
    def _build(corpus: Corpus) -> dict[str, list[int]]:
        postings: dict[str, list[int]] = {}
        # IDs are visited in ascending order and each term once per document,
        # so appending keeps every list sorted and duplicate-free
        for doc_id, doc in enumerate(corpus):
            for term in doc.tf:
                postings.setdefault(term, []).append(doc_id)
        return postings

    @property
    def terms(self) -> tuple[str, ...]:
        return self.corpus.vocabulary

    def __len__(self) -> int:
        return len(self._postings)

    def __contains__(self, term: object) -> bool:
        return term in self._postings

    def postings(self, term: str) -> tuple[int, ...]:
        return tuple(self._postings.get(term, ()))

    def document_frequency(self, term: str) -> int:
        plist = self._postings.get(term)
        return 0 if plist is None else len(plist)

    def _query_terms(self, query: str) -> list[str]:
        terms = self.preprocessor.tokenize(query)
        if not terms:
            raise EmptyQuery(query)
        return terms

    def search(self, query: str) -> list[int]:
        """IDs of the documents containing every query term, ascending."""
        start = time.perf_counter()
        terms = self._query_terms(query)
        lists = [self._postings.get(t, []) for t in terms]
        # shortest lists first keeps every intermediate result small
        lists.sort(key=len)
        if not lists[0]:
            result: list[int] = []
        else:
            result = reduce(self.intersection, lists[1:], list(lists[0]))
        logger.debug(
            "Search for %r took %.3f ms (%d hits)",
            query,
            (time.perf_counter() - start) * 1000,
            len(result),
        )
        return result

    def search_or(self, query: str) -> list[int]:
        """IDs of the documents containing at least one query term, ascending."""
        terms = self._query_terms(query)
        return merge_union([self._postings.get(t, []) for t in terms])

    def search_documents(self, query: str) -> list[Document]:
        return [self.corpus[i] for i in self.search(query)]
