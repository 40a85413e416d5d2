from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from index.baseline import BASELINES, BooleanSearch
from index.intersection import STRATEGIES, Intersection, merge_intersection
from index.inverted import InvertedIndex
from ingestion.corpus import Corpus, Document
from processing.edit_distance import suggest
from processing.errors import ConfigurationError, EmptyQuery
from processing.text import Preprocessor, snippet
from search.config import SearchConfig
from search.ranking import VectorRanker
from vector.features import NumericalRepresentation, TfIdf
from vector.similarity import CosineSimilarity, VectorComparison
from vector.store import InMemoryVectorStore

logger = logging.getLogger(__name__)


@dataclass
class Doc:
    id: str
    title: str | None
    content: str
    source: str | None = None
    topic: str | None = None


class SearchEngine:
    """Boolean AND retrieval plus TF-IDF/cosine ranking.

    The inverted index answers conjunctive queries unless another
    ``search`` strategy (a linear scan or a term-document matrix) is given;
    the index still backs vocabulary lookups for suggestions.
    """

    def __init__(
        self,
        corpus: Corpus,
        *,
        intersection: Intersection = merge_intersection,
        search: BooleanSearch | None = None,
        representation: NumericalRepresentation | None = None,
        comparison: VectorComparison | None = None,
    ) -> None:
        self.corpus = corpus
        self.index = InvertedIndex(corpus, intersection=intersection)
        self.searcher: BooleanSearch = self.index if search is None else search
        self.representation = representation or TfIdf(corpus)
        self.comparison = comparison or CosineSimilarity()
        self.store = InMemoryVectorStore(self.representation, self.comparison)

    @classmethod
    def from_config(cls, cfg: SearchConfig | None = None) -> SearchEngine:
        cfg = cfg or SearchConfig()
        if not cfg.corpus_path:
            raise ConfigurationError("No corpus configured; set TEXTBOOK_IR_CORPUS")
        intersection = STRATEGIES.get(cfg.intersection)
        if intersection is None:
            raise ConfigurationError(f"Unknown intersection strategy {cfg.intersection!r}")
        if cfg.strategy != "inverted" and cfg.strategy not in BASELINES:
            raise ConfigurationError(f"Unknown search strategy {cfg.strategy!r}")
        corpus = Corpus.from_file(
            cfg.corpus_path, cfg.document_pattern, cfg.title_delimiter, preamble=cfg.preamble
        )
        search = BASELINES[cfg.strategy](corpus) if cfg.strategy in BASELINES else None
        logger.info("Searching %d documents with the %s strategy", len(corpus), cfg.strategy)
        return cls(corpus, intersection=intersection, search=search)

    def search(self, query: str) -> list[Document]:
        return [self.corpus[i] for i in self.searcher.search(query)]

    def _query_document(self, query: str) -> Document:
        doc = Document.create("Query", query, self.corpus.preprocessor)
        if not doc.tokens:
            raise EmptyQuery(query)
        return doc

    def rank(self, query: str, documents: Iterable[Document] | None = None) -> list[Document]:
        """Rank ``documents`` (default: the AND result for ``query``) by similarity."""
        candidates = self.search(query) if documents is None else list(documents)
        ranker = VectorRanker(
            self._query_document(query),
            self.corpus,
            representation=self.representation,
            comparison=self.comparison,
        )
        return ranker.rank(candidates)

    def ranked_search(
        self, query: str, top_k: int | None = None, *, conjunctive: bool = True
    ) -> list[dict]:
        """Hits as dicts, best first. Without ``conjunctive`` every document competes."""
        query_vec = self.representation.vector(self._query_document(query))
        ids = self.searcher.search(query) if conjunctive else None
        hits = self.store.search(query_vec, ids=ids, top_k=top_k)
        out: list[dict] = []
        for doc_id, score in hits:
            d = self.corpus[doc_id]
            out.append(
                {
                    "id": doc_id,
                    "title": _title(d),
                    "source": d.source,
                    "score": float(round(score, 6)),
                    "snippet": snippet(d.text),
                }
            )
        logger.info("Ranked %d hits for %r", len(out), query)
        return out

    def suggest(
        self, query: str, *, max_distance: int = 2, top_k: int = 5
    ) -> dict[str, list[str]]:
        """Spelling suggestions for every query term missing from the vocabulary."""
        terms = self.corpus.preprocessor.tokenize(query)
        if not terms:
            raise EmptyQuery(query)
        return {
            t: suggest(t, self.corpus.vocabulary, max_distance=max_distance, top_k=top_k)
            for t in terms
            if t not in self.index
        }


def _title(d: Document) -> str:
    if d.title:
        return d.title
    text = d.text.strip()
    return text[:60] + ("…" if len(text) > 60 else "")


def search_docs(
    docs: Iterable[Doc],
    query: str,
    top_k: int = 5,
    *,
    conjunctive: bool = False,
    preprocessor: Preprocessor | None = None,
) -> list[dict]:
    """Build a throwaway corpus from ``docs`` and rank it against ``query``."""
    ordered = list(docs)
    pre = preprocessor or Preprocessor()
    corpus = Corpus(
        (
            Document.create(d.title, d.content, pre, source=d.source, topic=d.topic)
            for d in ordered
        ),
        pre,
    )
    engine = SearchEngine(corpus)
    ranked = engine.ranked_search(query, top_k=top_k, conjunctive=conjunctive)
    for hit in ranked:
        hit["id"] = ordered[hit["id"]].id
    return ranked
