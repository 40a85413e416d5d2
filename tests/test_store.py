from __future__ import annotations

import pytest

from vector.features import TfIdf
from vector.store import InMemoryVectorStore


def test_vectors_are_cached(corpus):
    store = InMemoryVectorStore(TfIdf(corpus))
    assert store.dim == len(corpus.vocabulary)
    assert len(store) == 0
    store.add([0, 1, 1])
    assert len(store) == 2
    assert store.vector(0) is store.vector(0)


def test_search_restricts_to_candidates(corpus):
    tfidf = TfIdf(corpus)
    store = InMemoryVectorStore(tfidf)
    query = tfidf.query_vector("caesar brutus")
    hits = store.search(query, ids=[2, 10, 11])
    assert [doc_id for doc_id, _ in hits][0] == 10
    assert {doc_id for doc_id, _ in hits} == {2, 10, 11}
    assert store.search(query, top_k=1) == hits[:1]


def test_ties_keep_id_order(corpus):
    tfidf = TfIdf(corpus)
    store = InMemoryVectorStore(tfidf)
    hits = store.search(tfidf.query_vector("calpurnia"), ids=[4, 1, 3])
    assert hits == [(4, 0.0), (1, 0.0), (3, 0.0)]


@pytest.mark.parametrize("top_k", [0, -2])
def test_top_k_must_be_positive(corpus, top_k):
    tfidf = TfIdf(corpus)
    store = InMemoryVectorStore(tfidf)
    with pytest.raises(ValueError):
        store.search(tfidf.query_vector("king"), top_k=top_k)
