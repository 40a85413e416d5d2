from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from api import main
from api.main import app
from search.pipeline import Doc, search_docs

DATA = Path(__file__).parent / "data" / "shakespeare_sample.txt"

client = TestClient(app)

DOCS = [
    {
        "id": "a",
        "title": "Intro to Cooking",
        "content": "Recipes and ingredients for delicious meals.",
    },
    {
        "id": "b",
        "title": "Advanced Python",
        "content": "Typing in Python with mypy and type hints.",
    },
]


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setenv("TEXTBOOK_IR_CORPUS", str(DATA))
    main._ENGINES.clear()
    yield
    main._ENGINES.clear()


def test_post_search_with_docs_ranks_expected_top():
    r = client.post("/search", json={"query": "python typing", "top_k": 2, "docs": DOCS})
    assert r.status_code == 200
    data = r.json()
    assert "ranked" in data
    ranked = data["ranked"]
    assert len(ranked) == 2
    # Expect the Python-related doc to rank first
    assert ranked[0]["id"] == "b"
    assert ranked[0]["title"] == "Advanced Python"
    assert ranked[1]["score"] == 0.0


def test_post_search_conjunctive_drops_partial_matches():
    r = client.post(
        "/search", json={"query": "python recipes", "docs": DOCS, "conjunctive": True}
    )
    assert r.status_code == 200
    assert r.json()["ranked"] == []


def test_search_docs_maps_ids():
    docs = [Doc(id=d["id"], title=d["title"], content=d["content"]) for d in DOCS]
    hits = search_docs(docs, "delicious meals", top_k=1)
    assert [h["id"] for h in hits] == ["a"]


def test_empty_query_is_bad_request():
    r = client.post("/search", json={"query": "?!", "docs": DOCS})
    assert r.status_code == 400


def test_docs_without_terms_are_bad_request():
    r = client.post("/search", json={"query": "x", "docs": [{"id": "z", "content": "..."}]})
    assert r.status_code == 400


def test_get_search_configured(configured):
    r = client.get("/search", params={"q": "Caesar Brutus"})
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 3
    assert body["ranked"][0]["title"] == "THE TRAGEDY OF JULIUS CAESAR"


def test_post_search_configured(configured):
    r = client.post("/search", json={"query": "King Love", "top_k": 5, "conjunctive": True})
    assert r.status_code == 200
    titles = {h["title"] for h in r.json()["ranked"]}
    assert titles == {
        "KING LEAR",
        "THE LIFE OF KING HENRY THE FIFTH",
        "LOVE'S LABOUR'S LOST",
        "THE LIFE AND DEATH OF KING JOHN",
        "KING RICHARD THE SECOND",
    }


def test_suggest(configured):
    r = client.get("/suggest", params={"q": "cesar"})
    assert r.status_code == 200
    assert r.json()["suggestions"]["cesar"][0] == "caesar"


def test_evaluate():
    docs = [
        {"id": "1", "title": "King Lear", "content": "king king love"},
        {"id": "2", "title": "Hamlet", "content": "king and love and ghost castle prince"},
        {"id": "3", "title": "Love Story", "content": "love king"},
        {"id": "4", "title": "Recipes", "content": "recipes and meals"},
    ]
    r = client.post("/evaluate", json={"query": "king love", "docs": docs, "k": 1})
    assert r.status_code == 200
    body = r.json()
    assert body["relevant"] == 2
    assert body["retrieved"] == 3
    assert body["unranked"] == {"p": 1.0, "r": 0.5, "f": pytest.approx(2 / 3)}
    assert body["ranked"] == {"p": 1.0, "r": 0.5, "f": pytest.approx(2 / 3)}


def test_gold_standard_matches_title_substrings():
    docs = [
        {"id": "1", "title": "King Lear", "content": "king love"},
        {"id": "2", "title": "Cooking", "content": "king love recipes"},
        {"id": "3", "title": "Rome", "content": "caesar"},
    ]
    r = client.post("/evaluate", json={"query": "king love", "docs": docs})
    assert r.status_code == 200
    assert r.json()["relevant"] == 2


@pytest.mark.parametrize("top_k", [0, -1])
def test_get_search_rejects_non_positive_top_k(configured, top_k):
    r = client.get("/search", params={"q": "king", "top_k": top_k})
    assert r.status_code == 422


@pytest.mark.parametrize("top_k", [0, -1])
def test_post_search_rejects_non_positive_top_k(top_k):
    r = client.post("/search", json={"query": "python", "docs": DOCS, "top_k": top_k})
    assert r.status_code == 422


def test_get_search_counts_all_hits(configured):
    r = client.get("/search", params={"q": "King Love", "top_k": 2})
    body = r.json()
    assert body["count"] == 10
    assert len(body["ranked"]) == 2


@pytest.mark.parametrize("strategy", ["linear", "matrix"])
def test_get_search_with_baseline_strategy(configured, monkeypatch, strategy):
    monkeypatch.setenv("TEXTBOOK_IR_STRATEGY", strategy)
    r = client.get("/search", params={"q": "Caesar Brutus"})
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 3
    assert body["ranked"][0]["title"] == "THE TRAGEDY OF JULIUS CAESAR"
