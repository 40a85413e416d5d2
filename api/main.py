from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ingestion.corpus import Corpus, Document
from processing.errors import ConfigurationError, EmptyQuery
from search.config import SearchConfig
from search.evaluation import Evaluation, EvaluationResult, gold_standard
from search.pipeline import Doc as SearchDoc
from search.pipeline import SearchEngine, search_docs

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="Textbook IR API", version="0.1.0")

_ENGINES: dict[str, SearchEngine] = {}


def get_engine(cfg: SearchConfig | None = None) -> SearchEngine:
    cfg = cfg or SearchConfig()
    if not cfg.corpus_path:
        raise HTTPException(status_code=503, detail="No corpus configured")
    key = (
        f"{cfg.corpus_path}|{cfg.document_pattern}|{cfg.title_delimiter}"
        f"|{cfg.intersection}|{cfg.strategy}"
    )
    engine = _ENGINES.get(key)
    if engine is None:
        engine = SearchEngine.from_config(cfg)
        _ENGINES[key] = engine
    return engine


@app.exception_handler(EmptyQuery)
async def _empty_query(_request: Request, exc: EmptyQuery) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(ConfigurationError)
async def _configuration_error(_request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("Configuration error: %s", exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/search")
def search(q: str, top_k: int | None = Query(None, ge=1)) -> dict[str, Any]:
    engine = get_engine()
    # every AND hit is scored, so the count comes from the same pass
    ranked = engine.ranked_search(q)
    limit = top_k if top_k is not None else SearchConfig().top_k
    return {"query": q, "count": len(ranked), "ranked": ranked[:limit]}


class DocIn(BaseModel):
    id: str
    title: str | None = None
    content: str
    source: str | None = None
    topic: str | None = None


class SearchRequest(BaseModel):
    query: str
    docs: list[DocIn] | None = None
    top_k: int = Field(5, ge=1)
    conjunctive: bool = False


@app.post("/search")
def search_post(body: SearchRequest) -> dict[str, Any]:
    if body.docs is None:
        engine = get_engine()
        ranked = engine.ranked_search(body.query, top_k=body.top_k, conjunctive=body.conjunctive)
        return {"query": body.query, "ranked": ranked}
    docs = [
        SearchDoc(id=d.id, title=d.title, content=d.content, source=d.source, topic=d.topic)
        for d in body.docs
    ]
    ranked = search_docs(docs, body.query, top_k=body.top_k, conjunctive=body.conjunctive)
    return {"query": body.query, "ranked": ranked}


@app.get("/suggest")
def suggest(q: str, max_distance: int = Query(2, ge=0)) -> dict[str, Any]:
    engine = get_engine()
    return {"query": q, "suggestions": engine.suggest(q, max_distance=max_distance)}


class EvaluateRequest(BaseModel):
    query: str
    docs: list[DocIn]
    k: int = Field(5, ge=1)


def _result(res: EvaluationResult) -> dict[str, float]:
    return {"p": res.p, "r": res.r, "f": res.f}


@app.post("/evaluate")
def evaluate(body: EvaluateRequest) -> dict[str, Any]:
    """Compare the top k of the unranked AND result with the ranked one.

    The gold standard is every document whose title contains a query term.
    """
    corpus = Corpus.from_documents((d.title, d.content) for d in body.docs)
    engine = SearchEngine(corpus)
    unranked: list[Document] = engine.search(body.query)
    ranked = engine.rank(body.query, unranked)
    evaluation = Evaluation(gold_standard(corpus, body.query))
    return {
        "query": body.query,
        "k": body.k,
        "relevant": len(evaluation.relevant),
        "retrieved": len(unranked),
        "unranked": _result(evaluation.evaluate(unranked[: body.k])),
        "ranked": _result(evaluation.evaluate(ranked[: body.k])),
    }
