from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ingestion.corpus import Corpus, Document
from processing.errors import NumericInvariantError
from processing.text import Preprocessor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationResult:
    p: float
    r: float
    f: float = field(init=False)

    def __post_init__(self) -> None:
        f = 0.0 if self.p + self.r == 0 else 2 * self.p * self.r / (self.p + self.r)
        if f < 0 or f > 1.0:
            logger.error("F-measure %r out of range for p=%r r=%r", f, self.p, self.r)
            raise NumericInvariantError(f"F should be between 0 and 1 but is: {f}")
        object.__setattr__(self, "f", f)

    def __str__(self) -> str:
        return f"EvaluationResult with p={self.p:.2f}, r={self.r:.2f} and f={self.f:.2f}"


class Evaluation:
    """Precision, recall and F of retrieved documents against a gold standard.

    Documents match by value (title and text), never by identity.
    """

    def __init__(self, relevant: Iterable[Document]) -> None:
        self.relevant = list(relevant)
        self._relevant_set = set(self.relevant)

    def true_positives(self, retrieved: Sequence[Document]) -> int:
        return sum(1 for d in retrieved if d in self._relevant_set)

    def evaluate(self, retrieved: Sequence[Document]) -> EvaluationResult:
        tp = self.true_positives(retrieved)
        fp = len(retrieved) - tp
        fn = len(self.relevant) - tp
        p = tp / (tp + fp) if tp + fp else 0.0
        r = tp / (tp + fn) if tp + fn else 0.0
        return EvaluationResult(p, r)

    def at_k(
        self, documents: Sequence[Document], ks: Iterable[int]
    ) -> list[tuple[int, EvaluationResult]]:
        return [(k, self.evaluate(documents[:k])) for k in ks]


def format_textile(sections: dict[str, list[tuple[int, EvaluationResult]]]) -> str:
    """Render per-k results as textile tables, one section per heading."""
    lines: list[str] = []
    for heading, rows in sections.items():
        lines.append(f"h1. {heading}")
        lines.append("")
        lines.append("table{ border: 1px solid; width:50%; }.")
        lines.append("| *k* | *p*  | *r*  | *f*  |")
        for k, res in rows:
            lines.append(f"| {k:^3} | {res.p:.2f} | {res.r:.2f} | {res.f:.2f} |")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def gold_standard(
    corpus: Corpus, query: str, preprocessor: Preprocessor | None = None
) -> list[Document]:
    """Mock gold standard: documents whose title contains any query term."""
    terms = (preprocessor or corpus.preprocessor).tokenize(query)
    result = []
    for doc in corpus:
        title = (doc.title or "").lower()
        if any(t in title for t in terms):
            result.append(doc)
    return result
