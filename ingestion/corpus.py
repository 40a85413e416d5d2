from __future__ import annotations

import logging
import os
import re
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import InitVar, dataclass, field
from pathlib import Path
from types import MappingProxyType

from processing.errors import ConfigurationError
from processing.text import Preprocessor, tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    """A corpus member. Equal to another document iff title and text match.

    ``tokens`` and ``tf`` are derived from the text on construction, with the
    given preprocessor or the default one, and are read-only afterwards.
    """

    title: str | None
    text: str
    source: str | None = field(default=None, compare=False)
    topic: str | None = field(default=None, compare=False)
    preprocessor: InitVar[Preprocessor | None] = None
    tokens: tuple[str, ...] = field(init=False, compare=False, repr=False)
    tf: Mapping[str, int] = field(init=False, compare=False, repr=False)

    def __post_init__(self, preprocessor: Preprocessor | None) -> None:
        pre = preprocessor.tokenize if preprocessor is not None else tokenize
        tokens = tuple(pre(self.text))
        # frozen: derived fields are set once, here
        object.__setattr__(self, "tokens", tokens)
        object.__setattr__(self, "tf", MappingProxyType(dict(Counter(tokens))))

    @classmethod
    def create(
        cls,
        title: str | None,
        text: str,
        preprocessor: Preprocessor,
        *,
        source: str | None = None,
        topic: str | None = None,
    ) -> Document:
        return cls(title, text, source=source, topic=topic, preprocessor=preprocessor)

    def term_frequency(self, term: str) -> int:
        return self.tf.get(term, 0)

    @property
    def terms(self) -> set[str]:
        return set(self.tf)

    def __str__(self) -> str:
        return self.title or self.text[:60]


class Corpus:
    """Ordered, read-only collection of documents.

    A document's ID is its position; the vocabulary is kept sorted and that
    order is the order of every feature vector built over this corpus.
    """

    def __init__(
        self, documents: Iterable[Document], preprocessor: Preprocessor | None = None
    ) -> None:
        self.preprocessor = preprocessor or Preprocessor()
        self.documents: tuple[Document, ...] = tuple(documents)
        df: Counter[str] = Counter()
        for doc in self.documents:
            df.update(doc.tf.keys())
        self._df: dict[str, int] = dict(df)
        self.vocabulary: tuple[str, ...] = tuple(sorted(self._df))
        self.positions: dict[str, int] = {t: i for i, t in enumerate(self.vocabulary)}

    @classmethod
    def from_text(
        cls,
        text: str,
        document_pattern: str,
        title_delimiter: str | None = None,
        *,
        preamble: bool = True,
        preprocessor: Preprocessor | None = None,
    ) -> Corpus:
        """Split ``text`` into documents at every match of ``document_pattern``.

        With ``preamble`` the chunk before the first boundary (a file header)
        is skipped. The title is the trimmed chunk up to the first
        ``title_delimiter``, or the whole trimmed chunk if it never occurs.
        """
        try:
            boundary = re.compile(document_pattern)
        except re.error as e:
            raise ConfigurationError(f"Invalid document pattern {document_pattern!r}: {e}") from e
        pre = preprocessor or Preprocessor()
        chunks = _split(boundary, text)
        if preamble:
            chunks = chunks[1:]
        docs: list[Document] = []
        for chunk in chunks:
            trimmed = chunk.strip()
            if not trimmed:
                continue
            title = None
            if title_delimiter is not None:
                pos = trimmed.find(title_delimiter)
                title = (trimmed[:pos] if pos >= 0 else trimmed).strip()
            docs.append(Document.create(title, chunk, pre))
        logger.info("Split corpus into %d documents", len(docs))
        return cls(docs, pre)

    @classmethod
    def from_file(
        cls,
        location: str | os.PathLike[str],
        document_pattern: str,
        title_delimiter: str | None = None,
        *,
        preamble: bool = True,
        preprocessor: Preprocessor | None = None,
    ) -> Corpus:
        text = Path(location).read_text(encoding="utf-8")
        logger.info("Read %d characters from %s", len(text), location)
        return cls.from_text(
            text, document_pattern, title_delimiter, preamble=preamble, preprocessor=preprocessor
        )

    @classmethod
    def from_documents(
        cls, pairs: Iterable[tuple[str | None, str]], preprocessor: Preprocessor | None = None
    ) -> Corpus:
        pre = preprocessor or Preprocessor()
        return cls((Document.create(title, text, pre) for title, text in pairs), pre)

    def __len__(self) -> int:
        return len(self.documents)

    def __getitem__(self, doc_id: int) -> Document:
        return self.documents[doc_id]

    def __iter__(self):
        return iter(self.documents)

    @property
    def n(self) -> int:
        return len(self.documents)

    def document_frequency(self, term: str) -> int:
        # a term outside the vocabulary occurs in zero documents
        return self._df.get(term, 0)

    def documents_for_source(self, query: str) -> list[Document]:
        return [d for d in self.documents if d.source and query in d.source]

    def documents_for_topic(self, query: str) -> list[Document]:
        return [d for d in self.documents if d.topic and query in d.topic]

    def ids_of(self, documents: Sequence[Document]) -> list[int]:
        """Corpus positions of the given documents (first match by value)."""
        first: dict[Document, int] = {}
        for i, d in enumerate(self.documents):
            first.setdefault(d, i)
        return [first[d] for d in documents]


def _split(boundary: re.Pattern[str], text: str) -> list[str]:
    # re.split would interleave captured groups with the chunks
    chunks: list[str] = []
    start = 0
    for m in boundary.finditer(text):
        chunks.append(text[start : m.start()])
        start = m.end()
    chunks.append(text[start:])
    return chunks
