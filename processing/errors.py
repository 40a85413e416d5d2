from __future__ import annotations


class IRError(Exception):
    """Base class for errors raised by the retrieval core."""


class ConfigurationError(IRError):
    """Bad construction input: malformed pattern, empty corpus vocabulary."""


class EmptyQuery(IRError, ValueError):
    def __init__(self, query: str) -> None:
        super().__init__(f"Query {query!r} contains no terms")
        self.query = query


class IncomparableVectors(IRError, ValueError):
    def __init__(self, size1: int, size2: int) -> None:
        super().__init__(f"Cannot compare vector of length {size1} with vector of length {size2}")
        self.size1 = size1
        self.size2 = size2


class NumericInvariantError(IRError, ArithmeticError):
    """An internal numeric invariant was violated (a bug, not a user error)."""
