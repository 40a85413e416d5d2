from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol


class EditDistance(Protocol):
    def distance(self, s1: str, s2: str) -> int:
        """Minimum number of inserts, deletes and replaces turning s1 into s2."""
        ...


class RecursiveEditDistance:
    """Direct transcription of the recurrence; exponential, only for short strings."""

    def distance(self, s1: str, s2: str) -> int:
        if not s1:
            return len(s2)
        if not s2:
            return len(s1)
        cost = 0 if s1[-1] == s2[-1] else 1
        return min(
            self.distance(s1[:-1], s2) + 1,
            self.distance(s1, s2[:-1]) + 1,
            self.distance(s1[:-1], s2[:-1]) + cost,
        )


class MemoizedEditDistance:
    """Same recurrence, top-down, every (i, j) pair computed once."""

    def distance(self, s1: str, s2: str) -> int:
        memo: dict[tuple[int, int], int] = {}

        def d(i: int, j: int) -> int:
            if i == 0:
                return j
            if j == 0:
                return i
            key = (i, j)
            if key not in memo:
                cost = 0 if s1[i - 1] == s2[j - 1] else 1
                memo[key] = min(d(i - 1, j) + 1, d(i, j - 1) + 1, d(i - 1, j - 1) + cost)
            return memo[key]

        return d(len(s1), len(s2))


class DynamicProgrammingEditDistance:
    """Bottom-up table, no recursion."""

    def distance(self, s1: str, s2: str) -> int:
        table = [[0] * (len(s2) + 1) for _ in range(len(s1) + 1)]
        for i in range(len(s1) + 1):
            for j in range(len(s2) + 1):
                if i == 0:
                    table[i][j] = j
                elif j == 0:
                    table[i][j] = i
                else:
                    rep = table[i - 1][j - 1] + (0 if s1[i - 1] == s2[j - 1] else 1)
                    table[i][j] = min(table[i - 1][j] + 1, table[i][j - 1] + 1, rep)
        return table[len(s1)][len(s2)]


def suggest(
    term: str,
    vocabulary: Iterable[str],
    *,
    distance: EditDistance | None = None,
    max_distance: int = 2,
    top_k: int = 5,
) -> list[str]:
    """Vocabulary terms closest to ``term``, ordered by (distance, term)."""
    metric = distance or DynamicProgrammingEditDistance()
    term = term.lower()
    scored: list[tuple[int, str]] = []
    for candidate in vocabulary:
        # length difference is a lower bound on the distance
        if abs(len(candidate) - len(term)) > max_distance:
            continue
        dist = metric.distance(term, candidate)
        if dist <= max_distance:
            scored.append((dist, candidate))
    scored.sort()
    return [c for _, c in scored[:top_k]]
