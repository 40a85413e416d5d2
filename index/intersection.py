from __future__ import annotations

import heapq
from collections.abc import Callable, Sequence

# Postings lists are ascending lists of document IDs without duplicates.
Intersection = Callable[[Sequence[int], Sequence[int]], list[int]]


def merge_intersection(pl1: Sequence[int], pl2: Sequence[int]) -> list[int]:
    """Intersect two sorted postings lists in O(n1 + n2).

    Two cursors; the one on the smaller value advances, on equality the value
    is emitted and both advance. The result stays sorted.
    """
    answer: list[int] = []
    i = j = 0
    while i < len(pl1) and j < len(pl2):
        p1, p2 = pl1[i], pl2[j]
        if p1 == p2:
            answer.append(p1)
            i += 1
            j += 1
        elif p1 < p2:
            i += 1
        else:
            j += 1
    return answer


def set_intersection(pl1: Sequence[int], pl2: Sequence[int]) -> list[int]:
    """Reference implementation on top of the built-in set type."""
    return sorted(set(pl1) & set(pl2))


def merge_union(lists: Sequence[Sequence[int]]) -> list[int]:
    """k-way merge of sorted postings lists, duplicates dropped."""
    out: list[int] = []
    for doc_id in heapq.merge(*lists):
        if not out or out[-1] != doc_id:
            out.append(doc_id)
    return out


STRATEGIES: dict[str, Intersection] = {
    "book": merge_intersection,
    "api": set_intersection,
}
