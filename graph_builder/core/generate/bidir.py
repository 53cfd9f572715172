from __future__ import annotations

from collections import Counter

from graph_builder.core.errors import BidirError
from graph_builder.core.model import Edge, U


def bidir(edges: list[Edge[U]]) -> None:
    """Keep only edges that are equal in both directions, in place.

    Endpoints are normalized to (min, max), which drops direction. Two equal
    edges on the same pair collapse into one; an edge without an equal partner
    is removed. The result is sorted by endpoints.

    Assumes at most two edges per unordered pair of nodes (one per direction).
    Raises BidirError before touching the list when that does not hold.
    """

    canonical = [Edge(ends=_ordered(e.ends), label=e.label) for e in edges]

    counts = Counter(e.ends for e in canonical)
    crowded = sorted(ends for ends, c in counts.items() if c > 2)
    if crowded:
        a, b = crowded[0]
        raise BidirError(
            code="E_BIDIR_TOO_MANY_EDGES",
            message=f"expected at most 2 edges between nodes {a} and {b}, got {counts[(a, b)]}",
            node=a,
        )

    canonical.sort(key=lambda e: e.ends)

    kept: list[Edge[U]] = []
    j = len(canonical) - 1
    while j >= 0:
        if j > 0 and canonical[j - 1] == canonical[j]:
            kept.append(canonical[j])
            j -= 2
        else:
            j -= 1
    kept.reverse()
    edges[:] = kept


def both_directions(edges: list[Edge[U]]) -> list[Edge[U]]:
    """Return each edge followed by its reverse, with the same label."""
    out: list[Edge[U]] = []
    for e in edges:
        a, b = e.ends
        out.append(e)
        out.append(Edge(ends=(b, a), label=e.label))
    return out


def _ordered(ends: tuple[int, int]) -> tuple[int, int]:
    a, b = ends
    return (a, b) if a <= b else (b, a)
