"""Solutions of x0 + x1 + ... + xn-2 = xn-1 as a graph.

Each node is one arrangement of the terms over the two sides. An edge tells
which terms to move across (flipping their sign) to get from one node to the
other. Between any two solutions at most two terms need to move.

With n terms and m terms on the right, the graph has bin(n, m) nodes and
bin(n, m) * (bin(n, m) - 1) / 2 edges.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from graph_builder.core.errors import GraphError, SkipEdge
from graph_builder.core.generate.bidir import bidir
from graph_builder.core.generate.generate_graph import generate
from graph_builder.core.model import GenerateSettings, Graph


@dataclass(frozen=True)
class Equation:
    side: tuple[bool, ...]  # True = right side
    positive: tuple[bool, ...]

    def len_right(self) -> int:
        return sum(1 for s in self.side if s)

    def unique_right(self) -> Optional[int]:
        """Index of the only term on the right, or None."""
        found: Optional[int] = None
        for i, s in enumerate(self.side):
            if s:
                if found is not None:
                    return None
                found = i
        return found

    def signs(self) -> tuple[str, str]:
        """(positive, negative) sign strings.

        Inverted when the single right term is negative, so it reads positive.
        """
        ind = self.unique_right()
        if ind is not None and not self.positive[ind]:
            return ("-", "+")
        return ("+", "-")

    def __str__(self) -> str:
        plus, minus = self.signs()

        def term(i: int) -> str:
            return f"{plus if self.positive[i] else minus}x{i}"

        left = [term(i) for i, s in enumerate(self.side) if not s]
        right = [term(i) for i, s in enumerate(self.side) if s]
        return f"{' '.join(left) or '0'} = {' '.join(right) or '0'}"


@dataclass(frozen=True, order=True)
class Swap:
    terms: tuple[int, ...]


def start_equation(n: int, solution_terms: int) -> Equation:
    side = [True] * n
    if solution_terms == 1 and n > 0:
        side[-1] = False
    return Equation(side=tuple(side), positive=tuple([True] * n))


def swap_term(eq: Equation, ind: int) -> tuple[Equation, Swap]:
    side = list(eq.side)
    positive = list(eq.positive)
    side[ind] = not side[ind]
    positive[ind] = not positive[ind]
    return Equation(side=tuple(side), positive=tuple(positive)), Swap(terms=(ind,))


def has_right_terms(solution_terms: int) -> Callable[[Equation], bool]:
    def keep(eq: Equation) -> bool:
        return eq.len_right() == solution_terms

    return keep


def join_swaps(a: Swap, b: Swap) -> Swap:
    # Moves commute; compose only in ascending order to avoid mirrored duplicates.
    if a >= b:
        raise SkipEdge()
    return Swap(terms=tuple(sorted(a.terms + b.terms)))


def solve_equations(
    n: int, solution_terms: int, settings: GenerateSettings
) -> tuple[Graph[Equation, Swap], Optional[GraphError]]:
    """Generate all solutions with solution_terms terms on the right.

    Edges are made undirected with bidir and sorted.
    """

    seed: Graph[Equation, Swap] = Graph(nodes=[start_equation(n, solution_terms)], edges=[])
    graph, error = generate(
        seed, n, swap_term, has_right_terms(solution_terms), join_swaps, settings
    )
    bidir(graph.edges)
    graph.edges.sort(key=lambda e: (e.ends, e.label))
    return graph, error
