from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Hashable, TypeVar


T = TypeVar("T", bound=Hashable)
U = TypeVar("U")


@dataclass(frozen=True)
class Edge(Generic[U]):
    ends: tuple[int, int]  # (from_index, to_index)
    label: U


@dataclass
class Graph(Generic[T, U]):
    nodes: list[T] = field(default_factory=list)
    edges: list[Edge[U]] = field(default_factory=list)


@dataclass(frozen=True)
class GenerateSettings:
    max_nodes: int
    max_edges: int
