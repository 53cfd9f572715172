from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class GenerateError(str, Enum):
    """Which generation ceiling was hit."""

    MAX_NODES = "max_nodes"
    MAX_EDGES = "max_edges"

    @property
    def message(self) -> str:
        if self is GenerateError.MAX_NODES:
            return "Reached limit maximum number of nodes"
        return "Reached limit maximum number of edges"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class GraphError(Exception):
    """Base error envelope. Generation records these rather than raising them."""

    code: str
    message: str
    node: Optional[int] = None
    step: Optional[int] = None

    def __str__(self) -> str:
        parts: list[str] = []
        if self.node is not None:
            parts.append(f"node[{self.node}]")
        if self.step is not None:
            parts.append(f"step[{self.step}]")
        loc = ":".join(parts) if parts else "<graph>"
        return f"{loc}: {self.code}: {self.message}"


class ExpandError(GraphError):
    pass


class ComposeError(GraphError):
    pass


@dataclass(frozen=True)
class LimitError(GraphError):
    kind: GenerateError = GenerateError.MAX_NODES

    @classmethod
    def from_kind(cls, kind: GenerateError) -> "LimitError":
        return cls(code=f"E_{kind.name}", message=kind.message, kind=kind)


class BidirError(GraphError):
    pass


class SkipEdge(Exception):
    """Raised by a composition rule when no edge should exist for a pair.

    Not an error: generation drops the candidate edge silently.
    """
