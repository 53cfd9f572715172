from __future__ import annotations

import logging
from typing import Callable, Optional

from graph_builder.core.errors import GenerateError, GraphError, LimitError, SkipEdge
from graph_builder.core.model import Edge, GenerateSettings, Graph, T, U

logger = logging.getLogger(__name__)


ExpandFn = Callable[[T, int], tuple[T, U]]
KeepFn = Callable[[T], bool]
ComposeFn = Callable[[U, U], U]
LimitErrorFn = Callable[[GenerateError], GraphError]


def generate(
    seed: Graph[T, U],
    n: int,
    expand: ExpandFn,
    keep: KeepFn,
    compose: ComposeFn,
    settings: GenerateSettings,
    *,
    limit_error: LimitErrorFn = LimitError.from_kind,
) -> tuple[Graph[T, U], Optional[GraphError]]:
    """Generate a graph from a seed, then filter nodes and compose edges across them.

    - expand(node, step) returns (new_node, label) for each step in range(n),
      or raises a GraphError when the step does not apply to that node.
    - keep(node) decides which nodes survive post-processing.
    - compose(label_ab, label_bd) labels a direct edge a -> d when b is removed.
      It raises SkipEdge when no such edge should exist, or a GraphError to
      report a failure.

    Filtering waits until expansion is done, so an edge can summarize a path
    that needs several steps through uninteresting nodes.

    Returns (graph, error). The graph is always usable: hitting a ceiling in
    settings stops expansion but filtering and composition still run on what
    was built, since limits are usually hit by combinatorial explosion and the
    partial graph is what callers want. Only the first error is reported.
    limit_error converts a ceiling hit into the caller's error type.
    """

    nodes = list(seed.nodes)
    edges = list(seed.edges)
    error: Optional[GraphError] = None

    index: dict[T, int] = {node: i for i, node in enumerate(nodes)}
    has_edge: set[tuple[int, int]] = {e.ends for e in edges}

    i = 0
    expanding = n > 0
    # A seed already at a ceiling must not grow by even one node or edge.
    hit = _ceiling_hit(nodes, edges, settings) if expanding else None
    if hit is not None:
        logger.info("%s before expansion (nodes=%d, edges=%d)", hit.message, len(nodes), len(edges))
        error = limit_error(hit)
        expanding = False
    while expanding and i < len(nodes):
        for step in range(n):
            try:
                new_node, label = expand(nodes[i], step)
            except GraphError as e:
                if error is None:
                    error = e
                continue

            target = index.get(new_node)
            if target is None:
                target = len(nodes)
                index[new_node] = target
                nodes.append(new_node)
            has_edge.add((i, target))
            edges.append(Edge(ends=(i, target), label=label))

            hit = _ceiling_hit(nodes, edges, settings)
            if hit is not None:
                logger.info("%s (nodes=%d, edges=%d)", hit.message, len(nodes), len(edges))
                if error is None:
                    error = limit_error(hit)
                expanding = False
                break
        i += 1

    logger.debug("expanded: nodes=%d edges=%d", len(nodes), len(edges))

    removed = {j for j, node in enumerate(nodes) if not keep(node)}

    # Edges appended below are walked too, so chains of removed nodes resolve
    # one hop at a time. Only the snapshot is searched for outgoing edges.
    snapshot = len(edges)
    j = 0
    while j < len(edges):
        a, b = edges[j].ends
        if b in removed:
            for k in range(snapshot):
                c, d = edges[k].ends
                if c != b or (a, d) in has_edge:
                    continue
                try:
                    label = compose(edges[j].label, edges[k].label)
                except SkipEdge:
                    continue
                except GraphError as e:
                    if error is None:
                        error = e
                    continue
                edges.append(Edge(ends=(a, d), label=label))
                has_edge.add((a, d))
        j += 1

    logger.debug(
        "filtered: removed=%d composed=%d", len(removed), len(edges) - snapshot
    )

    return _compact(nodes, edges, removed), error


def _compact(
    nodes: list[T], edges: list[Edge[U]], removed: set[int]
) -> Graph[T, U]:
    """Renumber surviving nodes and drop edges touching removed ones.

    Edges are swap-removed while walking backwards, so edge order is not
    preserved.
    """

    new_nodes: list[T] = []
    mapping: list[Optional[int]] = []
    for i, node in enumerate(nodes):
        if i in removed:
            mapping.append(None)
        else:
            mapping.append(len(new_nodes))
            new_nodes.append(node)

    for j in range(len(edges) - 1, -1, -1):
        a, b = edges[j].ends
        na, nb = mapping[a], mapping[b]
        if na is not None and nb is not None:
            edges[j] = Edge(ends=(na, nb), label=edges[j].label)
        else:
            _swap_remove(edges, j)

    return Graph(nodes=new_nodes, edges=edges)


def _swap_remove(items: list[Edge[U]], j: int) -> None:
    last = items.pop()
    if j < len(items):
        items[j] = last


def _ceiling_hit(
    nodes: list[T], edges: list[Edge[U]], settings: GenerateSettings
) -> Optional[GenerateError]:
    if len(nodes) >= settings.max_nodes:
        return GenerateError.MAX_NODES
    if len(edges) >= settings.max_edges:
        return GenerateError.MAX_EDGES
    return None
