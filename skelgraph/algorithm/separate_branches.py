"""Branch separation: collapse degree-2 chains of a skeleton graph into branches.

Walks start from every extremity (degree-1 node) and follow the chain away
from the node just visited until they reach another extremity or a junction
(degree >= 3). A junction reached mid-walk is queued again once per incident
edge not yet covered, so the branches leaving it are walked later; a walk
starting on a junction leaves through its first uncovered edge. Bookkeeping
is per edge, so two adjacent junctions still get the branch joining them.
Walks are driven by a FIFO work queue; there is no recursion.

A graph without any extremity (e.g. a pure cycle) produces an empty composed
skeleton with status NO_EXTREMITY.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass

from skelgraph.skeleton.composed import ComposedCurveSkeleton, SeparationStatus
from skelgraph.skeleton.graph import GraphBranch, GraphCurveSkeleton, M

logger = logging.getLogger(__name__)


@dataclass
class _Walk:
    start: int
    end: int
    chain: list[int]


def _edge(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a < b else (b, a)


def _walk_from(
    graph: GraphCurveSkeleton[M],
    start: int,
    covered: set[tuple[int, int]],
    visited: set[int],
    worklist: deque[int],
) -> _Walk | None:
    """Follow one branch from ``start``. Returns None when no uncovered edge leaves it."""
    free = [n for n in graph.get_neighbors(start) if _edge(start, n) not in covered]
    if not free:
        return None

    chain = [start]
    visited.add(start)
    prev, cur = start, free[0]
    while True:
        covered.add(_edge(prev, cur))
        chain.append(cur)
        visited.add(cur)
        neigh = graph.get_neighbors(cur)

        if len(neigh) != 2:
            if len(neigh) > 2:
                # Junction reached: queue it once per branch still to walk.
                for n in neigh:
                    if _edge(cur, n) not in covered:
                        worklist.append(cur)
            break

        nxt = neigh[1] if neigh[0] == prev else neigh[0]
        if _edge(cur, nxt) in covered:
            break
        prev, cur = cur, nxt

    return _Walk(start=start, end=cur, chain=chain)


def separate_branches(graph: GraphCurveSkeleton[M]) -> ComposedCurveSkeleton[GraphBranch[M]]:
    """Build the composed skeleton (extremities/junctions + branches) of ``graph``."""
    composed: ComposedCurveSkeleton[GraphBranch[M]] = ComposedCurveSkeleton()

    if graph.node_count == 0:
        composed.status = SeparationStatus.EMPTY
        return composed

    worklist: deque[int] = deque(graph.get_nodes_by_degree(1))
    if not worklist:
        composed.status = SeparationStatus.NO_EXTREMITY
        composed.unvisited_nodes = tuple(graph.get_all_nodes())
        logger.info(
            "Branch separation: no extremity among %d nodes, composed skeleton is empty",
            graph.node_count,
        )
        return composed

    covered: set[tuple[int, int]] = set()
    visited: set[int] = set()
    walks: list[_Walk] = []
    while worklist:
        walk = _walk_from(graph, worklist.popleft(), covered, visited, worklist)
        if walk is not None:
            walks.append(walk)

    endpoints = sorted({w.start for w in walks} | {w.end for w in walks})
    label = {node_id: i for i, node_id in enumerate(endpoints)}
    for i in range(len(endpoints)):
        composed.add_node(i)

    model = graph.get_model()
    for walk in walks:
        branch = GraphBranch(model, graph.get_nodes(walk.chain))
        composed.add_edge(label[walk.start], label[walk.end], branch)

    unvisited = tuple(n for n in graph.get_all_nodes() if n not in visited)
    composed.unvisited_nodes = unvisited
    composed.status = SeparationStatus.PARTIAL if unvisited else SeparationStatus.COMPLETE

    logger.debug(
        "Branch separation: %d nodes -> %d composed nodes, %d branches (%d unvisited)",
        graph.node_count,
        composed.node_count,
        composed.edge_count,
        len(unvisited),
    )
    return composed
