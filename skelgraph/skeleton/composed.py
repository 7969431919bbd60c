"""ComposedCurveSkeleton: coarse graph of extremities/junctions with branches as edges."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from skelgraph.errors import UnknownNodeError

E = TypeVar("E")


class SeparationStatus(enum.Enum):
    """How completely branch separation covered its input graph."""

    COMPLETE = "complete"
    EMPTY = "empty"  # input graph had no node at all
    NO_EXTREMITY = "no_extremity"  # nodes exist, none of degree 1 (e.g. a pure cycle)
    PARTIAL = "partial"  # some nodes were never reached (isolated cycles / nodes)


@dataclass(frozen=True)
class ComposedEdge(Generic[E]):
    edge_id: int
    start: int
    end: int
    value: E


class BranchSummary(BaseModel):
    edge_id: int
    start: int
    end: int
    node_count: int
    length: float = 0.0


class ComposedSkeletonSummary(BaseModel):
    status: str
    node_count: int
    edge_count: int
    extremities: list[int] = Field(default_factory=list)
    junctions: list[int] = Field(default_factory=list)
    branches: list[BranchSummary] = Field(default_factory=list)
    unvisited_nodes: list[int] = Field(default_factory=list)


class ComposedCurveSkeleton(Generic[E]):
    """Nodes are dense ids; each edge carries an ``E`` (typically a GraphBranch).

    Parallel edges and self-loop edges are allowed: two junctions may be
    joined by several branches, and a loop may start and end at one junction.
    An edge keyed (a, b) carries a branch running from a to b.
    """

    def __init__(self) -> None:
        self._nodes: set[int] = set()
        self._edges: dict[int, ComposedEdge[E]] = {}
        self._incident: dict[int, list[int]] = {}
        self.status = SeparationStatus.COMPLETE
        self.unvisited_nodes: tuple[int, ...] = ()

    def add_node(self, node_id: int) -> None:
        if node_id in self._nodes:
            raise ValueError(f"Duplicate node id: {node_id}")
        self._nodes.add(node_id)
        self._incident[node_id] = []

    def add_edge(self, id1: int, id2: int, value: E) -> int:
        self._check(id1)
        self._check(id2)
        edge_id = len(self._edges)
        self._edges[edge_id] = ComposedEdge(edge_id, id1, id2, value)
        self._incident[id1].append(edge_id)
        if id2 != id1:
            self._incident[id2].append(edge_id)
        return edge_id

    def _check(self, node_id: int) -> None:
        if node_id not in self._nodes:
            raise UnknownNodeError(node_id)

    def get_all_nodes(self) -> list[int]:
        return sorted(self._nodes)

    def get_edges(self) -> list[ComposedEdge[E]]:
        return [self._edges[k] for k in sorted(self._edges)]

    def get_edge_by_id(self, edge_id: int) -> ComposedEdge[E]:
        return self._edges[edge_id]

    def get_edges_between(self, id1: int, id2: int) -> list[E]:
        """Values of every edge joining id1 and id2, oriented from id1 to id2."""
        self._check(id1)
        self._check(id2)
        result = []
        for edge_id in self._incident[id1]:
            edge = self._edges[edge_id]
            if (edge.start, edge.end) == (id1, id2):
                result.append(edge.value)
            elif (edge.start, edge.end) == (id2, id1):
                result.append(_reverse(edge.value))
        return result

    def get_edge(self, id1: int, id2: int) -> E:
        """The single edge joining id1 and id2, oriented from id1 to id2."""
        values = self.get_edges_between(id1, id2)
        if not values:
            raise KeyError(f"No edge between {id1} and {id2}")
        if len(values) > 1:
            raise ValueError(f"{len(values)} edges between {id1} and {id2}, use get_edges_between")
        return values[0]

    def get_neighbors(self, node_id: int) -> list[int]:
        self._check(node_id)
        neigh: set[int] = set()
        for edge_id in self._incident[node_id]:
            edge = self._edges[edge_id]
            neigh.add(edge.end if edge.start == node_id else edge.start)
        return sorted(neigh)

    def get_node_degree(self, node_id: int) -> int:
        """Number of edge ends at the node (a self-loop counts twice)."""
        self._check(node_id)
        return sum(
            2 if self._edges[e].start == self._edges[e].end else 1 for e in self._incident[node_id]
        )

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    @property
    def is_empty(self) -> bool:
        return not self._nodes

    def summary(self) -> ComposedSkeletonSummary:
        branches = []
        for edge in self.get_edges():
            length_fn = getattr(edge.value, "length", None)
            branches.append(
                BranchSummary(
                    edge_id=edge.edge_id,
                    start=edge.start,
                    end=edge.end,
                    node_count=getattr(edge.value, "node_count", 0),
                    length=length_fn() if callable(length_fn) else 0.0,
                )
            )
        nodes = self.get_all_nodes()
        return ComposedSkeletonSummary(
            status=self.status.value,
            node_count=self.node_count,
            edge_count=self.edge_count,
            extremities=[n for n in nodes if self.get_node_degree(n) == 1],
            junctions=[n for n in nodes if self.get_node_degree(n) >= 3],
            branches=branches,
            unvisited_nodes=list(self.unvisited_nodes),
        )


def _reverse(value: E) -> E:
    reverse = getattr(value, "reversed", None)
    return reverse() if callable(reverse) else value
