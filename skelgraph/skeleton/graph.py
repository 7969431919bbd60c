"""GraphCurveSkeleton: undirected node/edge graph whose nodes carry a model storage vector."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Sequence
from typing import Any, Generic, TypeVar

import numpy as np
from numpy.typing import ArrayLike, NDArray

from skelgraph.errors import UnknownNodeError
from skelgraph.skeleton.model.base import SkeletonModel
from skelgraph.utils.geometry import arc_lengths

M = TypeVar("M", bound=SkeletonModel)


class GraphCurveSkeleton(Generic[M]):
    """Curve skeleton as a graph. Node ids are unique but not necessarily contiguous.

    Invariants: no self-loops, at most one edge between two ids. Neighbor and
    id queries return sorted lists so traversals are deterministic.
    """

    def __init__(self, model: M) -> None:
        self._model = model
        self._nodes: dict[int, NDArray[np.float64]] = {}
        self._adj: dict[int, set[int]] = {}

    @property
    def model(self) -> M:
        return self._model

    def get_model(self) -> M:
        return self._model

    # --- construction ---

    def add_node(self, node_id: int, vec: ArrayLike) -> None:
        if node_id in self._nodes:
            raise ValueError(f"Duplicate node id: {node_id}")
        stor = np.array(self._model.check_vec(vec), dtype=np.float64)
        stor.setflags(write=False)
        self._nodes[node_id] = stor
        self._adj[node_id] = set()

    def add_edge(self, id1: int, id2: int) -> None:
        self._check(id1)
        self._check(id2)
        if id1 == id2:
            raise ValueError(f"Self-loop on node {id1} is not allowed")
        self._adj[id1].add(id2)
        self._adj[id2].add(id1)

    # --- queries ---

    def _check(self, node_id: int) -> None:
        if node_id not in self._nodes:
            raise UnknownNodeError(node_id)

    def has_node(self, node_id: int) -> bool:
        return node_id in self._nodes

    def has_edge(self, id1: int, id2: int) -> bool:
        return id1 in self._adj and id2 in self._adj[id1]

    def get_neighbors(self, node_id: int) -> list[int]:
        self._check(node_id)
        return sorted(self._adj[node_id])

    def get_node_degree(self, node_id: int) -> int:
        self._check(node_id)
        return len(self._adj[node_id])

    def get_nodes_by_degree(self, degree: int) -> list[int]:
        return sorted(n for n, neigh in self._adj.items() if len(neigh) == degree)

    def get_all_nodes(self) -> list[int]:
        return sorted(self._nodes)

    def get_node(self, node_id: int) -> NDArray[np.float64]:
        self._check(node_id)
        return self._nodes[node_id]

    def get_nodes(self, node_ids: Iterable[int]) -> NDArray[np.float64]:
        """Storage vectors of ``node_ids``, one row per id, in the given order."""
        rows = [self.get_node(n) for n in node_ids]
        if not rows:
            return np.empty((0, self._model.stordim))
        return np.vstack(rows)

    def get_edges(self) -> list[tuple[int, int]]:
        """Every edge once, as (smaller id, larger id), sorted."""
        return sorted((a, b) for a, neigh in self._adj.items() for b in neigh if a < b)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return sum(len(neigh) for neigh in self._adj.values()) // 2

    def __repr__(self) -> str:
        return f"{type(self).__name__}(nodes={self.node_count}, edges={self.edge_count}, model={self._model!r})"


class GraphBranch(GraphCurveSkeleton[M]):
    """One branch: nodes 0..n-1 chained by edges (i, i+1).

    Holds its own copy of the model so it can reinterpret its nodes
    independently of the skeleton it was cut from.
    """

    def __init__(self, model: M, nodes: Sequence[ArrayLike] | NDArray[np.float64] = ()) -> None:
        super().__init__(copy.copy(model))
        for i, vec in enumerate(nodes):
            self.add_node(i, vec)
            if i > 0:
                self.add_edge(i - 1, i)

    def get_ordered_nodes(self) -> NDArray[np.float64]:
        """Storage vectors from the first extremity to the last."""
        return self.get_nodes(range(self.node_count))

    @property
    def first(self) -> NDArray[np.float64]:
        return self.get_node(0)

    @property
    def last(self) -> NDArray[np.float64]:
        return self.get_node(self.node_count - 1)

    def reversed(self) -> GraphBranch[M]:
        return GraphBranch(self._model, self.get_ordered_nodes()[::-1])

    def to_objects(self, obj_type: type) -> list[Any]:
        """Decode every node, in chain order, into ``obj_type`` through the branch model."""
        return [self._model.to_obj(vec, obj_type) for vec in self.get_ordered_nodes()]

    def length(self) -> float:
        """Polyline length through the node centers in storage coordinates."""
        nodes = self.get_ordered_nodes()
        if len(nodes) < 2:
            return 0.0
        return float(arc_lengths(nodes[:, :-1])[-1])
