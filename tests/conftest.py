"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from skelgraph.camera.camera import Camera, Extrinsics, Intrinsics
from skelgraph.geometry.affine import Frame
from skelgraph.shape.discrete_shape import DiscreteShape
from skelgraph.skeleton.graph import GraphCurveSkeleton
from skelgraph.skeleton.model.classic import Classic


# 5x5 grid with a centered 3x3 block
BLOCK_GRID = np.zeros((5, 5), dtype=bool)
BLOCK_GRID[1:4, 1:4] = True

# Two cells touching only at a corner
DIAGONAL_GRID = np.array(
    [
        [1, 0],
        [0, 1],
    ],
    dtype=bool,
)

# One-cell-thick plus sign, arms of 3 cells around the center (3, 3)
PLUS_MASK = np.zeros((7, 7), dtype=bool)
PLUS_MASK[3, :] = True
PLUS_MASK[:, 3] = True

# Path 0-1-2 with two extra leaves 3 and 4 on node 2
JUNCTION_EDGES = [(0, 1), (1, 2), (2, 3), (2, 4)]

SQUARE_CYCLE_EDGES = [(0, 1), (1, 2), (2, 3), (3, 0)]


def make_graph(edges: list[tuple[int, int]], model: Classic | None = None) -> GraphCurveSkeleton[Classic]:
    """Classic 2D graph whose node i sits at (i, 0) with radius 1."""
    model = model or Classic(2)
    graph: GraphCurveSkeleton[Classic] = GraphCurveSkeleton(model)
    for node_id in sorted({n for e in edges for n in e}):
        graph.add_node(node_id, [float(node_id), 0.0, 1.0])
    for a, b in edges:
        graph.add_edge(a, b)
    return graph


@pytest.fixture
def block_shape() -> DiscreteShape:
    return DiscreteShape(BLOCK_GRID)


@pytest.fixture
def diagonal_shape() -> DiscreteShape:
    return DiscreteShape(DIAGONAL_GRID)


@pytest.fixture
def plus_mask() -> np.ndarray:
    return PLUS_MASK.copy()


@pytest.fixture
def junction_graph() -> GraphCurveSkeleton[Classic]:
    return make_graph(JUNCTION_EDGES)


@pytest.fixture
def cycle_graph() -> GraphCurveSkeleton[Classic]:
    return make_graph(SQUARE_CYCLE_EDGES)


@pytest.fixture
def camera() -> Camera:
    """Camera 5 units behind the world origin, looking down +z."""
    intrinsics = Intrinsics(fx=500.0, fy=500.0, cx=320.0, cy=240.0, width=640, height=480)
    extrinsics = Extrinsics(Frame([0.0, 0.0, -5.0], np.eye(3)))
    return Camera(intrinsics, extrinsics)
