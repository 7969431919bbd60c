"""Raster skeleton -> GraphCurveSkeleton.

Thins a 2D DiscreteShape with scikit-image, measures the local radius with
the Euclidean distance transform, and links skeleton cells into a graph.
Cells are 8-connected, except that a diagonal link is dropped whenever one
of the two orthogonal cells bridging it is also on the skeleton; otherwise
every corner of the thinned curve would form a spurious 3-cycle.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import distance_transform_edt
from skimage.morphology import skeletonize

from skelgraph.shape.discrete_shape import DiscreteShape
from skelgraph.skeleton.graph import GraphCurveSkeleton
from skelgraph.skeleton.model.classic import Classic

logger = logging.getLogger(__name__)

_ORTHOGONAL = ((0, 1), (1, 0))
_DIAGONAL = ((1, 1), (1, -1))


def graph_from_skeleton_mask(
    mask: NDArray[np.bool_],
    shape: DiscreteShape,
    radii: NDArray[np.float64] | None = None,
    model: Classic | None = None,
) -> GraphCurveSkeleton[Classic]:
    """Build a graph from a one-cell-thick 2D mask laid on ``shape``'s grid.

    Node ids are flat cell indices (row-major). Each node stores the cell's
    world position and its radius (0 when ``radii`` is None).
    """
    mask = np.asarray(mask, dtype=bool)
    if mask.shape != shape.shape or mask.ndim != 2:
        raise ValueError(f"Skeleton mask shape {mask.shape} does not match 2D shape {shape.shape}")
    model = model if model is not None else Classic(shape.frame)
    if model.dim != 2:
        raise ValueError("graph_from_skeleton_mask needs a 2D classic model")

    graph: GraphCurveSkeleton[Classic] = GraphCurveSkeleton(model)
    rows, cols = mask.shape
    cells = [tuple(int(v) for v in rc) for rc in np.argwhere(mask)]

    def node_id(r: int, c: int) -> int:
        return r * cols + c

    def on(r: int, c: int) -> bool:
        return 0 <= r < rows and 0 <= c < cols and bool(mask[r, c])

    for r, c in cells:
        radius = float(radii[r, c]) if radii is not None else 0.0
        position = model.frame.to_local(shape.position((r, c)))
        graph.add_node(node_id(r, c), np.append(position, radius))

    for r, c in cells:
        for dr, dc in _ORTHOGONAL:
            if on(r + dr, c + dc):
                graph.add_edge(node_id(r, c), node_id(r + dr, c + dc))
        for dr, dc in _DIAGONAL:
            if on(r + dr, c + dc) and not on(r + dr, c) and not on(r, c + dc):
                graph.add_edge(node_id(r, c), node_id(r + dr, c + dc))

    logger.debug("Skeleton graph: %d nodes, %d edges", graph.node_count, graph.edge_count)
    return graph


def skeletonize_shape(
    shape: DiscreteShape,
    model: Classic | None = None,
    with_radii: bool = True,
) -> GraphCurveSkeleton[Classic]:
    """Thin a 2D shape and return its skeleton graph with per-node radii."""
    if shape.dim != 2:
        raise ValueError(f"skeletonize_shape needs a 2D shape, got {shape.dim}D")
    grid = np.pad(shape.grid, 1, mode="constant", constant_values=False)
    thin = skeletonize(grid)[1:-1, 1:-1]
    if not with_radii:
        return graph_from_skeleton_mask(thin, shape, None, model)
    # Distance (in cells) to the nearest unoccupied cell, scaled by the mean resolution.
    radii = distance_transform_edt(grid)[1:-1, 1:-1] * float(np.mean(shape.resolution))
    return graph_from_skeleton_mask(thin, shape, radii, model)
