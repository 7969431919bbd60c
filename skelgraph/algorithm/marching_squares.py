"""Marching-squares boundary extraction for 2D discrete shapes.

The grid is sampled every ``step`` cells and padded with one ring of
unoccupied samples, so shapes touching the border still produce closed
contours. Each 2x2 window of samples is classified by its occupied corners
(TL=8, TR=4, BR=2, BL=1) and emits oriented segments between points on its
edges. Segment orientation keeps the occupied side on the same side of every
segment, so each boundary vertex ends exactly one segment and starts exactly
one.

Saddle windows (5 and 10) keep the two occupied corners disconnected:
occupied cells are 4-connected, background cells 8-connected.

Vertices are keyed by the window edge they lie on and computed once, so
adjacent windows share the very same vertex (no tolerance needed).
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from skelgraph.config import settings
from skelgraph.shape.discrete_boundary import DiscreteBoundary
from skelgraph.shape.discrete_shape import DiscreteShape

logger = logging.getLogger(__name__)

# Window edges, as pairs of corner offsets (row, col) in the 2x2 window.
_TOP = ((0, 0), (0, 1))
_RIGHT = ((0, 1), (1, 1))
_BOTTOM = ((1, 0), (1, 1))
_LEFT = ((0, 0), (1, 0))

# Oriented segments (from edge, to edge) per window case.
_SEGMENTS: dict[int, tuple[tuple[tuple, tuple], ...]] = {
    0: (),
    1: ((_LEFT, _BOTTOM),),
    2: ((_BOTTOM, _RIGHT),),
    3: ((_LEFT, _RIGHT),),
    4: ((_RIGHT, _TOP),),
    5: ((_LEFT, _BOTTOM), (_RIGHT, _TOP)),  # saddle: TR and BL kept apart
    6: ((_BOTTOM, _TOP),),
    7: ((_LEFT, _TOP),),
    8: ((_TOP, _LEFT),),
    9: ((_TOP, _BOTTOM),),
    10: ((_TOP, _LEFT), (_BOTTOM, _RIGHT)),  # saddle: TL and BR kept apart
    11: ((_TOP, _RIGHT),),
    12: ((_RIGHT, _LEFT),),
    13: ((_RIGHT, _BOTTOM),),
    14: ((_BOTTOM, _LEFT),),
    15: (),
}


def window_case(window: NDArray[np.bool_]) -> int:
    """Case index (0-15) of a 2x2 occupancy window."""
    return (
        8 * int(window[0, 0])
        + 4 * int(window[0, 1])
        + 2 * int(window[1, 1])
        + 1 * int(window[1, 0])
    )


def interpolate_crossing(
    p0: NDArray[np.float64],
    p1: NDArray[np.float64],
    v0: float,
    v1: float,
    level: float,
) -> NDArray[np.float64]:
    """Point where the linear interpolation of v0 -> v1 crosses ``level``."""
    if v0 == v1:
        return (p0 + p1) / 2
    t = (level - v0) / (v1 - v0)
    return p0 + t * (p1 - p0)


def marching_squares(
    shape: DiscreteShape,
    step: int | None = None,
    level: float | None = None,
) -> DiscreteBoundary:
    """Extract the boundary of a 2D discrete shape."""
    if shape.dim != 2:
        raise ValueError(f"marching_squares needs a 2D shape, got {shape.dim}D")
    step = settings.skelgraph_marching_step if step is None else step
    if isinstance(step, bool) or not isinstance(step, (int, np.integer)) or step < 1:
        raise ValueError(f"marching_squares step must be a positive integer, got {step!r}")
    level = settings.skelgraph_iso_level if level is None else level

    boundary = DiscreteBoundary(dim=2)
    if shape.is_empty or shape.is_full:
        logger.debug("Shape is empty or full, boundary is empty")
        return boundary

    samples = shape.grid[::step, ::step]
    padded = np.pad(samples, 1, mode="constant", constant_values=False)
    rows, cols = padded.shape

    vertex_of_edge: dict[tuple[tuple[int, int], tuple[int, int]], int] = {}

    def vertex_on(r: int, c: int, edge: tuple) -> int:
        (dr0, dc0), (dr1, dc1) = edge
        a = (r + dr0, c + dc0)
        b = (r + dr1, c + dc1)
        key = (a, b) if a <= b else (b, a)
        vid = vertex_of_edge.get(key)
        if vid is None:
            # Padded sample index -> original grid index.
            ia = (np.array(key[0], dtype=np.float64) - 1) * step
            ib = (np.array(key[1], dtype=np.float64) - 1) * step
            index = interpolate_crossing(
                ia, ib, float(padded[key[0]]), float(padded[key[1]]), level
            )
            vid = boundary.add_vertex(shape.position(index))
            vertex_of_edge[key] = vid
        return vid

    n_segments = 0
    for r in range(rows - 1):
        for c in range(cols - 1):
            case = window_case(padded[r : r + 2, c : c + 2])
            for src_edge, dst_edge in _SEGMENTS[case]:
                src = vertex_on(r, c, src_edge)
                dst = vertex_on(r, c, dst_edge)
                boundary.add_link(src, dst)
                n_segments += 1

    logger.debug(
        "Marching squares: %d vertices, %d segments (step=%d)",
        boundary.size,
        n_segments,
        step,
    )
    return boundary
