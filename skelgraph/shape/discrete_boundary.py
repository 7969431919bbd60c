"""DiscreteBoundary: boundary vertices + next/prev connectivity."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray
from shapely.geometry import Polygon

from skelgraph.errors import UnknownNodeError
from skelgraph.utils.geometry import signed_area

logger = logging.getLogger(__name__)


class DiscreteBoundary:
    """Boundary vertices keyed by integer id, linked into one or more polylines.

    Each vertex has at most one successor and one predecessor. A contour is
    closed when following successors comes back to its first vertex.
    """

    def __init__(self, dim: int = 2) -> None:
        self.dim = dim
        self._vertices: dict[int, NDArray[np.float64]] = {}
        self._next: dict[int, int] = {}
        self._prev: dict[int, int] = {}
        self._next_id = 0

    def add_vertex(self, position: ArrayLike) -> int:
        pos = np.array(position, dtype=np.float64)
        if pos.shape != (self.dim,):
            raise ValueError(f"Boundary vertex must have {self.dim} components, got shape {pos.shape}")
        pos.setflags(write=False)
        vid = self._next_id
        self._vertices[vid] = pos
        self._next_id += 1
        return vid

    def add_link(self, src: int, dst: int) -> None:
        """Declare that ``dst`` follows ``src`` along the boundary."""
        self._check(src)
        self._check(dst)
        if src == dst:
            raise ValueError(f"Boundary vertex {src} cannot follow itself")
        if src in self._next and self._next[src] != dst:
            raise ValueError(f"Boundary vertex {src} already has successor {self._next[src]}")
        if dst in self._prev and self._prev[dst] != src:
            raise ValueError(f"Boundary vertex {dst} already has predecessor {self._prev[dst]}")
        self._next[src] = dst
        self._prev[dst] = src

    def _check(self, vid: int) -> None:
        if vid not in self._vertices:
            raise UnknownNodeError(vid)

    @property
    def size(self) -> int:
        return len(self._vertices)

    @property
    def is_empty(self) -> bool:
        return not self._vertices

    def vertex_ids(self) -> list[int]:
        return sorted(self._vertices)

    def get_vertex(self, vid: int) -> NDArray[np.float64]:
        self._check(vid)
        return self._vertices[vid]

    def get_next(self, vid: int) -> int | None:
        self._check(vid)
        return self._next.get(vid)

    def get_prev(self, vid: int) -> int | None:
        self._check(vid)
        return self._prev.get(vid)

    def contours(self) -> list[list[int]]:
        """Vertex ids of each polyline, in boundary order.

        Open polylines start at their vertex without predecessor; closed
        ones start at their smallest id. Ordering of contours follows the
        smallest id they contain.
        """
        seen: set[int] = set()
        result: list[list[int]] = []
        starts = [v for v in self.vertex_ids() if v not in self._prev]
        starts += [v for v in self.vertex_ids() if v in self._prev]
        for start in starts:
            if start in seen:
                continue
            contour = [start]
            seen.add(start)
            cur = self._next.get(start)
            while cur is not None and cur not in seen:
                contour.append(cur)
                seen.add(cur)
                cur = self._next.get(cur)
            result.append(contour)
        result.sort(key=min)
        return result

    def is_closed(self, contour: list[int]) -> bool:
        return len(contour) > 2 and self._next.get(contour[-1]) == contour[0]

    def contour_points(self, contour: list[int]) -> NDArray[np.float64]:
        if not contour:
            return np.empty((0, self.dim))
        return np.vstack([self._vertices[v] for v in contour])

    def get_vertices(self) -> list[NDArray[np.float64]]:
        """Positions of every vertex, contour after contour in boundary order."""
        return [self._vertices[v] for contour in self.contours() for v in contour]

    def contour_area(self, contour: list[int]) -> float:
        """Signed area of a closed 2D contour (sign gives its orientation)."""
        if self.dim != 2:
            raise ValueError("contour_area is only defined for 2D boundaries")
        pts = self.contour_points(contour)
        if len(pts) < 3:
            return 0.0
        return signed_area(np.vstack([pts, pts[:1]]))

    def to_polygons(self) -> list[Polygon]:
        """Shapely polygon per closed 2D contour (holes are separate polygons)."""
        if self.dim != 2:
            raise ValueError("to_polygons is only defined for 2D boundaries")
        polygons = []
        for contour in self.contours():
            if not self.is_closed(contour):
                logger.debug("Skipping open contour of %d vertices", len(contour))
                continue
            polygons.append(Polygon(self.contour_points(contour)))
        return polygons
