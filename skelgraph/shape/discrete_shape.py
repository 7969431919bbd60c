"""DiscreteShape: boolean occupancy grid embedded in space by a frame + resolution."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from skelgraph.geometry.affine import Frame


class DiscreteShape:
    """2D or 3D occupancy grid.

    Grid index ``i`` (one integer per array axis) maps to position
    ``frame.to_world(i * resolution)``. The grid is copied and made read-only.
    """

    def __init__(
        self,
        grid: ArrayLike,
        resolution: ArrayLike | float = 1.0,
        frame: Frame | None = None,
    ) -> None:
        occ = np.array(grid, dtype=bool)
        if occ.ndim not in (2, 3):
            raise ValueError(f"DiscreteShape grid must be 2D or 3D, got {occ.ndim}D")
        res = np.broadcast_to(np.asarray(resolution, dtype=np.float64), (occ.ndim,)).copy()
        if np.any(res <= 0):
            raise ValueError("DiscreteShape resolution must be positive")
        frm = frame if frame is not None else Frame.canonic(occ.ndim)
        if frm.dim != occ.ndim:
            raise ValueError(f"DiscreteShape of dimension {occ.ndim} in a frame of dimension {frm.dim}")
        occ.setflags(write=False)
        res.setflags(write=False)
        self._grid = occ
        self._resolution = res
        self._frame = frm

    @property
    def grid(self) -> NDArray[np.bool_]:
        return self._grid

    @property
    def resolution(self) -> NDArray[np.float64]:
        return self._resolution

    @property
    def frame(self) -> Frame:
        return self._frame

    @property
    def dim(self) -> int:
        return self._grid.ndim

    @property
    def shape(self) -> tuple[int, ...]:
        return self._grid.shape

    @property
    def is_empty(self) -> bool:
        return not bool(self._grid.any())

    @property
    def is_full(self) -> bool:
        return bool(self._grid.all())

    def occupied(self, index: tuple[int, ...]) -> bool:
        """Occupancy at ``index``; anything outside the grid is unoccupied."""
        if len(index) != self.dim:
            raise ValueError(f"Index {index} does not have {self.dim} components")
        for i, n in zip(index, self._grid.shape):
            if i < 0 or i >= n:
                return False
        return bool(self._grid[tuple(index)])

    def position(self, index: ArrayLike) -> NDArray[np.float64]:
        """World position of a (possibly fractional) grid index."""
        return self._frame.to_world(np.asarray(index, dtype=np.float64) * self._resolution)

    def index(self, position: ArrayLike) -> NDArray[np.float64]:
        """Inverse of :meth:`position` (fractional index)."""
        return self._frame.to_local(position) / self._resolution

    def occupied_positions(self) -> NDArray[np.float64]:
        """World positions of every occupied cell, Nxdim."""
        idx = np.argwhere(self._grid).astype(np.float64)
        if len(idx) == 0:
            return np.empty((0, self.dim))
        local = idx * self._resolution
        return self._frame.origin + local @ self._frame.basis.T
