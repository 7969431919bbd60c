"""Affine frames and points in N-dimensional space.

A Frame is an origin plus a basis (columns of a square matrix). Frames are
immutable once built and are shared by reference between every object
expressed in them. Points are plain values: coordinates plus the frame they
are relative to.
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np
from numpy.typing import ArrayLike, NDArray

# Below this |det(basis)| the frame cannot be inverted reliably.
_SINGULAR_TOL = 1e-12


def _frozen(values: ArrayLike) -> NDArray[np.float64]:
    arr = np.array(values, dtype=np.float64)
    arr.setflags(write=False)
    return arr


class Frame:
    """Affine basis (origin + dim basis vectors) in dim-dimensional space."""

    __slots__ = ("_origin", "_basis", "_inverse")

    def __init__(self, origin: ArrayLike, basis: ArrayLike) -> None:
        origin_arr = _frozen(origin)
        basis_arr = _frozen(basis)
        if origin_arr.ndim != 1:
            raise ValueError(f"Frame origin must be a vector, got shape {origin_arr.shape}")
        dim = origin_arr.shape[0]
        if basis_arr.shape != (dim, dim):
            raise ValueError(f"Frame basis must be {dim}x{dim}, got shape {basis_arr.shape}")
        if abs(np.linalg.det(basis_arr)) < _SINGULAR_TOL:
            raise ValueError("Frame basis is singular")
        self._origin = origin_arr
        self._basis = basis_arr
        self._inverse = _frozen(np.linalg.inv(basis_arr))

    @staticmethod
    def canonic(dim: int) -> Frame:
        """Canonical frame of the given dimension (one shared instance per dim)."""
        return _canonic_frame(dim)

    @classmethod
    def from_axes(cls, origin: ArrayLike, *axes: ArrayLike) -> Frame:
        """Build a frame from an origin and one basis vector per dimension."""
        return cls(origin, np.column_stack(axes))

    @property
    def dim(self) -> int:
        return int(self._origin.shape[0])

    @property
    def origin(self) -> NDArray[np.float64]:
        return self._origin

    @property
    def basis(self) -> NDArray[np.float64]:
        return self._basis

    def to_world(self, local: ArrayLike) -> NDArray[np.float64]:
        """Local coordinates -> canonical coordinates."""
        return self._origin + self._basis @ np.asarray(local, dtype=np.float64)

    def to_local(self, world: ArrayLike) -> NDArray[np.float64]:
        """Canonical coordinates -> local coordinates."""
        return self._inverse @ (np.asarray(world, dtype=np.float64) - self._origin)

    def vector_to_world(self, local: ArrayLike) -> NDArray[np.float64]:
        """Express a direction given in local coordinates canonically (no translation)."""
        return self._basis @ np.asarray(local, dtype=np.float64)

    def vector_to_local(self, world: ArrayLike) -> NDArray[np.float64]:
        return self._inverse @ np.asarray(world, dtype=np.float64)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Frame):
            return NotImplemented
        return bool(
            np.array_equal(self._origin, other._origin)
            and np.array_equal(self._basis, other._basis)
        )

    def __hash__(self) -> int:
        return hash((self._origin.tobytes(), self._basis.tobytes()))

    def __repr__(self) -> str:
        return f"Frame(origin={self._origin.tolist()}, basis={self._basis.tolist()})"


@lru_cache(maxsize=None)
def _canonic_frame(dim: int) -> Frame:
    if dim < 1:
        raise ValueError(f"Frame dimension must be positive, got {dim}")
    return Frame(np.zeros(dim), np.eye(dim))


class Point:
    """Coordinates relative to a Frame."""

    __slots__ = ("_coords", "_frame")

    def __init__(self, coords: ArrayLike, frame: Frame | None = None) -> None:
        coords_arr = _frozen(coords)
        if coords_arr.ndim != 1:
            raise ValueError(f"Point coordinates must be a vector, got shape {coords_arr.shape}")
        self._frame = frame if frame is not None else Frame.canonic(coords_arr.shape[0])
        if self._frame.dim != coords_arr.shape[0]:
            raise ValueError(
                f"Point of dimension {coords_arr.shape[0]} in a frame of dimension {self._frame.dim}"
            )
        self._coords = coords_arr

    @property
    def coords(self) -> NDArray[np.float64]:
        return self._coords

    @property
    def frame(self) -> Frame:
        return self._frame

    @property
    def dim(self) -> int:
        return self._frame.dim

    @property
    def world(self) -> NDArray[np.float64]:
        return self._frame.to_world(self._coords)

    def in_frame(self, frame: Frame) -> Point:
        """Same position, expressed in another frame."""
        if frame is self._frame:
            return self
        return Point(frame.to_local(self.world), frame)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self._frame == other._frame and bool(np.array_equal(self._coords, other._coords))

    def __hash__(self) -> int:
        return hash((self._coords.tobytes(), self._frame))

    def __repr__(self) -> str:
        return f"Point({self._coords.tolist()})"
