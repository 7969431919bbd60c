"""Classic model: a node is a hypersphere (center coordinates + radius) in one frame.

``Classic(frame)`` hands back the subclass for the frame's dimension, so the
storage length is a class constant: ``Classic2`` stores ``(x, y, r)``,
``Classic3`` stores ``(x, y, z, r)``.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from skelgraph.config import settings
from skelgraph.geometry.affine import Frame, Point
from skelgraph.geometry.primitives import HyperEllipse, HyperSphere
from skelgraph.skeleton.model.base import ModelType, SkeletonModel


def _frame_dim(frame: Frame | int) -> int:
    return frame if isinstance(frame, int) else frame.dim


class Classic(SkeletonModel):
    """Euclidean storage ``(c_1, ..., c_dim, r)`` with the center in ``frame`` coordinates."""

    dim: int
    stordim: int

    def __new__(cls, frame: Frame | int | None = None):
        if cls is Classic:
            dim = 2 if frame is None else _frame_dim(frame)
            for sub in (Classic2, Classic3):
                if sub.dim == dim:
                    cls = sub
                    break
            else:
                raise ValueError(f"Classic model supports 2D and 3D frames, got {dim}D")
        return super().__new__(cls)

    def __init__(self, frame: Frame | int | None = None) -> None:
        if frame is None:
            frame = self.dim
        if _frame_dim(frame) != self.dim:
            raise ValueError(f"{type(self).__name__} needs a {self.dim}D frame, got {_frame_dim(frame)}D")
        self._frame = Frame.canonic(frame) if isinstance(frame, int) else frame

    @property
    def frame(self) -> Frame:
        return self._frame

    def get_type(self) -> ModelType:
        return ModelType.CLASSIC

    def get_size(self, vec: ArrayLike) -> float:
        return float(self.check_vec(vec)[-1])

    def resize(self, vec: ArrayLike, size: float) -> NDArray[np.float64]:
        if size < 0:
            raise ValueError(f"Size must be non-negative, got {size}")
        out = self.check_vec(vec).copy()
        out[-1] = size
        out.setflags(write=False)
        return out

    def included(self, vec1: ArrayLike, vec2: ArrayLike) -> bool:
        v1 = self.check_vec(vec1)
        v2 = self.check_vec(vec2)
        dist = float(np.linalg.norm(v1[:-1] - v2[:-1]))
        return bool(dist + v1[-1] <= v2[-1] + settings.skelgraph_inclusion_tol)

    def _to_point(self, vec: NDArray[np.float64]) -> Point:
        return Point(vec[:-1], self._frame)

    def _to_sphere(self, vec: NDArray[np.float64]) -> HyperSphere:
        return HyperSphere(Point(vec[:-1], self._frame), float(vec[-1]), self._frame)

    def _to_ellipse(self, vec: NDArray[np.float64]) -> HyperEllipse:
        return HyperEllipse(Point(vec[:-1], self._frame), vec[-1] * np.eye(self.dim), self._frame)

    def _from_point(self, point: Point) -> NDArray[np.float64]:
        if point.dim != self.dim:
            raise ValueError(f"Cannot encode a {point.dim}D point in a {self.dim}D classic model")
        return np.append(point.in_frame(self._frame).coords, 0.0)

    def _from_sphere(self, sphere: HyperSphere) -> NDArray[np.float64]:
        if sphere.dim != self.dim:
            raise ValueError(f"Cannot encode a {sphere.dim}D sphere in a {self.dim}D classic model")
        return np.append(sphere.center.in_frame(self._frame).coords, sphere.radius)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Classic2(Classic):
    dim = 2
    stordim = 3


class Classic3(Classic):
    dim = 3
    stordim = 4
