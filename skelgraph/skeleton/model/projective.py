"""Projective skeleton models (perspective and orthographic).

A projective node is stored as ``(x, y, r)`` in the model's 2D image frame.
It stands for a one-parameter family of 3D spheres compatible with the image
observation; that family is a line in R^4 (sphere center, radius). The
``r8fun`` application maps the storage vector to the 8-vector
``(point, direction)`` of that line, expressed in world coordinates.

- Orthographic: spheres ``center = (X, Y, t)``, ``radius = r`` in the camera
  frame, i.e. every sphere inscribed in the viewing cylinder.
- Perspective: with ``(x, y)`` in normalized image coordinates, spheres
  ``center = t * (x, y, 1)``, ``radius = t * r``, i.e. every sphere inscribed
  in the viewing cone whose apex is the camera center.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from skelgraph.config import settings
from skelgraph.errors import ModelNotImplementedError
from skelgraph.geometry.affine import Frame, Point
from skelgraph.geometry.application import AffineApplication, Application, Compositor
from skelgraph.geometry.primitives import HyperEllipse, HyperSphere, Line
from skelgraph.skeleton.model.base import ModelType, SkeletonModel
from skelgraph.utils.geometry import vector_angle

if TYPE_CHECKING:
    from skelgraph.camera.camera import Camera


def _isotropic_scale(frame: Frame) -> float:
    """Length scale of a frame: sqrt(|det basis|)."""
    return float(np.sqrt(abs(np.linalg.det(frame.basis))))


class Projective(SkeletonModel):
    """Base projective model: owns the 2D image frame, the 3D camera frame and ``r8fun``.

    The base declares the whole conversion surface but implements none of it;
    only Perspective and Orthographic give the conversions a geometric meaning.
    """

    stordim = 3

    def __init__(self, frame2: Frame | None = None, frame3: Frame | None = None) -> None:
        self._frame2 = frame2 if frame2 is not None else Frame.canonic(2)
        self._frame3 = frame3 if frame3 is not None else Frame.canonic(3)
        if self._frame2.dim != 2:
            raise ValueError(f"Projective frame2 must be 2D, got {self._frame2.dim}D")
        if self._frame3.dim != 3:
            raise ValueError(f"Projective frame3 must be 3D, got {self._frame3.dim}D")
        self._image_fn = self._image_application()
        self._r8fun: Application | None = None

    @classmethod
    def from_camera(cls, camera: Camera) -> Projective:
        """Model whose image frame comes from the intrinsics and camera frame from the extrinsics."""
        return cls(camera.get_intrinsics().image_frame(), camera.get_extrinsics().frame)

    @property
    def frame2(self) -> Frame:
        return self._frame2

    @property
    def frame3(self) -> Frame:
        return self._frame3

    @property
    def r8fun(self) -> Application:
        """Storage vector -> 8-vector (point, direction) of the line of compatible spheres."""
        if self._r8fun is None:
            self._r8fun = Compositor(self._lift_application(), self._image_fn)
        return self._r8fun

    def to_r8(self, vec: ArrayLike) -> NDArray[np.float64]:
        return self.r8fun(self.check_vec(vec))

    def _image_application(self) -> Application:
        """(x, y, r) in frame2 -> (u, v, rho) in canonical image units."""
        mat = np.zeros((3, 3))
        mat[:2, :2] = self._frame2.basis
        mat[2, 2] = _isotropic_scale(self._frame2)
        return AffineApplication(mat, np.append(self._frame2.origin, 0.0))

    def _lift_application(self) -> Application:
        """(u, v, rho) -> 8-vector of the line of compatible spheres."""
        raise ModelNotImplementedError(type(self).__name__, "r8fun")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class _ImageDiscModel(Projective):
    """Shared behavior of the concrete projective models: (x, y, r) is an image disc."""

    def get_size(self, vec: ArrayLike) -> float:
        return float(self.check_vec(vec)[2])

    def resize(self, vec: ArrayLike, size: float) -> NDArray[np.float64]:
        if size < 0:
            raise ValueError(f"Size must be non-negative, got {size}")
        out = self.check_vec(vec).copy()
        out[2] = size
        out.setflags(write=False)
        return out

    def _to_point(self, vec: NDArray[np.float64]) -> Point:
        return Point(vec[:2], self._frame2)

    def _to_sphere(self, vec: NDArray[np.float64]) -> HyperSphere:
        return HyperSphere(Point(vec[:2], self._frame2), float(vec[2]), self._frame2)

    def _to_line(self, vec: NDArray[np.float64]) -> Line:
        r8 = self.r8fun(vec)
        return Line(Point(r8[:4]), r8[4:])

    def _from_point(self, point: Point) -> NDArray[np.float64]:
        if point.dim != 2:
            raise ValueError(f"Projective models encode 2D points, got a {point.dim}D one")
        return np.append(point.in_frame(self._frame2).coords, 0.0)

    def _from_sphere(self, sphere: HyperSphere) -> NDArray[np.float64]:
        if sphere.dim != 2:
            raise ValueError(f"Projective models encode 2D spheres, got a {sphere.dim}D one")
        return np.append(sphere.center.in_frame(self._frame2).coords, sphere.radius)


class Orthographic(_ImageDiscModel):
    """Orthographic projection: image disc (x, y, r) <-> cylinder of 3D spheres."""

    def get_type(self) -> ModelType:
        return ModelType.ORTHOGRAPHIC

    def _lift_application(self) -> Application:
        basis = self._frame3.basis
        mat = np.zeros((8, 3))
        mat[:3, :2] = basis[:, :2]
        mat[3, 2] = 1.0
        offset = np.zeros(8)
        offset[:3] = self._frame3.origin
        offset[4:7] = basis[:, 2]
        return AffineApplication(mat, offset)

    def included(self, vec1: ArrayLike, vec2: ArrayLike) -> bool:
        v1 = self.check_vec(vec1)
        v2 = self.check_vec(vec2)
        dist = float(np.linalg.norm(v1[:2] - v2[:2]))
        return bool(dist + v1[2] <= v2[2] + settings.skelgraph_inclusion_tol)

    def _to_ellipse(self, vec: NDArray[np.float64]) -> HyperEllipse:
        # A sphere projects orthographically onto a circle.
        return HyperEllipse(Point(vec[:2], self._frame2), vec[2] * np.eye(2), self._frame2)


class Perspective(_ImageDiscModel):
    """Perspective projection: image node (x, y, r) <-> cone of 3D spheres."""

    def get_type(self) -> ModelType:
        return ModelType.PERSPECTIVE

    def _lift_application(self) -> Application:
        basis = self._frame3.basis
        mat = np.zeros((8, 3))
        mat[4:7, :2] = basis[:, :2]
        mat[7, 2] = 1.0
        offset = np.zeros(8)
        offset[:3] = self._frame3.origin
        offset[4:7] = basis[:, 2]
        return AffineApplication(mat, offset)

    def _cone(self, vec: NDArray[np.float64]) -> tuple[NDArray[np.float64], float]:
        """Cone axis (u, v, 1) in camera coordinates and rho."""
        u, v, rho = self._image_fn(vec)
        return np.array([u, v, 1.0]), float(rho)

    def half_angle(self, vec: ArrayLike) -> float:
        """Half-angle (radians) of the viewing cone of a node."""
        axis, rho = self._cone(self.check_vec(vec))
        return float(np.arcsin(min(rho / float(np.linalg.norm(axis)), 1.0)))

    def included(self, vec1: ArrayLike, vec2: ArrayLike) -> bool:
        v1 = self.check_vec(vec1)
        v2 = self.check_vec(vec2)
        axis1, _ = self._cone(v1)
        axis2, _ = self._cone(v2)
        theta = vector_angle(axis1, axis2)
        return theta + self.half_angle(v1) <= self.half_angle(v2) + settings.skelgraph_inclusion_tol

    def _to_ellipse(self, vec: NDArray[np.float64]) -> HyperEllipse:
        # Section of the cone by the plane z = 1: p^T (d d^T - (|d|^2 - rho^2) I) p = 0.
        d, rho = self._cone(vec)
        if not 0.0 < rho < 1.0:
            raise ValueError("Viewing cone section by the image plane is not an ellipse")
        conic = np.outer(d, d) - (d @ d - rho**2) * np.eye(3)
        quad = conic[:2, :2]
        lin = conic[:2, 2]
        center = -np.linalg.solve(quad, lin)
        value = conic[2, 2] + lin @ center
        eigvals, eigvecs = np.linalg.eigh(-quad / value)
        axes_img = eigvecs / np.sqrt(eigvals)
        center_local = self._frame2.to_local(center)
        axes_local = self._frame2.vector_to_local(axes_img)
        return HyperEllipse(Point(center_local, self._frame2), axes_local, self._frame2)
