"""Camera = intrinsics (projection parameters) + extrinsics (camera frame in world space).

Cameras are passive, read-only data holders shared by reference between the
projective models that use them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import ArrayLike, NDArray

from skelgraph.geometry.affine import Frame


@dataclass(frozen=True)
class Intrinsics:
    """Pinhole projection parameters, in pixels."""

    fx: float
    fy: float
    cx: float
    cy: float
    skew: float = 0.0
    # Radial/tangential coefficients; carried, not applied by the skeleton core.
    distortion: tuple[float, ...] = field(default_factory=tuple)
    width: int = 0
    height: int = 0

    def __post_init__(self) -> None:
        if self.fx <= 0 or self.fy <= 0:
            raise ValueError(f"Focal lengths must be positive, got fx={self.fx}, fy={self.fy}")

    @classmethod
    def from_matrix(cls, K: ArrayLike, width: int = 0, height: int = 0) -> Intrinsics:
        k = np.asarray(K, dtype=np.float64)
        if k.shape != (3, 3):
            raise ValueError(f"Intrinsic matrix must be 3x3, got shape {k.shape}")
        return cls(
            fx=float(k[0, 0]),
            fy=float(k[1, 1]),
            cx=float(k[0, 2]),
            cy=float(k[1, 2]),
            skew=float(k[0, 1]),
            width=width,
            height=height,
        )

    @property
    def matrix(self) -> NDArray[np.float64]:
        """3x3 intrinsic matrix K."""
        return np.array(
            [
                [self.fx, self.skew, self.cx],
                [0.0, self.fy, self.cy],
                [0.0, 0.0, 1.0],
            ]
        )

    def image_frame(self) -> Frame:
        """2D frame mapping pixel coordinates to normalized image coordinates (K^-1)."""
        k_inv = np.linalg.inv(self.matrix)
        return Frame(k_inv[:2, 2], k_inv[:2, :2])


class Extrinsics:
    """Camera pose: a 3D frame whose origin is the camera center and basis its axes."""

    def __init__(self, frame: Frame) -> None:
        if frame.dim != 3:
            raise ValueError(f"Extrinsics frame must be 3D, got {frame.dim}D")
        self._frame = frame

    @classmethod
    def from_rotation_translation(cls, R: ArrayLike, t: ArrayLike) -> Extrinsics:
        """Pose from world-to-camera parameters: ``X_cam = R @ X_world + t``."""
        rot = np.asarray(R, dtype=np.float64)
        trans = np.asarray(t, dtype=np.float64).reshape(3)
        return cls(Frame(-rot.T @ trans, rot.T))

    @property
    def frame(self) -> Frame:
        return self._frame

    @property
    def center(self) -> NDArray[np.float64]:
        return self._frame.origin

    @property
    def rotation(self) -> NDArray[np.float64]:
        """World-to-camera rotation R."""
        return self._frame.basis.T

    @property
    def translation(self) -> NDArray[np.float64]:
        """World-to-camera translation t."""
        return -self._frame.basis.T @ self._frame.origin


class Camera:
    def __init__(self, intrinsics: Intrinsics, extrinsics: Extrinsics) -> None:
        self._intrinsics = intrinsics
        self._extrinsics = extrinsics

    def get_intrinsics(self) -> Intrinsics:
        return self._intrinsics

    def get_extrinsics(self) -> Extrinsics:
        return self._extrinsics

    def __repr__(self) -> str:
        return f"Camera({self._intrinsics!r}, center={self._extrinsics.center.tolist()})"
