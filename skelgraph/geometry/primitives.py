"""Geometric primitives expressed relative to a Frame."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from skelgraph.geometry.affine import Frame, Point


@dataclass(frozen=True, eq=False)
class HyperSphere:
    """Center + radius. The frame defines the scalar product the radius is measured with."""

    center: Point
    radius: float
    frame: Frame = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.frame is None:
            object.__setattr__(self, "frame", self.center.frame)
        if self.center.frame is not self.frame:
            object.__setattr__(self, "center", self.center.in_frame(self.frame))
        if self.radius < 0:
            raise ValueError(f"HyperSphere radius must be non-negative, got {self.radius}")
        object.__setattr__(self, "radius", float(self.radius))

    @property
    def dim(self) -> int:
        return self.frame.dim


@dataclass(frozen=True, eq=False)
class HyperEllipse:
    """Center + semi-axes. Columns of ``axes`` are semi-axis vectors in frame coordinates."""

    center: Point
    axes: NDArray[np.float64]
    frame: Frame = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.frame is None:
            object.__setattr__(self, "frame", self.center.frame)
        if self.center.frame is not self.frame:
            object.__setattr__(self, "center", self.center.in_frame(self.frame))
        axes = np.array(self.axes, dtype=np.float64)
        if axes.shape != (self.frame.dim, self.frame.dim):
            raise ValueError(f"HyperEllipse axes must be {self.frame.dim}x{self.frame.dim}")
        axes.setflags(write=False)
        object.__setattr__(self, "axes", axes)

    @property
    def dim(self) -> int:
        return self.frame.dim

    @property
    def semi_axis_lengths(self) -> NDArray[np.float64]:
        """Length of each semi-axis, in frame coordinates."""
        return np.linalg.norm(self.axes, axis=0)


@dataclass(frozen=True, eq=False)
class Line:
    """Point + direction. ``direction`` is in frame coordinates and never zero."""

    point: Point
    direction: NDArray[np.float64]
    frame: Frame = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.frame is None:
            object.__setattr__(self, "frame", self.point.frame)
        if self.point.frame is not self.frame:
            object.__setattr__(self, "point", self.point.in_frame(self.frame))
        direction = np.array(self.direction, dtype=np.float64)
        if direction.shape != (self.frame.dim,):
            raise ValueError(f"Line direction must have {self.frame.dim} components")
        if np.linalg.norm(direction) < 1e-15:
            raise ValueError("Line direction must be non-zero")
        direction.setflags(write=False)
        object.__setattr__(self, "direction", direction)

    @property
    def dim(self) -> int:
        return self.frame.dim

    def at(self, t: float) -> NDArray[np.float64]:
        """Frame coordinates of ``point + t * direction``."""
        return self.point.coords + t * self.direction
