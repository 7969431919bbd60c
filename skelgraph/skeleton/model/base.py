"""Skeleton model interface: storage vector <-> geometric object.

Every model fixes ``stordim``, the length of the storage vector held by each
skeleton node, and the frame(s) used to interpret it. Conversions are
dispatched on the requested object type through per-type hooks; a hook the
model does not override raises ModelNotImplementedError.
"""

from __future__ import annotations

import enum
from typing import Any, TypeVar

import numpy as np
from numpy.typing import ArrayLike, NDArray

from skelgraph.errors import ModelNotImplementedError
from skelgraph.geometry.affine import Point
from skelgraph.geometry.primitives import HyperEllipse, HyperSphere, Line

T = TypeVar("T")


class ModelType(enum.Enum):
    CLASSIC = "classic"
    PERSPECTIVE = "perspective"
    ORTHOGRAPHIC = "orthographic"


# Object type -> name of the hook that decodes a storage vector into it.
_DECODERS: dict[type, str] = {
    Point: "_to_point",
    HyperSphere: "_to_sphere",
    HyperEllipse: "_to_ellipse",
    Line: "_to_line",
}

# Object type -> name of the hook that encodes it into a storage vector.
_ENCODERS: dict[type, str] = {
    Point: "_from_point",
    HyperSphere: "_from_sphere",
}


class SkeletonModel:
    """Base of Classic and Projective models. Instances are immutable values."""

    stordim: int

    def get_type(self) -> ModelType:
        raise ModelNotImplementedError(type(self).__name__, "get_type")

    def to_vec(self, obj: Any) -> NDArray[np.float64]:
        """Encode a geometric object into this model's storage vector."""
        hook = _ENCODERS.get(type(obj))
        if hook is None:
            raise ModelNotImplementedError(type(self).__name__, "to_vec", type(obj))
        vec = getattr(self, hook)(obj)
        vec.setflags(write=False)
        return vec

    def to_obj(self, vec: ArrayLike, obj_type: type[T]) -> T:
        """Decode a storage vector into an object of ``obj_type``."""
        hook = _DECODERS.get(obj_type)
        if hook is None:
            raise ModelNotImplementedError(type(self).__name__, "to_obj", obj_type)
        return getattr(self, hook)(self.check_vec(vec))

    def get_size(self, vec: ArrayLike) -> float:
        """Scalar size of the encoded object, used to compare nodes."""
        raise ModelNotImplementedError(type(self).__name__, "get_size")

    def resize(self, vec: ArrayLike, size: float) -> NDArray[np.float64]:
        """Same object rescaled so that ``get_size`` returns ``size``."""
        raise ModelNotImplementedError(type(self).__name__, "resize")

    def included(self, vec1: ArrayLike, vec2: ArrayLike) -> bool:
        """True iff the object of ``vec1`` lies inside the object of ``vec2``."""
        raise ModelNotImplementedError(type(self).__name__, "included")

    def check_vec(self, vec: ArrayLike) -> NDArray[np.float64]:
        arr = np.asarray(vec, dtype=np.float64)
        if arr.shape != (self.stordim,):
            raise ValueError(
                f"{type(self).__name__} storage vector must have {self.stordim} components, "
                f"got shape {arr.shape}"
            )
        return arr

    # Conversion hooks, overridden by concrete models.

    def _to_point(self, vec: NDArray[np.float64]) -> Point:
        raise ModelNotImplementedError(type(self).__name__, "to_obj", Point)

    def _to_sphere(self, vec: NDArray[np.float64]) -> HyperSphere:
        raise ModelNotImplementedError(type(self).__name__, "to_obj", HyperSphere)

    def _to_ellipse(self, vec: NDArray[np.float64]) -> HyperEllipse:
        raise ModelNotImplementedError(type(self).__name__, "to_obj", HyperEllipse)

    def _to_line(self, vec: NDArray[np.float64]) -> Line:
        raise ModelNotImplementedError(type(self).__name__, "to_obj", Line)

    def _from_point(self, point: Point) -> NDArray[np.float64]:
        raise ModelNotImplementedError(type(self).__name__, "to_vec", Point)

    def _from_sphere(self, sphere: HyperSphere) -> NDArray[np.float64]:
        raise ModelNotImplementedError(type(self).__name__, "to_vec", HyperSphere)
