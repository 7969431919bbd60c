"""Differentiable maps between vector spaces and their composition.

Projective skeleton models use these to turn a storage vector into the
8-vector (point + direction) of a line in R^4, and to get the Jacobian of
that conversion for downstream optimisation.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray


class Application:
    """A map R^in_dim -> R^out_dim with a Jacobian."""

    in_dim: int
    out_dim: int

    def __call__(self, x: ArrayLike) -> NDArray[np.float64]:
        raise NotImplementedError

    def jac(self, x: ArrayLike) -> NDArray[np.float64]:
        raise NotImplementedError

    def _check_input(self, x: ArrayLike) -> NDArray[np.float64]:
        arr = np.asarray(x, dtype=np.float64)
        if arr.shape != (self.in_dim,):
            raise ValueError(f"{type(self).__name__} expects a {self.in_dim}-vector, got shape {arr.shape}")
        return arr


class AffineApplication(Application):
    """x -> matrix @ x + offset."""

    def __init__(self, matrix: ArrayLike, offset: ArrayLike | None = None) -> None:
        mat = np.array(matrix, dtype=np.float64)
        if mat.ndim != 2:
            raise ValueError("AffineApplication matrix must be 2-D")
        self.out_dim, self.in_dim = mat.shape
        off = np.zeros(self.out_dim) if offset is None else np.array(offset, dtype=np.float64)
        if off.shape != (self.out_dim,):
            raise ValueError(f"AffineApplication offset must have {self.out_dim} components")
        mat.setflags(write=False)
        off.setflags(write=False)
        self.matrix = mat
        self.offset = off

    def __call__(self, x: ArrayLike) -> NDArray[np.float64]:
        return self.matrix @ self._check_input(x) + self.offset

    def jac(self, x: ArrayLike) -> NDArray[np.float64]:
        self._check_input(x)
        return self.matrix.copy()


class Compositor(Application):
    """Chain of applications applied right to left: ``Compositor(f, g)(x) == f(g(x))``."""

    def __init__(self, *fcts: Application) -> None:
        if not fcts:
            raise ValueError("Compositor needs at least one application")
        for outer, inner in zip(fcts, fcts[1:]):
            if outer.in_dim != inner.out_dim:
                raise ValueError(
                    f"Cannot compose {type(outer).__name__} (in {outer.in_dim}) "
                    f"after {type(inner).__name__} (out {inner.out_dim})"
                )
        self.fcts = tuple(fcts)
        self.in_dim = fcts[-1].in_dim
        self.out_dim = fcts[0].out_dim

    def __call__(self, x: ArrayLike) -> NDArray[np.float64]:
        value = self._check_input(x)
        for fct in reversed(self.fcts):
            value = fct(value)
        return value

    def jac(self, x: ArrayLike) -> NDArray[np.float64]:
        # Chain rule, innermost first.
        value = self._check_input(x)
        result = np.eye(self.in_dim)
        for fct in reversed(self.fcts):
            result = fct.jac(value) @ result
            value = fct(value)
        return result
