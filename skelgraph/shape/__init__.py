"""Discrete shapes and their extracted boundaries."""

from skelgraph.shape.discrete_boundary import DiscreteBoundary
from skelgraph.shape.discrete_shape import DiscreteShape

__all__ = ["DiscreteShape", "DiscreteBoundary"]
