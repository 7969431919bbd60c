"""Skeleton models: how a node's storage vector maps to a geometric object."""

from skelgraph.skeleton.model.base import ModelType, SkeletonModel
from skelgraph.skeleton.model.classic import Classic, Classic2, Classic3
from skelgraph.skeleton.model.projective import Orthographic, Perspective, Projective

__all__ = [
    "ModelType",
    "SkeletonModel",
    "Classic",
    "Classic2",
    "Classic3",
    "Projective",
    "Perspective",
    "Orthographic",
]
