"""Curve skeleton graphs."""

from skelgraph.skeleton.composed import ComposedCurveSkeleton, SeparationStatus
from skelgraph.skeleton.graph import GraphBranch, GraphCurveSkeleton

__all__ = [
    "GraphCurveSkeleton",
    "GraphBranch",
    "ComposedCurveSkeleton",
    "SeparationStatus",
]
