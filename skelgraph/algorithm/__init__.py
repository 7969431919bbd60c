"""Skeleton algorithms: boundary extraction, raster thinning, branch separation."""

from skelgraph.algorithm.marching_squares import marching_squares
from skelgraph.algorithm.separate_branches import separate_branches
from skelgraph.algorithm.skeletonize import graph_from_skeleton_mask, skeletonize_shape

__all__ = [
    "marching_squares",
    "separate_branches",
    "graph_from_skeleton_mask",
    "skeletonize_shape",
]
