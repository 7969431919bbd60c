"""S1.01: Raster skeleton graph. Thins the shape and links skeleton cells."""

from __future__ import annotations

from skelgraph.algorithm.skeletonize import skeletonize_shape
from skelgraph.engine.context import SkeletonContext
from skelgraph.engine.registry import stage


@stage(
    id="S1.01",
    requires=("shape",),
    provides="graph",
    description="Build the skeleton graph of a 2D shape",
)
def skeleton_graph(ctx: SkeletonContext) -> None:
    ctx.graph = skeletonize_shape(ctx.shape, with_radii=ctx.config.with_radii)
