"""S0.01: Boundary extraction. Marching squares over the 2D input shape."""

from __future__ import annotations

import logging

from skelgraph.algorithm.marching_squares import marching_squares
from skelgraph.engine.context import SkeletonContext
from skelgraph.engine.registry import stage

logger = logging.getLogger(__name__)


@stage(
    id="S0.01",
    requires=("shape",),
    provides="boundary",
    description="Extract the oriented boundary contours of the shape",
)
def boundary_extraction(ctx: SkeletonContext) -> None:
    ctx.boundary = marching_squares(
        ctx.shape,
        step=ctx.config.marching_step,
        level=ctx.config.iso_level,
    )
    logger.debug(
        "Boundary: %d vertices in %d contours",
        ctx.boundary.size,
        len(ctx.boundary.contours()),
    )
