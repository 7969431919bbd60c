"""S2.01: Branch separation. Collapses the skeleton graph into branches."""

from __future__ import annotations

import logging

from skelgraph.algorithm.separate_branches import separate_branches
from skelgraph.engine.context import SkeletonContext
from skelgraph.engine.registry import stage

logger = logging.getLogger(__name__)


@stage(
    id="S2.01",
    requires=("graph",),
    provides="composed",
    description="Separate the skeleton graph into branches between extremities and junctions",
)
def branch_separation(ctx: SkeletonContext) -> None:
    ctx.composed = separate_branches(ctx.graph)
    logger.debug(
        "Composed skeleton: %d nodes, %d branches (%s)",
        ctx.composed.node_count,
        ctx.composed.edge_count,
        ctx.composed.status.name,
    )
