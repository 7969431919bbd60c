"""Entry point: environment, logging and the skeleton extraction pipeline."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from skelgraph.config import settings
from skelgraph.engine.config import SkeletonConfig
from skelgraph.engine.context import SkeletonContext
from skelgraph.engine.pipeline import create_pipeline
from skelgraph.shape.discrete_shape import DiscreteShape
from skelgraph.skeleton.graph import GraphCurveSkeleton

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.skelgraph_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


def register_stages() -> None:
    """Import all stage modules so @stage decorators fire."""
    import importlib
    import pkgutil

    package_name = "skelgraph.engine.stages"
    package = importlib.import_module(package_name)
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{package_name}.{module_name}")


def extract_skeleton(
    shape: DiscreteShape | None = None,
    graph: GraphCurveSkeleton | None = None,
    config: SkeletonConfig | None = None,
) -> SkeletonContext:
    """Run boundary extraction, skeleton graph and branch separation.

    Either a 2D shape or a ready-made skeleton graph (or both) may be given.
    Stage failures are recorded in ``ctx.errors``; they do not raise.
    """
    register_stages()
    ctx = SkeletonContext(shape=shape, graph=graph)
    pipeline = create_pipeline(config)
    pipeline.run(ctx)
    if ctx.errors:
        logger.warning("Skeleton extraction finished with %d failed stage(s)", len(ctx.errors))
    return ctx
