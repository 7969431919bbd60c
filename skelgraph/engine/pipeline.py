"""Pipeline orchestrator: runs skeleton stages whose inputs are available."""

from __future__ import annotations

import logging
import time

from skelgraph.engine.config import SkeletonConfig
from skelgraph.engine.context import SkeletonContext
from skelgraph.engine.registry import StageRegistry, StageSpec, get_registry

logger = logging.getLogger(__name__)


class SkeletonPipeline:
    """Shape -> boundary / skeleton graph -> composed skeleton.

    A stage is skipped, with the reason kept in ``ctx.skipped_stages``, when
    the config excludes it, when one of its inputs is still None, or when its
    output was supplied by the caller (e.g. a ready-made graph). A failing
    stage is recorded in ``ctx.errors`` and leaves its output unset, so the
    stages reading that output are skipped in turn.
    """

    def __init__(
        self,
        registry: StageRegistry | None = None,
        config: SkeletonConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or SkeletonConfig()

    def run(self, ctx: SkeletonContext) -> SkeletonContext:
        start = time.perf_counter()
        ctx.config = self.config
        stages = self.registry.all()

        for spec in stages:
            reason = self._skip_reason(ctx, spec)
            if reason:
                ctx.skipped_stages[spec.id] = reason
                logger.debug("  %s skipped: %s", spec.id, reason)
                continue

            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
            except Exception as e:
                setattr(ctx, spec.provides, None)
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
                continue
            ctx.completed_stages.add(spec.id)
            ctx.timings_ms[spec.id] = (time.perf_counter() - t0) * 1000
            logger.debug("  %s produced %s in %.1fms", spec.id, spec.provides, ctx.timings_ms[spec.id])

        logger.info(
            "Pipeline complete: %d ran, %d skipped, %d failed in %.0fms",
            len(ctx.completed_stages),
            len(ctx.skipped_stages),
            len(ctx.errors),
            (time.perf_counter() - start) * 1000,
        )
        return ctx

    def _skip_reason(self, ctx: SkeletonContext, spec: StageSpec) -> str:
        if spec.id in self.config.skip_stages:
            return "disabled in config"
        if spec.already_provided(ctx):
            return f"{spec.provides} already set"
        missing = spec.missing_inputs(ctx)
        if missing:
            producer = self.registry.producer_of(missing[0])
            if producer is not None and producer.id in ctx.errors:
                return f"no {missing[0]} ({producer.id} failed)"
            return f"no {missing[0]}"
        return ""


def create_pipeline(config: SkeletonConfig | None = None) -> SkeletonPipeline:
    """Factory function for creating a pipeline instance."""
    return SkeletonPipeline(config=config)
