"""Skeleton extraction stage engine."""

from skelgraph.engine.context import SkeletonContext
from skelgraph.engine.registry import get_registry, stage
from skelgraph.engine.pipeline import SkeletonPipeline, create_pipeline

__all__ = [
    "stage",
    "get_registry",
    "SkeletonContext",
    "SkeletonPipeline",
    "create_pipeline",
]
