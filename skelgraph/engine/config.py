"""Pipeline configuration: algorithm knobs for the skeleton stages."""

from __future__ import annotations

from dataclasses import dataclass, field

from skelgraph.config import settings


@dataclass
class SkeletonConfig:
    """Controls how the boundary and skeleton stages run."""

    # Marching squares
    marching_step: int = field(default_factory=lambda: settings.skelgraph_marching_step)
    iso_level: float = field(default_factory=lambda: settings.skelgraph_iso_level)

    # Raster skeleton: drop the per-node radius (distance transform) when False
    with_radii: bool = True

    # Stage ids never run, e.g. {"S0.01"} when only the skeleton is wanted
    skip_stages: set[str] = field(default_factory=set)
