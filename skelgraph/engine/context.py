"""SkeletonContext: the state object flowing through the pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from pydantic import BaseModel, Field

from skelgraph.engine.config import SkeletonConfig
from skelgraph.shape.discrete_boundary import DiscreteBoundary
from skelgraph.shape.discrete_shape import DiscreteShape
from skelgraph.skeleton.composed import ComposedCurveSkeleton
from skelgraph.skeleton.graph import GraphBranch, GraphCurveSkeleton
from skelgraph.utils.geometry import bbox, winding_direction


class ContourSummary(BaseModel):
    vertex_count: int
    closed: bool
    area: float = 0.0
    winding: int = 0
    bbox: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)


class BoundarySummary(BaseModel):
    vertex_count: int = 0
    contours: list[ContourSummary] = Field(default_factory=list)


def summarize_boundary(boundary: DiscreteBoundary) -> BoundarySummary:
    contours = []
    for contour in boundary.contours():
        pts = boundary.contour_points(contour)
        closed = boundary.is_closed(contour)
        area = boundary.contour_area(contour) if closed else 0.0
        contours.append(
            ContourSummary(
                vertex_count=len(contour),
                closed=closed,
                area=abs(area),
                winding=winding_direction(np.vstack([pts, pts[:1]])) if closed else 0,
                bbox=bbox(pts),
            )
        )
    return BoundarySummary(vertex_count=boundary.size, contours=contours)


@dataclass
class SkeletonContext:
    """Shared state: each stage reads its input and writes its output here."""

    shape: DiscreteShape | None = None
    config: SkeletonConfig = field(default_factory=SkeletonConfig)

    # S0: boundary extraction
    boundary: DiscreteBoundary | None = None
    # S1: raw skeleton graph (may be supplied directly instead of a shape)
    graph: GraphCurveSkeleton | None = None
    # S2: branch separation
    composed: ComposedCurveSkeleton[GraphBranch] | None = None

    # --- Pipeline metadata ---
    completed_stages: set[str] = field(default_factory=set)
    skipped_stages: dict[str, str] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)
    timings_ms: dict[str, float] = field(default_factory=dict)

    def boundary_summary(self) -> BoundarySummary | None:
        if self.boundary is None:
            return None
        return summarize_boundary(self.boundary)
