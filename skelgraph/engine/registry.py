"""Stage registry: each skeleton stage is a function registered via decorator.

A stage names the SkeletonContext fields it reads (``requires``) and the one
it fills (``provides``). The pipeline runs stages in id order and uses these
declarations to decide whether a stage has anything to do.

Usage:
    @stage(id="S2.01", requires=("graph",), provides="composed")
    def branch_separation(ctx: SkeletonContext) -> None:
        ctx.composed = separate_branches(ctx.graph)
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Callable

from skelgraph.engine.context import SkeletonContext

logger = logging.getLogger(__name__)

_CONTEXT_FIELDS = frozenset(f.name for f in dataclasses.fields(SkeletonContext))


@dataclass(frozen=True)
class StageSpec:
    id: str
    fn: Callable[[SkeletonContext], None]
    requires: tuple[str, ...]
    provides: str
    description: str = ""

    def missing_inputs(self, ctx: SkeletonContext) -> list[str]:
        return [name for name in self.requires if getattr(ctx, name) is None]

    def already_provided(self, ctx: SkeletonContext) -> bool:
        return getattr(ctx, self.provides) is not None


class StageRegistry:
    """Stages keyed by id; a stage may only read fields an earlier stage provides."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        unknown = [n for n in (*spec.requires, spec.provides) if n not in _CONTEXT_FIELDS]
        if unknown:
            raise ValueError(f"Stage {spec.id} names unknown context fields: {unknown}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s -> %s)", spec.id, ",".join(spec.requires), spec.provides)

    def get(self, stage_id: str) -> StageSpec:
        return self._stages[stage_id]

    def all(self) -> list[StageSpec]:
        return [self._stages[k] for k in sorted(self._stages)]

    def producer_of(self, field_name: str) -> StageSpec | None:
        for spec in self.all():
            if spec.provides == field_name:
                return spec
        return None

    @property
    def count(self) -> int:
        return len(self._stages)


# Module-level singleton
_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(
    *,
    id: str,
    requires: tuple[str, ...] = (),
    provides: str,
    description: str = "",
):
    """Decorator to register a stage function."""

    def decorator(fn: Callable[[SkeletonContext], None]):
        _registry.register(
            StageSpec(id=id, fn=fn, requires=tuple(requires), provides=provides, description=description)
        )
        return fn

    return decorator
