"""Exception types raised for wiring bugs (not for degenerate input)."""

from __future__ import annotations


class SkelgraphError(Exception):
    """Base class for skelgraph contract violations."""


class UnknownNodeError(SkelgraphError, KeyError):
    """A node id was queried that the graph does not hold."""

    def __init__(self, node_id: int) -> None:
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"Unknown node id: {self.node_id}"


class ModelNotImplementedError(SkelgraphError, NotImplementedError):
    """Conversion not implemented for this skeleton model."""

    def __init__(self, model_name: str, operation: str, obj_type: object = None) -> None:
        target = getattr(obj_type, "__name__", obj_type)
        msg = f"{model_name}.{operation}: not implemented in that skeleton type"
        if target is not None:
            msg += f" (object type {target})"
        super().__init__(msg)
        self.model_name = model_name
        self.operation = operation
