"""Camera intrinsics/extrinsics consumed by projective skeleton models."""

from skelgraph.camera.camera import Camera, Extrinsics, Intrinsics

__all__ = ["Camera", "Intrinsics", "Extrinsics"]
