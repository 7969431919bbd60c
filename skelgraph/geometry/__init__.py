"""Affine frames, points and the primitives expressed in them."""

from skelgraph.geometry.affine import Frame, Point
from skelgraph.geometry.application import AffineApplication, Application, Compositor
from skelgraph.geometry.primitives import HyperEllipse, HyperSphere, Line

__all__ = [
    "Frame",
    "Point",
    "HyperSphere",
    "HyperEllipse",
    "Line",
    "Application",
    "AffineApplication",
    "Compositor",
]
