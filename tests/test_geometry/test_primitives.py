"""Tests for spheres, ellipses and lines."""

import numpy as np
import pytest

from skelgraph.geometry.affine import Frame, Point
from skelgraph.geometry.primitives import HyperEllipse, HyperSphere, Line


def test_sphere_takes_center_frame():
    frame = Frame([1.0, 0.0], np.eye(2))
    s = HyperSphere(Point([0.0, 0.0], frame), 2)
    assert s.frame is frame
    assert s.radius == 2.0
    assert s.dim == 2


def test_sphere_center_reexpressed():
    frame = Frame([1.0, 0.0], np.eye(2))
    s = HyperSphere(Point([1.0, 0.0]), 1.0, frame)
    assert s.center.frame is frame
    assert np.allclose(s.center.coords, [0.0, 0.0])


def test_negative_radius_rejected():
    with pytest.raises(ValueError):
        HyperSphere(Point([0.0, 0.0]), -1.0)


def test_ellipse_semi_axes():
    e = HyperEllipse(Point([0.0, 0.0]), [[3.0, 0.0], [0.0, 4.0]])
    assert np.allclose(sorted(e.semi_axis_lengths), [3.0, 4.0])


def test_ellipse_axes_shape_checked():
    with pytest.raises(ValueError):
        HyperEllipse(Point([0.0, 0.0]), np.eye(3))


def test_line_at():
    line = Line(Point([1.0, 0.0, 0.0]), [0.0, 0.0, 2.0])
    assert np.allclose(line.at(0.5), [1.0, 0.0, 1.0])


def test_line_zero_direction_rejected():
    with pytest.raises(ValueError):
        Line(Point([0.0, 0.0]), [0.0, 0.0])
