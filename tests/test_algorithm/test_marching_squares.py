"""Tests for marching-squares boundary extraction."""

import numpy as np
import pytest

from skelgraph.algorithm.marching_squares import interpolate_crossing, marching_squares, window_case
from skelgraph.geometry.affine import Frame
from skelgraph.shape.discrete_shape import DiscreteShape


def _assert_closed(boundary):
    """Every vertex has exactly one successor and one predecessor."""
    for vid in boundary.vertex_ids():
        assert boundary.get_next(vid) is not None
        assert boundary.get_prev(vid) is not None
        assert boundary.get_prev(boundary.get_next(vid)) == vid


class TestHelpers:
    def test_window_case(self):
        assert window_case(np.array([[1, 0], [0, 0]], dtype=bool)) == 8
        assert window_case(np.array([[0, 0], [1, 0]], dtype=bool)) == 1
        assert window_case(np.array([[1, 1], [1, 1]], dtype=bool)) == 15

    def test_interpolate_midpoint(self):
        p = interpolate_crossing(np.array([0.0, 0.0]), np.array([0.0, 1.0]), 1.0, 0.0, 0.5)
        assert np.allclose(p, [0.0, 0.5])

    def test_interpolate_biased(self):
        p = interpolate_crossing(np.array([0.0]), np.array([4.0]), 0.0, 1.0, 0.25)
        assert np.allclose(p, [1.0])


class TestMarchingSquares:
    def test_single_block(self, block_shape):
        boundary = marching_squares(block_shape)
        contours = boundary.contours()
        assert len(contours) == 1
        assert len(contours[0]) == 12
        assert boundary.is_closed(contours[0])
        assert abs(boundary.contour_area(contours[0])) == pytest.approx(8.5)
        _assert_closed(boundary)

    def test_vertices_sit_on_cell_edges(self, block_shape):
        boundary = marching_squares(block_shape)
        pts = np.vstack(boundary.get_vertices())
        assert np.allclose(pts.min(axis=0), [0.5, 0.5])
        assert np.allclose(pts.max(axis=0), [3.5, 3.5])

    def test_single_cell(self):
        grid = np.zeros((3, 3), dtype=bool)
        grid[1, 1] = True
        boundary = marching_squares(DiscreteShape(grid))
        assert boundary.size == 4
        assert len(boundary.contours()) == 1

    def test_saddle_keeps_cells_apart(self, diagonal_shape):
        boundary = marching_squares(diagonal_shape)
        contours = boundary.contours()
        assert len(contours) == 2
        assert all(len(c) == 4 for c in contours)
        _assert_closed(boundary)

    def test_border_touching_shape_is_closed(self):
        grid = np.zeros((4, 4), dtype=bool)
        grid[:, :2] = True
        boundary = marching_squares(DiscreteShape(grid))
        contours = boundary.contours()
        assert len(contours) == 1
        assert boundary.is_closed(contours[0])
        _assert_closed(boundary)

    def test_hole_gives_two_contours_of_opposite_orientation(self):
        grid = np.zeros((7, 7), dtype=bool)
        grid[1:6, 1:6] = True
        grid[3, 3] = False
        boundary = marching_squares(DiscreteShape(grid))
        contours = boundary.contours()
        assert len(contours) == 2
        areas = [boundary.contour_area(c) for c in contours]
        assert areas[0] * areas[1] < 0

    def test_empty_and_full_shapes(self):
        assert marching_squares(DiscreteShape(np.zeros((4, 4)))).is_empty
        assert marching_squares(DiscreteShape(np.ones((4, 4)))).is_empty

    def test_positions_follow_shape_frame(self, block_shape):
        frame = Frame([100.0, 0.0], np.eye(2))
        shape = DiscreteShape(block_shape.grid, resolution=2.0, frame=frame)
        boundary = marching_squares(shape)
        pts = np.vstack(boundary.get_vertices())
        assert np.allclose(pts.min(axis=0), [101.0, 1.0])
        contour = boundary.contours()[0]
        assert abs(boundary.contour_area(contour)) == pytest.approx(8.5 * 4)

    def test_step_subsamples(self):
        grid = np.zeros((9, 9), dtype=bool)
        grid[2:7, 2:7] = True
        boundary = marching_squares(DiscreteShape(grid), step=2)
        contours = boundary.contours()
        assert len(contours) == 1
        _assert_closed(boundary)
        pts = np.vstack(boundary.get_vertices())
        # One coordinate on a sampled (even) index, the other midway between two.
        assert np.allclose(np.mod(pts, 2.0).sum(axis=1), 1.0)

    def test_invalid_arguments(self, block_shape):
        with pytest.raises(ValueError):
            marching_squares(block_shape, step=0)
        with pytest.raises(ValueError):
            marching_squares(DiscreteShape(np.ones((2, 2, 2))))
