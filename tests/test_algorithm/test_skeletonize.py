"""Tests for the raster skeleton graph."""

import numpy as np
import pytest

from skelgraph.algorithm.separate_branches import separate_branches
from skelgraph.algorithm.skeletonize import graph_from_skeleton_mask, skeletonize_shape
from skelgraph.shape.discrete_shape import DiscreteShape
from skelgraph.skeleton.composed import SeparationStatus


class TestMaskGraph:
    def test_plus_sign(self, plus_mask):
        shape = DiscreteShape(np.zeros_like(plus_mask))
        graph = graph_from_skeleton_mask(plus_mask, shape)
        assert graph.node_count == 13
        assert graph.edge_count == 12
        assert graph.get_nodes_by_degree(4) == [3 * 7 + 3]
        assert len(graph.get_nodes_by_degree(1)) == 4

    def test_plus_sign_branches(self, plus_mask):
        shape = DiscreteShape(np.zeros_like(plus_mask))
        composed = separate_branches(graph_from_skeleton_mask(plus_mask, shape))
        assert composed.node_count == 5
        assert composed.edge_count == 4
        assert all(edge.value.node_count == 4 for edge in composed.get_edges())

    def test_diagonal_links(self):
        mask = np.eye(4, dtype=bool)
        graph = graph_from_skeleton_mask(mask, DiscreteShape(np.zeros((4, 4))))
        assert graph.edge_count == 3

    def test_staircase_has_no_triangles(self):
        mask = np.array(
            [
                [1, 1, 0],
                [0, 1, 1],
            ],
            dtype=bool,
        )
        graph = graph_from_skeleton_mask(mask, DiscreteShape(np.zeros((2, 3))))
        assert graph.edge_count == 3
        assert graph.get_nodes_by_degree(1) == [0, 5]

    def test_positions_and_radii(self, plus_mask):
        shape = DiscreteShape(np.zeros_like(plus_mask), resolution=0.5)
        radii = np.full(plus_mask.shape, 2.0)
        graph = graph_from_skeleton_mask(plus_mask, shape, radii)
        assert np.allclose(graph.get_node(3 * 7 + 3), [1.5, 1.5, 2.0])

    def test_mask_shape_checked(self, plus_mask):
        with pytest.raises(ValueError):
            graph_from_skeleton_mask(plus_mask, DiscreteShape(np.zeros((3, 3))))


class TestSkeletonizeShape:
    def test_bar_is_one_branch(self):
        grid = np.zeros((5, 15), dtype=bool)
        grid[1:4, 1:14] = True
        graph = skeletonize_shape(DiscreteShape(grid))
        assert graph.node_count > 0
        composed = separate_branches(graph)
        assert composed.status is SeparationStatus.COMPLETE
        assert composed.node_count == 2
        assert composed.edge_count == 1

    def test_radii_from_distance_transform(self):
        grid = np.zeros((5, 15), dtype=bool)
        grid[1:4, 1:14] = True
        graph = skeletonize_shape(DiscreteShape(grid, resolution=2.0))
        radii = graph.get_nodes(graph.get_all_nodes())[:, -1]
        assert np.all(radii > 0)
        assert radii.max() == pytest.approx(4.0)

    def test_without_radii(self):
        grid = np.zeros((5, 15), dtype=bool)
        grid[1:4, 1:14] = True
        graph = skeletonize_shape(DiscreteShape(grid), with_radii=False)
        assert np.all(graph.get_nodes(graph.get_all_nodes())[:, -1] == 0.0)

    def test_needs_2d(self):
        with pytest.raises(ValueError):
            skeletonize_shape(DiscreteShape(np.ones((3, 3, 3))))
