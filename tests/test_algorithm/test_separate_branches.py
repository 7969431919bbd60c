"""Tests for branch separation."""

import numpy as np
import pytest

from skelgraph.algorithm.separate_branches import separate_branches
from skelgraph.skeleton.composed import SeparationStatus
from skelgraph.skeleton.graph import GraphCurveSkeleton
from skelgraph.skeleton.model import Classic, Orthographic
from tests.conftest import make_graph


def _chains(composed):
    """Node x-coordinates of each branch, i.e. the source graph node ids."""
    return [[int(x) for x in edge.value.get_ordered_nodes()[:, 0]] for edge in composed.get_edges()]


class TestJunctionScenario:
    def test_structure(self, junction_graph):
        composed = separate_branches(junction_graph)
        assert composed.node_count == 4
        assert composed.edge_count == 3
        assert composed.status is SeparationStatus.COMPLETE
        assert composed.unvisited_nodes == ()

    def test_branches(self, junction_graph):
        composed = separate_branches(junction_graph)
        assert _chains(composed) == [[0, 1, 2], [3, 2], [4, 2]]
        assert [(e.start, e.end) for e in composed.get_edges()] == [(0, 1), (2, 1), (3, 1)]

    def test_branches_read_from_junction(self, junction_graph):
        composed = separate_branches(junction_graph)
        ids = lambda branch: [int(x) for x in branch.get_ordered_nodes()[:, 0]]  # noqa: E731
        assert ids(composed.get_edge(0, 1)) == [0, 1, 2]
        assert ids(composed.get_edge(1, 2)) == [2, 3]
        assert ids(composed.get_edge(1, 3)) == [2, 4]

    def test_degrees_preserved(self, junction_graph):
        composed = separate_branches(junction_graph)
        assert composed.get_node_degree(1) == 3
        for node in (0, 2, 3):
            assert composed.get_node_degree(node) == 1

    def test_branch_models_are_private_copies(self, junction_graph):
        composed = separate_branches(junction_graph)
        models = [edge.value.get_model() for edge in composed.get_edges()]
        assert all(m is not junction_graph.get_model() for m in models)
        assert len({id(m) for m in models}) == 3


def test_pure_cycle(cycle_graph):
    composed = separate_branches(cycle_graph)
    assert composed.is_empty
    assert composed.edge_count == 0
    assert composed.status is SeparationStatus.NO_EXTREMITY
    assert composed.unvisited_nodes == (0, 1, 2, 3)


def test_empty_graph():
    composed = separate_branches(GraphCurveSkeleton(Classic(2)))
    assert composed.is_empty
    assert composed.status is SeparationStatus.EMPTY


def test_single_edge():
    composed = separate_branches(make_graph([(0, 1)]))
    assert composed.node_count == 2
    assert _chains(composed) == [[0, 1]]


def test_path_collapses_to_one_branch():
    composed = separate_branches(make_graph([(0, 1), (1, 2), (2, 3), (3, 4)]))
    assert composed.node_count == 2
    assert _chains(composed) == [[0, 1, 2, 3, 4]]


def test_loop_on_junction_becomes_self_loop():
    # Tail 0-1, then triangle 1-2-3.
    composed = separate_branches(make_graph([(0, 1), (1, 2), (2, 3), (3, 1)]))
    assert composed.node_count == 2
    assert composed.edge_count == 2
    loops = [e for e in composed.get_edges() if e.start == e.end]
    assert len(loops) == 1
    assert [int(x) for x in loops[0].value.get_ordered_nodes()[:, 0]] == [1, 2, 3, 1]
    assert composed.get_node_degree(loops[0].start) == 3


def test_tree_edges_all_covered():
    edges = [(0, 1), (1, 2), (2, 3), (3, 4), (2, 5), (5, 6), (6, 7), (6, 8), (8, 9)]
    graph = make_graph(edges)
    composed = separate_branches(graph)
    covered = set()
    for chain in _chains(composed):
        for a, b in zip(chain, chain[1:]):
            covered.add((min(a, b), max(a, b)))
    assert covered == set(graph.get_edges())
    assert composed.status is SeparationStatus.COMPLETE


def test_degree_invariant_on_tree():
    edges = [(0, 1), (1, 2), (2, 3), (3, 4), (2, 5), (5, 6), (6, 7), (6, 8), (8, 9)]
    graph = make_graph(edges)
    composed = separate_branches(graph)
    endpoints = sorted(n for n in graph.get_all_nodes() if graph.get_node_degree(n) != 2)
    for label, node in enumerate(endpoints):
        assert composed.get_node_degree(label) == graph.get_node_degree(node)


def test_isolated_cycle_is_partial():
    composed = separate_branches(make_graph([(0, 1), (2, 3), (3, 4), (4, 2)]))
    assert composed.status is SeparationStatus.PARTIAL
    assert composed.unvisited_nodes == (2, 3, 4)
    assert composed.edge_count == 1


def test_storage_carried_into_branches():
    graph: GraphCurveSkeleton[Orthographic] = GraphCurveSkeleton(Orthographic())
    graph.add_node(7, [0.0, 0.0, 1.0])
    graph.add_node(9, [1.0, 0.0, 2.0])
    graph.add_edge(7, 9)
    composed = separate_branches(graph)
    branch = composed.get_edge(0, 1)
    assert isinstance(branch.get_model(), Orthographic)
    assert np.allclose(branch.get_ordered_nodes(), [[0.0, 0.0, 1.0], [1.0, 0.0, 2.0]])
    assert branch.length() == pytest.approx(1.0)


class TestAdjacentJunctions:
    # Junctions 1 and 2 joined directly, two leaves on each.
    EDGES = [(0, 1), (5, 1), (1, 2), (2, 3), (2, 4)]

    def test_edge_between_junctions_is_a_branch(self):
        graph = make_graph(self.EDGES)
        composed = separate_branches(graph)
        covered = set()
        for chain in _chains(composed):
            for a, b in zip(chain, chain[1:]):
                covered.add((min(a, b), max(a, b)))
        assert covered == set(graph.get_edges())
        assert [1, 2] in _chains(composed)
        assert composed.edge_count == 5

    def test_junction_degrees_preserved(self):
        graph = make_graph(self.EDGES)
        composed = separate_branches(graph)
        endpoints = sorted(n for n in graph.get_all_nodes() if graph.get_node_degree(n) != 2)
        for label, node in enumerate(endpoints):
            assert composed.get_node_degree(label) == graph.get_node_degree(node)
        assert composed.status is SeparationStatus.COMPLETE

    def test_chain_of_three_junctions(self):
        # 10 - 11 - 12 in a row, each carrying two leaves.
        edges = [(10, 11), (11, 12), (10, 0), (10, 1), (11, 2), (12, 3), (12, 4)]
        graph = make_graph(edges)
        composed = separate_branches(graph)
        assert composed.edge_count == graph.edge_count
        assert sorted(composed.summary().junctions) == [5, 6, 7]
