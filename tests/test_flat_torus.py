# test_flat_torus.py
import os
import sys
import unittest

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from torusvis.core.exceptions import HandleBoundsError, InvalidOperationError
from torusvis.core.flat_torus import FlatTorus
from torusvis.core.graph import EdgeOrientation


class TestFlatTorusCoordinates(unittest.TestCase):
    def setUp(self):
        self.t = FlatTorus(3, 4)

    def test_counts(self):
        self.assertEqual(self.t.number_of_nodes(), 12)
        self.assertEqual(self.t.number_of_edges(), 24)
        self.assertEqual(self.t.get_dimensions(), [3, 4])
        self.assertEqual(FlatTorus([2, 5]).get_dimensions(), [2, 5])

    def test_node_round_trip(self):
        for node in range(self.t.number_of_nodes()):
            self.assertEqual(self.t.node_at(self.t.node_coordinates(node)), node)
        self.assertEqual(self.t.node_at([1, 2]), 7)
        self.assertEqual(self.t.node_coordinates(7), [1, 2])

    def test_edge_round_trip(self):
        for edge in range(self.t.number_of_edges()):
            self.assertEqual(self.t.edge_at(self.t.edge_coordinates(edge)), edge)
        self.assertEqual(self.t.edge_at([1, 2, 1]), 19)
        self.assertEqual(self.t.edge_at([1, 2], 1), 19)
        self.assertEqual(self.t.edge_coordinates(19), [1, 2, 1])

    def test_endpoints(self):
        t = self.t
        self.assertEqual(t.edge_source(19), 7)
        self.assertEqual(t.edge_destination(19), 10)
        # wraps around dimension 0
        edge = t.edge_at([2, 0], 0)
        self.assertEqual(t.edge_source(edge), 2)
        self.assertEqual(t.edge_destination(edge), 0)
        self.assertEqual(t.node_neighbor(2, edge), 0)
        self.assertEqual(t.node_neighbor(5, edge), -1)

    def test_orientation_views(self):
        t = self.t
        self.assertIs(t.edge_orientation(19), EdgeOrientation.UNDIRECTED)
        self.assertEqual(t.edge_canonical_sources(19), [])
        self.assertEqual(t.edge_canonical_destinations(19), [])
        self.assertEqual(t.edge_symmetrical_sources(19), [7, 10])
        self.assertEqual(t.edge_symmetrical_destinations(19), [10, 7])

    def test_predicates(self):
        t = self.t
        self.assertTrue(t.is_incident_edge(19, 7))
        self.assertTrue(t.is_incident_edge(19, 10))
        self.assertFalse(t.is_incident_edge(19, 0))
        self.assertTrue(t.is_out_edge(19, 7))
        self.assertTrue(t.is_in_edge(19, 10))
        self.assertFalse(t.is_in_edge(19, 7))
        self.assertTrue(t.is_undirected_edge(19, 7))
        self.assertTrue(t.is_canonically_undirected_edge(19, 7))
        self.assertTrue(t.is_symmetric_edge(19, 7))
        self.assertTrue(t.is_symmetrically_in_edge(19, 7))
        self.assertTrue(t.is_symmetrically_out_edge(19, 10))
        for predicate in (
            t.is_directed_edge,
            t.is_reversed_edge,
            t.is_bidirectional_edge,
            t.is_asymmetric_edge,
            t.is_canonically_directed_edge,
            t.is_canonically_in_edge,
            t.is_canonically_out_edge,
        ):
            self.assertFalse(predicate(19, 7))
        self.assertFalse(t.is_self_edge(19, 7))

    def test_singular_dimension_gives_self_edges(self):
        t = FlatTorus(1, 3)
        edge = t.edge_at([0, 1], 0)
        self.assertEqual(t.edge_source(edge), t.edge_destination(edge))
        self.assertTrue(t.is_self_edge(edge, 1))
        self.assertFalse(t.is_self_edge(edge, 0))
        self.assertFalse(t.is_self_edge(t.edge_at([0, 1], 1), 1))
        self.assertEqual(t.edge_symmetrical_sources(edge), [1])
        self.assertEqual(t.edge_symmetrical_destinations(edge), [1])

    def test_id_bounds(self):
        self.assertEqual(self.t.get_node_by_id(11), 11)
        self.assertEqual(self.t.get_edge_by_id(23), 23)
        self.assertEqual(self.t.get_node_id(5), 5)
        with self.assertRaises(HandleBoundsError):
            self.t.get_node_by_id(12)
        with self.assertRaises(IndexError):
            self.t.get_edge_by_id(-1)

    def test_lazy_data(self):
        self.t.node_data(3)["x"] = 1
        self.assertEqual(self.t.node_data(3), {"x": 1})
        self.assertEqual(self.t.edge_data(0), {})
        with self.assertRaises(HandleBoundsError):
            self.t.node_data(100)

    def test_invalid_dimensions(self):
        with self.assertRaises(ValueError):
            FlatTorus(3, 0)


class TestFlatTorusImmutability(unittest.TestCase):
    def test_mutators_raise(self):
        t = FlatTorus(2, 2)
        calls = {
            "new_node": lambda: t.new_node(),
            "delete_node": lambda: t.delete_node(0),
            "new_edge": lambda: t.new_edge(0, 1),
            "delete_edge": lambda: t.delete_edge(0),
            "clear": lambda: t.clear(),
        }
        for name, call in calls.items():
            with self.subTest(op=name):
                with self.assertRaisesRegex(
                    InvalidOperationError, f"FlatTorus: invalid operation: {name}"
                ):
                    call()
        self.assertEqual(t.number_of_nodes(), 4)


class TestFlatTorusTraversal(unittest.TestCase):
    def setUp(self):
        self.t = FlatTorus(3, 4)

    def test_iter_nodes_and_edges(self):
        nodes, edges = [], []
        self.assertFalse(self.t.iter_nodes(nodes.append))
        self.assertFalse(self.t.iter_edges(edges.append))
        self.assertEqual(nodes, list(range(12)))
        self.assertEqual(edges, list(range(24)))

    def test_iter_edges_of_node(self):
        visited = []
        self.t.iter_edges(7, visited.append)
        # per dimension: the edge leaving the node, then the one entering it
        self.assertEqual(visited, [7, 6, 19, 16])
        for edge in visited:
            self.assertTrue(self.t.is_incident_edge(edge, 7))

    def test_early_exit(self):
        visited = []

        def visit(edge):
            visited.append(edge)
            return True

        self.assertTrue(self.t.iter_edges(7, visit))
        self.assertEqual(visited, [7])
        self.assertTrue(self.t.iter_nodes(lambda node: node == 3))


@pytest.mark.parametrize("dims", [[5], [2, 3], [2, 1, 3], [2, 2, 2, 2]])
def test_every_edge_joins_neighbouring_cells(dims):
    t = FlatTorus(*dims)
    for edge in t.edges():
        src = t.node_coordinates(t.edge_source(edge))
        dst = t.node_coordinates(t.edge_destination(edge))
        axis = t.edge_coordinates(edge)[-1]
        for i, (s, d) in enumerate(zip(src, dst)):
            if i == axis:
                assert d == (s + 1) % dims[i]
            else:
                assert d == s


def test_incident_edges_deduplicate_small_dimensions():
    t = FlatTorus(1, 3)
    assert t.incident_edges(0) == [0, 3, 5]
    assert t.degree(0) == 3


if __name__ == "__main__":
    unittest.main()
