# test_adapters.py
import os
import sys
import unittest
import warnings

import polars as pl
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from conftest import assert_same_structure, build_reference_graph

from torusvis.core.flat_torus import FlatTorus
from torusvis.core.graph import EdgeOrientation
from torusvis.io.dataframe_io import from_dataframes, to_dataframes
from torusvis.mappers import FlatTorusTopologyMapper


class TestDataFrameIO(unittest.TestCase):
    def setUp(self):
        self.g, self.n, self.e = build_reference_graph()
        self.g.edge_data(self.e["ca"])["weight"] = 0.5
        self.g.node_data(self.n["a"])["__private"] = True

    def test_export_tables(self):
        dfs = to_dataframes(self.g)
        nodes, edges = dfs["nodes"], dfs["edges"]
        self.assertIsInstance(nodes, pl.DataFrame)
        self.assertEqual(nodes.height, 4)
        self.assertEqual(edges.height, 5)
        self.assertIn("label", nodes.columns)
        self.assertNotIn("__private", nodes.columns)
        row = edges.filter(pl.col("edge_id") == self.e["bd"]).to_dicts()[0]
        self.assertEqual(row["orientation"], "REVERSED")
        self.assertEqual((row["source"], row["destination"]), (self.n["b"], self.n["d"]))
        self.assertIsNone(row["weight"])

    def test_public_only_false_keeps_private_keys(self):
        nodes = to_dataframes(self.g, public_only=False)["nodes"]
        self.assertIn("__private", nodes.columns)

    def test_round_trip(self):
        dfs = to_dataframes(self.g)
        G2 = from_dataframes(dfs["nodes"], dfs["edges"])
        assert_same_structure(self.g, G2)
        ca = [e for e in G2.edges() if G2.edge_data(e).get("weight") == 0.5]
        self.assertEqual(len(ca), 1)
        self.assertIs(G2.edge_orientation(ca[0]), EdgeOrientation.DIRECTED)

    def test_data_keys_cannot_shadow_structural_columns(self):
        self.g.node_data(self.n["a"]).update(node_id="alpha", x="left")
        self.g.edge_data(self.e["ca"]).update(source="lab", orientation="sideways", edge_id=-1)
        dfs = to_dataframes(self.g)
        self.assertEqual(dfs["nodes"]["node_id"].to_list(), list(self.g.nodes()))
        self.assertEqual(dfs["nodes"]["node_id"].dtype, pl.Int64)
        self.assertNotIn("x", dfs["nodes"].columns)
        row = dfs["edges"].filter(pl.col("edge_id") == self.e["ca"]).to_dicts()[0]
        self.assertEqual(row["source"], self.n["c"])
        self.assertEqual(row["orientation"], "DIRECTED")
        self.assertEqual(dfs["edges"]["source"].dtype, pl.Int64)
        G2 = from_dataframes(dfs["nodes"], dfs["edges"])
        assert_same_structure(self.g, G2)

    def test_empty_graph(self):
        from torusvis.core.directed_graph import DirectedGraph

        dfs = to_dataframes(DirectedGraph())
        self.assertEqual(dfs["nodes"].height, 0)
        self.assertIn("orientation", dfs["edges"].columns)

    def test_positions_from_mapper(self):
        ring = FlatTorus(4)
        mapper = FlatTorusTopologyMapper([0, 0, 0], [4, 2, 2])
        nodes = to_dataframes(ring, mapper)["nodes"]
        self.assertEqual(nodes["x"].to_list(), [-1.5, -0.5, 0.5, 1.5])
        self.assertEqual(to_dataframes(ring)["edges"]["orientation"].unique().to_list(), ["UNDIRECTED"])

    def test_import_edges_only_and_defaults(self):
        edges = pl.DataFrame(
            {
                "source": ["x", "y"],
                "destination": ["y", "z"],
                "orientation": ["DIRECTED", None],
            }
        )
        G = from_dataframes(edges=edges)
        self.assertEqual(G.number_of_nodes(), 3)
        orientations = [G.edge_orientation(e) for e in G.edges()]
        self.assertEqual(orientations, [EdgeOrientation.DIRECTED, EdgeOrientation.UNDIRECTED])

    def test_import_positions(self):
        nodes = pl.DataFrame({"node_id": [10, 20], "x": [1.0, 2.0], "y": [0.0, 0.0], "z": [3.0, 4.0]})
        G = from_dataframes(nodes)
        self.assertEqual(G.node_data(0), {"position": [1.0, 0.0, 3.0]})

    def test_missing_columns(self):
        with self.assertRaises(ValueError):
            from_dataframes(pl.DataFrame({"id": [1]}))
        with self.assertRaises(ValueError):
            from_dataframes(edges=pl.DataFrame({"source": [1]}))

    def test_accepts_pandas(self):
        pd = pytest.importorskip("pandas")
        edges = pd.DataFrame({"source": [0, 1], "destination": [1, 2]})
        G = from_dataframes(edges=edges, orientation="bidirectional")
        self.assertEqual(G.number_of_edges(), 2)
        self.assertTrue(all(G.is_bidirectional_edge(e, G.edge_source(e)) for e in G.edges()))


class TestNetworkXAdapter(unittest.TestCase):
    def setUp(self):
        self.nx = pytest.importorskip("networkx")
        from torusvis.adapters.networkx_adapter import from_nx, to_nx

        self.to_nx, self.from_nx = to_nx, from_nx
        self.g, self.n, self.e = build_reference_graph()

    def test_to_nx_warns_and_keeps_orientation(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            G = self.to_nx(self.g)
        self.assertTrue(any("orientation" in str(w.message) for w in caught))
        self.assertIsInstance(G, self.nx.MultiDiGraph)
        self.assertEqual(G.number_of_nodes(), 4)
        self.assertEqual(G.number_of_edges(), 5)
        self.assertEqual(G.nodes[self.n["c"]]["label"], "c")
        data = G.get_edge_data(self.n["b"], self.n["d"], key=self.e["bd"])
        self.assertEqual(data["orientation"], "REVERSED")

    def test_directed_only_graph_does_not_warn(self):
        from torusvis.core.directed_graph import DirectedGraph

        g = DirectedGraph()
        u, v = g.new_node(), g.new_node()
        g.new_edge(u, v, EdgeOrientation.DIRECTED)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            self.to_nx(g)

    def test_round_trip(self):
        G = self.to_nx(self.g, warn=False)
        back = self.from_nx(G)
        assert_same_structure(self.g, back)
        self.assertEqual(back.node_data(self.n["a"]), {"label": "a"})

    def test_from_plain_graphs(self):
        undirected = self.nx.path_graph(["p", "q", "r"])
        G = self.from_nx(undirected)
        self.assertEqual(G.number_of_edges(), 2)
        self.assertTrue(all(G.edge_orientation(e) is EdgeOrientation.UNDIRECTED for e in G.edges()))
        self.assertEqual(G.node_data(0)["nx_id"], "p")

        directed = self.nx.DiGraph([(0, 1)])
        G = self.from_nx(directed)
        self.assertIs(G.edge_orientation(0), EdgeOrientation.DIRECTED)

    def test_torus_export(self):
        G = self.to_nx(FlatTorus(3, 3), warn=False)
        self.assertEqual(G.number_of_edges(), 18)
        self.assertTrue(all(d == 4 for _, d in G.degree()))


if __name__ == "__main__":
    unittest.main()
