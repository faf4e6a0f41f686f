"""Shared fixtures and helpers for graph and mapper tests."""

import pathlib
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from torusvis.core.directed_graph import DirectedGraph  # noqa: E402
from torusvis.core.flat_torus import FlatTorus  # noqa: E402
from torusvis.core.graph import EdgeOrientation  # noqa: E402

# ======================================================================
# FIXTURES
# ======================================================================


def build_reference_graph():
    """Four nodes, one edge of every orientation plus a self-edge.

    c -> a  DIRECTED
    c -- b  UNDIRECTED
    c <-> d BIDIRECTIONAL
    b <- d  REVERSED (stored b, d)
    b -> b  DIRECTED self-edge
    """
    G = DirectedGraph()
    nodes = {name: G.new_node({"label": name}) for name in "abcd"}
    a, b, c, d = (nodes[k] for k in "abcd")
    edges = {
        "ca": G.new_edge(c, a, EdgeOrientation.DIRECTED),
        "cb": G.new_edge(c, b, EdgeOrientation.UNDIRECTED),
        "cd": G.new_edge(c, d, EdgeOrientation.BIDIRECTIONAL),
        "bd": G.new_edge(b, d, EdgeOrientation.REVERSED),
        "bb": G.new_edge(b, b, EdgeOrientation.DIRECTED),
    }
    return G, nodes, edges


@pytest.fixture
def reference_graph():
    """(graph, nodes-by-name, edges-by-name) for the reference topology."""
    return build_reference_graph()


@pytest.fixture
def small_torus():
    """3 x 4 two-dimensional torus."""
    return FlatTorus(3, 4)


@pytest.fixture
def tmpdir_fixture():
    """Temporary directory for file I/O (input/output) tests."""
    tmpdir = Path(tempfile.mkdtemp())
    yield tmpdir
    shutil.rmtree(tmpdir)


# ======================================================================
# HELPERS
# ======================================================================


def assert_same_structure(G1, G2):
    """Assert two graphs have the same nodes/edges up to handle renumbering.

    Nodes are matched by their position in ``nodes()`` order.
    """
    n1, n2 = list(G1.nodes()), list(G2.nodes())
    assert len(n1) == len(n2), "Node counts differ"
    remap = dict(zip(n1, n2))

    def signature(G, edge, mapping=None):
        src, dst = G.edge_source(edge), G.edge_destination(edge)
        if mapping is not None:
            src, dst = mapping[src], mapping[dst]
        return (src, dst, G.edge_orientation(edge))

    sig1 = sorted(
        (signature(G1, e, remap) for e in G1.edges()), key=lambda t: (t[0], t[1], t[2].value)
    )
    sig2 = sorted((signature(G2, e) for e in G2.edges()), key=lambda t: (t[0], t[1], t[2].value))
    assert sig1 == sig2, f"Edge sets differ: {sig1} != {sig2}"


def assert_points_close(actual, expected, atol=1e-9):
    """Compare mapper output, ``None`` breaks included."""
    assert len(actual) == len(expected), f"{actual} != {expected}"
    for a, e in zip(actual, expected):
        if e is None:
            assert a is None, f"expected a break, got {a}"
        else:
            assert a is not None, f"unexpected break, expected {e}"
            assert len(a) == len(e)
            for x, y in zip(a, e):
                assert abs(x - y) <= atol, f"{a} != {e}"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
