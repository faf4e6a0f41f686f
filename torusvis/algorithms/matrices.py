"""Sparse matrix views of a graph.

Rows and columns follow traversal order (``graph.nodes()`` / ``graph.edges()``),
not handle values: :class:`DirectedGraph` reuses freed handles, so handles can
be sparse. :func:`node_index` and :func:`edge_index` give the mapping.
"""

from __future__ import annotations

import numpy as np
import scipy.sparse as sp

from ..core.graph import EdgeOrientation, canonical_endpoints


def node_index(graph) -> dict[int, int]:
    """Node handle -> matrix row."""
    return {node: i for i, node in enumerate(graph.nodes())}


def edge_index(graph) -> dict[int, int]:
    """Edge handle -> incidence matrix column."""
    return {edge: j for j, edge in enumerate(graph.edges())}


def _edge_weight(graph, edge, weight):
    if weight is None:
        return 1.0
    return float(graph.edge_data(edge).get(weight, 1.0))


def adjacency_matrix(graph, interpretation="direct", weight=None):
    """Node-by-node adjacency matrix.

    Parameters
    --
    graph : AbstractGraph
    interpretation : {"direct", "canonical", "symmetrical"}, default "direct"
        ``"direct"`` writes one entry per edge, source row to destination
        column. The other two pair up the edge's sources and destinations
        under that interpretation, so an UNDIRECTED edge is absent in
        ``"canonical"`` and written both ways in ``"symmetrical"``.
    weight : str, optional
        Edge data key holding a numeric weight (1.0 when absent).

    Returns
    ---
    scipy.sparse.csr_matrix
        Shape ``(n, n)``. Parallel edges accumulate.

    """
    if interpretation == "direct":

        def pairs_of(e):
            return [(graph.edge_source(e), graph.edge_destination(e))]

    elif interpretation == "canonical":

        def pairs_of(e):
            return zip(graph.edge_canonical_sources(e), graph.edge_canonical_destinations(e))

    elif interpretation == "symmetrical":

        def pairs_of(e):
            return zip(graph.edge_symmetrical_sources(e), graph.edge_symmetrical_destinations(e))

    else:
        raise ValueError(f"unknown interpretation {interpretation!r}")

    rows_of = node_index(graph)
    n = len(rows_of)
    A = sp.dok_matrix((n, n), dtype=float)
    for edge in graph.edges():
        w = _edge_weight(graph, edge, weight)
        for src, dst in pairs_of(edge):
            i, j = rows_of[src], rows_of[dst]
            A[i, j] = A.get((i, j), 0.0) + w
    return A.tocsr()


def incidence_matrix(graph, weight=None):
    """Node-by-edge incidence matrix.

    Asymmetric edges (DIRECTED, REVERSED) write ``+w`` at their canonical
    source row and ``-w`` at their canonical destination row. Symmetric edges
    (UNDIRECTED, BIDIRECTIONAL) write ``+w`` at both endpoints. A self-edge
    only writes its source entry.

    Returns
    ---
    scipy.sparse.csr_matrix
        Shape ``(number_of_nodes, number_of_edges)``.

    """
    rows_of = node_index(graph)
    cols_of = edge_index(graph)
    M = sp.dok_matrix((len(rows_of), len(cols_of)), dtype=np.float32)
    for edge, col in cols_of.items():
        w = _edge_weight(graph, edge, weight)
        src, dst = graph.edge_source(edge), graph.edge_destination(edge)
        orientation = graph.edge_orientation(edge)
        is_dir = orientation in (EdgeOrientation.DIRECTED, EdgeOrientation.REVERSED)
        if is_dir:
            (src,), (dst,) = canonical_endpoints(src, dst, orientation)
        M[rows_of[src], col] = w
        if src != dst:
            M[rows_of[dst], col] = -w if is_dir else w
    return M.tocsr()


def laplacian_matrix(graph, weight=None):
    """Combinatorial Laplacian ``D - A`` of the symmetrical adjacency.

    Self-edges are dropped before building it.
    """
    A = adjacency_matrix(graph, "symmetrical", weight).tolil()
    A.setdiag(0)
    A = A.tocsr()
    A.eliminate_zeros()
    deg = np.asarray(A.sum(axis=1)).ravel()
    return (sp.diags(deg, format="csr") - A).tocsr()


__all__ = [
    "node_index",
    "edge_index",
    "adjacency_matrix",
    "incidence_matrix",
    "laplacian_matrix",
]
