from __future__ import annotations

try:
    import networkx as nx
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "Optional dependency 'networkx' is not installed. "
        "Install with: pip install torusvis[networkx]"
    ) from e

import copy
import warnings
from enum import Enum
from typing import TYPE_CHECKING

from ..core.directed_graph import DirectedGraph
from ..core.graph import EdgeOrientation

if TYPE_CHECKING:
    from ..core.graph import AbstractGraph


def _attrs_to_dict(attrs_dict: dict) -> dict:
    out = {}
    for k, v in attrs_dict.items():
        out[k] = v.name if isinstance(v, Enum) else copy.deepcopy(v)
    return out


def to_nx(graph: AbstractGraph, *, warn: bool = True) -> nx.MultiDiGraph:
    """Export a graph to a NetworkX MultiDiGraph.

    Every edge becomes one NetworkX edge from its stored source to its stored
    destination, keyed by the edge handle, with the node/edge data copied in
    and an ``orientation`` attribute holding the orientation name.

    Parameters
    --
    graph : AbstractGraph
    warn : bool, default True
        Warn that orientation survives only as an attribute.

    Returns
    ---
    networkx.MultiDiGraph

    Notes
    -
    NetworkX has one notion of direction per graph, so UNDIRECTED,
    BIDIRECTIONAL and REVERSED edges are all stored as src -> dst; read the
    ``orientation`` attribute (or use :func:`from_nx`) to recover them.

    """
    G = nx.MultiDiGraph()
    for node in graph.nodes():
        G.add_node(node, **_attrs_to_dict(graph.node_data(node)))

    flattened = 0
    for edge in graph.edges():
        orientation = graph.edge_orientation(edge)
        if orientation is not EdgeOrientation.DIRECTED:
            flattened += 1
        attrs = _attrs_to_dict(graph.edge_data(edge))
        attrs["orientation"] = orientation.name
        G.add_edge(graph.edge_source(edge), graph.edge_destination(edge), key=edge, **attrs)

    if warn and flattened:
        warnings.warn(
            f"to_nx: {flattened} non-DIRECTED edge(s) exported as src->dst; "
            "orientation is kept only in the 'orientation' edge attribute.",
            category=UserWarning,
            stacklevel=2,
        )
    return G


def from_nx(G: nx.Graph, *, history: bool = True) -> DirectedGraph:
    """Build a DirectedGraph from any NetworkX graph.

    Edge orientation is read from an ``orientation`` attribute (member, name
    or value). Without it, edges are DIRECTED when ``G`` is directed and
    UNDIRECTED otherwise.

    Returns
    ---
    DirectedGraph
        Node handles are assigned in ``G.nodes`` order; the NetworkX node key
        is kept in node data under ``"nx_id"`` unless the key already is the
        handle.

    """
    default = EdgeOrientation.DIRECTED if G.is_directed() else EdgeOrientation.UNDIRECTED
    graph = DirectedGraph(history=history)
    handles = {}
    for key, attrs in G.nodes(data=True):
        data = copy.deepcopy(dict(attrs))
        node = graph.new_node(data)
        if node != key:
            data["nx_id"] = key
        handles[key] = node

    if G.is_multigraph():
        edge_iter = ((u, v, d) for u, v, _k, d in G.edges(keys=True, data=True))
    else:
        edge_iter = G.edges(data=True)
    for u, v, attrs in edge_iter:
        data = copy.deepcopy(dict(attrs))
        orientation = data.pop("orientation", default)
        edge = graph.new_edge(handles[u], handles[v], orientation)
        graph.edge_data(edge).update(data)
    return graph
