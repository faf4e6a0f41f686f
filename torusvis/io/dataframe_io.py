from __future__ import annotations

from typing import Any

import narwhals as nw
import polars as pl
from narwhals.typing import IntoDataFrame

from ..core.directed_graph import DirectedGraph
from ..core.graph import EdgeOrientation

_NODE_SCHEMA = {"node_id": pl.Int64}
_EDGE_SCHEMA = {
    "edge_id": pl.Int64,
    "source": pl.Int64,
    "destination": pl.Int64,
    "orientation": pl.Utf8,
}


_NODE_COLUMNS = ("node_id", "x", "y", "z")
_EDGE_COLUMNS = tuple(_EDGE_SCHEMA)


def _public(data: dict, public_only: bool, reserved=()) -> dict:
    # structural columns win over data keys of the same name
    return {
        k: v
        for k, v in data.items()
        if k not in reserved and not (public_only and str(k).startswith("__"))
    }


def to_dataframes(graph, mapper=None, *, public_only: bool = True) -> dict[str, pl.DataFrame]:
    """Export a graph to Polars DataFrames.

    Returns a dictionary with two tables:
    - 'nodes': node_id, x/y/z when a mapper is given, node data keys
    - 'edges': edge_id, source, destination, orientation (member name), edge data keys

    Data keys named like a structural column (node_id, x, y, z for nodes;
    edge_id, source, destination, orientation for edges) are not exported.

    Args:
        graph: any AbstractGraph (DirectedGraph, FlatTorus, ...)
        mapper: optional topology mapper used to fill the x, y, z columns
        public_only: if True, drop data keys starting with '__'

    Returns:
        Dictionary mapping table names to Polars DataFrames

    """
    nodes_data = []
    for node in graph.nodes():
        row = {"node_id": node}
        if mapper is not None:
            x, y, z = (list(mapper.graph_node_to_position(graph, node)) + [0.0, 0.0, 0.0])[:3]
            row.update(x=float(x), y=float(y), z=float(z))
        row.update(_public(graph.node_data(node), public_only, _NODE_COLUMNS))
        nodes_data.append(row)

    edges_data = []
    for edge in graph.edges():
        row = {
            "edge_id": edge,
            "source": graph.edge_source(edge),
            "destination": graph.edge_destination(edge),
            "orientation": graph.edge_orientation(edge).name,
        }
        row.update(_public(graph.edge_data(edge), public_only, _EDGE_COLUMNS))
        edges_data.append(row)

    return {
        "nodes": pl.DataFrame(nodes_data, infer_schema_length=None) if nodes_data else pl.DataFrame(schema=_NODE_SCHEMA),
        "edges": pl.DataFrame(edges_data, infer_schema_length=None) if edges_data else pl.DataFrame(schema=_EDGE_SCHEMA),
    }


def _to_dicts(df: nw.DataFrame[Any]) -> list[dict[str, Any]]:
    """Convert narwhals DataFrame to list of dicts."""
    return [dict(zip(df.columns, row)) for row in df.rows()]


def _strip_nulls(row: dict) -> dict:
    # missing attributes come back as nulls from the column union
    return {k: v for k, v in row.items() if v is not None}


def from_dataframes(
    nodes: IntoDataFrame | None = None,
    edges: IntoDataFrame | None = None,
    *,
    orientation=EdgeOrientation.UNDIRECTED,
    history: bool = True,
) -> DirectedGraph:
    """Build a DirectedGraph from any DataFrame (Pandas, Polars, PyArrow, etc.).

    Accepts DataFrames in the format produced by to_dataframes():

    Nodes DataFrame (optional):
        - Required: node_id
        - Optional: x, y, z (stored as data["position"]), attribute columns

    Edges DataFrame (optional):
        - Required: source, destination
        - Optional: edge_id (ignored, handles are reassigned), orientation, attribute columns

    Args:
        nodes: DataFrame of nodes
        edges: DataFrame of edges; endpoints missing from ``nodes`` are created
        orientation: orientation for rows without an 'orientation' value
        history: passed to DirectedGraph

    Returns:
        DirectedGraph instance. Handles are reassigned in row order; node_id
        values are only used to resolve edge endpoints.

    """
    G = DirectedGraph(history=history)
    handles: dict[Any, int] = {}

    def _node(external_id, data=None):
        if external_id not in handles:
            handles[external_id] = G.new_node(dict(data or {}))
        return handles[external_id]

    if nodes is not None:
        nodes_nw = nw.from_native(nodes, eager_only=True)
        if nodes_nw.shape[0] > 0:
            if "node_id" not in nodes_nw.columns:
                raise ValueError("nodes DataFrame must have 'node_id' column")
            for row in _to_dicts(nodes_nw):
                row = _strip_nulls(row)
                nid = row.pop("node_id")
                if {"x", "y", "z"} & row.keys():
                    row["position"] = [float(row.pop(k, 0.0)) for k in ("x", "y", "z")]
                _node(nid, row)

    if edges is not None:
        edges_nw = nw.from_native(edges, eager_only=True)
        if edges_nw.shape[0] > 0:
            missing = {"source", "destination"} - set(edges_nw.columns)
            if missing:
                raise ValueError(f"edges DataFrame missing columns: {sorted(missing)}")
            for row in _to_dicts(edges_nw):
                row = _strip_nulls(row)
                row.pop("edge_id", None)
                src = _node(row.pop("source"))
                dst = _node(row.pop("destination"))
                edge = G.new_edge(src, dst, row.pop("orientation", orientation))
                G.edge_data(edge).update(row)

    return G
