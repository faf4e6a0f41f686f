from __future__ import annotations

from .abstract_mapper import AbstractTopologyMapper


class DirectTopologyMapper(AbstractTopologyMapper):
    """Read positions straight from node data.

    A node is placed at ``graph.node_data(node)["position"]``, or at the origin
    when that key is missing or ``None``. Edges are straight segments.
    """

    def graph_node_to_position(self, graph, node):
        position = graph.node_data(node).get("position")
        if position is None:
            return [0.0, 0.0, 0.0]
        return list(position)

    def graph_edge_to_path(self, graph, edge):
        return [
            self.graph_node_to_position(graph, graph.edge_source(edge)),
            self.graph_node_to_position(graph, graph.edge_destination(edge)),
        ]
