from __future__ import annotations

import math

from ._box import _BoxMixin
from .abstract_mapper import AbstractTopologyMapper


class FlatTorusTopologyMapper(_BoxMixin, AbstractTopologyMapper):
    """Lay a :class:`FlatTorus` out as a regular grid inside a box.

    Each torus dimension is spread evenly over the matching box axis, nodes
    sitting at cell centers. Integer shifts roll the grid along an axis. Edges
    that wrap around the torus are drawn as two stubs leaving the box faces,
    separated by a ``None`` break.

    Parameters
    --
    center : sequence of float
        Box center.
    dimensions : sequence of float
        Box extent per axis (absolute values are used).

    Notes
    -
    Only the first three torus dimensions are visible. A box axis with no
    matching torus dimension places every node at the box center on that axis.

    """

    def __init__(self, center, dimensions, input=None):
        super().__init__(input=input)
        self._init_box(center, dimensions)

    @staticmethod
    def _coerce_shift(x):
        return int(math.floor(x))

    def graph_node_to_position(self, graph, node):
        coords = graph.node_coordinates(node)
        g_dims = graph.get_dimensions()
        position = list(self.center)
        for i in range(min(3, len(coords))):
            cell = self.dimensions[i] / g_dims[i]
            x = (coords[i] + self.shifts[i]) % g_dims[i]
            position[i] = x * cell + self._corner(i) + 0.5 * cell
        return position

    def _edge_wraps(self, graph, edge):
        axis = graph.edge_coordinates(edge)[-1]
        src = graph.edge_source(edge)
        dst = graph.edge_destination(edge)
        p0 = self.graph_node_to_position(graph, src)
        p1 = self.graph_node_to_position(graph, dst)
        # a size-1 dimension gives a self-edge, which always wraps
        wraps = axis < 3 and (p0[axis] > p1[axis] or src == dst)
        return wraps, axis, p0, p1

    def graph_edge_to_path(self, graph, edge):
        wraps, axis, p0, p1 = self._edge_wraps(graph, edge)
        if not wraps:
            return [p0, p1]
        half = 0.5 * self.dimensions[axis] / graph.get_dimensions()[axis]
        leaving = list(p0)
        leaving[axis] += half
        entering = list(p1)
        entering[axis] -= half
        return [p0, leaving, None, entering, p1]
