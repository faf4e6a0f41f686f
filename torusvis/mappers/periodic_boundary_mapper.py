from __future__ import annotations

import numpy as np

from ..core._helpers import EPSILON, wrap
from ._box import _BoxMixin
from .abstract_mapper import AbstractTopologyMapper


class PeriodicBoundaryTopologyMapper(_BoxMixin, AbstractTopologyMapper):
    """Fold the positions of an input mapper into a periodic box.

    Positions from the input mapper are shifted, reduced modulo the box
    dimensions and re-centered. Edges follow the shortest path through the
    periodic boundaries and are split where they cross a face.

    Parameters
    --
    center : sequence of float
        Box center.
    dimensions : sequence of float
        Box extent per axis (absolute values are used). An extent below
        ``EPSILON`` collapses that axis onto the box center.
    input : AbstractTopologyMapper, optional
        Upstream mapper; required before mapping anything.

    Examples
    --
    >>> pbc = PeriodicBoundaryTopologyMapper([5, 0, 0], [10, 0, 0], input=DirectTopologyMapper())

    """

    def __init__(self, center, dimensions, input=None):
        super().__init__(input=input)
        self._init_box(center, dimensions)

    def graph_node_to_position(self, graph, node):
        upstream = self.require_input().graph_node_to_position(graph, node)
        position = []
        for i, x in enumerate((list(upstream) + [0.0, 0.0, 0.0])[:3]):
            d = self.dimensions[i]
            x = 0.0 if abs(d) < EPSILON else wrap(x + self.shifts[i], d)
            position.append(x + self._corner(i))
        return position

    def _to_box(self, p):
        # world position -> box-local coordinates in [0, d)
        d = np.asarray(self.dimensions)
        corner = np.asarray(self.center) - 0.5 * d
        p = np.asarray(p, dtype=float)
        degenerate = np.abs(d) < EPSILON
        local = np.fmod(p + d - corner, np.where(degenerate, 1.0, d))
        return np.where(degenerate, 0.0, local)

    def graph_edge_to_path(self, graph, edge):
        """Shortest periodic path between the edge endpoints.

        The displacement is taken the short way round along each axis; every
        axis where that means going through a face counts as one wrap. A ray
        is then marched from the source in the displacement direction, one
        face crossing per wrap, emitting a segment up to each crossing and
        restarting on the opposite face.

        Returns
        ---
        list[list[float] | None]
            Segments separated by ``None``, in world coordinates.

        """
        d = np.asarray(self.dimensions, dtype=float)
        corner = np.asarray(self.center, dtype=float) - 0.5 * d
        p0 = self._to_box(self.graph_node_to_position(graph, graph.edge_source(edge)))
        p1 = self._to_box(self.graph_node_to_position(graph, graph.edge_destination(edge)))

        delta = p1 - p0
        n_wrappings = 0
        for i in range(3):
            if abs(delta[i]) > 0.5 * d[i]:
                delta[i] += -d[i] if p0[i] < p1[i] else d[i]
                n_wrappings += 1

        norm = float(np.linalg.norm(delta))
        if norm == 0.0:
            return [(p0 + corner).tolist(), (p1 + corner).tolist()]
        delta /= norm

        result = []
        anchor = p0
        tracer = p0.copy()
        for _ in range(n_wrappings):
            min_i = None
            min_factor = 0.0
            for i in range(3):
                if abs(delta[i]) < EPSILON:
                    continue
                factor = ((d[i] if delta[i] > 0 else 0.0) - tracer[i]) / delta[i]
                # strict comparison: the lowest axis wins ties
                if min_i is None or factor < min_factor:
                    min_i, min_factor = i, factor
            if min_i is None:
                break
            if abs(min_factor) >= EPSILON:
                tracer = tracer + delta * min_factor
                if result:
                    result.append(None)
                result.append(anchor)
                result.append(tracer.copy())
            tracer[min_i] = 0.0 if delta[min_i] > 0 else d[min_i]
            anchor = tracer.copy()

        if result:
            result.append(None)
        result.append(anchor)
        result.append(p1)
        return [None if p is None else (p + corner).tolist() for p in result]
