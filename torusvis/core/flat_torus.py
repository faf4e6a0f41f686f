from __future__ import annotations

from ._helpers import index_map, index_unmap, invalid_operation, product
from .exceptions import HandleBoundsError
from .graph import AbstractGraph, EdgeOrientation, symmetrical_endpoints


class FlatTorus(AbstractGraph):
    """Graph whose nodes and edges form a regular, wrap-around grid.

    The topology is that of a multidimensional box whose boundaries wrap
    around; any number of dimensions is allowed. Nodes and edges are implicit:
    handles are computed from torus coordinates, so no per-element storage is
    needed. Everything is "created" at construction; adding or removing nodes
    or edges raises :class:`InvalidOperationError`.

    Edge coordinates
    --
    An edge is aligned along one dimension and joins node ``a`` to the node
    immediately following ``a`` in that dimension. Its torus coordinates are
    the coordinates of ``a`` plus a trailing component naming the aligned
    dimension. ``[0, 0, 0]`` in a 2D torus is the edge leaving node ``[0, 0]``
    along dimension 0; its other node is ``[1, 0]``, or ``[0, 0]`` again if
    dimension 0 has size 1.

    Parameters
    --
    *dimensions : int
        Size of each topological dimension.

    """

    def __init__(self, *dimensions):
        if len(dimensions) == 1 and isinstance(dimensions[0], (list, tuple)):
            dimensions = tuple(dimensions[0])
        self.dimensions = [int(d) for d in dimensions]
        if any(d < 1 for d in self.dimensions):
            raise ValueError(f"FlatTorus dimensions must be positive, got {self.dimensions}")
        self._number_of_nodes = None
        self._number_of_edges = None
        self._node_data = {}
        self._edge_data = {}

    def get_dimensions(self):
        return list(self.dimensions)

    # Coordinates

    def node_at(self, coords) -> int:
        return index_map(coords, self.dimensions)

    def node_coordinates(self, node) -> list[int]:
        return index_unmap(node, self.dimensions)

    def edge_at(self, coords, dimension=None) -> int:
        """Edge with the given torus coordinates.

        If ``dimension`` is omitted, it is taken from the last element of
        ``coords``.
        """
        if dimension is None:
            coords, dimension = coords[:-1], coords[-1]
        return index_map(coords, self.dimensions) + dimension * self.number_of_nodes()

    def edge_coordinates(self, edge) -> list[int]:
        n = self.number_of_nodes()
        result = index_unmap(edge % n, self.dimensions)
        result.append(edge // n)
        return result

    # Structure

    clear = invalid_operation("FlatTorus", "clear")
    new_node = invalid_operation("FlatTorus", "new_node")
    delete_node = invalid_operation("FlatTorus", "delete_node")
    new_edge = invalid_operation("FlatTorus", "new_edge")
    delete_edge = invalid_operation("FlatTorus", "delete_edge")

    def number_of_nodes(self) -> int:
        if self._number_of_nodes is None:
            self._number_of_nodes = product(self.dimensions)
        return self._number_of_nodes

    def number_of_edges(self) -> int:
        if self._number_of_edges is None:
            self._number_of_edges = self.number_of_nodes() * len(self.dimensions)
        return self._number_of_edges

    def get_node_by_id(self, id_) -> int:
        if not 0 <= id_ < self.number_of_nodes():
            raise HandleBoundsError(f"FlatTorus: no such node matching id: {id_}")
        return id_

    def get_edge_by_id(self, id_) -> int:
        if not 0 <= id_ < self.number_of_edges():
            raise HandleBoundsError(f"FlatTorus: no such edge matching id: {id_}")
        return id_

    def node_data(self, node) -> dict:
        # created on first access, kept for the lifetime of the torus
        data = self._node_data.get(node)
        if data is None:
            data = self._node_data[self.get_node_by_id(node)] = {}
        return data

    def edge_data(self, edge) -> dict:
        data = self._edge_data.get(edge)
        if data is None:
            data = self._edge_data[self.get_edge_by_id(edge)] = {}
        return data

    # Orientation

    def edge_orientation(self, edge) -> EdgeOrientation:
        return EdgeOrientation.UNDIRECTED

    def edge_source(self, edge) -> int:
        return self.node_at(self.edge_coordinates(edge)[:-1])

    def edge_destination(self, edge) -> int:
        coords = self.edge_coordinates(edge)
        dimension = coords.pop()
        coords[dimension] = (coords[dimension] + 1) % self.dimensions[dimension]
        return self.node_at(coords)

    def edge_canonical_sources(self, edge) -> list[int]:
        return []

    def edge_canonical_destinations(self, edge) -> list[int]:
        return []

    def edge_symmetrical_sources(self, edge) -> list[int]:
        src, dst = self.edge_source(edge), self.edge_destination(edge)
        return symmetrical_endpoints(src, dst, EdgeOrientation.UNDIRECTED)[0]

    def edge_symmetrical_destinations(self, edge) -> list[int]:
        src, dst = self.edge_source(edge), self.edge_destination(edge)
        return symmetrical_endpoints(src, dst, EdgeOrientation.UNDIRECTED)[1]

    # Predicates

    def is_self_edge(self, edge, node) -> bool:
        # only when the edge wraps around a singular dimension
        dimension = edge // self.number_of_nodes()
        return self.is_incident_edge(edge, node) and self.dimensions[dimension] == 1

    def is_directed_edge(self, edge, node) -> bool:
        return False

    def is_undirected_edge(self, edge, node) -> bool:
        return True

    def is_reversed_edge(self, edge, node) -> bool:
        return False

    def is_bidirectional_edge(self, edge, node) -> bool:
        return False

    def is_canonically_directed_edge(self, edge, node) -> bool:
        return False

    def is_canonically_undirected_edge(self, edge, node) -> bool:
        return True

    def is_symmetric_edge(self, edge, node) -> bool:
        return True

    def is_asymmetric_edge(self, edge, node) -> bool:
        return False

    def is_canonically_in_edge(self, edge, node) -> bool:
        return False

    def is_canonically_out_edge(self, edge, node) -> bool:
        return False

    def is_symmetrically_in_edge(self, edge, node) -> bool:
        return True

    def is_symmetrically_out_edge(self, edge, node) -> bool:
        return True

    # Traversal

    def iter_nodes(self, callback) -> bool:
        for node in range(self.number_of_nodes()):
            if callback(node):
                return True
        return False

    def iter_edges(self, *args) -> bool:
        node, callback = self._split_iter_edges_args(args)
        if node is None:
            for edge in range(self.number_of_edges()):
                if callback(edge):
                    return True
            return False

        coords = self.node_coordinates(self.get_node_by_id(node))
        for i, size in enumerate(self.dimensions):
            # edge leaving the node along dimension i
            if callback(self.edge_at(coords, i)):
                return True
            # edge entering it along dimension i
            before = list(coords)
            before[i] = (before[i] + size - 1) % size
            if callback(self.edge_at(before, i)):
                return True
        return False

    def __repr__(self):
        return f"FlatTorus(dimensions={self.dimensions})"
