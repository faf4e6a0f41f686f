from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from ..algorithms.traversal import Traversal
from .exceptions import InvalidOrientationError

# returned by node_neighbor() when the edge is not incident to the node
NO_NODE = -1


class EdgeOrientation(Enum):
    """Orientation hint carried by every edge.

    Every edge has a source and a destination node; the orientation tells
    analysis and mapping code how to read them.

    UNDIRECTED    - no orientation at all
    DIRECTED      - begins at the source node, ends at the destination node
    BIDIRECTIONAL - begins and ends at both nodes
    REVERSED      - as DIRECTED, but destination to source

    The values are the historical bit flags; they are interchange codes only
    and are never combined.
    """

    UNDIRECTED = 1
    DIRECTED = 2
    BIDIRECTIONAL = 4
    REVERSED = 8

    @classmethod
    def coerce(cls, value):
        """Accept a member, its name (any case) or its numeric value.

        Raises
        --
        InvalidOrientationError
            For anything else.

        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.upper()]
            except KeyError:
                pass
        elif isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        raise InvalidOrientationError(f"invalid edge orientation: {value!r}")

    @property
    def src_to_dst(self) -> bool:
        """True if the edge connects its source to its destination."""
        return self in _SRC_TO_DST

    @property
    def dst_to_src(self) -> bool:
        """True if the edge connects its destination to its source."""
        return self in _DST_TO_SRC


_SRC_TO_DST = frozenset(
    {EdgeOrientation.UNDIRECTED, EdgeOrientation.DIRECTED, EdgeOrientation.BIDIRECTIONAL}
)
_DST_TO_SRC = frozenset(
    {EdgeOrientation.UNDIRECTED, EdgeOrientation.REVERSED, EdgeOrientation.BIDIRECTIONAL}
)


def _pair(a, b):
    return [a] if a == b else [a, b]


def canonical_endpoints(src, dst, orientation):
    """(sources, destinations) of an edge under the canonical interpretation."""
    if orientation is EdgeOrientation.DIRECTED:
        return [src], [dst]
    if orientation is EdgeOrientation.REVERSED:
        return [dst], [src]
    if orientation is EdgeOrientation.UNDIRECTED:
        return [], []
    if orientation is EdgeOrientation.BIDIRECTIONAL:
        return _pair(src, dst), _pair(dst, src)
    raise InvalidOrientationError(f"invalid edge orientation: {orientation!r}")


def symmetrical_endpoints(src, dst, orientation):
    """(sources, destinations) of an edge under the symmetrical interpretation."""
    if orientation is EdgeOrientation.UNDIRECTED:
        return _pair(src, dst), _pair(dst, src)
    return canonical_endpoints(src, dst, orientation)


class AbstractGraph(Traversal, ABC):
    """Graph API shared by graphs of different topologies.

    Concrete graphs implement the storage primitives (creation, deletion,
    data, direct endpoints, orientation and traversal). The orientation
    interpretations and incidence predicates are derived here from
    ``edge_source``, ``edge_destination`` and ``edge_orientation``; graphs with
    a regular structure (see :class:`FlatTorus`) override them with constants.

    Node and edge handles are non-negative ints usable as list indexes.

    Orientation interpretations
    --
    direct
        edges start at their source and end at their destination, whatever
        their orientation.
    canonical
        orientation decides sources and destinations; BIDIRECTIONAL edges
        have both endpoints as sources and destinations; UNDIRECTED edges have
        neither.
    symmetrical
        as canonical, except UNDIRECTED edges are read like BIDIRECTIONAL ones.

    """

    # Structure

    @abstractmethod
    def new_node(self, data=None) -> int:
        """Create a node and return its handle.

        Raises
        --
        IterationGuardError
            If called while iterating over nodes.

        """

    @abstractmethod
    def delete_node(self, node):
        """Delete a node and every edge incident to it."""

    @abstractmethod
    def new_edge(self, src, dst, orientation=EdgeOrientation.UNDIRECTED) -> int:
        """Create an edge from ``src`` to ``dst`` and return its handle."""

    @abstractmethod
    def delete_edge(self, edge):
        """Delete an edge."""

    @abstractmethod
    def clear(self):
        """Remove every node and edge."""

    @abstractmethod
    def node_data(self, node) -> dict:
        """Attribute dict of ``node`` (mutable, owned by the graph)."""

    @abstractmethod
    def edge_data(self, edge) -> dict:
        """Attribute dict of ``edge`` (mutable, owned by the graph)."""

    @abstractmethod
    def number_of_nodes(self) -> int: ...

    @abstractmethod
    def number_of_edges(self) -> int: ...

    @abstractmethod
    def get_node_by_id(self, id_) -> int: ...

    @abstractmethod
    def get_edge_by_id(self, id_) -> int: ...

    def get_node_id(self, node) -> int:
        return node

    def get_edge_id(self, edge) -> int:
        return edge

    def node_neighbor(self, node, edge) -> int:
        """Node sharing ``edge`` with ``node``, or ``NO_NODE`` if not incident."""
        src = self.edge_source(edge)
        dst = self.edge_destination(edge)
        if src == node:
            return dst
        if dst == node:
            return src
        return NO_NODE

    # Orientation

    @abstractmethod
    def edge_orientation(self, edge) -> EdgeOrientation: ...

    @abstractmethod
    def edge_source(self, edge) -> int:
        """Source node under the direct interpretation."""

    @abstractmethod
    def edge_destination(self, edge) -> int:
        """Destination node under the direct interpretation."""

    def _endpoints(self, edge):
        return self.edge_source(edge), self.edge_destination(edge), self.edge_orientation(edge)

    def edge_canonical_sources(self, edge) -> list[int]:
        return canonical_endpoints(*self._endpoints(edge))[0]

    def edge_canonical_destinations(self, edge) -> list[int]:
        return canonical_endpoints(*self._endpoints(edge))[1]

    def edge_symmetrical_sources(self, edge) -> list[int]:
        return symmetrical_endpoints(*self._endpoints(edge))[0]

    def edge_symmetrical_destinations(self, edge) -> list[int]:
        return symmetrical_endpoints(*self._endpoints(edge))[1]

    # Predicates

    def is_incident_edge(self, edge, node) -> bool:
        return node == self.edge_source(edge) or node == self.edge_destination(edge)

    def is_self_edge(self, edge, node) -> bool:
        return node == self.edge_source(edge) == self.edge_destination(edge)

    def _incident_orientation(self, edge, node):
        # None when not incident, so every orientation test below is False
        if not self.is_incident_edge(edge, node):
            return None
        return self.edge_orientation(edge)

    def is_directed_edge(self, edge, node) -> bool:
        return self._incident_orientation(edge, node) is EdgeOrientation.DIRECTED

    def is_undirected_edge(self, edge, node) -> bool:
        return self._incident_orientation(edge, node) is EdgeOrientation.UNDIRECTED

    def is_reversed_edge(self, edge, node) -> bool:
        return self._incident_orientation(edge, node) is EdgeOrientation.REVERSED

    def is_bidirectional_edge(self, edge, node) -> bool:
        return self._incident_orientation(edge, node) is EdgeOrientation.BIDIRECTIONAL

    def is_canonically_directed_edge(self, edge, node) -> bool:
        o = self._incident_orientation(edge, node)
        return o is not None and o is not EdgeOrientation.UNDIRECTED

    def is_canonically_undirected_edge(self, edge, node) -> bool:
        return self._incident_orientation(edge, node) is EdgeOrientation.UNDIRECTED

    def is_symmetric_edge(self, edge, node) -> bool:
        return self._incident_orientation(edge, node) in (
            EdgeOrientation.BIDIRECTIONAL,
            EdgeOrientation.UNDIRECTED,
        )

    def is_asymmetric_edge(self, edge, node) -> bool:
        return self._incident_orientation(edge, node) in (
            EdgeOrientation.DIRECTED,
            EdgeOrientation.REVERSED,
        )

    def is_in_edge(self, edge, node) -> bool:
        return self.edge_destination(edge) == node

    def is_out_edge(self, edge, node) -> bool:
        return self.edge_source(edge) == node

    def is_canonically_in_edge(self, edge, node) -> bool:
        o = self._incident_orientation(edge, node)
        return (
            o is EdgeOrientation.BIDIRECTIONAL
            or (o is EdgeOrientation.DIRECTED and self.edge_destination(edge) == node)
            or (o is EdgeOrientation.REVERSED and self.edge_source(edge) == node)
        )

    def is_canonically_out_edge(self, edge, node) -> bool:
        o = self._incident_orientation(edge, node)
        return (
            o is EdgeOrientation.BIDIRECTIONAL
            or (o is EdgeOrientation.DIRECTED and self.edge_source(edge) == node)
            or (o is EdgeOrientation.REVERSED and self.edge_destination(edge) == node)
        )

    def is_symmetrically_in_edge(self, edge, node) -> bool:
        return self._incident_orientation(
            edge, node
        ) is EdgeOrientation.UNDIRECTED or self.is_canonically_in_edge(edge, node)

    def is_symmetrically_out_edge(self, edge, node) -> bool:
        return self._incident_orientation(
            edge, node
        ) is EdgeOrientation.UNDIRECTED or self.is_canonically_out_edge(edge, node)

    # Traversal

    @abstractmethod
    def iter_nodes(self, callback) -> bool:
        """Call ``callback(node)`` for every node.

        A truthy return value from the callback stops the traversal; the
        method then returns True (False after a full pass).
        """

    @abstractmethod
    def iter_edges(self, *args) -> bool:
        """``iter_edges(callback)`` or ``iter_edges(node, callback)``.

        The one-argument form visits every edge, the two-argument form every
        edge incident to ``node``. Early exit as in :meth:`iter_nodes`.
        """

    def nodes(self):
        """Generator over a snapshot of node handles taken under the traversal guard."""
        collected = []
        self.iter_nodes(collected.append)
        yield from collected

    def edges(self, node=None):
        """Generator over edge handles, optionally restricted to ``node``."""
        collected = []
        if node is None:
            self.iter_edges(collected.append)
        else:
            self.iter_edges(node, collected.append)
        yield from collected

    @staticmethod
    def _split_iter_edges_args(args):
        if len(args) == 1:
            return None, args[0]
        if len(args) == 2:
            return args[0], args[1]
        raise TypeError(f"iter_edges() takes 1 or 2 arguments ({len(args)} given)")

    def __repr__(self):
        return (
            f"{type(self).__name__}(nodes={self.number_of_nodes()}, "
            f"edges={self.number_of_edges()})"
        )
