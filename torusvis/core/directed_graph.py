from __future__ import annotations

from ._History import History
from ._IdAllocator import IdAllocator
from ._IterationGuard import IterationGuard
from ._OrderedMap import OrderedMap
from .exceptions import IterationGuardError
from .graph import NO_NODE, AbstractGraph, EdgeOrientation


class _NodeEntry:
    __slots__ = ("data", "in_neighbors", "out_neighbors")

    def __init__(self, data):
        self.data = data
        # neighbor -> {edge: None}; dicts as ordered sets so parallel edges coexist
        self.in_neighbors = {}
        self.out_neighbors = {}


class _EdgeEntry:
    __slots__ = ("src", "dst", "orientation", "data")

    def __init__(self, src, dst, orientation, data):
        self.src = src
        self.dst = dst
        self.orientation = orientation
        self.data = data


def _link(slots, neighbor, edge):
    slots.setdefault(neighbor, {})[edge] = None


def _unlink(slots, neighbor, edge):
    edges = slots.get(neighbor)
    if edges is None:
        return
    edges.pop(edge, None)
    if not edges:
        del slots[neighbor]


class DirectedGraph(History, AbstractGraph):
    """General graph with explicitly stored nodes and edges.

    Nodes and edges are tracked individually, complete with orientation, so
    any irregular topology can be represented. Handles come from two
    independent :class:`IdAllocator` namespaces and are reused after deletion.

    Parameters
    --
    history : bool, default True
        Record mutations (``new_node``, ``delete_node``, ``new_edge``,
        ``delete_edge``, ``clear``) in the in-memory history log.

    Notes
    -
    - Adjacency follows the edge orientation: UNDIRECTED, DIRECTED and
      BIDIRECTIONAL edges link source to destination; UNDIRECTED, REVERSED and
      BIDIRECTIONAL edges link destination to source.
    - Structural mutations raise :class:`IterationGuardError` while any node
      or edge traversal of this graph is running. Collect handles first
      (``list(g.nodes())``) to mutate while walking the graph.

    Examples
    --
    >>> g = DirectedGraph()
    >>> a, b = g.new_node({"label": "a"}), g.new_node({"label": "b"})
    >>> e = g.new_edge(a, b, EdgeOrientation.DIRECTED)
    >>> g.edge_canonical_sources(e)
    [0]

    """

    _HISTORY_MUTATORS = ("new_node", "delete_node", "new_edge", "delete_edge", "clear")

    def __init__(self, history: bool = True):
        self._node_ids = IdAllocator()
        self._edge_ids = IdAllocator()
        self._node_iter_guard = IterationGuard("cannot add or remove nodes while iterating over them")
        self._edge_iter_guard = IterationGuard("cannot add or remove edges while iterating over them")
        self._clear()
        self._init_history(enabled=history)

    # Internals

    def _clear(self):
        self._nodes = OrderedMap()  # str(handle) -> handle, creation order
        self._edges = OrderedMap()
        self._node_ids.free_all()
        self._edge_ids.free_all()
        self._incident_cache = {}  # node -> OrderedMap of incident edges
        self._node_entries = []
        self._edge_entries = []

    def _check_structure_guards(self, what):
        if what == "nodes":
            self._node_iter_guard.check()
            if self._edge_iter_guard.active:
                raise IterationGuardError("cannot add or remove nodes while iterating over edges")
        else:
            self._edge_iter_guard.check()
            if self._node_iter_guard.active:
                raise IterationGuardError("cannot add or remove edges while iterating over nodes")

    def _node_entry(self, node) -> _NodeEntry:
        if not self._node_ids.is_allocated(node):
            raise KeyError(f"Node {node} not found")
        return self._node_entries[node]

    def _edge_entry(self, edge) -> _EdgeEntry:
        if not self._edge_ids.is_allocated(edge):
            raise KeyError(f"Edge {edge} not found")
        return self._edge_entries[edge]

    @staticmethod
    def _store(entries, handle, entry):
        if handle == len(entries):
            entries.append(entry)
        else:
            entries[handle] = entry

    def _compute_edges(self, node):
        """Incident edges of ``node``, cached until its adjacency changes."""
        cached = self._incident_cache.get(node)
        if cached is None:
            entry = self._node_entry(node)
            cached = OrderedMap()
            # edges entering this node, then edges leaving it
            for edges in entry.in_neighbors.values():
                for edge in edges:
                    cached.set(str(edge), edge)
            for edges in entry.out_neighbors.values():
                for edge in edges:
                    cached.set(str(edge), edge)
            self._incident_cache[node] = cached
        return cached

    def _invalidate(self, *nodes):
        for node in nodes:
            self._incident_cache.pop(node, None)

    def _new_node(self, data):
        node = self._node_ids.alloc()
        self._store(self._node_entries, node, _NodeEntry({} if data is None else data))
        self._nodes.set(str(node), node)
        return node

    def _new_edge(self, src, dst, orientation):
        orientation = EdgeOrientation.coerce(orientation)
        src_entry = self._node_entry(src)
        dst_entry = self._node_entry(dst)
        edge = self._edge_ids.alloc()
        self._store(self._edge_entries, edge, _EdgeEntry(src, dst, orientation, {}))
        if orientation.src_to_dst:
            _link(src_entry.out_neighbors, dst, edge)
            _link(dst_entry.in_neighbors, src, edge)
        if orientation.dst_to_src:
            _link(src_entry.in_neighbors, dst, edge)
            _link(dst_entry.out_neighbors, src, edge)
        self._edges.set(str(edge), edge)
        self._invalidate(src, dst)
        return edge

    def _delete_edge(self, edge):
        entry = self._edge_entry(edge)
        src, dst = entry.src, entry.dst
        src_entry = self._node_entries[src]
        dst_entry = self._node_entries[dst]
        # undo exactly what _new_edge linked for this orientation
        if entry.orientation.src_to_dst:
            _unlink(src_entry.out_neighbors, dst, edge)
            _unlink(dst_entry.in_neighbors, src, edge)
        if entry.orientation.dst_to_src:
            _unlink(dst_entry.out_neighbors, src, edge)
            _unlink(src_entry.in_neighbors, dst, edge)
        self._edges.unset(str(edge))
        self._edge_entries[edge] = None
        self._edge_ids.free(edge)
        self._invalidate(src, dst)

    def _delete_node(self, node):
        # remove all edges incident to this node first
        for edge in self._compute_edges(node).values():
            self._delete_edge(edge)
        self._nodes.unset(str(node))
        self._node_entries[node] = None
        self._node_ids.free(node)
        self._invalidate(node)

    # Structure

    def new_node(self, data=None) -> int:
        """Create a node.

        Parameters
        --
        data : dict, optional
            Attribute dict stored as-is (not copied). A fresh dict by default.

        Returns
        ---
        int
            Node handle.

        """
        self._check_structure_guards("nodes")
        return self._new_node(data)

    def delete_node(self, node):
        """Delete ``node`` after deleting every edge incident to it.

        Not transactional: if an edge deletion fails, earlier ones stay done.
        """
        self._check_structure_guards("nodes")
        self._delete_node(node)

    def new_edge(self, src, dst, orientation=EdgeOrientation.UNDIRECTED) -> int:
        """Create an edge from ``src`` to ``dst``.

        Parameters
        --
        src, dst : int
            Existing node handles (equal for a self-edge).
        orientation : EdgeOrientation or str or int, default UNDIRECTED

        Returns
        ---
        int
            Edge handle.

        Raises
        --
        KeyError
            If an endpoint does not exist.
        InvalidOrientationError
            If ``orientation`` is not an EdgeOrientation.

        """
        self._check_structure_guards("edges")
        return self._new_edge(src, dst, orientation)

    def delete_edge(self, edge):
        self._check_structure_guards("edges")
        self._delete_edge(edge)

    def clear(self):
        IterationGuard.check_all([self._node_iter_guard, self._edge_iter_guard])
        self._clear()

    def node_data(self, node) -> dict:
        return self._node_entry(node).data

    def edge_data(self, edge) -> dict:
        return self._edge_entry(edge).data

    def number_of_nodes(self) -> int:
        return len(self._nodes)

    def number_of_edges(self) -> int:
        return len(self._edges)

    def has_node(self, node) -> bool:
        return self._node_ids.is_allocated(node)

    def has_edge(self, edge) -> bool:
        return self._edge_ids.is_allocated(edge)

    def get_node_by_id(self, id_) -> int:
        return id_

    def get_edge_by_id(self, id_) -> int:
        return id_

    def node_neighbor(self, node, edge) -> int:
        entry = self._edge_entry(edge)
        if entry.src == node:
            return entry.dst
        if entry.dst == node:
            return entry.src
        return NO_NODE

    # Orientation

    def edge_orientation(self, edge) -> EdgeOrientation:
        return self._edge_entry(edge).orientation

    def edge_source(self, edge) -> int:
        return self._edge_entry(edge).src

    def edge_destination(self, edge) -> int:
        return self._edge_entry(edge).dst

    def _endpoints(self, edge):
        entry = self._edge_entry(edge)
        return entry.src, entry.dst, entry.orientation

    # Traversal

    def iter_nodes(self, callback) -> bool:
        with self._node_iter_guard.guarding():
            for node in self._nodes.values():
                if callback(node):
                    return True
        return False

    def iter_edges(self, *args) -> bool:
        node, callback = self._split_iter_edges_args(args)
        edges = self._edges if node is None else self._compute_edges(node)
        with self._edge_iter_guard.guarding():
            for edge in edges.values():
                if callback(edge):
                    return True
        return False
