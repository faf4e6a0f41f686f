from collections import deque

_INTERPRETATIONS = ("direct", "canonical", "symmetrical")


def _check_interpretation(interpretation):
    if interpretation not in _INTERPRETATIONS:
        raise ValueError(
            f"unknown interpretation {interpretation!r}; expected one of {_INTERPRETATIONS}"
        )


# Traversal (neighbors)
class Traversal:
    def incident_edges(self, node):
        """Edges incident to ``node``, each listed once.

        Parameters
        --
        node : int

        Returns
        ---
        list[int]

        """
        # a torus with a dimension of size 1 or 2 reports some edges twice
        return list(dict.fromkeys(self.edges(node)))

    def degree(self, node):
        """Number of distinct edges incident to ``node`` (self-edges count once)."""
        return len(self.incident_edges(node))

    def neighbors(self, node):
        """Nodes sharing an edge with ``node``, whatever its orientation.

        Parameters
        --
        node : int

        Returns
        ---
        list[int]
            In first-seen order. Contains ``node`` itself if it has a self-edge.

        """
        out = {}
        for edge in self.incident_edges(node):
            out.setdefault(self.node_neighbor(node, edge), None)
        return list(out)

    def out_neighbors(self, node):
        """Destinations of the edges whose stored source is ``node``."""
        return self.successors(node, interpretation="direct")

    def in_neighbors(self, node):
        """Sources of the edges whose stored destination is ``node``."""
        return self.predecessors(node, interpretation="direct")

    def successors(self, node, interpretation="symmetrical"):
        """Nodes reachable from ``node`` over one edge.

        Parameters
        --
        node : int
        interpretation : {"direct", "canonical", "symmetrical"}
            How edge orientation is read. ``"canonical"`` ignores undirected
            edges, ``"symmetrical"`` follows them both ways.

        Returns
        ---
        list[int]

        """
        _check_interpretation(interpretation)
        if interpretation == "direct":
            test = self.is_out_edge
        elif interpretation == "canonical":
            test = self.is_canonically_out_edge
        else:
            test = self.is_symmetrically_out_edge
        out = {}
        for edge in self.incident_edges(node):
            if test(edge, node):
                out.setdefault(self.node_neighbor(node, edge), None)
        return list(out)

    def predecessors(self, node, interpretation="symmetrical"):
        """Nodes from which ``node`` is reachable over one edge.

        See :meth:`successors` for ``interpretation``.
        """
        _check_interpretation(interpretation)
        if interpretation == "direct":
            test = self.is_in_edge
        elif interpretation == "canonical":
            test = self.is_canonically_in_edge
        else:
            test = self.is_symmetrically_in_edge
        out = {}
        for edge in self.incident_edges(node):
            if test(edge, node):
                out.setdefault(self.node_neighbor(node, edge), None)
        return list(out)

    def bfs(self, start, interpretation="symmetrical"):
        """Breadth-first order of the nodes reachable from ``start``.

        Parameters
        --
        start : int
        interpretation : {"direct", "canonical", "symmetrical"}

        Returns
        ---
        list[int]
            ``start`` first, then nodes by increasing hop distance.

        """
        seen = {start: None}
        queue = deque([start])
        while queue:
            node = queue.popleft()
            for nxt in self.successors(node, interpretation):
                if nxt not in seen:
                    seen[nxt] = None
                    queue.append(nxt)
        return list(seen)
