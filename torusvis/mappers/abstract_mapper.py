from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.exceptions import MissingInputError


class AbstractTopologyMapper(ABC):
    """Maps graph topology to 3D geometry.

    A mapper turns a node into a position and an edge into a path. Mappers
    can be chained: a decorating mapper (see
    :class:`PeriodicBoundaryTopologyMapper`) asks its *input* mapper for
    positions and transforms them.

    Parameters
    --
    input : AbstractTopologyMapper, optional
        Upstream mapper.

    """

    def __init__(self, input=None):
        self.input = input

    @abstractmethod
    def graph_node_to_position(self, graph, node) -> list[float]:
        """Position of ``node`` as ``[x, y, z]``."""

    @abstractmethod
    def graph_edge_to_path(self, graph, edge) -> list[list[float] | None]:
        """Polyline of ``edge``; ``None`` entries break the line."""

    def set_input(self, *mappers):
        """Wire the chain of upstream mappers.

        ``m.set_input(a, b, c)`` makes ``c`` the input of ``b``, ``b`` the
        input of ``a`` and ``a`` the input of ``m``, and clears the input of
        ``c``. With no argument the input is cleared.

        Returns
        ---
        AbstractTopologyMapper
            ``self``, for chaining.

        """
        if not mappers:
            self.input = None
            return self
        upstream = mappers[-1].set_input()
        for mapper in reversed(mappers[:-1]):
            upstream = mapper.set_input(upstream)
        self.input = upstream
        return self

    def get_input(self):
        return self.input

    def require_input(self):
        """Input mapper, or :class:`MissingInputError` if none is wired."""
        if self.input is None:
            raise MissingInputError(f"{type(self).__name__}: no input mapper set")
        return self.input

    def __repr__(self):
        return f"{type(self).__name__}()"
