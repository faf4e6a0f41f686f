# torusvis/__init__.py
"""torusvis: graph model and topology-to-geometry mappers, single import."""

from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

# Lazily exposed submodules (imported on first attribute access)
_lazy_submodules = {
    # namespaces
    "core": "torusvis.core",
    "mappers": "torusvis.mappers",
    "algorithms": "torusvis.algorithms",
    "adapters": "torusvis.adapters",
    "io": "torusvis.io",
    "utils": "torusvis.utils",
    # direct convenience
    "matrices": "torusvis.algorithms.matrices",
    "networkx": "torusvis.adapters.networkx_adapter",
    "dataframe": "torusvis.io.dataframe_io",
    "plotting": "torusvis.utils.plotting",
}

# Curated top-level symbols (lazy). name -> (module, attribute)
_lazy_symbols: dict[str, tuple[str, str]] = {
    # Graphs
    "AbstractGraph": ("torusvis.core.graph", "AbstractGraph"),
    "DirectedGraph": ("torusvis.core.directed_graph", "DirectedGraph"),
    "FlatTorus": ("torusvis.core.flat_torus", "FlatTorus"),
    "EdgeOrientation": ("torusvis.core.graph", "EdgeOrientation"),
    "NO_NODE": ("torusvis.core.graph", "NO_NODE"),
    # Groups
    "GenericGroup": ("torusvis.core.groups", "GenericGroup"),
    "NodeGroup": ("torusvis.core.groups", "NodeGroup"),
    "EdgeGroup": ("torusvis.core.groups", "EdgeGroup"),
    # Utilities
    "IdAllocator": ("torusvis.core._IdAllocator", "IdAllocator"),
    "IterationGuard": ("torusvis.core._IterationGuard", "IterationGuard"),
    "OrderedMap": ("torusvis.core._OrderedMap", "OrderedMap"),
    "HandleAllocator": ("torusvis.core._Handles", "HandleAllocator"),
    # Mappers
    "AbstractTopologyMapper": ("torusvis.mappers.abstract_mapper", "AbstractTopologyMapper"),
    "DirectTopologyMapper": ("torusvis.mappers.direct_mapper", "DirectTopologyMapper"),
    "FlatTorusTopologyMapper": ("torusvis.mappers.flat_torus_mapper", "FlatTorusTopologyMapper"),
    "PeriodicBoundaryTopologyMapper": (
        "torusvis.mappers.periodic_boundary_mapper",
        "PeriodicBoundaryTopologyMapper",
    ),
    # Matrices
    "adjacency_matrix": ("torusvis.algorithms.matrices", "adjacency_matrix"),
    "incidence_matrix": ("torusvis.algorithms.matrices", "incidence_matrix"),
    # NetworkX adapter (optional dependency)
    "to_nx": ("torusvis.adapters.networkx_adapter", "to_nx"),
    "from_nx": ("torusvis.adapters.networkx_adapter", "from_nx"),
    # DataFrames
    "to_dataframes": ("torusvis.io.dataframe_io", "to_dataframes"),
    "from_dataframes": ("torusvis.io.dataframe_io", "from_dataframes"),
}

__all__ = sorted(set(list(_lazy_submodules) + list(_lazy_symbols)))


def __getattr__(name: str) -> Any:  # PEP 562: lazy attribute resolution
    if name in _lazy_submodules:
        return import_module(_lazy_submodules[name])
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))


try:
    __version__ = _pkg_version("torusvis")
except PackageNotFoundError:
    __version__ = "0.0.0"
