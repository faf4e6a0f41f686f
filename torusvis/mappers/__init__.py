from .abstract_mapper import AbstractTopologyMapper
from .direct_mapper import DirectTopologyMapper
from .flat_torus_mapper import FlatTorusTopologyMapper
from .periodic_boundary_mapper import PeriodicBoundaryTopologyMapper

__all__ = [
    "AbstractTopologyMapper",
    "DirectTopologyMapper",
    "FlatTorusTopologyMapper",
    "PeriodicBoundaryTopologyMapper",
]
