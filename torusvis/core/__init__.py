from ._Handles import Handle, HandleAllocator
from ._IdAllocator import IdAllocator
from ._IterationGuard import IterationGuard
from ._OrderedMap import OrderedMap
from .directed_graph import DirectedGraph
from .exceptions import (
    AllocatorError,
    HandleBoundsError,
    InvalidHandleError,
    InvalidOperationError,
    InvalidOrientationError,
    IterationGuardError,
    MissingInputError,
    TorusvisError,
)
from .flat_torus import FlatTorus
from .graph import NO_NODE, AbstractGraph, EdgeOrientation
from .groups import EdgeGroup, GenericGroup, NodeGroup
