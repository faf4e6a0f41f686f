class TorusvisError(Exception):
    """Base class for all torusvis errors."""


class InvalidOperationError(TorusvisError, RuntimeError):
    """Operation not supported by this graph type (e.g. mutating a FlatTorus)."""


class IterationGuardError(TorusvisError, RuntimeError):
    """Structural mutation attempted while the same collection is being traversed."""


class InvalidOrientationError(TorusvisError, ValueError):
    """Edge orientation value outside of EdgeOrientation."""


class HandleBoundsError(TorusvisError, IndexError):
    """Node/edge id or positional index outside the valid range."""


class AllocatorError(TorusvisError, KeyError):
    """Id freed while not allocated."""


class InvalidHandleError(TorusvisError, KeyError):
    """Handle dereferenced after being freed or after its slot was reused."""


class MissingInputError(TorusvisError, RuntimeError):
    """Decorating topology mapper used without an upstream input mapper."""
