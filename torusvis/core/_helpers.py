import math
from functools import reduce
from operator import mul

from .exceptions import InvalidOperationError

# tolerance for "effectively zero" axis displacements, box sizes and ray factors
EPSILON = 1e-8


def product(values):
    """Product of an iterable of numbers (1 for an empty iterable)."""
    return reduce(mul, values, 1)


def index_map(indexes, dimensions):
    """Map a tuple of integer indexes to a single flat index (FORTRAN order).

    Parameters
    --
    indexes : sequence[int]
        Multidimensional index, first component varying fastest.
    dimensions : sequence[int]
        Extent of each dimension.

    Returns
    ---
    int

    Examples
    --
    >>> index_map([1, 2], [3, 4])
    7

    """
    result = 0
    scale = 1
    for i, index in enumerate(indexes):
        if i > 0:
            scale *= dimensions[i - 1]
        result += index * scale
    return result


def index_unmap(index, dimensions):
    """Inverse of :func:`index_map`.

    Divides by the product of the remaining dimensions from the highest
    index down.

    Returns
    ---
    list[int]

    """
    result = [0] * len(dimensions)
    divisor = product(dimensions)
    for i in range(len(dimensions) - 1, -1, -1):
        divisor //= dimensions[i]
        result[i] = index // divisor
        index %= divisor
    return result


def wrap(x, size):
    """Reduce ``x`` into ``[0, size)``, also for negative ``x``."""
    return math.fmod(math.fmod(x, size) + size, size)


def invalid_operation(class_name, operation_name):
    """Build a method that always raises InvalidOperationError."""

    def _invalid(self, *args, **kwargs):
        raise InvalidOperationError(f"{class_name}: invalid operation: {operation_name}")

    _invalid.__name__ = operation_name
    _invalid.__doc__ = f"Always raises InvalidOperationError: {class_name} topology is fixed."
    return _invalid
