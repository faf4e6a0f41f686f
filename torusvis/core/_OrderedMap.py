from itertools import islice

from .exceptions import HandleBoundsError


class OrderedMap:
    """Mapping that remembers the order in which keys were first added.

    Lookups accept either a key or an integer position. Changing the value of
    an existing key keeps its place; to move a key to the end, ``unset`` it and
    ``set`` it again. Because integers address positions, integer-like
    identifiers must be stored under ``str`` keys.
    """

    def __init__(self):
        self._map = {}

    def _check_index(self, index):
        if not 0 <= index < len(self._map):
            raise HandleBoundsError(f"numeric key {index} is out of bounds")

    def _resolve(self, key):
        if isinstance(key, int) and not isinstance(key, bool):
            self._check_index(key)
            return next(islice(self._map, key, None))
        return key

    def get(self, *keys):
        """Fetch values by key or position.

        With no argument, returns a dict of all entries (in order). With one
        argument, returns its value (``None`` for a missing string key). With
        several, returns a dict mapping each argument to its value.

        Raises
        --
        HandleBoundsError
            If a positional argument is out of range.

        """
        if not keys:
            return dict(self._map)
        if len(keys) == 1:
            return self._map.get(self._resolve(keys[0]))
        return self.get_many(*keys)

    def get_many(self, *keys):
        return {key: self._map.get(self._resolve(key)) for key in keys}

    def set(self, key, value):
        """Associate ``value`` with ``key`` (or with the entry at a position)."""
        self._map[self._resolve(key)] = value
        return self

    def unset(self, *keys):
        """Remove the given keys/positions, or every entry when none is given."""
        if not keys:
            self._map = {}
            return self
        # resolve every position before removing anything
        doomed = [self._resolve(key) for key in keys]
        for key in doomed:
            self._map.pop(key, None)
        return self

    def keys(self):
        return list(self._map)

    def values(self):
        return list(self._map.values())

    def items(self):
        return list(self._map.items())

    def length(self):
        return len(self._map)

    def __len__(self):
        return len(self._map)

    def __contains__(self, key):
        return key in self._map

    def __iter__(self):
        return iter(list(self._map))

    def __repr__(self):
        return f"OrderedMap({self.items()!r})"
