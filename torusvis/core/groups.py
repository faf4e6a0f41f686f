from __future__ import annotations

import copy
import math

from ._IterationGuard import IterationGuard

_COMMON = "--common--"


def _deep_merge(*dicts):
    """Recursively merge dicts left to right into a new dict."""
    out = {}
    for d in dicts:
        for k, v in (d or {}).items():
            if isinstance(v, dict) and isinstance(out.get(k), dict):
                out[k] = _deep_merge(out[k], v)
            else:
                out[k] = copy.deepcopy(v)
    return out


class GenericGroup:
    """Insertion-ordered collection of node or edge handles.

    Groups are how the output layer is told what to draw and how. Adding or
    removing items while iterating over the same group raises
    :class:`IterationGuardError`.

    Parameters
    --
    items : iterable, optional
        Initial handles.
    **options
        Extra attributes copied onto the group.

    """

    def __init__(self, items=None, **options):
        self._items = {}
        self._iter_guard = IterationGuard("cannot add or remove items while iterating over them")
        for item in items or ():
            self.add_item(item)
        for k, v in options.items():
            setattr(self, k, copy.deepcopy(v))

    def has_item(self, item) -> bool:
        return item in self._items

    def add_item(self, item):
        self._iter_guard.check()
        self._items.setdefault(item, None)
        return self

    def remove_item(self, item):
        self._iter_guard.check()
        if item not in self._items:
            raise KeyError(f"item not in group: {item}")
        del self._items[item]
        return self

    def iter_items(self, callback) -> bool:
        """Call ``callback(item)`` per item; a truthy return stops early."""
        with self._iter_guard.guarding():
            for item in list(self._items):
                if callback(item):
                    return True
        return False

    def items(self):
        return list(self._items)

    def __len__(self):
        return len(self._items)

    def __contains__(self, item):
        return item in self._items

    def __iter__(self):
        return iter(list(self._items))

    def __repr__(self):
        return f"{type(self).__name__}({len(self._items)} items)"


class _DisplayGroup(GenericGroup):
    DEFAULT_DISPLAY_MODE = None
    DEFAULT_DISPLAY_OPTIONS: dict = {}

    def __init__(self, items=None, display_mode=None, display_options=None, **options):
        self.display_options = copy.deepcopy(display_options or {})
        self.set_display_mode(display_mode or self.DEFAULT_DISPLAY_MODE)
        super().__init__(items, **options)

    def set_display_mode(self, mode):
        """Switch display mode, filling in that mode's default options.

        Options already set on the group take precedence over the defaults.
        """
        self.display_mode = mode
        defaults = _deep_merge(
            self.DEFAULT_DISPLAY_OPTIONS.get(_COMMON),
            self.DEFAULT_DISPLAY_OPTIONS.get(mode),
        )
        self.display_options = _deep_merge(defaults, self.display_options)
        return self


class NodeGroup(_DisplayGroup):
    """Group of node handles drawn as sprites (default) or spheres."""

    DEFAULT_DISPLAY_MODE = "sprite"
    DEFAULT_DISPLAY_OPTIONS = {
        "sphere": {
            "theta_segments": 3,
            "theta_start": 0,
            "theta_length": math.pi,
            "phi_segments": 2,
            "phi_start": 0,
            "phi_length": 2.0 * math.pi,
        },
        _COMMON: {"color": 0xFFFFFF, "size": 1, "opacity": 1.0},
    }

    def __init__(self, nodes=None, display_mode=None, display_options=None, **options):
        super().__init__(nodes, display_mode, display_options, **options)


class EdgeGroup(_DisplayGroup):
    """Group of edge handles drawn as lines (default), cylinders or arrows."""

    DEFAULT_DISPLAY_MODE = "line"
    DEFAULT_DISPLAY_OPTIONS = {
        "line": {"height_segments": 2, "height_start": 0, "height_length": 1},
        "cylinder": {
            "theta_segments": 3,
            "theta_start": 0,
            "theta_length": math.pi,
            "height_segments": 2,
            "height_start": 0,
            "height_length": 1,
        },
        "arrow": {
            "head_length": 0.1,
            "head_radius": 1.0,
            "head_theta_segments": 3,
            "head_theta_start": 0,
            "head_theta_length": math.pi,
            "height_segments": 2,
            "height_start": 0,
            "height_length": 1,
        },
        # size is the thickness for lines, the radius for cylinders
        _COMMON: {"color": 0xFFFFFF, "size": 1, "opacity": 1.0},
    }

    def __init__(self, edges=None, display_mode=None, display_options=None, **options):
        super().__init__(edges, display_mode, display_options, **options)
