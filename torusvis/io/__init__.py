"""torusvis.io: table I/O with lazy symbol loading."""

from __future__ import annotations

from importlib import import_module
from typing import Any

_lazy_symbols: dict[str, tuple[str, str]] = {
    "to_dataframes": ("torusvis.io.dataframe_io", "to_dataframes"),
    "from_dataframes": ("torusvis.io.dataframe_io", "from_dataframes"),
}

__all__ = sorted(_lazy_symbols)


def __getattr__(name: str) -> Any:
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)
