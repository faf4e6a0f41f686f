"""Helpers at the boundary between the mappers and a rendering engine.

Nothing here draws. These functions turn mapper output into arrays and colors
a renderer can consume directly.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Literal, Protocol, runtime_checkable

import numpy as np

# Small helpers


def _normalize(
    values: Iterable[float], lo: float | None = None, hi: float | None = None, eps: float = 1e-12
):
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return arr
    if lo is None:
        lo = np.nanmin(arr)
    if hi is None:
        hi = np.nanmax(arr)
    if not math.isfinite(lo):
        lo = 0.0
    if not math.isfinite(hi):
        hi = 1.0
    denom = max(hi - lo, eps)
    return (arr - lo) / denom


def _greyscale(v: float) -> list[float]:
    v = float(np.clip(v, 0.0, 1.0))
    return [v, v, v]


# Geometry


def split_path(path) -> list[np.ndarray]:
    """Split a mapper path at its ``None`` breaks.

    Returns
    ---
    list[numpy.ndarray]
        One ``(k, 3)`` array per run of consecutive points; empty runs are
        dropped.

    """
    polylines = []
    current = []
    for point in path:
        if point is None:
            if current:
                polylines.append(np.asarray(current, dtype=float))
            current = []
        else:
            current.append(point)
    if current:
        polylines.append(np.asarray(current, dtype=float))
    return polylines


def edge_polylines(graph, mapper) -> dict[int, list[np.ndarray]]:
    """Edge handle -> polylines of its mapped path."""
    return {edge: split_path(mapper.graph_edge_to_path(graph, edge)) for edge in graph.edges()}


def node_positions(graph, mapper) -> np.ndarray:
    """Mapped node positions as an ``(N, 3)`` array, rows in ``graph.nodes()`` order."""
    rows = [mapper.graph_node_to_position(graph, node) for node in graph.nodes()]
    if not rows:
        return np.zeros((0, 3))
    return np.asarray(rows, dtype=float)


# Colors


@runtime_checkable
class ColorTransferFunction(Protocol):
    """Maps a scalar to an ``[r, g, b]`` color in ``[0, 1]``, or ``None`` to hide it."""

    def compute_color(self, scalar: float) -> list[float] | None: ...


def greyscale_colors(values: Iterable[float], *, invert: bool = False) -> list[list[float]]:
    """Grey levels from scalars normalised over their own range."""
    x = _normalize(values)
    if invert:
        x = 1.0 - x
    return [_greyscale(v) for v in x]


def attribute_colors(
    graph,
    key: str,
    color_fn: ColorTransferFunction | None = None,
    *,
    kind: Literal["node", "edge"] = "node",
    default: float = 0.0,
) -> dict[int, list[float] | None]:
    """Color every node (or edge) from a numeric data attribute.

    Parameters
    --
    graph : AbstractGraph
    key : str
        Data key holding the scalar; ``default`` when missing.
    color_fn : ColorTransferFunction, optional
        Scalar -> color. Without one, :func:`greyscale_colors` is used.
    kind : {"node", "edge"}

    Returns
    ---
    dict[int, list[float] | None]
        Handle -> color. ``None`` marks elements the transfer function hides.

    """
    if kind == "node":
        handles, data_of = list(graph.nodes()), graph.node_data
    elif kind == "edge":
        handles, data_of = list(graph.edges()), graph.edge_data
    else:
        raise ValueError(f"kind must be 'node' or 'edge', got {kind!r}")

    scalars = [float(data_of(h).get(key, default)) for h in handles]
    if color_fn is None:
        return dict(zip(handles, greyscale_colors(scalars)))
    return {h: color_fn.compute_color(s) for h, s in zip(handles, scalars)}
