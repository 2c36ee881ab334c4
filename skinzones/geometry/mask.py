# SPDX-License-Identifier: Apache-2.0
"""Point-in-polygon tests and downsampled containment masks."""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Sequence

import numpy as np

from skinzones.errors import DimensionMismatch, InvalidPolygon
from skinzones.geometry.zones import polygon_from


def point_in_polygon(x: float, y: float, polygon: Sequence[Any]) -> bool:
    """Even-odd ray casting with a horizontal ray towards +x."""
    vs = polygon_from(polygon)
    inside = False
    j = len(vs) - 1
    for i in range(len(vs)):
        xi, yi = vs[i]
        xj, yj = vs[j]
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def _crossing_parity(xs: np.ndarray, ys: np.ndarray, vs: np.ndarray) -> np.ndarray:
    """Vectorised ray casting of the grid ``ys x xs`` against polygon *vs*."""
    X = xs[np.newaxis, :]
    Y = ys[:, np.newaxis]
    inside = np.zeros((len(ys), len(xs)), dtype=bool)
    for i in range(len(vs)):
        xi, yi = vs[i]
        xj, yj = vs[i - 1]
        if yi == yj:
            # horizontal edges never straddle the ray
            continue
        straddles = (yi > Y) != (yj > Y)
        x_cross = (xj - xi) * (Y - yi) / (yj - yi) + xi
        inside ^= straddles & (X < x_cross)
    return inside


class ContainmentMask:
    """Boolean grid answering "is pixel (x, y) inside the polygon?".

    One cell covers ``step x step`` image pixels and holds the test result of
    the cell's top-left pixel.
    """

    def __init__(self, cells: np.ndarray, width: int, height: int, step: int):
        self.cells = cells
        self.width = width
        self.height = height
        self.step = step

    @property
    def shape(self) -> tuple[int, int]:
        return self.cells.shape

    def contains(self, x: float, y: float) -> bool:
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return False
        return bool(self.cells[int(y // self.step), int(x // self.step)])

    __call__ = contains

    def to_pixels(self, width: int, height: int) -> np.ndarray:
        """Expand to a full-resolution ``(height, width)`` boolean array."""
        if (width, height) != (self.width, self.height):
            raise DimensionMismatch(
                f"mask built for {self.width}x{self.height}, queried with {width}x{height}"
            )
        rows = np.arange(height) // self.step
        cols = np.arange(width) // self.step
        return self.cells[np.ix_(rows, cols)]

    def __repr__(self) -> str:
        return (
            f"ContainmentMask(width={self.width}, height={self.height}, "
            f"step={self.step}, cells={int(self.cells.sum())})"
        )


def _bands(n_rows: int, workers: int) -> list[tuple[int, int]]:
    size = max(1, math.ceil(n_rows / workers))
    return [(start, min(n_rows, start + size)) for start in range(0, n_rows, size)]


def rasterize(
    polygon: Sequence[Any],
    width: int,
    height: int,
    step: int = 2,
    workers: int = 1,
) -> ContainmentMask:
    """Build a :class:`ContainmentMask` of *polygon* over a ``width x height`` image.

    Parameters
    ----------
    polygon:
        Three or more ``(x, y)`` points in pixel coordinates.
    step:
        Image pixels per mask cell along each axis.
    workers:
        Threads used to evaluate disjoint row bands of the mask.
    """
    vs = polygon_from(polygon)
    if len(vs) < 3:
        raise InvalidPolygon(f"polygon needs at least 3 points, got {len(vs)}")
    if width <= 0 or height <= 0:
        raise DimensionMismatch(f"invalid image size {width}x{height}")
    if step < 1:
        raise ValueError(f"step must be >= 1, got {step}")

    xs = np.arange(math.ceil(width / step), dtype=float) * step
    ys = np.arange(math.ceil(height / step), dtype=float) * step
    if workers <= 1:
        cells = _crossing_parity(xs, ys, vs)
    else:
        cells = np.zeros((len(ys), len(xs)), dtype=bool)

        def _fill(band: tuple[int, int]) -> None:
            start, stop = band
            cells[start:stop] = _crossing_parity(xs, ys[start:stop], vs)

        with ThreadPoolExecutor(max_workers=workers) as pool:
            list(pool.map(_fill, _bands(len(ys), workers)))
    return ContainmentMask(cells, width, height, step)
