# MIT License (see LICENSE)
"""
Broadphase culling using spatial hashing.

Partitions the plane into a uniform grid. Circles are hashed into every cell
their axis-aligned bounding box (AABB) touches; a query returns only the
circles sharing a cell with the query circle. The trajectory projector rebuilds
the grid every few steps over the coasting particle positions so each step
costs O(nearby particles) instead of O(all particles).

Key concepts:
- AABB: conservative square around a circle.
- Spatial hashing: O(1) expected cell lookup.
- Results are candidates; callers still run the exact overlap test.
"""
from __future__ import annotations
from collections import defaultdict
import math
from typing import Iterator, Sequence

import numpy as np


def aabb_for_circle(position, radius: float) -> tuple[float, float, float, float]:
    """Axis-Aligned Bounding Box (min_x, min_y, max_x, max_y) of a circle."""
    return (position[0] - radius, position[1] - radius, position[0] + radius, position[1] + radius)


class SpatialHash:
    """
    Uniform grid over a fixed set of circles.

    Attributes:
        cell: The size of each grid cell in world units.

    Example:
        grid = SpatialHash(cell_size=64.0)
        grid.build(positions, radii)
        for i in grid.query(point, radius):
            # exact test against circle i
            ...
    """

    def __init__(self, cell_size: float = 64.0) -> None:
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell = float(cell_size)
        self._grid: dict[tuple[int, int], list[int]] = defaultdict(list)

    def _cells_for_aabb(self, aabb: tuple[float, float, float, float]) -> Iterator[tuple[int, int]]:
        """
        Yield all grid cell coordinates that overlap with an AABB.

        Args:
            aabb: Bounding box as (x_min, y_min, x_max, y_max).

        Yields:
            (ix, iy) integer cell coordinates.
        """
        x0, y0, x1, y1 = aabb
        cs = self.cell
        ix0, iy0 = math.floor(x0 / cs), math.floor(y0 / cs)
        ix1, iy1 = math.floor(x1 / cs), math.floor(y1 / cs)
        for ix in range(ix0, ix1 + 1):
            for iy in range(iy0, iy1 + 1):
                yield (ix, iy)

    def build(self, positions: np.ndarray, radii: Sequence[float]) -> None:
        """Index circles i = 0..N-1; replaces any previous contents."""
        self._grid.clear()
        for i in range(len(radii)):
            for c in self._cells_for_aabb(aabb_for_circle(positions[i], radii[i])):
                self._grid[c].append(i)

    def query(self, point, radius: float) -> list[int]:
        """
        Indices of circles that may overlap the circle (point, radius).

        Sorted ascending so callers see a deterministic order.
        """
        found: set[int] = set()
        for c in self._cells_for_aabb(aabb_for_circle(point, radius)):
            bucket = self._grid.get(c)
            if bucket:
                found.update(bucket)
        return sorted(found)
