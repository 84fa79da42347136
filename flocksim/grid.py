"""Square, toroidal grids of points supporting radius neighbour queries."""

from __future__ import annotations

import copy
import math
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Generic, Iterable, Protocol, TypeVar


class _Point(Protocol):
    def xy(self) -> tuple[float, float]: ...

    def set_xy(self, x: float, y: float) -> None: ...


P = TypeVar("P", bound=_Point)


class Grid(ABC, Generic[P]):
    """A square grid of side ``size`` whose edges wrap around."""

    def __init__(self, size: float) -> None:
        self._size = float(size)
        self._points: list[P] = []

    @property
    def points(self) -> list[P]:
        """The points held by the grid, in insertion order."""
        return list(self._points)

    @property
    def size(self) -> float:
        """The width and height of the grid."""
        return self._size

    @abstractmethod
    def insert(self, point: P) -> None:
        """Add a point; raise ValueError if it lies outside the grid."""

    @abstractmethod
    def neighbors(self, point: _Point, radius: float) -> list[P]:
        """Return the points within ``radius`` of ``point``, excluding itself."""

    @abstractmethod
    def set_points(self, points: Iterable[P]) -> None:
        """Replace all points held by the grid."""

    def resize(self, size: float) -> None:
        """Change the grid size, scaling every point to keep its relative place."""
        if self._points:
            factor = size / self._size
            for p in self._points:
                x, y = p.xy()
                p.set_xy(x * factor, y * factor)
        self._size = float(size)

    def copy(self) -> Grid[P]:
        """Return an independent deep copy of the grid and its points."""
        return copy.deepcopy(self)

    def _check_bounds(self, point: _Point) -> None:
        x, y = point.xy()
        if x < 0.0 or y < 0.0 or x > self._size or y > self._size:
            raise ValueError(f"Cannot insert ({x},{y}) into grid with size {self._size}")

    def _within_radius(
        self, candidates: Iterable[P], point: _Point, radius: float
    ) -> list[P]:
        ax, ay = point.xy()
        size = self._size
        limit = radius * radius
        found_self = False
        result: list[P] = []
        for candidate in candidates:
            bx, by = candidate.xy()
            if not found_self and bx == ax and by == ay:
                found_self = True
                continue
            dx = min(abs(bx - ax), size - abs(bx - ax))
            dy = min(abs(by - ay), size - abs(by - ay))
            if dx * dx + dy * dy <= limit:
                result.append(candidate)
        return result


class NaiveGrid(Grid[P]):
    """A grid that checks every point on each neighbour query."""

    def insert(self, point: P) -> None:
        self._check_bounds(point)
        self._points.append(point)

    def neighbors(self, point: _Point, radius: float) -> list[P]:
        return self._within_radius(self._points, point, radius)

    def set_points(self, points: Iterable[P]) -> None:
        self._points = list(points)


class TiledGrid(Grid[P]):
    """A grid that buckets points into tiles as wide as the largest query radius."""

    def __init__(self, size: float) -> None:
        super().__init__(size)
        self._tiles: defaultdict[tuple[int, int], list[int]] = defaultdict(list)
        self._tile_size = 0.0

    def _tile_coords(self, point: _Point) -> tuple[int, int]:
        x, y = point.xy()
        return (self._tile_index(x), self._tile_index(y))

    def _tile_index(self, value: float) -> int:
        scaled = value / self._tile_size
        if math.isnan(scaled) or scaled <= 0.0:
            return 0
        if math.isinf(scaled):
            return 2**32 - 1
        return min(math.floor(scaled), 2**32 - 1)

    def insert(self, point: P) -> None:
        self._check_bounds(point)
        if self._tile_size > 0.0:
            self._tiles[self._tile_coords(point)].append(len(self._points))
        self._points.append(point)

    def set_points(self, points: Iterable[P]) -> None:
        new_points = list(points)
        self._points = []
        self._tiles = defaultdict(list)
        for p in new_points:
            self.insert(p)

    def resize(self, size: float) -> None:
        super().resize(size)
        self.set_points(self._points)

    def neighbors(self, point: _Point, radius: float) -> list[P]:
        if radius > self._tile_size:
            self._tile_size = radius
            self.set_points(self._points)
        if self._tile_size <= 0.0:
            return []

        tile_x, tile_y = self._tile_coords(point)
        per_axis = max(math.ceil(self._size / self._tile_size), 1)
        seen: set[tuple[int, int]] = set()
        candidates: list[P] = []

        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                other_x = (tile_x + dx + per_axis) % per_axis
                other_y = (tile_y + dy + per_axis) % per_axis
                # The last column may be narrower than a tile, so also look one left of it.
                tiles = [(other_x, other_y)]
                if other_x >= per_axis - 1:
                    tiles.append((max(other_x - 1, 0), other_y))
                    tiles.append((0, other_y))
                for tile in tiles:
                    indices = self._tiles.get(tile)
                    if indices is None or tile in seen:
                        continue
                    candidates.extend(self._points[i] for i in indices)
                    seen.add(tile)

        return self._within_radius(candidates, point, radius)