"""Step-by-step configuration of a Universe, with ready-made presets."""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional, TypeVar

from flocksim.factory import BlueNoiseBoidFactory, BoidFactory
from flocksim.grid import NaiveGrid, TiledGrid
from flocksim.universe import Universe

_T = TypeVar("_T")


class Preset(Enum):
    """Named parameter sets for common flocking behaviours."""

    BASIC = "basic"
    MARUYAMA = "maruyama"
    ZHANG = "zhang"


def _require(value: Optional[_T], message: str) -> _T:
    if value is None:
        raise ValueError(message)
    return value


def _non_negative_int(value: int, name: str) -> int:
    number = int(value)
    if number < 0:
        raise ValueError(f"{name} cannot be negative")
    return number


class Builder:
    """Collects the settings of a Universe; every setter returns the builder."""

    def __init__(self) -> None:
        self._number_of_boids: Optional[int] = None
        self._density: Optional[float] = None
        self._grid_size: Optional[float] = None
        self._noise_fraction: Optional[float] = None
        self._attraction_weighting: Optional[int] = None
        self._alignment_weighting: Optional[int] = None
        self._separation_weighting: Optional[int] = None
        self._attraction_radius: Optional[float] = None
        self._alignment_radius: Optional[float] = None
        self._separation_radius: Optional[float] = None
        self._maximum_velocity: Optional[float] = None
        self._boid_factory: BoidFactory = BlueNoiseBoidFactory()
        self._naive = False
        self._multithreaded = True
        self._number_of_boids_per_thread = 200

    @classmethod
    def from_preset(cls, preset: Preset) -> Builder:
        """Return a builder filled in with the settings of ``preset``."""
        if preset is Preset.BASIC:
            return (
                cls()
                .number_of_boids(100)
                .grid_size(100.0)
                .noise_fraction(0.05)
                .attraction_weighting(1)
                .alignment_weighting(1)
                .separation_weighting(1)
                .attraction_radius(1.0)
                .alignment_radius(1.0)
                .separation_radius(1.0)
                .maximum_velocity(1.0)
            )
        if preset is Preset.MARUYAMA:
            return (
                cls()
                .number_of_boids(100)
                .density(600.0)
                .noise_fraction(0.0)
                .attraction_weighting(4)
                .alignment_weighting(30)
                .separation_weighting(1)
                .attraction_radius(0.05)
                .alignment_radius(0.05)
                .separation_radius(0.01)
                .maximum_velocity(0.05)
            )
        if preset is Preset.ZHANG:
            return (
                cls()
                .number_of_boids(100)
                .grid_size(100.0)
                .noise_fraction(0.05)
                .attraction_weighting(10)
                .alignment_weighting(1)
                .separation_weighting(400)
                .attraction_radius(1.0)
                .alignment_radius(1.0)
                .separation_radius(1.0)
                .maximum_velocity(1.0)
            )
        raise ValueError(f"Unknown preset: {preset!r}")

    def number_of_boids(self, count: int) -> Builder:
        self._number_of_boids = _non_negative_int(count, "Number of boids")
        return self

    def density(self, density: float) -> Builder:
        """Size the grid by boids per unit area; replaces any grid size."""
        self._grid_size = None
        self._density = float(density)
        return self

    def grid_size(self, size: float) -> Builder:
        """Set the grid's side length; replaces any density."""
        self._density = None
        self._grid_size = float(size)
        return self

    def noise_fraction(self, noise_fraction: float) -> Builder:
        if not 0.0 <= noise_fraction <= 1.0:
            raise ValueError("Noise fraction must be between 0 and 1")
        self._noise_fraction = float(noise_fraction)
        return self

    def attraction_weighting(self, weighting: int) -> Builder:
        self._attraction_weighting = _non_negative_int(weighting, "Attraction weighting")
        return self

    def alignment_weighting(self, weighting: int) -> Builder:
        self._alignment_weighting = _non_negative_int(weighting, "Alignment weighting")
        return self

    def separation_weighting(self, weighting: int) -> Builder:
        self._separation_weighting = _non_negative_int(weighting, "Separation weighting")
        return self

    def attraction_radius(self, radius: float) -> Builder:
        self._attraction_radius = float(radius)
        return self

    def alignment_radius(self, radius: float) -> Builder:
        self._alignment_radius = float(radius)
        return self

    def separation_radius(self, radius: float) -> Builder:
        self._separation_radius = float(radius)
        return self

    def maximum_velocity(self, magnitude: float) -> Builder:
        self._maximum_velocity = float(magnitude)
        return self

    def naive(self, naive: bool) -> Builder:
        """Use a grid that checks every boid rather than a tiled one."""
        self._naive = bool(naive)
        return self

    def number_of_boids_per_thread(self, boids_per_thread: int) -> Builder:
        self._number_of_boids_per_thread = int(boids_per_thread)
        return self

    def multithreaded(self, multithreaded: bool) -> Builder:
        self._multithreaded = bool(multithreaded)
        return self

    def boid_factory(self, factory: BoidFactory) -> Builder:
        """Use ``factory`` to create the universe's boids."""
        self._boid_factory = factory
        return self

    def build(self) -> Universe:
        """Create the Universe; raise ValueError if a required setting is missing."""
        number_of_boids = _require(self._number_of_boids, "Missing field: number_of_boids")
        attraction = _require(
            self._attraction_weighting, "Must provide attraction_weighting"
        )
        alignment = _require(self._alignment_weighting, "Must provide alignment_weighting")
        separation = _require(
            self._separation_weighting, "Must provide separation_weighting"
        )
        # All weightings zero: every weighting stays zero, just avoid dividing by it.
        total = (attraction + alignment + separation) or 1

        if self._density is not None:
            density = self._density
        else:
            if number_of_boids == 0:
                raise ValueError("Must set a density when creating a grid with no boids.")
            size = _require(self._grid_size, "Either density or grid_size must be set.")
            density = number_of_boids / size**2
        if not density > 0.0:
            raise ValueError("Density must be positive")

        noise_fraction = _require(self._noise_fraction, "Must provide noise_fraction")
        attraction_radius = _require(
            self._attraction_radius, "Must provide attraction_radius"
        )
        alignment_radius = _require(self._alignment_radius, "Must provide alignment_radius")
        separation_radius = _require(
            self._separation_radius, "Must provide separation_radius"
        )
        maximum_velocity = _require(
            self._maximum_velocity, "Must provide a maximum_velocity"
        )

        grid_type = NaiveGrid if self._naive else TiledGrid
        grid = grid_type(math.sqrt(number_of_boids / density))
        grid.set_points(self._boid_factory.create_n(grid, number_of_boids))

        return Universe(
            grid,
            self._boid_factory,
            noise_fraction=noise_fraction,
            attraction_weighting=attraction / total,
            alignment_weighting=alignment / total,
            separation_weighting=separation / total,
            attraction_radius=attraction_radius,
            alignment_radius=alignment_radius,
            separation_radius=separation_radius,
            maximum_velocity=maximum_velocity,
            multithreaded=self._multithreaded,
            boids_per_thread=self._number_of_boids_per_thread,
        )


def build_from_preset(preset: Preset) -> Universe:
    """Build a Universe straight from ``preset``."""
    return Builder.from_preset(preset).build()