"""Factories that create new boids for a grid."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod

from flocksim.bluenoise import BlueNoise, Sample
from flocksim.grid import Grid, NaiveGrid
from flocksim.vector import Boid, Vec2


class BoidFactory(ABC):
    """Creates boids to be added to a grid."""

    @abstractmethod
    def create_n(self, grid: Grid, number_of_boids: int) -> list[Boid]:
        """Return ``number_of_boids`` new boids suited to ``grid``."""


class BlueNoiseBoidFactory(BoidFactory):
    """Creates boids whose positions, velocities and accelerations are blue noise."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._noise = BlueNoise(rng)

    def _generate_from_existing(
        self, size: float, existing: list[Sample], count: int
    ) -> list[Sample]:
        samples_grid: NaiveGrid[Sample] = NaiveGrid(size)
        samples_grid.set_points(existing)
        return self._noise.generate(samples_grid, count)

    def create_n(self, grid: Grid, number_of_boids: int) -> list[Boid]:
        boids = grid.points
        size = grid.size
        positions = self._generate_from_existing(
            size, [Sample(*b.position) for b in boids], number_of_boids
        )
        velocities = self._generate_from_existing(
            size, [Sample(*b.velocity) for b in boids], number_of_boids
        )
        accelerations = self._generate_from_existing(
            size, [Sample(*b.acceleration) for b in boids], number_of_boids
        )
        triples = list(zip(positions, velocities, accelerations))[:number_of_boids]
        return [
            Boid(Vec2(*p.xy()), Vec2(*v.xy()), Vec2(*a.xy())) for p, v, a in triples
        ]