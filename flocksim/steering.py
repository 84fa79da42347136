"""The flocking rules that update a boid from its neighbours."""

from __future__ import annotations

import random
from dataclasses import dataclass

from flocksim.grid import Grid
from flocksim.vector import Boid, Vec2

_ZERO = Vec2(0.0, 0.0)


def wrapped_position(grid_size: float, starting: Vec2, other: Vec2) -> Vec2:
    """Return ``other`` shifted across the grid edge if that brings it closer to ``starting``."""
    half = grid_size / 2.0

    def adjust(a: float, b: float) -> float:
        difference = b - a
        if difference > half:
            return b - grid_size
        if difference < -half:
            return b + grid_size
        return b

    return Vec2(adjust(starting.x, other.x), adjust(starting.y, other.y))


def _average_neighbor_position(boid: Boid, neighbors: list[Boid], size: float) -> Vec2:
    total = sum(
        (wrapped_position(size, boid.position, n.position) for n in neighbors), _ZERO
    )
    return total / len(neighbors)


def attraction_acceleration(boid: Boid, grid: Grid, radius: float) -> Vec2:
    """Steer towards the average position of neighbours within ``radius``."""
    neighbors = grid.neighbors(boid, radius)
    if not neighbors:
        return _ZERO
    return _average_neighbor_position(boid, neighbors, grid.size) - boid.position


def alignment_acceleration(boid: Boid, grid: Grid, radius: float) -> Vec2:
    """Steer towards the average velocity of neighbours within ``radius``."""
    neighbors = grid.neighbors(boid, radius)
    if not neighbors:
        return _ZERO
    total = sum((n.velocity for n in neighbors), _ZERO)
    return total / len(neighbors) - boid.velocity


def separation_acceleration(boid: Boid, grid: Grid, radius: float) -> Vec2:
    """Steer away from the average position of neighbours within ``radius``."""
    neighbors = grid.neighbors(boid, radius)
    if not neighbors:
        return _ZERO
    return boid.position - _average_neighbor_position(boid, neighbors, grid.size)


@dataclass(frozen=True)
class FlockingRules:
    """Weights, radii and limits for one step of the flocking update."""

    noise_fraction: float
    attraction_radius: float
    attraction_weighting: float
    alignment_radius: float
    alignment_weighting: float
    separation_radius: float
    separation_weighting: float
    maximum_velocity: float

    def apply(self, boid: Boid, grid: Grid, rng: random.Random) -> Boid:
        """Return the boid's state after one step among the neighbours in ``grid``."""
        noise_deduction = self.noise_fraction / 3.0
        noise = Vec2(rng.uniform(-1.0, 1.0), rng.uniform(-1.0, 1.0)) * self.noise_fraction

        attraction = attraction_acceleration(boid, grid, self.attraction_radius) * (
            self.attraction_weighting - noise_deduction
        )
        alignment = alignment_acceleration(boid, grid, self.alignment_radius) * (
            self.alignment_weighting - noise_deduction
        )
        separation = separation_acceleration(boid, grid, self.separation_radius) * (
            self.separation_weighting - noise_deduction
        )

        acceleration = boid.acceleration + attraction + alignment + separation + noise

        raw_velocity = boid.velocity + acceleration
        speed = raw_velocity.magnitude()
        if speed < self.maximum_velocity:
            velocity = raw_velocity
        elif speed > 0.0:
            velocity = raw_velocity / speed * self.maximum_velocity
        else:
            velocity = _ZERO

        # fmod keeps the sign, so shift into [0, size) with a second remainder.
        size = grid.size
        position = ((boid.position + velocity) % size + size) % size

        return Boid(position, velocity, acceleration)