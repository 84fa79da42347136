"""The simulated universe: a grid of boids advanced one tick at a time."""

from __future__ import annotations

import math
import random
from concurrent.futures import ThreadPoolExecutor

from flocksim.factory import BoidFactory
from flocksim.grid import Grid
from flocksim.steering import FlockingRules
from flocksim.vector import Boid


class Universe:
    """A flock of boids living on a wrapping grid, updated by the flocking rules."""

    def __init__(
        self,
        grid: Grid,
        boid_factory: BoidFactory,
        *,
        noise_fraction: float,
        attraction_weighting: float,
        alignment_weighting: float,
        separation_weighting: float,
        attraction_radius: float,
        alignment_radius: float,
        separation_radius: float,
        maximum_velocity: float,
        multithreaded: bool = True,
        boids_per_thread: int = 200,
        rng: random.Random | None = None,
    ) -> None:
        self._grid = grid
        self._boid_factory = boid_factory
        self._noise_fraction = noise_fraction
        self._attraction_weighting = attraction_weighting
        self._alignment_weighting = alignment_weighting
        self._separation_weighting = separation_weighting
        self._attraction_radius = attraction_radius
        self._alignment_radius = alignment_radius
        self._separation_radius = separation_radius
        self._maximum_velocity = maximum_velocity
        self._multithreaded = multithreaded
        self._boids_per_thread = max(int(boids_per_thread), 1)
        self._rng = rng if rng is not None else random.Random()

    # -- simulation -------------------------------------------------------

    def _rules(self) -> FlockingRules:
        return FlockingRules(
            noise_fraction=self._noise_fraction,
            attraction_radius=self._attraction_radius,
            attraction_weighting=self._attraction_weighting,
            alignment_radius=self._alignment_radius,
            alignment_weighting=self._alignment_weighting,
            separation_radius=self._separation_radius,
            separation_weighting=self._separation_weighting,
            maximum_velocity=self._maximum_velocity,
        )

    def _step_chunk(
        self, rules: FlockingRules, chunk: list[Boid], seed: int
    ) -> list[Boid]:
        grid = self._grid.copy()
        rng = random.Random(seed)
        return [rules.apply(boid, grid, rng) for boid in chunk]

    def tick(self) -> None:
        """Advance time by one step, updating every boid in the universe."""
        boids = self._grid.points
        rules = self._rules()
        per_thread = self._boids_per_thread

        if self._multithreaded and len(boids) > per_thread:
            chunks = [
                boids[start : start + per_thread]
                for start in range(0, len(boids), per_thread)
            ]
            seeds = [self._rng.getrandbits(64) for _ in chunks]
            rules_for_each = [rules] * len(chunks)
            with ThreadPoolExecutor() as pool:
                results = pool.map(self._step_chunk, rules_for_each, chunks, seeds)
                updated = [boid for chunk in results for boid in chunk]
        else:
            updated = self._step_chunk(rules, boids, self._rng.getrandbits(64))

        self._grid.set_points(updated)

    # -- population and space ---------------------------------------------

    @property
    def boids(self) -> list[Boid]:
        """The boids currently in the universe."""
        return self._grid.points

    @property
    def size(self) -> float:
        """The width and height of the universe."""
        return self._grid.size

    @property
    def number_of_boids(self) -> int:
        """How many boids the universe holds."""
        return len(self._grid.points)

    def set_number_of_boids(self, n: int) -> None:
        """Grow the flock with new boids from the factory, or drop the last ones."""
        if n < 0:
            raise ValueError("Number of boids cannot be negative")
        current = self._grid.points
        if n > len(current):
            current.extend(self._boid_factory.create_n(self._grid, n - len(current)))
        else:
            del current[n:]
        self._grid.set_points(current)

    def set_density(self, density: float) -> None:
        """Resize the universe so that it holds ``density`` boids per unit area."""
        if not density > 0.0:
            raise ValueError("Density must be positive")
        self._grid.resize(math.sqrt(self.number_of_boids / density))

    # -- parameters -------------------------------------------------------

    def _reweight(self) -> None:
        total = (
            self._attraction_weighting
            + self._alignment_weighting
            + self._separation_weighting
        )
        if total == 0.0:
            return
        self._attraction_weighting /= total
        self._alignment_weighting /= total
        self._separation_weighting /= total

    @staticmethod
    def _clamp_unit(value: float) -> float:
        return min(max(value, 0.0), 1.0)

    @property
    def noise_fraction(self) -> float:
        """The share of random movement, between 0 and 1."""
        return self._noise_fraction

    @noise_fraction.setter
    def noise_fraction(self, fraction: float) -> None:
        self._noise_fraction = self._clamp_unit(fraction)

    @property
    def attraction_weighting(self) -> float:
        """The normalised weight of the attraction rule."""
        return self._attraction_weighting

    @attraction_weighting.setter
    def attraction_weighting(self, weighting: float) -> None:
        self._attraction_weighting = self._clamp_unit(weighting)
        self._reweight()

    @property
    def alignment_weighting(self) -> float:
        """The normalised weight of the alignment rule."""
        return self._alignment_weighting

    @alignment_weighting.setter
    def alignment_weighting(self, weighting: float) -> None:
        self._alignment_weighting = self._clamp_unit(weighting)
        self._reweight()

    @property
    def separation_weighting(self) -> float:
        """The normalised weight of the separation rule."""
        return self._separation_weighting

    @separation_weighting.setter
    def separation_weighting(self, weighting: float) -> None:
        self._separation_weighting = self._clamp_unit(weighting)
        self._reweight()

    @property
    def attraction_radius(self) -> float:
        """How far a boid looks for neighbours to move towards."""
        return self._attraction_radius

    @attraction_radius.setter
    def attraction_radius(self, radius: float) -> None:
        self._attraction_radius = max(radius, 0.0)

    @property
    def alignment_radius(self) -> float:
        """How far a boid looks for neighbours to align with."""
        return self._alignment_radius

    @alignment_radius.setter
    def alignment_radius(self, radius: float) -> None:
        self._alignment_radius = max(radius, 0.0)

    @property
    def separation_radius(self) -> float:
        """How far a boid looks for neighbours to move away from."""
        return self._separation_radius

    @separation_radius.setter
    def separation_radius(self, radius: float) -> None:
        self._separation_radius = max(radius, 0.0)

    @property
    def maximum_velocity(self) -> float:
        """The speed limit of every boid."""
        return self._maximum_velocity

    @property
    def multithreaded(self) -> bool:
        """Whether ticks spread the work over several threads."""
        return self._multithreaded

    @multithreaded.setter
    def multithreaded(self, multithreaded: bool) -> None:
        self._multithreaded = bool(multithreaded)