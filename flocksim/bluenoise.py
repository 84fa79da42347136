"""Blue-noise (Poisson disk) sampling over a square, wrapping grid."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from flocksim.grid import Grid

NUMBER_OF_SAMPLES_UNTIL_REJECTION = 50


@dataclass(slots=True)
class Sample:
    """A single sampled point."""

    x: float
    y: float

    def xy(self) -> tuple[float, float]:
        """Return the sample's coordinates."""
        return (self.x, self.y)

    def set_xy(self, x: float, y: float) -> None:
        """Move the sample to new coordinates."""
        self.x = x
        self.y = y


class BlueNoise:
    """Generates well-spread points using Bridson's Poisson disk sampling."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def _random_point(self, size: float) -> Sample:
        return Sample(self._rng.uniform(0.0, size), self._rng.uniform(0.0, size))

    def generate(self, grid: Grid, number_of_samples: int) -> list[Sample]:
        """Return ``number_of_samples`` new points spread around the grid's existing ones."""
        rng = self._rng
        size = grid.size
        active = [Sample(*p.xy()) for p in grid.points]
        generated: list[Sample] = []

        if not active:
            initial = self._random_point(size)
            active.append(Sample(initial.x, initial.y))
            generated.append(initial)

        radius = (
            size * math.sqrt(2.0 / number_of_samples)
            if number_of_samples > 0
            else math.inf
        )

        while active:
            if len(generated) >= number_of_samples:
                return generated

            idx = rng.randrange(len(active))
            active_x, active_y = active[idx].xy()

            for _ in range(NUMBER_OF_SAMPLES_UNTIL_REJECTION):
                r = rng.uniform(radius, radius * 2.0)
                angle = rng.random() * 2.0 * math.pi
                candidate_x = active_x + r * math.cos(angle)
                candidate_y = active_y + r * math.sin(angle)

                if not (0.0 <= candidate_x <= size and 0.0 <= candidate_y <= size):
                    continue

                candidate = Sample(candidate_x, candidate_y)
                if candidate in generated:
                    continue
                if not grid.neighbors(candidate, radius):
                    active.append(Sample(candidate_x, candidate_y))
                    generated.append(candidate)
                    break
            else:
                del active[idx]

        # Sampling can run dry around an existing set of points; fill the rest uniformly.
        while len(generated) < number_of_samples:
            generated.append(self._random_point(size))
        return generated