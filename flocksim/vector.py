"""Two-dimensional vectors and the boid state built on them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, Union

_Number = Union[int, float]


@dataclass(frozen=True, slots=True)
class Vec2:
    """An immutable 2D vector."""

    x: float
    y: float

    def magnitude(self) -> float:
        """Return the Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: Vec2 | _Number) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x + other.x, self.y + other.y)
        if isinstance(other, (int, float)):
            return Vec2(self.x + other, self.y + other)
        return NotImplemented

    def __radd__(self, other: _Number) -> Vec2:
        if isinstance(other, (int, float)):
            return Vec2(self.x + other, self.y + other)
        return NotImplemented

    def __sub__(self, other: Vec2) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x - other.x, self.y - other.y)
        return NotImplemented

    def __mul__(self, scalar: _Number) -> Vec2:
        if isinstance(scalar, (int, float)):
            return Vec2(self.x * scalar, self.y * scalar)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, scalar: _Number) -> Vec2:
        if isinstance(scalar, (int, float)):
            return Vec2(self.x / scalar, self.y / scalar)
        return NotImplemented

    def __mod__(self, modulus: _Number) -> Vec2:
        """Componentwise remainder that keeps the sign of the dividend."""
        if isinstance(modulus, (int, float)):
            return Vec2(math.fmod(self.x, modulus), math.fmod(self.y, modulus))
        return NotImplemented


_ZERO = Vec2(0.0, 0.0)


@dataclass(slots=True)
class Boid:
    """A single flocking agent: position, velocity and acceleration."""

    position: Vec2
    velocity: Vec2 = field(default=_ZERO)
    acceleration: Vec2 = field(default=_ZERO)

    def xy(self) -> tuple[float, float]:
        """Return the boid's position as a tuple."""
        return (self.position.x, self.position.y)

    def set_xy(self, x: float, y: float) -> None:
        """Move the boid to a new position."""
        self.position = Vec2(x, y)