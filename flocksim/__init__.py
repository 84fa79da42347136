"""Boids flocking simulation on a wrapping square world with blue-noise placement."""

__version__ = "0.2.17"

__all__ = ["bluenoise", "builder", "factory", "grid", "steering", "universe", "vector"]