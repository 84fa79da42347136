# flocksim

A boids flocking simulation. Boids live on a square world whose edges wrap
around. On each tick, every boid steers by three rules, each with its own
weighting and radius:

- attraction: move towards the average position of its neighbours;
- alignment: match the average velocity of its neighbours;
- separation: move away from the average position of its neighbours.

Random noise can be mixed in, and speed is capped at a maximum velocity.
New boids get their positions, velocities and accelerations from blue-noise
(Poisson-disk) sampling, so they start evenly spread out.

The package has no dependencies beyond the standard library.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Usage

Build a universe from a preset and advance it:

```python
from flocksim.builder import Preset, build_from_preset

universe = build_from_preset(Preset.BASIC)
for _ in range(100):
    universe.tick()

for boid in universe.boids:
    print(boid.position, boid.velocity)
```

Each boid is a `flocksim.vector.Boid` with `position`, `velocity` and
`acceleration`, each a `Vec2`. `Vec2` is an immutable vector with `x`, `y`,
`magnitude()`, and `+`, `-`, `*`, `/` and `%` operators.

Use `Builder` to change a preset or to set everything yourself. Each setter
returns the builder, so calls can be chained:

```python
from flocksim.builder import Builder, Preset

universe = (
    Builder.from_preset(Preset.BASIC)
    .number_of_boids(500)
    .grid_size(50.0)
    .noise_fraction(0.1)
    .attraction_weighting(2)
    .alignment_weighting(1)
    .separation_weighting(1)
    .maximum_velocity(0.5)
    .build()
)
```

The presets are `Preset.BASIC`, `Preset.MARUYAMA` and `Preset.ZHANG`.

Notes on the builder:

- `density(...)` and `grid_size(...)` replace each other. The world's side
  length is `sqrt(number_of_boids / density)`. A universe with no boids
  needs a density.
- The weightings are whole numbers. At build time they are divided by their
  sum, so they always add up to 1 (or all stay 0).
- `naive(True)` selects `NaiveGrid` instead of the default `TiledGrid`.
- `multithreaded(...)` and `number_of_boids_per_thread(...)` control how
  ticks are spread over a thread pool. The defaults are on and 200.
- `build()` raises `ValueError` if a required setting is missing or the
  density is not positive. `noise_fraction(...)` raises `ValueError` for
  values outside 0 to 1. Negative boid counts or weightings also raise
  `ValueError`.

### Changing a running simulation

```python
universe.set_number_of_boids(200)   # adds blue-noise boids or drops the last ones
universe.set_density(0.5)           # rescales the world, keeping relative positions
print(universe.size, universe.number_of_boids)

universe.noise_fraction = 0.2       # clamped to [0, 1]
universe.attraction_weighting = 1.0 # clamped to [0, 1], then all weightings renormalised
universe.separation_radius = 2.0    # negative values become 0
universe.multithreaded = False
```

`noise_fraction`, the three weightings, the three radii and `multithreaded`
can be read and assigned. `boids`, `size`, `number_of_boids` and
`maximum_velocity` are read-only. `set_number_of_boids` and `set_density`
raise `ValueError` for a negative count or a density that is not positive.

### Grids

Neighbour lookups go through a `flocksim.grid.Grid`, which has `insert`,
`neighbors(point, radius)`, `set_points`, `resize`, `copy` and the `points`
and `size` properties. `TiledGrid` buckets points into tiles as wide as the
largest radius it has been asked about. `NaiveGrid` checks every point. Both
measure distance across the wrapping edges. `insert` raises `ValueError` for
a point outside the grid.

### Building blocks

- `flocksim.bluenoise.BlueNoise.generate(grid, number_of_samples)` returns
  Poisson-disk `Sample`s spread around the points already in `grid`. If the
  sampling runs out of room, it fills the rest uniformly at random.
- `flocksim.steering` holds the flocking rules: `FlockingRules.apply(boid,
  grid, rng)` and the functions `attraction_acceleration`,
  `alignment_acceleration`, `separation_acceleration` and
  `wrapped_position`.
- `BlueNoise`, `BlueNoiseBoidFactory` and `Universe` accept an optional
  `random.Random` for reproducible runs.

### Custom boid factories

Pass any `flocksim.factory.BoidFactory` subclass to `Builder.boid_factory(...)`
to decide where new boids start. Its `create_n(grid, number_of_boids)` method
must return a list of `Boid`. This is useful for placing boids exactly in
tests.

## What it does not do

flocksim is a library only. It draws nothing and has no window, no
animation and no command-line program. To watch a flock, read
`universe.boids` after each tick and plot the positions yourself.

## Running the tests

```
pytest
```