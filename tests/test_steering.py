import random

import pytest

from flocksim.grid import NaiveGrid, TiledGrid
from flocksim.steering import (
    FlockingRules,
    alignment_acceleration,
    attraction_acceleration,
    separation_acceleration,
    wrapped_position,
)
from flocksim.vector import Boid, Vec2


def _rules(**overrides):
    values = dict(
        noise_fraction=0.0,
        attraction_radius=1.0,
        attraction_weighting=0.0,
        alignment_radius=1.0,
        alignment_weighting=0.0,
        separation_radius=1.0,
        separation_weighting=0.0,
        maximum_velocity=10.0,
    )
    values.update(overrides)
    return FlockingRules(**values)


def _grid(boids, size=10.0, tiled=False):
    grid = TiledGrid(size) if tiled else NaiveGrid(size)
    grid.set_points(boids)
    return grid


@pytest.mark.parametrize(
    "start,other",
    [
        (Vec2(1.0, 5.0), Vec2(9.0, 5.0)),
        (Vec2(9.0, 5.0), Vec2(1.0, 5.0)),
        (Vec2(5.0, 9.0), Vec2(5.0, 1.0)),
        (Vec2(1.0, 9.0), Vec2(9.0, 1.0)),
        (Vec2(2.0, 3.0), Vec2(4.0, 6.0)),
    ],
)
def test_wrapped_position_is_nearest_image(start, other):
    result = wrapped_position(10.0, start, other)
    assert abs(result.x - start.x) <= 5.0
    assert abs(result.y - start.y) <= 5.0
    assert result.x - other.x in (-10.0, 0.0, 10.0)
    assert result.y - other.y in (-10.0, 0.0, 10.0)


def test_wrapped_position_keeps_close_points():
    assert wrapped_position(10.0, Vec2(2.0, 3.0), Vec2(4.0, 6.0)) == Vec2(4.0, 6.0)


def test_no_neighbors_means_no_acceleration():
    boid = Boid(Vec2(5.0, 5.0), Vec2(1.0, 1.0))
    grid = _grid([boid])
    assert attraction_acceleration(boid, grid, 1.0) == Vec2(0.0, 0.0)
    assert alignment_acceleration(boid, grid, 1.0) == Vec2(0.0, 0.0)
    assert separation_acceleration(boid, grid, 1.0) == Vec2(0.0, 0.0)


@pytest.mark.parametrize("tiled", [False, True])
def test_attraction_points_towards_neighbor(tiled):
    b1 = Boid(Vec2(1.0, 1.0))
    b2 = Boid(Vec2(2.0, 1.0))
    grid = _grid([b1, b2], tiled=tiled)
    acc = attraction_acceleration(b1, grid, 1.0)
    assert acc.x > 0.0 and acc.y == 0.0
    assert separation_acceleration(b1, grid, 1.0) == acc * -1.0


def test_attraction_across_wrapped_edge():
    b1 = Boid(Vec2(5.0, 9.0))
    b2 = Boid(Vec2(5.0, 1.0))
    grid = _grid([b1, b2])
    assert attraction_acceleration(b1, grid, 2.0).y > 0.0
    assert attraction_acceleration(b2, grid, 2.0).y < 0.0


def test_alignment_matches_single_neighbor_velocity():
    b1 = Boid(Vec2(1.0, 1.0), Vec2(0.5, -0.25))
    b2 = Boid(Vec2(2.0, 1.0), Vec2(1.0, 0.5))
    grid = _grid([b1, b2])
    acc = alignment_acceleration(b1, grid, 1.0)
    assert b1.velocity + acc == b2.velocity


def test_boid_wraps_around_grid_when_moving():
    rules = _rules()
    rng = random.Random(0)
    cases = [
        (Boid(Vec2(0.0, 5.0), Vec2(-1.0, 0.0)), Vec2(9.0, 5.0)),
        (Boid(Vec2(5.0, 1.0), Vec2(-1.0, -1.5)), Vec2(4.0, 9.5)),
        (Boid(Vec2(1.0, 9.0), Vec2(-2.0, 2.0)), Vec2(9.0, 1.0)),
    ]
    for boid, expected in cases:
        assert rules.apply(boid, _grid([boid]), rng).position == expected


def test_maximum_velocity_limits_speed():
    rng = random.Random(0)
    b1 = Boid(Vec2(5.0, 5.0), Vec2(2.0, 0.0))
    assert _rules(maximum_velocity=1.0).apply(b1, _grid([b1]), rng).velocity == Vec2(1.0, 0.0)

    b2 = Boid(Vec2(5.0, 5.0), Vec2(0.0, 5.0))
    assert _rules(maximum_velocity=3.5).apply(b2, _grid([b2]), rng).velocity == Vec2(0.0, 3.5)

    b3 = Boid(Vec2(9.0, 9.0), Vec2(-6.0, -8.0))
    result = _rules(maximum_velocity=5.0).apply(b3, _grid([b3]), rng)
    assert result.position == Vec2(6.0, 5.0)
    assert result.velocity == Vec2(-3.0, -4.0)


def test_zero_maximum_velocity_keeps_boid_still():
    boid = Boid(Vec2(5.0, 5.0), Vec2(-1.0, 2.3))
    result = _rules(maximum_velocity=0.0).apply(boid, _grid([boid]), random.Random(0))
    assert result.position == Vec2(5.0, 5.0)


def test_alignment_rule_changes_velocity():
    b1 = Boid(Vec2(1.0, 1.0), Vec2(0.0, 0.0))
    b2 = Boid(Vec2(2.0, 1.0), Vec2(1.0, 0.0))
    grid = _grid([b1, b2])
    rules = _rules(alignment_weighting=1.0)
    rng = random.Random(0)
    u = rules.apply(b1, grid, rng).velocity
    v = rules.apply(b2, grid, rng).velocity
    assert u.x > 0.0 and u.y == 0.0
    assert v.x < 1.0 and v.y == 0.0


def test_separation_rule_pushes_apart():
    b1 = Boid(Vec2(1.0, 1.0))
    b2 = Boid(Vec2(2.0, 1.0))
    grid = _grid([b1, b2])
    rules = _rules(separation_weighting=1.0, maximum_velocity=1.0)
    rng = random.Random(0)
    assert rules.apply(b1, grid, rng).position.x < 1.0
    assert rules.apply(b2, grid, rng).position.x > 2.0


def test_noise_free_update_keeps_velocity():
    boid = Boid(Vec2(5.0, 5.0), Vec2(1.0, 1.0))
    result = _rules().apply(boid, _grid([boid]), random.Random(0))
    assert result.velocity == Vec2(1.0, 1.0)


def test_noise_adds_bounded_acceleration():
    boid = Boid(Vec2(5.0, 5.0), Vec2(1.0, 1.0))
    result = _rules(noise_fraction=1.0).apply(boid, _grid([boid]), random.Random(3))
    assert -1.0 <= result.acceleration.x <= 1.0
    assert -1.0 <= result.acceleration.y <= 1.0
    assert result.velocity == boid.velocity + result.acceleration


def test_apply_does_not_mutate_input_boid():
    boid = Boid(Vec2(5.0, 5.0), Vec2(1.0, 0.5))
    _rules(noise_fraction=0.5).apply(boid, _grid([boid]), random.Random(1))
    assert boid == Boid(Vec2(5.0, 5.0), Vec2(1.0, 0.5))