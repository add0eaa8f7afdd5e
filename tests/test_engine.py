import math

import pytest

from chickensoup.droplets import DropletStore
from chickensoup.engine import PhysicsParams, PhysicsStep


def _dist(a, b):
    return math.hypot(a.x - b.x, a.y - b.y)


def test_damping(rng, store, still_params):
    step = PhysicsStep(rng, still_params)
    d = store.add(x=200, y=200, vx=1.0, vy=-0.5, radius=10, target_radius=10)
    step(store, 400, 400)
    assert d.vx == pytest.approx(0.96)
    assert d.vy == pytest.approx(-0.48)
    assert d.x == pytest.approx(200.96)


def test_wall_bounce(rng, store, still_params):
    step = PhysicsStep(rng, still_params)
    d = store.add(x=5, y=200, vx=-2.0, radius=10, target_radius=10)
    step(store, 400, 400)
    assert d.x == 10
    assert d.vx == pytest.approx(0.96)


def test_wall_containment(rng):
    params = PhysicsParams()
    store = DropletStore(rng, params)
    store.seed(600, 400)
    for d in store:
        d.radius = d.target_radius
    step = PhysicsStep(rng, params)

    for tick in range(200):
        pointer = (300 + 100 * math.sin(tick / 10), 200)
        step(store, 600, 400, pointer)
        for d in store:
            assert d.radius <= d.x <= 600 - d.radius
            assert d.radius <= d.y <= 400 - d.radius


def test_overlap_separates_monotonically(rng, store, still_params):
    step = PhysicsStep(rng, still_params)
    a = store.add(x=190, y=200, radius=20, target_radius=20)
    b = store.add(x=210, y=200, radius=20, target_radius=20)

    distances = [_dist(a, b)]
    for _ in range(100):
        step(store, 400, 400)
        distances.append(_dist(a, b))

    assert all(later >= earlier for earlier, later in zip(distances, distances[1:]))
    assert distances[1] < 40          # soft response: not resolved in one tick
    assert distances[-1] >= 40


def test_heavier_droplet_moves_less(rng, store, still_params):
    step = PhysicsStep(rng, still_params)
    big = store.add(x=180, y=200, radius=30, target_radius=30)
    small = store.add(x=210, y=200, radius=10, target_radius=10)
    step(store, 400, 400)
    assert abs(big.x - 180) < abs(small.x - 210)
    assert big.vx < 0 < small.vx


def test_coincident_droplets_are_skipped(rng, store, still_params):
    step = PhysicsStep(rng, still_params)
    a = store.add(x=200, y=200, radius=20, target_radius=20)
    b = store.add(x=200, y=200, radius=20, target_radius=20)
    step(store, 400, 400)
    assert (a.x, a.y, b.x, b.y) == (200, 200, 200, 200)
    assert a.vx == a.vy == b.vx == b.vy == 0


def test_pointer_repulsion(rng, store, still_params):
    step = PhysicsStep(rng, still_params)
    d = store.add(x=100, y=100, radius=20, target_radius=20)
    step(store, 400, 400, pointer=(90, 100))
    assert d.vx > 0
    assert d.vy == pytest.approx(0)


def test_pointer_out_of_range(rng, store, still_params):
    step = PhysicsStep(rng, still_params)
    d = store.add(x=100, y=100, radius=20, target_radius=20)
    step(store, 400, 400, pointer=(300, 300))
    assert d.vx == 0 and d.vy == 0


def test_no_pointer_means_no_repulsion(rng, store, still_params):
    step = PhysicsStep(rng, still_params)
    d = store.add(x=100, y=100, radius=20, target_radius=20)
    step(store, 400, 400, pointer=None)
    assert d.vx == 0


def test_max_speed_cap(rng, store):
    step = PhysicsStep(rng, PhysicsParams(drift=0.0, max_speed=2.0))
    d = store.add(x=200, y=200, vx=30.0, radius=10, target_radius=10)
    step(store, 400, 400)
    assert math.hypot(d.vx, d.vy) == pytest.approx(2.0)


def test_hint_when_droplets_far_apart(rng, store, still_params):
    step = PhysicsStep(rng, still_params)
    store.add(x=50, y=50, radius=10, target_radius=10)
    store.add(x=350, y=350, radius=10, target_radius=10)
    assert step(store, 400, 400) is True


def test_no_hint_when_droplets_close(rng, store, still_params):
    step = PhysicsStep(rng, still_params)
    store.add(x=100, y=100, radius=10, target_radius=10)
    store.add(x=125, y=100, radius=10, target_radius=10)
    assert step(store, 400, 400) is False
    assert step.hint is False


def test_hint_for_giant_droplet(rng, store, still_params):
    step = PhysicsStep(rng, still_params)
    store.add(x=300, y=200, radius=120, target_radius=120)
    store.add(x=430, y=200, radius=10, target_radius=10)
    # 120 > 0.25 * min(600, 400)
    assert step(store, 600, 400) is True
