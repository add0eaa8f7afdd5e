import math

import pytest

from chickensoup.droplets import DropletStore, ShapeGenerator
from chickensoup.engine import PhysicsParams


def test_shape_generator_round(rng):
    shapes = ShapeGenerator(rng, PhysicsParams(round_probability=1.0))
    assert all(shapes.generate() == () for _ in range(20))


def test_shape_generator_organic(rng):
    shapes = ShapeGenerator(rng, PhysicsParams(round_probability=0.0))
    for _ in range(20):
        offsets = shapes.generate()
        assert len(offsets) == 8
        assert all(0.85 <= k <= 1.15 for k in offsets)


def test_shape_generator_mostly_round(rng):
    shapes = ShapeGenerator(rng)
    rolls = [shapes.generate() for _ in range(2000)]
    round_share = sum(1 for r in rolls if not r) / len(rolls)
    assert 0.75 < round_share < 0.85


def test_seed_count_and_initial_state(rng):
    store = DropletStore(rng)
    store.seed(900, 600)
    assert len(store) == 60
    for d in store:
        assert d.radius == 0.0
        assert 15 <= d.target_radius <= 50
        assert 0 <= d.x <= 900 and 0 <= d.y <= 600
        assert abs(d.vx) <= 0.1 and abs(d.vy) <= 0.1
        assert 0 <= d.rotation < 2 * math.pi
        assert abs(d.rotation_speed) <= 0.01
    assert len({d.id for d in store}) == 60


@pytest.mark.parametrize("size", [(0, 600), (900, 0), (-100, 600), (50, 50)])
def test_seed_degenerate_viewport(rng, size):
    store = DropletStore(rng)
    store.seed(*size)
    assert len(store) == 0


def test_reseed_never_reuses_ids(rng):
    store = DropletStore(rng)
    store.seed(900, 600)
    first = {d.id for d in store}
    store.seed(900, 600)
    second = {d.id for d in store}
    assert len(second) == 60
    assert first.isdisjoint(second)


def test_replace(store):
    a = store.add(x=10, y=10, radius=5, target_radius=5)
    b = store.add(x=20, y=10, radius=5, target_radius=5)
    c = store.add(x=90, y=90, radius=5, target_radius=5)
    new = store.add(x=15, y=10)
    store.droplets.remove(new)

    assert store.replace(a.id, b.id, new)
    assert [d.id for d in store] == [c.id, new.id]


def test_replace_stale_id_is_noop(store):
    a = store.add(x=10, y=10, radius=5, target_radius=5)
    b = store.add(x=20, y=10, radius=5, target_radius=5)
    new = store.add(x=15, y=10)
    store.droplets.remove(new)

    assert not store.replace(a.id, 999, new)
    assert not store.replace(a.id, a.id, new)
    assert [d.id for d in store] == [a.id, b.id]


def test_scatter_reseeds_when_one_left(rng):
    store = DropletStore(rng)
    store.seed(900, 600)
    store.droplets = store.droplets[:1]
    store.scatter_or_gather((450, 300))
    assert len(store) == 60


def test_scatter_reseeds_when_empty(rng):
    store = DropletStore(rng)
    store.seed(900, 600)
    store.droplets = []
    store.scatter_or_gather((450, 300))
    assert len(store) == 60


def test_gather_pulls_toward_center(store):
    left = store.add(x=100, y=200, radius=10, target_radius=10)
    above = store.add(x=200, y=50, radius=10, target_radius=10)
    centred = store.add(x=200, y=200, radius=10, target_radius=10)

    store.scatter_or_gather((200, 200))

    assert len(store) == 3
    assert 10 <= left.vx <= 15 and left.vy == pytest.approx(0)
    assert 10 <= above.vy <= 15 and above.vx == pytest.approx(0)
    assert centred.vx == 0 and centred.vy == 0
