import math

import pytest

from chickensoup.droplets import Droplet
from chickensoup.palettes import get_scheme
from chickensoup.renderer import RecordingSurface, Renderer, outline_points, smooth_closed_path


@pytest.fixture
def renderer():
    return Renderer(get_scheme("golden"))


def test_background_then_droplets(renderer):
    surface = RecordingSurface()
    droplets = [
        Droplet(id=1, x=50, y=50, radius=20, target_radius=20),
        Droplet(id=2, x=150, y=50, radius=10, target_radius=10),
    ]
    assert renderer.render(droplets, surface) == 2
    assert surface.ops() == ["background", "circle", "highlight", "circle", "highlight"]
    assert surface.calls[0][1]["color"] == (244, 196, 48)


def test_circle_and_highlight_geometry(renderer):
    surface = RecordingSurface()
    d = Droplet(id=1, x=100, y=80, radius=20, target_radius=20)
    renderer.draw_droplet(d, surface)

    (op, circle), (_, hl) = surface.calls
    assert op == "circle"
    assert circle["center"] == (100, 80)
    assert circle["radius"] == 20
    assert circle["fill"] == (255, 245, 150, 102)
    assert circle["stroke"] == (218, 165, 32, 153)
    assert circle["stroke_width"] == 2.0

    assert hl["center"] == pytest.approx((94, 74))
    assert hl["rx"] == pytest.approx(5)
    assert hl["ry"] == pytest.approx(3.5)
    assert hl["angle"] == pytest.approx(math.pi / 4)
    assert hl["outer"][3] == 0


def test_radius_eases_toward_target(renderer):
    d = Droplet(id=1, x=100, y=100, radius=0, target_radius=30)
    surface = RecordingSurface()
    renderer.draw_droplet(d, surface)
    assert d.radius == pytest.approx(3.0)
    renderer.draw_droplet(d, surface)
    assert d.radius == pytest.approx(5.7)

    for _ in range(200):
        renderer.draw_droplet(d, surface)
        assert d.radius <= 30
    assert d.radius == pytest.approx(30, abs=0.1)


def test_shrinking_radius_never_undershoots(renderer):
    d = Droplet(id=1, radius=40, target_radius=20)
    for _ in range(200):
        renderer.draw_droplet(d, RecordingSurface())
        assert d.radius >= 20


def test_tiny_droplet_not_drawn(renderer):
    d = Droplet(id=1, x=10, y=10, radius=0, target_radius=5, rotation=1.0, rotation_speed=0.01)
    surface = RecordingSurface()
    assert renderer.draw_droplet(d, surface) is False
    assert surface.calls == []
    assert d.rotation == 1.0


def test_rotation_advances(renderer):
    d = Droplet(id=1, x=10, y=10, radius=20, target_radius=20, rotation=1.0, rotation_speed=0.01)
    renderer.draw_droplet(d, RecordingSurface())
    assert d.rotation == pytest.approx(1.01)


def test_organic_outline(renderer):
    d = Droplet(
        id=1, x=100, y=100, radius=20, target_radius=20,
        shape_offsets=(1.0,) * 8,
    )
    surface = RecordingSurface()
    renderer.draw_droplet(d, surface)

    op, curve = surface.calls[0]
    assert op == "curve"
    assert len(curve["segments"]) == 8
    for ctrl, _ in curve["segments"]:
        assert math.hypot(ctrl[0] - 100, ctrl[1] - 100) == pytest.approx(20)
    # starts halfway between the last and first control points
    first = curve["segments"][0][0]
    last = curve["segments"][-1][0]
    assert curve["start"] == pytest.approx(((first[0] + last[0]) / 2, (first[1] + last[1]) / 2))
    assert surface.ops()[-1] == "highlight"


def test_outline_rotation():
    pts = outline_points([1.0, 1.0, 1.0, 1.0], 10, math.pi / 2, 0, 0)
    assert pts[0] == pytest.approx((0, 10))
    assert pts[1] == pytest.approx((-10, 0))


def test_outline_offsets_scale_radius():
    pts = outline_points([0.9, 1.1], 10, 0, 5, 5)
    assert pts[0] == pytest.approx((14, 5))
    assert pts[1] == pytest.approx((-6, 5))


def test_smooth_closed_path_square():
    start, segments = smooth_closed_path([(0, 0), (10, 0), (10, 10), (0, 10)])
    assert start == (0, 5)
    assert segments == [
        ((0, 0), (5, 0)),
        ((10, 0), (10, 5)),
        ((10, 10), (5, 10)),
        ((0, 10), (0, 5)),
    ]


def test_color_offset_tints_fill(renderer):
    plain = RecordingSurface()
    tinted = RecordingSurface()
    renderer.draw_droplet(Droplet(id=1, radius=20, target_radius=20), plain)
    renderer.draw_droplet(Droplet(id=2, radius=20, target_radius=20, color_offset=0.2), tinted)
    a = plain.calls[0][1]["fill"]
    b = tinted.calls[0][1]["fill"]
    assert a != b
    assert b[3] == a[3]
