"""
Droplet renderer.

Turns droplet state into drawing calls on a :class:`DrawingSurface`.
The surface is deliberately tiny (circle, closed quadratic curve, radial
highlight) so the same renderer can paint through QPainter on screen or
into a :class:`RecordingSurface` for headless checks.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List, Optional, Protocol, Sequence, Tuple

from .engine import PhysicsParams
from .palettes import RGB, RGBA, ColorScheme, get_scheme, tint

if TYPE_CHECKING:
    from .droplets import Droplet

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
Segment = Tuple[Point, Point]      # (control point, end point)


# ---------------------------------------------------------------------------
# Drawing surface
# ---------------------------------------------------------------------------

class DrawingSurface(Protocol):
    """What the renderer needs from a canvas."""

    def fill_background(self, color: RGB) -> None: ...

    def draw_circle(
        self, center: Point, radius: float, fill: RGBA, stroke: RGBA, stroke_width: float,
    ) -> None: ...

    def draw_closed_curve(
        self, start: Point, segments: Sequence[Segment],
        fill: RGBA, stroke: RGBA, stroke_width: float,
    ) -> None: ...

    def draw_radial_highlight(
        self, center: Point, rx: float, ry: float, angle: float,
        inner: RGBA, outer: RGBA,
    ) -> None: ...


@dataclass
class RecordingSurface:
    """Surface that just remembers every call as ``(op, kwargs)``."""
    calls: List[Tuple[str, dict]] = field(default_factory=list)

    def fill_background(self, color: RGB) -> None:
        self.calls.append(("background", {"color": color}))

    def draw_circle(self, center, radius, fill, stroke, stroke_width) -> None:
        self.calls.append(("circle", {
            "center": center, "radius": radius,
            "fill": fill, "stroke": stroke, "stroke_width": stroke_width,
        }))

    def draw_closed_curve(self, start, segments, fill, stroke, stroke_width) -> None:
        self.calls.append(("curve", {
            "start": start, "segments": list(segments),
            "fill": fill, "stroke": stroke, "stroke_width": stroke_width,
        }))

    def draw_radial_highlight(self, center, rx, ry, angle, inner, outer) -> None:
        self.calls.append(("highlight", {
            "center": center, "rx": rx, "ry": ry, "angle": angle,
            "inner": inner, "outer": outer,
        }))

    def ops(self) -> List[str]:
        return [op for op, _ in self.calls]

    def clear(self) -> None:
        self.calls.clear()


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

def outline_points(
    offsets: Sequence[float], radius: float, rotation: float, cx: float, cy: float,
) -> List[Point]:
    """Control points of an organic outline in viewport coordinates."""
    n = len(offsets)
    cos_r = math.cos(rotation)
    sin_r = math.sin(rotation)
    pts = []
    for i, k in enumerate(offsets):
        angle = 2 * math.pi * i / n
        lx = math.cos(angle) * radius * k
        ly = math.sin(angle) * radius * k
        pts.append((cx + lx * cos_r - ly * sin_r, cy + lx * sin_r + ly * cos_r))
    return pts


def smooth_closed_path(points: Sequence[Point]) -> Tuple[Point, List[Segment]]:
    """Round a closed polygon through its edge midpoints.

    Starts at the midpoint of the last and first points, then runs one
    quadratic curve per point: control = the point, end = the midpoint
    of the following edge.
    """
    n = len(points)
    last, first = points[-1], points[0]
    start = ((last[0] + first[0]) / 2, (last[1] + first[1]) / 2)
    segments = []
    for i in range(n):
        p1 = points[i]
        p2 = points[(i + 1) % n]
        segments.append((p1, ((p1[0] + p2[0]) / 2, (p1[1] + p2[1]) / 2)))
    return start, segments


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------

class Renderer:
    """Draws droplets and eases their radius / rotation one frame forward.

    Parameters:
        scheme: Colour scheme for broth and oil.
        params: Shared constants (easing rate, visibility threshold).
    """

    def __init__(
        self,
        scheme: Optional[ColorScheme] = None,
        params: Optional[PhysicsParams] = None,
    ) -> None:
        self.scheme = scheme or get_scheme("golden")
        self.params = params or PhysicsParams()

    def render(
        self,
        droplets: Iterable["Droplet"],
        surface: DrawingSurface,
        background: bool = True,
    ) -> int:
        """Paint one frame; returns the number of droplets drawn."""
        if background:
            surface.fill_background(self.scheme.broth)
        drawn = 0
        for d in droplets:
            if self.draw_droplet(d, surface):
                drawn += 1
        return drawn

    def draw_droplet(self, d: "Droplet", surface: DrawingSurface) -> bool:
        p = self.params
        s = self.scheme

        if abs(d.radius - d.target_radius) > p.easing_snap:
            d.radius += (d.target_radius - d.radius) * p.easing_rate

        r = d.radius
        if r <= p.visible_radius:
            return False

        d.rotation += d.rotation_speed
        fill = tint(s.oil_fill, d.color_offset)

        if d.is_round:
            surface.draw_circle((d.x, d.y), r, fill, s.oil_rim, s.rim_width)
        else:
            pts = outline_points(d.shape_offsets, r, d.rotation, d.x, d.y)
            start, segments = smooth_closed_path(pts)
            surface.draw_closed_curve(start, segments, fill, s.oil_rim, s.rim_width)

        # Specular glint, upper-left
        hr = r * 0.25
        surface.draw_radial_highlight(
            (d.x - r * 0.3, d.y - r * 0.3), hr, hr * 0.7, math.pi / 4,
            s.highlight, s.highlight_clear,
        )
        return True
