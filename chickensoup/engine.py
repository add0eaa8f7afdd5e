"""
Droplet physics engine.

Advances every droplet one frame: Brownian drift, pointer repulsion,
damping, integration, wall bounces, then soft pairwise collisions.
One tick is one display frame, so velocities are in pixels per frame.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    import numpy as np

    from .droplets import DropletStore

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


# ---------------------------------------------------------------------------
# Physics parameters
# ---------------------------------------------------------------------------

@dataclass
class PhysicsParams:
    """All tuneable constants.

    Defaults reproduce the tested browser version of the soup.
    """
    # Seeding
    seed_density: float = 9000.0        # viewport px² per droplet
    radius_min: float = 15.0
    radius_max: float = 50.0
    initial_speed: float = 0.1
    rotation_speed_max: float = 0.01
    color_offset_max: float = 0.2

    # Shapes
    round_probability: float = 0.8
    shape_points: int = 8
    shape_offset_min: float = 0.85
    shape_offset_max: float = 1.15

    # Motion
    drift: float = 0.01
    damping: float = 0.96
    restitution: float = 0.5            # wall bounce keeps this much speed
    max_speed: Optional[float] = None   # None = only damping limits speed

    # Pointer
    repulsion_radius: float = 75.0
    repulsion_force: float = 0.005

    # Collisions
    collision_strength: float = 0.08
    proximity_margin: float = 10.0

    # Merging
    merge_distance_factor: float = 1.2
    click_tolerance: float = 60.0

    # Stirring
    gather_impulse: float = 10.0
    gather_impulse_jitter: float = 5.0

    # Hint
    giant_fraction: float = 0.25

    # Rendering
    easing_rate: float = 0.1
    easing_snap: float = 0.1
    visible_radius: float = 1.0


# ---------------------------------------------------------------------------
# Physics step
# ---------------------------------------------------------------------------

class PhysicsStep:
    """Per-tick update of a droplet store.

    Parameters:
        rng:    Shared random generator (drift noise).
        params: Physics constants (or defaults).
    """

    def __init__(self, rng: "np.random.Generator", params: Optional[PhysicsParams] = None) -> None:
        self.rng = rng
        self.params = params or PhysicsParams()
        self.hint: bool = False

    def __call__(
        self,
        store: "DropletStore",
        width: float,
        height: float,
        pointer: Optional[Point] = None,
    ) -> bool:
        """Advance *store* one tick and return the "show hint" flag.

        *pointer* is ``None`` when repulsion is inactive (not playing).
        """
        p = self.params
        droplets = store.droplets
        giant_limit = min(width, height) * p.giant_fraction
        has_giant = any(d.radius > giant_limit for d in droplets)

        for d in droplets:
            # ── Drift ──
            d.vx += self.rng.uniform(-p.drift, p.drift)
            d.vy += self.rng.uniform(-p.drift, p.drift)

            # ── Pointer repulsion ──
            if pointer is not None:
                self._repel(d, pointer)

            # ── Damping ──
            d.vx *= p.damping
            d.vy *= p.damping
            if p.max_speed is not None:
                speed = math.hypot(d.vx, d.vy)
                if speed > p.max_speed:
                    d.vx *= p.max_speed / speed
                    d.vy *= p.max_speed / speed

            # ── Integration ──
            d.x += d.vx
            d.y += d.vy

            # ── Walls ──
            pad = d.radius
            if d.x < pad:
                d.x = pad
                d.vx *= -p.restitution
            if d.x > width - pad:
                d.x = width - pad
                d.vx *= -p.restitution
            if d.y < pad:
                d.y = pad
                d.vy *= -p.restitution
            if d.y > height - pad:
                d.y = height - pad
                d.vy *= -p.restitution

        any_close = self._collide(droplets)

        # Collision nudges can push a droplet back past a wall.
        for d in droplets:
            d.x = min(max(d.x, d.radius), width - d.radius)
            d.y = min(max(d.y, d.radius), height - d.radius)

        self.hint = has_giant or not any_close
        return self.hint

    def _repel(self, d, pointer: Point) -> None:
        p = self.params
        dx = d.x - pointer[0]
        dy = d.y - pointer[1]
        dist_sq = dx * dx + dy * dy
        rep_rad = p.repulsion_radius + d.radius
        if dist_sq < rep_rad * rep_rad:
            dist = math.sqrt(dist_sq)
            if dist > 0:
                force = (1 - dist / rep_rad) * p.repulsion_force
                d.vx += (dx / dist) * force
                d.vy += (dy / dist) * force

    def _collide(self, droplets) -> bool:
        """Soft penalty collisions; returns True if any pair was close."""
        p = self.params
        any_close = False
        n = len(droplets)
        for i in range(n):
            a = droplets[i]
            for j in range(i + 1, n):
                b = droplets[j]
                dx = b.x - a.x
                dy = b.y - a.y
                dist_sq = dx * dx + dy * dy
                min_dist = a.radius + b.radius

                near = min_dist + p.proximity_margin
                if dist_sq < near * near:
                    any_close = True

                if dist_sq >= min_dist * min_dist:
                    continue
                dist = math.sqrt(dist_sq)
                if dist == 0:
                    continue

                overlap = min_dist - dist
                force = overlap * p.collision_strength
                nx = dx / dist
                ny = dy / dist

                # Heavier droplet (mass ∝ r²) takes the smaller share.
                m1 = a.radius * a.radius
                m2 = b.radius * b.radius
                total = m1 + m2
                r1 = m2 / total
                r2 = m1 / total

                a.vx -= nx * force * r1
                a.vy -= ny * force * r1
                b.vx += nx * force * r2
                b.vy += ny * force * r2

                a.x -= nx * force * r1
                a.y -= ny * force * r1
                b.x += nx * force * r2
                b.y += ny * force * r2
        return any_close
