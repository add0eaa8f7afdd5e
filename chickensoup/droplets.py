"""
Droplet state and the store that owns it.

A droplet is a blob of oil floating on the broth.  The store is the only
place droplet records live; physics, merging and rendering all work on
the store's list between (or during) ticks.
"""

from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .engine import PhysicsParams

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Droplet
# ---------------------------------------------------------------------------

@dataclass
class Droplet:
    """A single oil droplet in viewport space."""
    id: int
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    radius: float = 0.0           # currently drawn radius
    target_radius: float = 0.0    # radius eases toward this
    color_offset: float = 0.0
    shape_offsets: Tuple[float, ...] = ()   # empty = perfect circle
    rotation: float = 0.0
    rotation_speed: float = 0.0

    @property
    def is_round(self) -> bool:
        return not self.shape_offsets


# ---------------------------------------------------------------------------
# Shape generation
# ---------------------------------------------------------------------------

class ShapeGenerator:
    """Rolls organic outlines.

    Most droplets are perfect circles; the rest get ``points`` radius
    multipliers placed at equal angular spacing around the centre.
    """

    def __init__(self, rng: np.random.Generator, params: Optional[PhysicsParams] = None) -> None:
        self.rng = rng
        self.params = params or PhysicsParams()

    def generate(self) -> Tuple[float, ...]:
        p = self.params
        if self.rng.random() < p.round_probability:
            return ()
        offsets = self.rng.uniform(p.shape_offset_min, p.shape_offset_max, p.shape_points)
        return tuple(float(o) for o in offsets)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class DropletStore:
    """Live collection of droplets for one simulation session.

    Ids come from a monotonic counter and are never handed out twice,
    even across reseeds.
    """

    def __init__(
        self,
        rng: np.random.Generator,
        params: Optional[PhysicsParams] = None,
        shapes: Optional[ShapeGenerator] = None,
    ) -> None:
        self.params = params or PhysicsParams()
        self.rng = rng
        self.shapes = shapes or ShapeGenerator(rng, self.params)
        self.droplets: List[Droplet] = []
        self.width: float = 0.0
        self.height: float = 0.0
        self._ids = itertools.count(1)

    # ── container protocol ────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.droplets)

    def __iter__(self) -> Iterator[Droplet]:
        return iter(self.droplets)

    def get(self, droplet_id: int) -> Optional[Droplet]:
        for d in self.droplets:
            if d.id == droplet_id:
                return d
        return None

    def next_id(self) -> int:
        return next(self._ids)

    def add(self, **fields) -> Droplet:
        """Create a droplet with a fresh id and insert it."""
        d = Droplet(id=self.next_id(), **fields)
        self.droplets.append(d)
        return d

    # ── seeding ───────────────────────────────────────────────────────────

    def seed(self, width: float, height: float) -> None:
        """Clear the store and fill the viewport with fresh droplets.

        Droplets start with ``radius = 0`` so they grow in on screen.
        Non-positive viewport dimensions seed nothing.
        """
        self.width = width
        self.height = height
        self.droplets = []
        if width <= 0 or height <= 0:
            logger.info("Seed skipped: empty viewport %sx%s", width, height)
            return

        p = self.params
        count = int(math.floor(width * height / p.seed_density))
        rng = self.rng
        xs = rng.uniform(0, width, count)
        ys = rng.uniform(0, height, count)
        radii = rng.uniform(p.radius_min, p.radius_max, count)
        vxs = rng.uniform(-p.initial_speed, p.initial_speed, count)
        vys = rng.uniform(-p.initial_speed, p.initial_speed, count)

        for i in range(count):
            self.add(
                x=float(xs[i]),
                y=float(ys[i]),
                vx=float(vxs[i]),
                vy=float(vys[i]),
                radius=0.0,
                target_radius=float(radii[i]),
                color_offset=float(rng.uniform(0, p.color_offset_max)),
                shape_offsets=self.shapes.generate(),
                rotation=float(rng.uniform(0, 2 * math.pi)),
                rotation_speed=float(rng.uniform(-p.rotation_speed_max, p.rotation_speed_max)),
            )
        logger.info("Seeded %d droplets for %gx%g viewport", count, width, height)

    # ── stirring ──────────────────────────────────────────────────────────

    def scatter_or_gather(self, center: Tuple[float, float]) -> None:
        """Re-seed when at most one droplet is left, else pull all to *center*."""
        if len(self.droplets) <= 1:
            self.seed(self.width, self.height)
            return

        p = self.params
        cx, cy = center
        for d in self.droplets:
            dx = cx - d.x
            dy = cy - d.y
            dist = math.sqrt(dx * dx + dy * dy)
            if dist > 0:
                speed = p.gather_impulse + self.rng.random() * p.gather_impulse_jitter
                d.vx += (dx / dist) * speed
                d.vy += (dy / dist) * speed
        logger.debug("Gathered %d droplets toward (%.0f, %.0f)", len(self.droplets), cx, cy)

    # ── merging ───────────────────────────────────────────────────────────

    def replace(self, id_a: int, id_b: int, new_droplet: Droplet) -> bool:
        """Swap droplets *id_a* and *id_b* for *new_droplet* in one step.

        Returns False (and changes nothing) if either id is missing.
        """
        if id_a == id_b or self.get(id_a) is None or self.get(id_b) is None:
            logger.debug("Replace ignored: stale ids %s, %s", id_a, id_b)
            return False
        self.droplets = [d for d in self.droplets if d.id != id_a and d.id != id_b]
        self.droplets.append(new_droplet)
        return True
