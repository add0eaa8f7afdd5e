"""
Click-to-merge resolution.

A click near the boundary between two adjacent droplets fuses them into
one droplet with the same total area.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Optional

from .droplets import Droplet, ShapeGenerator
from .engine import PhysicsParams

if TYPE_CHECKING:
    import numpy as np

    from .droplets import DropletStore

logger = logging.getLogger(__name__)


class MergeResolver:
    """Finds the two droplets nearest a click and merges them if adjacent."""

    def __init__(
        self,
        rng: "np.random.Generator",
        params: Optional[PhysicsParams] = None,
        shapes: Optional[ShapeGenerator] = None,
    ) -> None:
        self.rng = rng
        self.params = params or PhysicsParams()
        self.shapes = shapes or ShapeGenerator(rng, self.params)

    def resolve(self, store: "DropletStore", x: float, y: float) -> Optional[Droplet]:
        """Try to merge at ``(x, y)``; return the new droplet or None."""
        p = self.params
        candidates = []
        for d in store.droplets:
            dist = math.hypot(d.x - x, d.y - y)
            if dist < d.radius + p.click_tolerance:
                candidates.append(d)

        if len(candidates) < 2:
            return None

        # sort() is stable, so equal distances keep store order
        candidates.sort(key=lambda d: (d.x - x) ** 2 + (d.y - y) ** 2)
        d1, d2 = candidates[0], candidates[1]

        gap = math.hypot(d1.x - d2.x, d1.y - d2.y)
        if gap >= (d1.radius + d2.radius) * p.merge_distance_factor:
            logger.debug("Merge skipped: droplets %d and %d are %.1f apart", d1.id, d2.id, gap)
            return None

        merged = self.combine(store.next_id(), d1, d2)
        if not store.replace(d1.id, d2.id, merged):
            return None
        logger.debug(
            "Merged %d (r=%.1f) + %d (r=%.1f) -> %d (r=%.1f)",
            d1.id, d1.radius, d2.id, d2.radius, merged.id, merged.target_radius,
        )
        return merged

    def combine(self, new_id: int, d1: Droplet, d2: Droplet) -> Droplet:
        """Build the droplet that replaces *d1* and *d2*."""
        p = self.params
        r1, r2 = d1.radius, d2.radius
        weight = r1 + r2
        if weight > 0:
            cx = (d1.x * r1 + d2.x * r2) / weight
            cy = (d1.y * r1 + d2.y * r2) / weight
        else:
            cx = (d1.x + d2.x) / 2
            cy = (d1.y + d2.y) / 2

        return Droplet(
            id=new_id,
            x=cx,
            y=cy,
            vx=(d1.vx + d2.vx) / 2,
            vy=(d1.vy + d2.vy) / 2,
            radius=r1,
            target_radius=math.sqrt(r1 * r1 + r2 * r2),
            color_offset=d1.color_offset,
            shape_offsets=self.shapes.generate(),
            rotation=0.0,
            rotation_speed=float(self.rng.uniform(-p.rotation_speed_max, p.rotation_speed_max)),
        )
