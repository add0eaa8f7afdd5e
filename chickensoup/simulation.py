"""
Simulation loop: lifecycle, intent queue and per-frame driving.

The host (a Qt widget, or a test) owns the frame clock and calls
:meth:`SimulationLoop.tick` once per frame.  Pointer clicks and stir
requests are queued as intents and applied at the start of the next
tick, before physics runs, so the store is only ever touched from the
tick.
"""

from __future__ import annotations

import enum
import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Tuple, Union

import numpy as np

from .droplets import DropletStore, ShapeGenerator
from .engine import PhysicsParams, PhysicsStep
from .merge import MergeResolver
from .palettes import ColorScheme
from .renderer import DrawingSurface, Renderer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Intents
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Click:
    x: float
    y: float


@dataclass(frozen=True)
class Stir:
    pass


Intent = Union[Click, Stir]


class LoopState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


# ---------------------------------------------------------------------------
# Loop
# ---------------------------------------------------------------------------

class SimulationLoop:
    """Owns one soup session: store, physics, merging and rendering.

    ``IDLE --start()--> RUNNING --stop()--> IDLE``.  Every ``start`` builds
    a brand-new store, so nothing carries over between sessions.

    Parameters:
        params: Physics constants (or defaults).
        scheme: Colour scheme handed to the renderer.
        seed:   RNG seed for reproducibility (None = random).
    """

    def __init__(
        self,
        params: Optional[PhysicsParams] = None,
        scheme: Optional[ColorScheme] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.params = params or PhysicsParams()
        self.rng = np.random.default_rng(seed)
        self.shapes = ShapeGenerator(self.rng, self.params)
        self.physics = PhysicsStep(self.rng, self.params)
        self.merger = MergeResolver(self.rng, self.params, self.shapes)
        self.renderer = Renderer(scheme, self.params)

        self.state = LoopState.IDLE
        self.store: Optional[DropletStore] = None
        self.width: float = 0.0
        self.height: float = 0.0
        self.playing: bool = False
        self.pointer: Optional[Tuple[float, float]] = None
        self.hint_visible: bool = False
        self.frame: int = 0
        self._intents: Deque[Intent] = deque()

    # ── lifecycle ─────────────────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return self.state is LoopState.RUNNING

    def start(self, width: float, height: float, playing: bool = False) -> None:
        """Begin a fresh session seeded for a ``width × height`` viewport."""
        if self.running:
            raise RuntimeError("SimulationLoop already running; call stop() first")
        self.width, self.height = width, height
        self.store = DropletStore(self.rng, self.params, self.shapes)
        self.store.seed(width, height)
        self.playing = playing
        self.pointer = None
        self.hint_visible = False
        self.frame = 0
        self._intents.clear()
        self.state = LoopState.RUNNING
        logger.info("Simulation started (%gx%g, playing=%s)", width, height, playing)

    def stop(self) -> None:
        """Tear the session down; safe to call when already idle."""
        if not self.running:
            return
        self.state = LoopState.IDLE
        self.store = None
        self.pointer = None
        self.hint_visible = False
        self._intents.clear()
        logger.info("Simulation stopped after %d frames", self.frame)

    def resize(self, width: float, height: float) -> None:
        """New viewport bounds; reseeds only if the store is empty."""
        self.width, self.height = width, height
        if not self.running:
            return
        self.store.width, self.store.height = width, height
        if len(self.store) == 0:
            self.store.seed(width, height)

    def set_playing(self, playing: bool) -> None:
        self.playing = playing
        if not playing:
            self.pointer = None

    # ── input ─────────────────────────────────────────────────────────────

    def pointer_moved(self, x: float, y: float) -> None:
        if self.running and self.playing:
            self.pointer = (x, y)

    def pointer_left(self) -> None:
        self.pointer = None

    def click(self, x: float, y: float) -> None:
        if not (self.running and self.playing):
            logger.debug("Click ignored (not playing)")
            return
        self._intents.append(Click(x, y))

    def stir(self) -> None:
        """Queue a stir and hide the hint until the next tick re-checks."""
        if not self.running:
            return
        self._intents.append(Stir())
        self.hint_visible = False

    @property
    def pending(self) -> int:
        return len(self._intents)

    # ── frame ─────────────────────────────────────────────────────────────

    def tick(self, surface: Optional[DrawingSurface] = None) -> bool:
        """Apply queued intents, step physics, then draw onto *surface*.

        Returns the hint flag for this frame.
        """
        if not self.running:
            return False
        self._drain()
        pointer = self.pointer if self.playing else None
        self.hint_visible = self.physics(self.store, self.width, self.height, pointer)
        if surface is not None:
            self.render(surface)
        self.frame += 1
        return self.hint_visible

    def render(self, surface: DrawingSurface) -> int:
        if not self.running:
            return 0
        return self.renderer.render(self.store.droplets, surface)

    def _drain(self) -> None:
        while self._intents:
            intent = self._intents.popleft()
            if isinstance(intent, Click):
                if self.playing:
                    self.merger.resolve(self.store, intent.x, intent.y)
            elif isinstance(intent, Stir):
                self.store.scatter_or_gather((self.width / 2, self.height / 2))
