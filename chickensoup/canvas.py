"""
Soup canvas widget: animated display driven by a QTimer.

Each timer tick runs one simulation frame and paints it into an
off-screen pixmap through :class:`QtSurface`; ``paintEvent`` only blits
that pixmap.  Mouse movement repels droplets and clicks merge them
while the game is playing.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Optional, Sequence

from PyQt5.QtCore import QPointF, QTimer, Qt, pyqtSignal
from PyQt5.QtGui import QBrush, QColor, QPainter, QPainterPath, QPen, QPixmap, QRadialGradient
from PyQt5.QtWidgets import QWidget

from .palettes import RGB, RGBA
from .renderer import Point, Segment
from .simulation import SimulationLoop

logger = logging.getLogger(__name__)


def _qcolor(c) -> QColor:
    return QColor(*c)


# ---------------------------------------------------------------------------
# QPainter-backed drawing surface
# ---------------------------------------------------------------------------

class QtSurface:
    """Implements the renderer's drawing surface on a QPainter."""

    def __init__(self, painter: QPainter, width: int, height: int) -> None:
        self.painter = painter
        self.width = width
        self.height = height

    def fill_background(self, color: RGB) -> None:
        self.painter.fillRect(0, 0, self.width, self.height, _qcolor(color))

    def _set_style(self, fill: RGBA, stroke: RGBA, stroke_width: float) -> None:
        pen = QPen(_qcolor(stroke))
        pen.setWidthF(stroke_width)
        self.painter.setPen(pen)
        self.painter.setBrush(QBrush(_qcolor(fill)))

    def draw_circle(self, center: Point, radius: float, fill: RGBA, stroke: RGBA,
                    stroke_width: float) -> None:
        self._set_style(fill, stroke, stroke_width)
        self.painter.drawEllipse(QPointF(*center), radius, radius)

    def draw_closed_curve(self, start: Point, segments: Sequence[Segment], fill: RGBA,
                          stroke: RGBA, stroke_width: float) -> None:
        path = QPainterPath(QPointF(*start))
        for ctrl, end in segments:
            path.quadTo(QPointF(*ctrl), QPointF(*end))
        path.closeSubpath()
        self._set_style(fill, stroke, stroke_width)
        self.painter.drawPath(path)

    def draw_radial_highlight(self, center: Point, rx: float, ry: float, angle: float,
                              inner: RGBA, outer: RGBA) -> None:
        grad = QRadialGradient(QPointF(0, 0), rx)
        grad.setColorAt(0.0, _qcolor(inner))
        grad.setColorAt(1.0, _qcolor(outer))
        p = self.painter
        p.save()
        p.translate(*center)
        p.rotate(math.degrees(angle))
        p.setPen(Qt.NoPen)
        p.setBrush(QBrush(grad))
        p.drawEllipse(QPointF(0, 0), rx, ry)
        p.restore()


# ---------------------------------------------------------------------------
# Canvas widget
# ---------------------------------------------------------------------------

class SoupCanvas(QWidget):
    """Animated bowl of soup.

    Signals:
        hint_changed(bool):  stir hint should be shown / hidden
        fps_changed(float):  current rendering FPS
        resized():           widget geometry changed (overlays re-layout)
    """

    hint_changed = pyqtSignal(bool)
    fps_changed = pyqtSignal(float)
    resized = pyqtSignal()

    def __init__(
        self,
        loop: SimulationLoop,
        fps: int = 60,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.loop = loop
        self._pixmap: Optional[QPixmap] = None
        self._last_hint = False

        # Timing
        self._last_time = time.perf_counter()
        self._frame_count = 0
        self._fps_accum = 0.0

        self.setMinimumSize(320, 240)
        self.setMouseTracking(True)
        self.setCursor(Qt.PointingHandCursor)

        # Frame timer
        self._timer = QTimer(self)
        self._timer.setInterval(max(1, int(1000 / fps)))
        self._timer.timeout.connect(self._tick)

    # ── lifecycle ─────────────────────────────────────────────────────────

    def start(self, playing: bool = False) -> None:
        """Fresh session sized to the widget, then start the frame timer."""
        self.loop.stop()
        self.loop.start(self.width(), self.height(), playing=playing)
        self._last_time = time.perf_counter()
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()
        self.loop.stop()
        self._emit_hint(False)

    def set_playing(self, playing: bool) -> None:
        self.loop.set_playing(playing)
        if not playing:
            self._emit_hint(False)

    def stir(self) -> None:
        self.loop.stir()
        self._emit_hint(self.loop.hint_visible)

    # ── animation loop ────────────────────────────────────────────────────

    def _tick(self) -> None:
        now = time.perf_counter()
        dt = now - self._last_time
        self._last_time = now

        w, h = self.width(), self.height()
        if w <= 0 or h <= 0:
            return
        pixmap = QPixmap(w, h)
        painter = QPainter(pixmap)
        painter.setRenderHint(QPainter.Antialiasing)
        self.loop.tick(QtSurface(painter, w, h))
        painter.end()
        self._pixmap = pixmap
        self.update()

        self._emit_hint(self.loop.hint_visible and self.loop.playing)

        # FPS tracking
        self._frame_count += 1
        self._fps_accum += dt
        if self._fps_accum >= 1.0:
            self.fps_changed.emit(self._frame_count / self._fps_accum)
            self._frame_count = 0
            self._fps_accum = 0.0

    def _emit_hint(self, visible: bool) -> None:
        if visible != self._last_hint:
            self._last_hint = visible
            self.hint_changed.emit(visible)

    # ── painting ──────────────────────────────────────────────────────────

    def paintEvent(self, event):
        painter = QPainter(self)
        if self._pixmap:
            painter.drawPixmap(0, 0, self._pixmap)
        else:
            painter.fillRect(self.rect(), _qcolor(self.loop.renderer.scheme.broth))
        painter.end()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.loop.resize(self.width(), self.height())
        self.resized.emit()

    # ── mouse interaction ─────────────────────────────────────────────────

    def mouseMoveEvent(self, event):
        self.loop.pointer_moved(event.x(), event.y())

    def leaveEvent(self, event):
        self.loop.pointer_left()

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.loop.click(event.x(), event.y())

