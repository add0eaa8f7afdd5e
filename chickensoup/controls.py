"""
Overlay controls floating on top of the soup canvas.

  - Menu card (title, description, start button) shown on the home screen
  - Language switch (中 / EN)
  - Home button while playing
  - Stir badge: spoon button plus caption, shown when nothing is mergeable
"""

from __future__ import annotations

import logging
from typing import Optional

from PyQt5.QtCore import QObject, Qt, pyqtSignal
from PyQt5.QtWidgets import (
    QButtonGroup,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from .canvas import SoupCanvas
from .texts import DEFAULT_LANGUAGE, Language, texts_for

logger = logging.getLogger(__name__)

_CARD_STYLE = """
    QFrame#menuCard {
        background: rgba(255, 255, 255, 150);
        border-radius: 18px;
    }
    QLabel#title {
        color: #7a4a0a;
        font-size: 30px;
        font-weight: bold;
    }
    QLabel#description {
        color: #7a4a0a;
        font-size: 14px;
    }
"""

_PILL_STYLE = (
    "background: rgba(255, 255, 255, 110); color: #7a4a0a;"
    "border-radius: 16px; padding: 6px 14px; font-weight: bold;"
)


# ---------------------------------------------------------------------------
# Stir badge
# ---------------------------------------------------------------------------

class StirBadge(QWidget):
    """Spoon button with the localized "stir" caption."""

    clicked = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        lay = QHBoxLayout(self)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.setSpacing(10)

        self._caption = QLabel()
        self._caption.setStyleSheet(_PILL_STYLE)
        lay.addWidget(self._caption)

        self._button = QPushButton("🥄")
        self._button.setFixedSize(44, 44)
        self._button.setToolTip("Stir Soup")
        self._button.setStyleSheet(
            "QPushButton { background: rgba(255,255,255,100); border-radius: 22px; font-size: 20px; }"
            "QPushButton:hover { background: rgba(255,255,255,180); }"
        )
        self._button.clicked.connect(self.clicked)
        lay.addWidget(self._button)

    def set_caption(self, text: str) -> None:
        self._caption.setText(text)
        self.adjustSize()


# ---------------------------------------------------------------------------
# Control panel
# ---------------------------------------------------------------------------

class ControlPanel(QObject):
    """Manages the overlay widgets placed over *canvas*.

    The panel is not a widget itself; the overlays are parented to the
    canvas and positioned by :meth:`relayout`.
    """

    start_requested = pyqtSignal()
    home_requested = pyqtSignal()
    stir_requested = pyqtSignal()
    language_changed = pyqtSignal(object)

    def __init__(self, canvas: SoupCanvas, language: Language = DEFAULT_LANGUAGE) -> None:
        super().__init__(canvas)
        self.canvas = canvas
        self.language = language
        self._playing = False
        self._hint = False

        # ── Menu card ─────────────────────────────────────────────────────
        self._card = QFrame(canvas)
        self._card.setObjectName("menuCard")
        self._card.setStyleSheet(_CARD_STYLE)
        cl = QVBoxLayout(self._card)
        cl.setContentsMargins(32, 28, 32, 28)
        cl.setSpacing(16)

        self._title = QLabel()
        self._title.setObjectName("title")
        self._title.setAlignment(Qt.AlignCenter)
        cl.addWidget(self._title)

        self._description = QLabel()
        self._description.setObjectName("description")
        self._description.setAlignment(Qt.AlignCenter)
        self._description.setWordWrap(True)
        cl.addWidget(self._description)

        self._start_btn = QPushButton()
        self._start_btn.setCursor(Qt.PointingHandCursor)
        self._start_btn.setStyleSheet(
            "QPushButton { background: #c47a12; color: white; border-radius: 20px;"
            " padding: 10px 28px; font-size: 16px; font-weight: bold; }"
            "QPushButton:hover { background: #a8650c; }"
        )
        self._start_btn.clicked.connect(self.start_requested)
        cl.addWidget(self._start_btn, alignment=Qt.AlignCenter)

        # ── Language switch ───────────────────────────────────────────────
        self._lang_box = QWidget(canvas)
        ll = QHBoxLayout(self._lang_box)
        ll.setContentsMargins(0, 0, 0, 0)
        self._lang_group = QButtonGroup(self._lang_box)
        for lang, label in ((Language.ZH, "中"), (Language.EN, "EN")):
            btn = QPushButton(label)
            btn.setCheckable(True)
            btn.setChecked(lang is language)
            btn.setFixedSize(40, 32)
            btn.setStyleSheet(_PILL_STYLE)
            btn.clicked.connect(lambda _=False, lg=lang: self.set_language(lg))
            self._lang_group.addButton(btn)
            ll.addWidget(btn)

        # ── Home button ───────────────────────────────────────────────────
        self._home_btn = QPushButton(canvas)
        self._home_btn.setStyleSheet(_PILL_STYLE)
        self._home_btn.clicked.connect(self.home_requested)

        # ── Stir badge ────────────────────────────────────────────────────
        self._stir = StirBadge(canvas)
        self._stir.clicked.connect(self.stir_requested)

        canvas.resized.connect(self.relayout)
        canvas.hint_changed.connect(self.set_hint_visible)
        self._retranslate()
        self._sync_visibility()

    # ── state ─────────────────────────────────────────────────────────────

    def set_playing(self, playing: bool) -> None:
        self._playing = playing
        if not playing:
            self._hint = False
        self._sync_visibility()

    def set_hint_visible(self, visible: bool) -> None:
        self._hint = visible
        self._sync_visibility()

    def set_language(self, language: Language) -> None:
        if language is self.language:
            return
        self.language = language
        for btn in self._lang_group.buttons():
            btn.setChecked(btn.text() == ("中" if language is Language.ZH else "EN"))
        self._retranslate()
        logger.debug("Language set to %s", language.value)
        self.language_changed.emit(language)

    def _retranslate(self) -> None:
        t = texts_for(self.language)
        self._title.setText(t.title)
        self._description.setText(t.description)
        self._start_btn.setText(t.start_button)
        self._home_btn.setText(t.home_button)
        self._stir.set_caption(t.scatter_hint)
        self._home_btn.adjustSize()
        self.relayout()

    def _sync_visibility(self) -> None:
        self._card.setVisible(not self._playing)
        self._lang_box.setVisible(not self._playing)
        self._home_btn.setVisible(self._playing)
        self._stir.setVisible(self._playing and self._hint)
        self.relayout()

    # ── layout ────────────────────────────────────────────────────────────

    def relayout(self) -> None:
        w, h = self.canvas.width(), self.canvas.height()
        margin = 16

        card_w = min(480, max(260, w - 2 * margin))
        self._card.setFixedWidth(card_w)
        self._card.adjustSize()
        self._card.move((w - card_w) // 2, max(margin, (h - self._card.height()) // 2))

        self._lang_box.adjustSize()
        self._lang_box.move(w - self._lang_box.width() - margin, margin)

        self._home_btn.move(margin, margin)

        self._stir.adjustSize()
        self._stir.move(w - self._stir.width() - margin, margin)
        for widget in (self._card, self._lang_box, self._home_btn, self._stir):
            widget.raise_()
