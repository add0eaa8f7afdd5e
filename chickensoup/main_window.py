"""
Main window: assembles the soup canvas, overlay controls, and menu bar.
"""

from __future__ import annotations

import logging

from PyQt5.QtCore import QTimer
from PyQt5.QtGui import QKeySequence
from PyQt5.QtWidgets import QAction, QMainWindow, QMessageBox

from . import __version__
from .canvas import SoupCanvas
from .controls import ControlPanel
from .simulation import SimulationLoop
from .texts import Language, texts_for

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Top-level window for Healing Chicken Soup."""

    def __init__(
        self,
        loop: SimulationLoop,
        language: Language = Language.ZH,
        fps: int = 60,
    ) -> None:
        super().__init__()
        self.setMinimumSize(480, 360)
        self.loop = loop

        self.canvas = SoupCanvas(loop, fps=fps)
        self.setCentralWidget(self.canvas)
        self.controls = ControlPanel(self.canvas, language)

        self._build_menu()
        self._on_language(language)

        # Signals
        self.controls.start_requested.connect(self._start_game)
        self.controls.home_requested.connect(self._go_home)
        self.controls.stir_requested.connect(self.canvas.stir)
        self.controls.language_changed.connect(self._on_language)
        self.canvas.fps_changed.connect(
            lambda fps: self.statusBar().showMessage(f"{fps:.0f} fps")
        )

    def showEvent(self, event):
        super().showEvent(event)
        if not self.loop.running:
            # Ambient soup behind the menu, once layout has sized the canvas
            QTimer.singleShot(0, self._start_ambient)

    def _start_ambient(self) -> None:
        if not self.loop.running:
            self.canvas.start(playing=False)

    def _build_menu(self) -> None:
        menu = self.menuBar()

        game_menu = menu.addMenu("&Game")
        start_act = QAction("&Start", self)
        start_act.setShortcut(QKeySequence("Return"))
        start_act.triggered.connect(self._start_game)
        game_menu.addAction(start_act)
        home_act = QAction("&Home", self)
        home_act.setShortcut(QKeySequence("Esc"))
        home_act.triggered.connect(self._go_home)
        game_menu.addAction(home_act)
        stir_act = QAction("S&tir", self)
        stir_act.setShortcut(QKeySequence("S"))
        stir_act.triggered.connect(self.canvas.stir)
        game_menu.addAction(stir_act)
        game_menu.addSeparator()
        quit_act = QAction("&Quit", self)
        quit_act.setShortcut(QKeySequence.Quit)
        quit_act.triggered.connect(self.close)
        game_menu.addAction(quit_act)

        lang_menu = menu.addMenu("&Language")
        for lang, label in ((Language.ZH, "中文"), (Language.EN, "English")):
            act = QAction(label, self)
            act.triggered.connect(lambda _=False, lg=lang: self.controls.set_language(lg))
            lang_menu.addAction(act)

        help_menu = menu.addMenu("&Help")
        about_act = QAction("&About", self)
        about_act.triggered.connect(self._about)
        help_menu.addAction(about_act)

    def _start_game(self) -> None:
        """Every start pours a fresh bowl."""
        self.canvas.start(playing=True)
        self.controls.set_playing(True)
        logger.info("Game started")

    def _go_home(self) -> None:
        if not self.loop.playing:
            return
        self.canvas.set_playing(False)
        self.controls.set_playing(False)
        logger.info("Returned to menu")

    def _on_language(self, language: Language) -> None:
        self.setWindowTitle(f"🍲  {texts_for(language).title}  v{__version__}")

    def closeEvent(self, event):
        self.canvas.stop()
        super().closeEvent(event)

    def _about(self) -> None:
        QMessageBox.about(
            self,
            "About Healing Chicken Soup",
            f"<h3>🍲 Healing Chicken Soup v{__version__}</h3>"
            "<p>Oil droplets drift on a bowl of golden broth. Click the "
            "boundary between two droplets to merge them into one.</p>"
            "<p><b>Physics model:</b></p>"
            "<ul>"
            "<li>Brownian drift with per-frame damping</li>"
            "<li>Inelastic wall bounces</li>"
            "<li>Soft, mass-weighted collision response</li>"
            "<li>Pointer repulsion while playing</li>"
            "<li>Area-conserving merges</li>"
            "</ul>"
            "<p>When nothing is left to merge, stir the soup with the "
            "spoon to gather the droplets, or pour a fresh bowl.</p>",
        )
