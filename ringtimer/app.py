"""Main application window for RingTimer."""

from __future__ import annotations

import logging

from PyQt6.QtGui import QAction, QKeySequence, QShortcut
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QMainWindow, QWidget, QVBoxLayout

from .audio.sounds import SoundManager
from .settings import Settings, load_settings
from .timer.engine import CountdownEngine, InvalidDurationError
from .ui.notifier import AlertNotifier
from .ui.styles import PALETTE, build_stylesheet
from .ui.timer_widget import TimerWidget

logger = logging.getLogger(__name__)


class RingTimerApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        sound_manager: SoundManager | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("RingTimer")

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()
        self.resize(self._settings.window_width, self._settings.window_height)

        # ── engine ────────────────────────────────────────────────────
        self._timer_engine = CountdownEngine(self, message=self._settings.alert_message)
        try:
            self._timer_engine.configure(
                self._settings.default_minutes, self._settings.default_seconds,
            )
        except InvalidDurationError as exc:
            logger.warning("Bad default duration in settings, using 25:00: %s", exc)
            self._timer_engine.configure(25, 0)

        # ── sound manager ─────────────────────────────────────────────
        self._sound_manager = sound_manager or SoundManager(
            parent=self, alert_path=self._settings.alert_sound_path,
        )
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._sound_manager.set_enabled(self._settings.sound_enabled)

        # ── notifier ──────────────────────────────────────────────────
        self._notifier = AlertNotifier(
            self._sound_manager, self, delay_ms=self._settings.alert_delay_ms,
        )
        self._timer_engine.attach_notifier(self._notifier)

        # ── central widget ────────────────────────────────────────────
        self.setStyleSheet(build_stylesheet(PALETTE))
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 16, 16, 16)

        self._timer_widget = TimerWidget(self._timer_engine, central)
        self._timer_widget.apply_palette(PALETTE)
        self._timer_widget.button_clicked.connect(
            lambda: self._sound_manager.play("click")
        )
        layout.addWidget(self._timer_widget)

        self._build_menu_bar()
        self._setup_shortcuts()

    # ── public ────────────────────────────────────────────────────────────

    @property
    def engine(self) -> CountdownEngine:
        return self._timer_engine

    @property
    def notifier(self) -> AlertNotifier:
        return self._notifier

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    # ── menus / shortcuts ─────────────────────────────────────────────────

    def _build_menu_bar(self) -> None:
        menu = self.menuBar().addMenu("&Timer")

        toggle_action = QAction("Start / Stop", self)
        toggle_action.triggered.connect(self._on_space)
        menu.addAction(toggle_action)

        reset_action = QAction("Reset", self)
        reset_action.setShortcut(QKeySequence("Ctrl+R"))
        reset_action.triggered.connect(self._on_reset)
        menu.addAction(reset_action)

        menu.addSeparator()
        quit_action = QAction("Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        menu.addAction(quit_action)

    def _setup_shortcuts(self) -> None:
        space = QShortcut(QKeySequence(Qt.Key.Key_Space), self)
        space.activated.connect(self._on_space)

    def _on_space(self) -> None:
        """Start/stop, ignored while the inputs are open."""
        if self._timer_widget.editing:
            return
        self._timer_engine.toggle()

    def _on_reset(self) -> None:
        self._notifier.cancel()
        self._timer_engine.reset()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._timer_engine.stop()
        self._notifier.cancel()
        super().closeEvent(event)
