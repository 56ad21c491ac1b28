"""Main timer card.

Layout (top → bottom):
    - Settings toggle (gear ⇄ check), top right
    - ProgressRing (large, centred)
    - Minutes : seconds inputs (editable only while the gear is open)
    - Start / Stop button
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QLineEdit, QFrame, QSizePolicy,
)

from ..timer.engine import (
    CountdownEngine, DisplayState, Phase,
    InvalidDurationError, InvalidStateError, ring_fraction,
)
from .progress_ring import ProgressRing

logger = logging.getLogger(__name__)


PHASE_LABELS: dict[Phase, str] = {
    Phase.IDLE:    "READY",
    Phase.RUNNING: "FOCUS",
    Phase.EXPIRED: "TIME'S UP",
}

SETTINGS_ICON = "⚙"
CONFIRM_ICON = "✓"


class TimerWidget(QWidget):
    """The countdown card.  Also the engine's presentation sink."""

    button_clicked = pyqtSignal()

    def __init__(self, engine: CountdownEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._editing: bool = False
        self._build_ui()
        self._connect_signals()
        self._on_phase_changed(engine.phase)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 16, 24, 24)
        layout.setSpacing(12)

        # ── settings toggle ──────────────────────────────────────────
        top_row = QHBoxLayout()
        top_row.addStretch()
        self._settings_btn = QPushButton(SETTINGS_ICON, card)
        self._settings_btn.setObjectName("settingsButton")
        self._settings_btn.setToolTip("Set the time")
        top_row.addWidget(self._settings_btn)
        layout.addLayout(top_row)

        # ── ring ─────────────────────────────────────────────────────
        ring_row = QHBoxLayout()
        ring_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._ring = ProgressRing(card)
        self._ring.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self._ring.setFixedSize(320, 320)
        ring_row.addWidget(self._ring)
        layout.addLayout(ring_row)

        # ── minutes : seconds ────────────────────────────────────────
        input_row = QHBoxLayout()
        input_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        input_row.setSpacing(8)
        self._minutes_input = self._make_input(card, "min")
        self._seconds_input = self._make_input(card, "sec")
        input_row.addWidget(self._minutes_input)
        input_row.addWidget(QLabel(":", card))
        input_row.addWidget(self._seconds_input)
        layout.addLayout(input_row)

        # ── start / stop ─────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._start_btn = QPushButton("Start", card)
        self._start_btn.setObjectName("primaryButton")
        btn_row.addWidget(self._start_btn)
        layout.addLayout(btn_row)

    @staticmethod
    def _make_input(parent: QWidget, placeholder: str) -> QLineEdit:
        field = QLineEdit(parent)
        field.setMaxLength(3)
        field.setFixedWidth(72)
        field.setAlignment(Qt.AlignmentFlag.AlignCenter)
        field.setPlaceholderText(placeholder)
        field.setEnabled(False)
        return field

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_btn.clicked.connect(self._on_start_clicked)
        self._settings_btn.clicked.connect(self.toggle_settings)
        self._minutes_input.textEdited.connect(self._on_input_edited)
        self._seconds_input.textEdited.connect(self._on_input_edited)

        self._engine.phase_changed.connect(self._on_phase_changed)
        self._engine.attach_sink(self)

    # ── presentation sink ─────────────────────────────────────────────────

    def show_display(self, display: DisplayState) -> None:
        self._ring.set_time_text(display.time_text)
        self._ring.set_fraction(
            ring_fraction(display.progress_fraction, display.configured_seconds)
        )
        self._ring.apply_zone(display.color_zone)
        if not self._editing:
            self._minutes_input.setText(display.minutes_display)
            self._seconds_input.setText(display.seconds_display)
        self._update_start_button()

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_start_clicked(self) -> None:
        self.button_clicked.emit()
        if self._engine.phase == Phase.EXPIRED or self._engine.remaining == 0:
            # "New time" opens the inputs
            if not self._editing:
                self.toggle_settings()
            return
        self._engine.toggle()

    def _on_input_edited(self, _text: str) -> None:
        minutes = self._minutes_input.text().strip() or "0"
        seconds = self._seconds_input.text().strip() or "0"
        try:
            self._engine.configure(minutes, seconds)
        except InvalidDurationError as exc:
            logger.warning("Rejected duration %r:%r (%s)", minutes, seconds, exc)
            self._set_invalid(True)
            return
        except InvalidStateError as exc:
            logger.warning("Duration edit ignored: %s", exc)
            return
        self._set_invalid(False)

    def _on_phase_changed(self, phase: Phase) -> None:
        running = phase == Phase.RUNNING
        self._ring.set_running(running)
        self._ring.set_state_label(PHASE_LABELS.get(phase, "READY"))
        self._settings_btn.setEnabled(not running)
        if phase == Phase.EXPIRED:
            # The final tick carries no display frame; show 00:00 here
            self.show_display(self._engine.display())
        self._update_start_button()

    # ── settings toggle ───────────────────────────────────────────────────

    def toggle_settings(self) -> None:
        """Open or close the minute/second inputs."""
        if self._engine.is_running:
            return
        self._editing = not self._editing
        self._minutes_input.setEnabled(self._editing)
        self._seconds_input.setEnabled(self._editing)
        self._settings_btn.setText(CONFIRM_ICON if self._editing else SETTINGS_ICON)
        self._start_btn.setVisible(not self._editing)

        if self._editing:
            self._minutes_input.setFocus()
            self._minutes_input.selectAll()
        else:
            # Drop anything half-typed that the engine refused
            self._set_invalid(False)
            self.show_display(self._engine.display())

    @property
    def editing(self) -> bool:
        return self._editing

    # ── helpers ───────────────────────────────────────────────────────────

    def _update_start_button(self) -> None:
        if self._engine.is_running:
            self._start_btn.setText("Stop")
        elif self._engine.remaining == 0:
            self._start_btn.setText("New time")
        else:
            self._start_btn.setText("Start")

    def _set_invalid(self, invalid: bool) -> None:
        for field in (self._minutes_input, self._seconds_input):
            field.setProperty("invalid", invalid)
            field.style().unpolish(field)
            field.style().polish(field)

    def apply_palette(self, palette: dict[str, str]) -> None:
        self._ring.apply_palette(palette)
