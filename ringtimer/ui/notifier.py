"""Expiry notifier: alert sound first, message box shortly after."""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal
from PyQt6.QtWidgets import QMessageBox, QWidget

from ..audio.sounds import SoundManager

logger = logging.getLogger(__name__)

ALERT_DELAY_MS = 500


class AlertNotifier(QObject):
    """Receives the engine's ``expired`` message.

    The sound starts immediately; the dialog waits ``delay_ms`` so the two
    don't land on the same frame.  ``presenter`` replaces the message box
    (tests, headless use).
    """

    alert_shown = pyqtSignal(str)

    def __init__(
        self,
        sounds: SoundManager | None,
        window: QWidget | None = None,
        *,
        delay_ms: int = ALERT_DELAY_MS,
        presenter: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__(window)
        self._sounds = sounds
        self._window = window
        self._presenter = presenter or self._message_box
        self._pending: str | None = None

        self._alert_timer = QTimer(self)
        self._alert_timer.setSingleShot(True)
        self._alert_timer.setInterval(max(0, delay_ms))
        self._alert_timer.timeout.connect(self._show_alert)

    @property
    def pending_message(self) -> str | None:
        return self._pending

    @property
    def delay_ms(self) -> int:
        return self._alert_timer.interval()

    def notify(self, message: str) -> None:
        if self._sounds is not None:
            self._sounds.play("alert")
        self._pending = message
        self._alert_timer.start()

    def cancel(self) -> None:
        """Drop an alert that has not been shown yet."""
        self._alert_timer.stop()
        self._pending = None

    def _show_alert(self) -> None:
        if self._pending is None:
            return
        message, self._pending = self._pending, None
        logger.info("Showing alert: %s", message)
        self._presenter(message)
        self.alert_shown.emit(message)

    def _message_box(self, message: str) -> None:
        QMessageBox.information(self._window, "RingTimer", message)
