"""Countdown state machine for RingTimer.

Phases
------
IDLE      Configured and waiting (also the paused state after ``stop``).
RUNNING   Counting down, one tick per second.
EXPIRED   Reached 00:00, waits for a new configuration.

Transitions
-----------
IDLE → RUNNING       (start, only with time left)
RUNNING → IDLE       (stop, remaining time is kept)
RUNNING → EXPIRED    (tick reaching 0)
IDLE | EXPIRED → IDLE (configure / reset)

The engine never touches widgets.  Rendering goes through
``display_changed`` (a *presentation sink* with ``show_display(display)``) and
the expiry alert through ``expired`` (a *notifier* with
``notify(message)``).
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    EXPIRED = "expired"


class ColorZone(Enum):
    NORMAL = "normal"
    WARNING = "warning"
    ALERT = "alert"


# ── errors ────────────────────────────────────────────────────────────────


class TimerError(Exception):
    """Base class for countdown engine errors."""


class InvalidDurationError(TimerError, ValueError):
    """Raised when ``configure`` receives a negative or non-integral value."""


class InvalidStateError(TimerError):
    """Raised when an operation is not allowed in the current phase."""


# ── constants ─────────────────────────────────────────────────────────────

TICK_INTERVAL_MS = 1000
EXPIRED_MESSAGE = "Time is up!"


# ── state ─────────────────────────────────────────────────────────────────


@dataclass
class TimerState:
    """Everything the engine knows about one countdown."""

    configured_seconds: int = 0
    remaining_seconds: int = 0
    phase: Phase = Phase.IDLE

    @property
    def warning_threshold(self) -> float:
        return self.configured_seconds / 2

    @property
    def alert_threshold(self) -> float:
        return self.configured_seconds / 4


@dataclass(frozen=True)
class DisplayState:
    """One frame for the presentation sink."""

    minutes_display: str
    seconds_display: str
    progress_fraction: float
    color_zone: ColorZone
    remaining_seconds: int = 0
    configured_seconds: int = 0
    phase: Phase = Phase.IDLE

    @property
    def time_text(self) -> str:
        return f"{self.minutes_display}:{self.seconds_display}"


class PresentationSink(Protocol):
    def show_display(self, display: DisplayState) -> None: ...


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


# ── pure helpers ──────────────────────────────────────────────────────────


def format_component(value: int) -> str:
    """Zero-pad to two digits (``7`` → ``"07"``, ``120`` → ``"120"``)."""
    return f"{value:02d}"


def color_zone(remaining: int, warning_threshold: float, alert_threshold: float) -> ColorZone:
    """Classify *remaining* seconds against the two thresholds."""
    if remaining > warning_threshold:
        return ColorZone.NORMAL
    if remaining > alert_threshold:
        return ColorZone.WARNING
    return ColorZone.ALERT


def ring_fraction(fraction: float, total: int) -> float:
    """Arc fill for the ring, pulled back slightly as it nears zero.

    Each tick the ring animates towards the next value, so the drawn arc
    trails the clock by one step.  Subtracting ``(1/total) * (1 - f)``
    makes the arc close exactly when the clock reads 00:00.
    """
    if total <= 0:
        return 0.0
    return max(0.0, fraction - (1 / total) * (1 - fraction))


def _coerce_component(name: str, value: object) -> int:
    if isinstance(value, bool):
        raise InvalidDurationError(f"{name} must be a number, got {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidDurationError(f"{name} must be a non-negative integer, got {value!r}")
        return int(text)
    if isinstance(value, numbers.Integral):
        number = int(value)
    elif isinstance(value, numbers.Real):
        as_float = float(value)
        if not math.isfinite(as_float) or not as_float.is_integer():
            raise InvalidDurationError(f"{name} must be a whole number, got {value!r}")
        number = int(as_float)
    else:
        raise InvalidDurationError(
            f"{name} must be a number, got {type(value).__name__}"
        )
    if number < 0:
        raise InvalidDurationError(f"{name} must not be negative, got {number}")
    return number


def parse_duration(minutes: object, seconds: object) -> int:
    """Validate a (minutes, seconds) pair and return the total in seconds."""
    return _coerce_component("minutes", minutes) * 60 + _coerce_component("seconds", seconds)


# ── engine ────────────────────────────────────────────────────────────────


class CountdownEngine(QObject):
    """Qt-driven countdown with a single one-second tick.

    Signals
    -------
    display_changed(display: DisplayState)
        Emitted after every configure and every tick that leaves time on
        the clock.
    phase_changed(phase: Phase)
        Emitted on every phase transition.
    expired(message: str)
        Emitted exactly once when the countdown reaches zero.
    """

    display_changed = pyqtSignal(object)
    phase_changed = pyqtSignal(object)
    expired = pyqtSignal(str)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        minutes: int = 0,
        seconds: int = 0,
        message: str = EXPIRED_MESSAGE,
    ) -> None:
        super().__init__(parent)

        self._message = message
        total = parse_duration(minutes, seconds)
        self._state = TimerState(configured_seconds=total, remaining_seconds=total)

        # ── Qt timer (the one periodic handle) ────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self.tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        """A copy of the current state."""
        s = self._state
        return TimerState(s.configured_seconds, s.remaining_seconds, s.phase)

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._state.remaining_seconds

    @property
    def configured(self) -> int:
        return self._state.configured_seconds

    @property
    def is_running(self) -> bool:
        return self._state.phase == Phase.RUNNING

    @property
    def is_ticking(self) -> bool:
        """True while the periodic timer is armed."""
        return self._qt_timer.isActive()

    @property
    def color_zone(self) -> ColorZone:
        s = self._state
        return color_zone(s.remaining_seconds, s.warning_threshold, s.alert_threshold)

    def progress_fraction(self) -> float:
        """1.0 → 0.0 as the countdown runs out."""
        s = self._state
        if s.configured_seconds <= 0:
            return 0.0
        return s.remaining_seconds / s.configured_seconds

    def display(self) -> DisplayState:
        s = self._state
        minutes, seconds = divmod(s.remaining_seconds, 60)
        return DisplayState(
            minutes_display=format_component(minutes),
            seconds_display=format_component(seconds),
            progress_fraction=self.progress_fraction(),
            color_zone=self.color_zone,
            remaining_seconds=s.remaining_seconds,
            configured_seconds=s.configured_seconds,
            phase=s.phase,
        )

    # ══════════════════════════════════════════════════════════════════
    #  COLLABORATORS
    # ══════════════════════════════════════════════════════════════════

    def attach_sink(self, sink: PresentationSink) -> None:
        """Route display updates to *sink* and render the current frame."""
        self.display_changed.connect(sink.show_display)
        sink.show_display(self.display())

    def attach_notifier(self, notifier: Notifier) -> None:
        self.expired.connect(notifier.notify)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def configure(self, minutes: object, seconds: object) -> None:
        """Set a new duration.  Not allowed while the countdown runs."""
        if self._state.phase == Phase.RUNNING:
            raise InvalidStateError("configure() is not valid while running")
        total = parse_duration(minutes, seconds)

        self._state.configured_seconds = total
        self._state.remaining_seconds = total
        logger.debug("Configured %d seconds", total)
        self._set_phase(Phase.IDLE)
        self._emit_display()

    def reset(self) -> None:
        """Stop and reload the configured duration."""
        self._qt_timer.stop()
        self._state.remaining_seconds = self._state.configured_seconds
        self._set_phase(Phase.IDLE)
        self._emit_display()

    def start(self) -> None:
        """Begin (or continue) counting down.  Only valid from IDLE."""
        if self._state.phase != Phase.IDLE:
            logger.debug("start() ignored in %s phase", self._state.phase.value)
            return
        if self._state.remaining_seconds <= 0:
            logger.debug("start() ignored: nothing to count down")
            return
        self._set_phase(Phase.RUNNING)
        self._qt_timer.start()

    def stop(self) -> None:
        """Pause, keeping the remaining time."""
        if self._state.phase != Phase.RUNNING:
            logger.debug("stop() ignored in %s phase", self._state.phase.value)
            return
        self._qt_timer.stop()
        self._set_phase(Phase.IDLE)

    def toggle(self) -> None:
        if self.is_running:
            self.stop()
        else:
            self.start()

    def tick(self) -> None:
        """Advance the countdown by one second."""
        if self._state.phase != Phase.RUNNING:
            return
        self._state.remaining_seconds = max(0, self._state.remaining_seconds - 1)

        if self._state.remaining_seconds == 0:
            self._expire()
        else:
            self._emit_display()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _expire(self) -> None:
        self._qt_timer.stop()
        self._set_phase(Phase.EXPIRED)
        logger.info("Countdown of %d seconds expired", self._state.configured_seconds)
        self.expired.emit(self._message)

    def _emit_display(self) -> None:
        self.display_changed.emit(self.display())

    def _set_phase(self, phase: Phase) -> None:
        if phase != self._state.phase:
            logger.debug("Phase %s -> %s", self._state.phase.value, phase.value)
        self._state.phase = phase
        self.phase_changed.emit(phase)
