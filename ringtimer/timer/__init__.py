"""Timer package."""

from .engine import (
    CountdownEngine,
    TimerState,
    DisplayState,
    Phase,
    ColorZone,
    TimerError,
    InvalidDurationError,
    InvalidStateError,
    PresentationSink,
    Notifier,
    color_zone,
    ring_fraction,
    parse_duration,
    EXPIRED_MESSAGE,
    TICK_INTERVAL_MS,
)

__all__ = [
    "CountdownEngine",
    "TimerState",
    "DisplayState",
    "Phase",
    "ColorZone",
    "TimerError",
    "InvalidDurationError",
    "InvalidStateError",
    "PresentationSink",
    "Notifier",
    "color_zone",
    "ring_fraction",
    "parse_duration",
    "EXPIRED_MESSAGE",
    "TICK_INTERVAL_MS",
]
