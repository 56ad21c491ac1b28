"""UI package."""

from .progress_ring import ProgressRing
from .timer_widget import TimerWidget
from .notifier import AlertNotifier

__all__ = ["ProgressRing", "TimerWidget", "AlertNotifier"]
