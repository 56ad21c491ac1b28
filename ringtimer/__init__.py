"""RingTimer: a countdown timer with a circular progress ring."""

__version__ = "0.1.0"
