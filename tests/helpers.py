"""Shared test helpers for RingTimer."""

from ringtimer.timer.engine import CountdownEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class RecordingSink:
    """Presentation sink that keeps every frame it was shown."""

    def __init__(self):
        self.frames: list = []

    def show_display(self, display):
        self.frames.append(display)


class RecordingNotifier:
    def __init__(self):
        self.messages: list[str] = []

    def notify(self, message):
        self.messages.append(message)


class FakeSounds:
    """Stands in for SoundManager where only the play() calls matter."""

    def __init__(self):
        self.played: list[str] = []

    def play(self, name):
        self.played.append(name)


def run_ticks(engine: CountdownEngine, count: int) -> None:
    """Drive *count* ticks without waiting on the event loop."""
    for _ in range(count):
        engine.tick()


def run_to_expiry(engine: CountdownEngine) -> None:
    engine.start()
    run_ticks(engine, engine.remaining)
