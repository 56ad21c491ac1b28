"""Shared pytest fixtures for RingTimer tests."""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from PyQt6.QtWidgets import QApplication

from ringtimer.audio.sounds import SoundManager
from ringtimer.timer.engine import CountdownEngine


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def engine(qapp):
    """Fresh, unconfigured CountdownEngine (00:00, IDLE)."""
    return CountdownEngine(parent=None)


@pytest.fixture
def engine_10s(qapp):
    """CountdownEngine configured for 0:10."""
    eng = CountdownEngine(parent=None)
    eng.configure(0, 10)
    return eng


@pytest.fixture
def sound_manager(qapp, tmp_path):
    """SoundManager caching its WAV files in a temp directory."""
    return SoundManager(parent=None, sounds_dir=tmp_path / "sounds")
