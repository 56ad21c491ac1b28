"""Tests for the ring, the timer card and the main window.

Covers:
- ProgressRing fraction / zone / running state and painting
- TimerWidget as the engine's presentation sink
- Settings toggle and live duration edits
- RingTimerApp wiring (defaults, shortcuts, expiry alert)
"""

from __future__ import annotations

import json

import pytest
from PyQt6.QtGui import QCloseEvent

from ringtimer.app import RingTimerApp
from ringtimer.settings import Settings, load_settings
from ringtimer.timer.engine import Phase, ColorZone, ring_fraction
from ringtimer.ui.progress_ring import ProgressRing
from ringtimer.ui.styles import ZONE_COLORS, build_stylesheet, zone_colors
from ringtimer.ui.timer_widget import TimerWidget, SETTINGS_ICON, CONFIRM_ICON

from helpers import FakeSounds, SignalCollector, run_ticks, run_to_expiry


# ═══════════════════════════════════════════════════════════════════════
#  PROGRESS RING
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestProgressRing:
    def test_starts_full(self):
        ring = ProgressRing()
        assert ring.fraction == 1.0
        assert ring.zone == ColorZone.NORMAL
        assert ring.running is False

    def test_set_fraction_clamps(self):
        ring = ProgressRing()
        ring.set_fraction(1.7)
        assert ring.fraction == 1.0
        ring.set_fraction(-0.2)
        assert ring.fraction == 0.0

    def test_running_arc_moves_over_one_tick(self):
        ring = ProgressRing()
        ring.set_running(True)
        ring.set_fraction(0.5)
        assert ring._arc_anim.duration() == 1000

    def test_idle_arc_settles_quickly(self):
        ring = ProgressRing()
        ring.set_fraction(0.5)
        assert ring._arc_anim.duration() == ProgressRing.SETTLE_MS

    def test_glow_follows_running(self):
        ring = ProgressRing()
        ring.set_running(True)
        assert ring._glow_timer.isActive()
        ring.set_running(False)
        assert not ring._glow_timer.isActive()

    def test_apply_zone(self):
        ring = ProgressRing()
        ring.apply_zone(ColorZone.ALERT)
        assert ring.zone == ColorZone.ALERT
        assert ring._target_primary.name() == ZONE_COLORS[ColorZone.ALERT][0].lower()

    def test_paints_without_error(self):
        ring = ProgressRing()
        ring.set_time_text("12:34")
        ring.set_state_label("FOCUS")
        ring.set_running(True)
        ring.resize(320, 320)
        pixmap = ring.grab()
        assert not pixmap.isNull()


class TestStyles:
    def test_every_zone_has_colors(self):
        for zone in ColorZone:
            assert zone_colors(zone) == ZONE_COLORS[zone]

    def test_stylesheet_mentions_inputs(self, qapp):
        qss = build_stylesheet()
        assert "QLineEdit" in qss
        assert "primaryButton" in qss


# ═══════════════════════════════════════════════════════════════════════
#  TIMER WIDGET
# ═══════════════════════════════════════════════════════════════════════


@pytest.fixture
def widget(engine_10s):
    return TimerWidget(engine_10s)


class TestTimerWidget:
    def test_initial_display(self, widget):
        assert widget._ring.time_text == "00:10"
        assert widget._minutes_input.text() == "00"
        assert widget._seconds_input.text() == "10"
        assert widget._start_btn.text() == "Start"

    def test_inputs_locked_until_settings_open(self, widget):
        assert not widget._minutes_input.isEnabled()
        assert not widget._seconds_input.isEnabled()

    def test_start_button_runs_engine(self, widget, engine_10s):
        clicks = SignalCollector()
        widget.button_clicked.connect(clicks)
        widget._start_btn.click()
        assert engine_10s.phase == Phase.RUNNING
        assert widget._start_btn.text() == "Stop"
        assert widget._ring.running is True
        assert len(clicks) == 1

    def test_stop_button_pauses(self, widget, engine_10s):
        widget._start_btn.click()
        run_ticks(engine_10s, 2)
        widget._start_btn.click()
        assert engine_10s.phase == Phase.IDLE
        assert engine_10s.remaining == 8
        assert widget._start_btn.text() == "Start"
        assert widget._ring.time_text == "00:08"

    def test_settings_disabled_while_running(self, widget, engine_10s):
        engine_10s.start()
        assert not widget._settings_btn.isEnabled()
        widget.toggle_settings()
        assert widget.editing is False
        engine_10s.stop()
        assert widget._settings_btn.isEnabled()

    def test_ring_follows_ticks(self, widget, engine_10s):
        engine_10s.start()
        engine_10s.tick()
        assert widget._ring.fraction == pytest.approx(ring_fraction(0.9, 10))
        assert widget._seconds_input.text() == "09"

    def test_ring_zone_follows_ticks(self, widget, engine_10s):
        engine_10s.start()
        run_ticks(engine_10s, 5)
        assert widget._ring.zone == ColorZone.WARNING
        run_ticks(engine_10s, 3)
        assert widget._ring.zone == ColorZone.ALERT

    def test_expiry_shows_zero_and_new_time(self, widget, engine_10s):
        run_to_expiry(engine_10s)
        assert widget._ring.time_text == "00:00"
        assert widget._ring.fraction == 0.0
        assert widget._start_btn.text() == "New time"
        assert widget._settings_btn.isEnabled()

    def test_new_time_opens_settings(self, widget, engine_10s):
        run_to_expiry(engine_10s)
        widget._start_btn.click()
        assert widget.editing is True
        assert engine_10s.phase == Phase.EXPIRED

    def test_toggle_settings(self, widget):
        widget.toggle_settings()
        assert widget.editing is True
        assert widget._minutes_input.isEnabled()
        assert widget._settings_btn.text() == CONFIRM_ICON
        assert widget._start_btn.isHidden()

        widget.toggle_settings()
        assert widget.editing is False
        assert not widget._minutes_input.isEnabled()
        assert widget._settings_btn.text() == SETTINGS_ICON
        assert not widget._start_btn.isHidden()

    def test_edit_configures_immediately(self, widget, engine_10s):
        widget.toggle_settings()
        widget._minutes_input.setText("2")
        widget._seconds_input.setText("30")
        widget._on_input_edited("30")
        assert engine_10s.configured == 150
        assert widget._ring.time_text == "02:30"
        # Typed text is left alone while editing
        assert widget._minutes_input.text() == "2"

    def test_empty_field_counts_as_zero(self, widget, engine_10s):
        widget.toggle_settings()
        widget._minutes_input.setText("")
        widget._seconds_input.setText("45")
        widget._on_input_edited("")
        assert engine_10s.configured == 45

    def test_invalid_edit_keeps_previous_duration(self, widget, engine_10s):
        widget.toggle_settings()
        widget._minutes_input.setText("ab")
        widget._on_input_edited("ab")
        assert engine_10s.configured == 10
        assert widget._minutes_input.property("invalid") is True

        widget.toggle_settings()
        assert widget._minutes_input.text() == "00"
        assert widget._minutes_input.property("invalid") is False

    def test_closing_settings_formats_inputs(self, widget):
        widget.toggle_settings()
        widget._minutes_input.setText("7")
        widget._seconds_input.setText("5")
        widget._on_input_edited("5")
        widget.toggle_settings()
        assert widget._minutes_input.text() == "07"
        assert widget._seconds_input.text() == "05"
        assert widget._start_btn.text() == "Start"

    def test_zero_duration_offers_new_time(self, widget, engine_10s):
        widget.toggle_settings()
        widget._minutes_input.setText("0")
        widget._seconds_input.setText("0")
        widget._on_input_edited("0")
        widget.toggle_settings()
        assert widget._start_btn.text() == "New time"
        widget._start_btn.click()
        assert engine_10s.phase == Phase.IDLE
        assert widget.editing is True


# ═══════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestRingTimerApp:
    def _make_app(self, sound_manager, **settings):
        return RingTimerApp(Settings(**settings), sound_manager=sound_manager)

    def test_uses_default_duration(self, sound_manager):
        app = self._make_app(sound_manager, default_minutes=0, default_seconds=3)
        assert app.engine.configured == 3
        assert app.engine.phase == Phase.IDLE

    def test_bad_default_falls_back(self, sound_manager):
        app = self._make_app(sound_manager, default_minutes=-4)
        assert app.engine.configured == 25 * 60

    def test_sound_settings_applied(self, sound_manager):
        self._make_app(sound_manager, sound_volume=20, sound_enabled=False)
        assert sound_manager.volume == 20
        assert sound_manager.enabled is False

    def test_alert_delay_from_settings(self, sound_manager):
        app = self._make_app(sound_manager, alert_delay_ms=250)
        assert app.notifier.delay_ms == 250

    def test_starts_with_wrong_typed_settings_file(self, sound_manager, tmp_path):
        path = tmp_path / "settings.json"
        data = {"sound_volume": "loud", "alert_delay_ms": "x", "window_width": "wide"}
        path.write_text(json.dumps(data), encoding="utf-8")
        app = RingTimerApp(load_settings(path), sound_manager=sound_manager)
        assert sound_manager.volume == 70
        assert app.notifier.delay_ms == 500

    def test_space_toggles(self, sound_manager):
        app = self._make_app(sound_manager, default_seconds=5, default_minutes=0)
        app._on_space()
        assert app.engine.phase == Phase.RUNNING
        app._on_space()
        assert app.engine.phase == Phase.IDLE

    def test_space_ignored_while_editing(self, sound_manager):
        app = self._make_app(sound_manager, default_seconds=5, default_minutes=0)
        app.timer_widget.toggle_settings()
        app._on_space()
        assert app.engine.phase == Phase.IDLE

    def test_expiry_queues_alert(self, sound_manager):
        app = self._make_app(
            sound_manager, default_minutes=0, default_seconds=2, alert_message="Break!",
        )
        run_to_expiry(app.engine)
        assert app.notifier.pending_message == "Break!"

    def test_click_sound_on_button(self):
        sounds = FakeSounds()
        sounds.set_volume = lambda level: None
        sounds.set_enabled = lambda enabled: None
        app = RingTimerApp(Settings(default_minutes=1), sound_manager=sounds)
        app.timer_widget._start_btn.click()
        assert sounds.played == ["click"]

    def test_reset_cancels_alert(self, sound_manager):
        app = self._make_app(sound_manager, default_minutes=0, default_seconds=1)
        run_to_expiry(app.engine)
        app._on_reset()
        assert app.notifier.pending_message is None
        assert app.engine.phase == Phase.IDLE
        assert app.engine.remaining == 1

    def test_close_stops_engine(self, sound_manager):
        app = self._make_app(sound_manager, default_minutes=1)
        app.engine.start()
        app.closeEvent(QCloseEvent())
        assert app.engine.phase == Phase.IDLE
        assert not app.engine.is_ticking
