"""Circular countdown ring rendered with QPainter.

- Starts full and depletes clockwise from 12 o'clock.
- Colour follows the urgency zone (green → orange → red) with a short
  cross-fade on every change.
- While running the arc glides linearly across each one-second tick, so
  the ring moves continuously instead of jumping; stopping freezes it.
- Shows MM:SS in the centre plus a small phase label.
"""

from __future__ import annotations

import math

from PyQt6.QtCore import Qt, QRectF, QTimer, QVariantAnimation, QEasingCurve
from PyQt6.QtGui import QPainter, QPen, QColor, QConicalGradient, QFont
from PyQt6.QtWidgets import QWidget

from ..timer.engine import ColorZone, TICK_INTERVAL_MS
from .styles import STOPPED_COLORS, zone_colors


def _lerp_color(c1: QColor, c2: QColor, t: float) -> QColor:
    """Linearly interpolate between two QColors."""
    t = max(0.0, min(1.0, t))
    return QColor(
        int(c1.red()   + (c2.red()   - c1.red())   * t),
        int(c1.green() + (c2.green() - c1.green()) * t),
        int(c1.blue()  + (c2.blue()  - c1.blue())  * t),
        int(c1.alpha() + (c2.alpha() - c1.alpha()) * t),
    )


class ProgressRing(QWidget):
    """Custom-painted circular countdown ring."""

    RING_DIAMETER = 280
    RING_THICKNESS = 14
    GLOW_EXTRA = 6
    SETTLE_MS = 400  # arc animation when not ticking (configure, reset)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(self.RING_DIAMETER + 40, self.RING_DIAMETER + 40)

        # ── state ──────────────────────────────────────────────────────
        self._fraction: float = 1.0          # target arc fill
        self._display_fraction: float = 1.0  # animated arc fill
        self._time_text: str = "00:00"
        self._state_label: str = "READY"
        self._zone: ColorZone = ColorZone.NORMAL
        self._running: bool = False

        primary, secondary = zone_colors(self._zone)
        self._primary_color = QColor(primary)
        self._secondary_color = QColor(secondary)
        self._old_primary = QColor(primary)
        self._old_secondary = QColor(secondary)
        self._target_primary = QColor(primary)
        self._target_secondary = QColor(secondary)

        self._text_color = QColor("#E2E2F0")

        # ── arc animation ──────────────────────────────────────────────
        self._arc_anim = QVariantAnimation(self)
        self._arc_anim.valueChanged.connect(self._on_arc_anim)

        # ── colour cross-fade ──────────────────────────────────────────
        self._color_anim = QVariantAnimation(self)
        self._color_anim.setDuration(500)
        self._color_anim.setStartValue(0.0)
        self._color_anim.setEndValue(1.0)
        self._color_anim.setEasingCurve(QEasingCurve.Type.InOutQuad)
        self._color_anim.valueChanged.connect(self._on_color_anim)

        # ── running glow ───────────────────────────────────────────────
        self._glow_phase: float = 0.0
        self._glow_timer = QTimer(self)
        self._glow_timer.setInterval(33)  # ~30 fps
        self._glow_timer.timeout.connect(self._on_glow_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC API
    # ══════════════════════════════════════════════════════════════════

    @property
    def fraction(self) -> float:
        return self._fraction

    @property
    def zone(self) -> ColorZone:
        return self._zone

    @property
    def running(self) -> bool:
        return self._running

    @property
    def time_text(self) -> str:
        return self._time_text

    def set_fraction(self, fraction: float) -> None:
        """Move the arc to *fraction* (0..1).

        Running: linear over one tick.  Otherwise a short ease-out.
        """
        self._fraction = max(0.0, min(1.0, fraction))
        self._arc_anim.stop()
        if self._running:
            self._arc_anim.setDuration(TICK_INTERVAL_MS)
            self._arc_anim.setEasingCurve(QEasingCurve.Type.Linear)
        else:
            self._arc_anim.setDuration(self.SETTLE_MS)
            self._arc_anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._arc_anim.setStartValue(self._display_fraction)
        self._arc_anim.setEndValue(self._fraction)
        self._arc_anim.start()

    def set_time_text(self, text: str) -> None:
        self._time_text = text
        self.update()

    def set_state_label(self, text: str) -> None:
        self._state_label = text
        self.update()

    def apply_zone(self, zone: ColorZone) -> None:
        """Cross-fade to the colours of *zone*."""
        if zone == self._zone and self._color_anim.state() != QVariantAnimation.State.Running:
            return
        self._zone = zone
        primary_hex, secondary_hex = zone_colors(zone)

        self._old_primary = QColor(self._primary_color)
        self._old_secondary = QColor(self._secondary_color)
        self._target_primary = QColor(primary_hex)
        self._target_secondary = QColor(secondary_hex)
        self._color_anim.stop()
        self._color_anim.start()

    def set_running(self, running: bool) -> None:
        """Start the glow, or freeze arc and glow where they are."""
        self._running = running
        if running:
            if not self._glow_timer.isActive():
                self._glow_timer.start()
            return
        self._glow_timer.stop()
        self._glow_phase = 0.0
        # Paused mid-tick: hold the arc where the animation left it
        if self._arc_anim.state() == QVariantAnimation.State.Running:
            self._arc_anim.stop()
        self.update()

    def apply_palette(self, palette: dict[str, str]) -> None:
        self._text_color = QColor(palette.get("text", "#E2E2F0"))
        self.update()

    # ══════════════════════════════════════════════════════════════════
    #  ANIMATION SLOTS
    # ══════════════════════════════════════════════════════════════════

    def _on_arc_anim(self, value: object) -> None:
        self._display_fraction = float(value)  # type: ignore[arg-type]
        self.update()

    def _on_color_anim(self, value: object) -> None:
        t = float(value)  # type: ignore[arg-type]
        self._primary_color = _lerp_color(self._old_primary, self._target_primary, t)
        self._secondary_color = _lerp_color(self._old_secondary, self._target_secondary, t)
        self.update()

    def _on_glow_tick(self) -> None:
        self._glow_phase += 0.06
        if self._glow_phase > 2 * math.pi:
            self._glow_phase -= 2 * math.pi
        self.update()

    # ══════════════════════════════════════════════════════════════════
    #  PAINTING
    # ══════════════════════════════════════════════════════════════════

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        cx, cy = self.width() / 2, self.height() / 2
        diameter = max(100, min(self.width(), self.height()) - 40)
        radius = diameter / 2
        thickness = self.RING_THICKNESS
        ring_rect = QRectF(cx - radius, cy - radius, diameter, diameter)

        # ── background track ─────────────────────────────────────────
        track_color = QColor(STOPPED_COLORS[0])
        track_color.setAlpha(60)
        track_pen = QPen(track_color, thickness, Qt.PenStyle.SolidLine)
        painter.setPen(track_pen)
        painter.drawEllipse(ring_rect)

        # ── remaining arc ────────────────────────────────────────────
        pct = self._display_fraction
        if pct > 0.001:
            gradient = QConicalGradient(cx, cy, 90)
            gradient.setColorAt(0.0, self._primary_color)
            gradient.setColorAt(0.5, self._secondary_color)
            gradient.setColorAt(1.0, self._primary_color)

            arc_pen = QPen(gradient, thickness, Qt.PenStyle.SolidLine)
            arc_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            painter.setPen(arc_pen)

            # Qt arcs: start at 12 o'clock (90*16), go clockwise (negative)
            start_angle = 90 * 16
            span_angle = -int(pct * 360 * 16)
            painter.drawArc(ring_rect, start_angle, span_angle)

            if self._glow_timer.isActive():
                glow_color = QColor(self._primary_color)
                glow_color.setAlpha(int(20 + 15 * math.sin(self._glow_phase)))
                glow_pen = QPen(glow_color, thickness + self.GLOW_EXTRA, Qt.PenStyle.SolidLine)
                glow_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
                painter.setPen(glow_pen)
                painter.drawArc(ring_rect, start_angle, span_angle)

        # ── centre text: time ────────────────────────────────────────
        time_font = QFont()
        time_font.setPixelSize(52)
        time_font.setWeight(QFont.Weight.Bold)
        time_font.setLetterSpacing(QFont.SpacingType.AbsoluteSpacing, 2)
        painter.setFont(time_font)
        painter.setPen(self._text_color)

        time_rect = QRectF(ring_rect)
        time_rect.moveTop(time_rect.top() - 12)
        painter.drawText(time_rect, Qt.AlignmentFlag.AlignCenter, self._time_text)

        # ── centre text: phase label ─────────────────────────────────
        label_font = QFont()
        label_font.setPixelSize(13)
        label_font.setWeight(QFont.Weight.DemiBold)
        label_font.setLetterSpacing(QFont.SpacingType.AbsoluteSpacing, 3)
        painter.setFont(label_font)

        label_color = QColor(self._primary_color)
        label_color.setAlpha(200)
        painter.setPen(label_color)

        label_rect = QRectF(ring_rect)
        label_rect.moveTop(label_rect.top() + 34)
        painter.drawText(label_rect, Qt.AlignmentFlag.AlignCenter, self._state_label)

        painter.end()
