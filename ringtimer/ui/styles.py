"""QSS stylesheet and ring colors for RingTimer."""

from __future__ import annotations

from ..timer.engine import ColorZone

# ── zone colors (ring gradient pairs) ───────────────────────────────────
#    Each zone maps to (primary, secondary) for the conical gradient.

ZONE_COLORS: dict[ColorZone, tuple[str, str]] = {
    ColorZone.NORMAL:  ("#41B883", "#6FD3A5"),   # green
    ColorZone.WARNING: ("#F5A623", "#F7C66B"),   # orange
    ColorZone.ALERT:   ("#E5484D", "#F2777B"),   # red
}

STOPPED_COLORS: tuple[str, str] = ("#6C7086", "#585B70")

# ── default palette ──────────────────────────────────────────────────────

PALETTE: dict[str, str] = {
    "bg":           "#1A1A2E",
    "bg_secondary": "#232340",
    "accent":       "#41B883",
    "accent2":      "#6FD3A5",
    "text":         "#E2E2F0",
    "text_muted":   "#7A7A9A",
    "danger":       "#E5484D",
    "border":       "#313154",
}


def zone_colors(zone: ColorZone) -> tuple[str, str]:
    return ZONE_COLORS.get(zone, STOPPED_COLORS)


# ── font resolution ───────────────────────────────────────────────────

_resolved_font: str | None = None


def resolve_font_family() -> str:
    """Pick the first installed UI font.  Call after QApplication exists."""
    global _resolved_font
    if _resolved_font is None:
        from PyQt6.QtGui import QFontDatabase
        families = set(QFontDatabase.families())
        for candidate in ("SF Pro", ".AppleSystemUIFont", "Helvetica Neue"):
            if candidate in families:
                _resolved_font = candidate
                break
        else:
            _resolved_font = "Arial"
    return _resolved_font


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    font = resolve_font_family()
    return f"""
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "{font}", "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 10px 24px;
        font-size: 14px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        border-color: {p['accent']};
    }}

    QPushButton:disabled {{
        color: {p['text_muted']};
        border-color: {p['bg_secondary']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 14px 40px;
        border-radius: 12px;
        font-weight: 700;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton#settingsButton {{
        background-color: transparent;
        color: {p['text_muted']};
        font-size: 20px;
        padding: 6px 12px;
        border-radius: 8px;
    }}

    QLineEdit {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 6px 10px;
        font-size: 18px;
        font-weight: 600;
    }}

    QLineEdit:disabled {{
        color: {p['text_muted']};
    }}

    QLineEdit[invalid="true"] {{
        border-color: {p['danger']};
    }}

    QFrame#card {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 12px;
    }}
    """
