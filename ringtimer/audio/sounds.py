"""Alert and click sounds, synthesized with numpy and played via QSoundEffect.

The WAV files are generated once from sine waves shaped by a simple
attack/release envelope and cached on disk.  A user-supplied file can
replace the synthesized alert (``Settings.alert_sound_path``).

Sound names
-----------
- ``alert``: three bright beeps, played when the countdown expires
- ``click``: short tick for the start/stop button
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "RingTimer"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = ("alert", "click")

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _envelope(length: int, attack: int, release: int) -> np.ndarray:
    """Linear fade-in over *attack* samples and fade-out over *release*."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    r = min(release, length - a)
    if r > 0:
        env[length - r:] = np.linspace(1.0, 0.0, r)
    return env


def _tone(freq: float, duration_s: float, amplitude: float = 0.5) -> np.ndarray:
    t = np.arange(int(SAMPLE_RATE * duration_s)) / SAMPLE_RATE
    return amplitude * np.sin(2 * np.pi * freq * t)


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert float samples in -1..1 to mono 16-bit PCM WAV bytes."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_alert() -> bytes:
    """Expiry: three 880 Hz beeps with a fifth on top, then a held note."""
    parts: list[np.ndarray] = []
    for _ in range(3):
        beep = _tone(880.0, 0.16, 0.45) + _tone(1318.5, 0.16, 0.12)
        parts.append(beep * _envelope(len(beep), attack=220, release=1800))
        parts.append(_silence(0.09))
    tail = _tone(1046.5, 0.45, 0.4)
    parts.append(tail * _envelope(len(tail), attack=300, release=int(SAMPLE_RATE * 0.3)))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_click() -> bytes:
    """Button click, 15 ms tick padded so QSoundEffect does not clip it."""
    tick = _tone(1200.0, 0.015, 0.2)
    tick = tick * _envelope(len(tick), attack=20, release=len(tick) - 70)
    return _to_wav_bytes(np.concatenate([tick, _silence(0.03)]))


_GENERATORS = {
    "alert": _generate_alert,
    "click": _generate_click,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Sound synthesis, caching and playback.

    Usage::

        mgr = SoundManager(parent=self, alert_path=settings.alert_sound_path)
        mgr.set_volume(70)
        mgr.play("alert")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
        alert_path: str | Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()
        if alert_path:
            self.set_alert_source(alert_path)

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def set_alert_source(self, path: str | Path) -> bool:
        """Use the WAV at *path* for the alert.  Returns False if missing."""
        source = Path(path).expanduser()
        if not source.is_file():
            logger.warning("Alert sound %s not found, keeping built-in alert", source)
            return False
        self._effects["alert"].setSource(QUrl.fromLocalFile(str(source)))
        return True

    def source_of(self, name: str) -> Path | None:
        effect = self._effects.get(name)
        if effect is None:
            return None
        return Path(effect.source().toLocalFile())

    def play(self, name: str) -> None:
        """Play a sound by name.  No-op if disabled or name unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is None:
            logger.debug("Unknown sound %r", name)
            return
        effect.play()

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(gen_fn())
                logger.debug("Generated %s", path)

    def _load_effects(self) -> None:
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            self._effects[name] = effect
