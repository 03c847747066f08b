import array
import logging
import wave
from pathlib import Path

from wordsprint.utils.file_handler import SFX_DIR

log = logging.getLogger(__name__)

SAMPLE_RATE = 22050

# kind -> (frequency Hz, length s); square-wave keyboard clicks
CLICKS = {
    "correct": (900.0, 0.05),
    "error": (225.0, 0.08),
    "normal": (550.0, 0.06),
    "streak": (1320.0, 0.09),
}


def synthesize_click(path, freq: float, seconds: float, volume: float = 0.15) -> Path:
    """Write a short decaying square-wave click as 16-bit mono WAV."""
    n = max(1, int(SAMPLE_RATE * seconds))
    period = SAMPLE_RATE / freq
    peak = int(32767 * max(0.0, min(volume, 1.0)))
    samples = array.array("h")
    for i in range(n):
        decay = 0.01 ** (i / n)  # exponential ramp down to 1%
        level = peak if (i % period) < period / 2 else -peak
        samples.append(int(level * decay))
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(p), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(SAMPLE_RATE)
        w.writeframes(samples.tobytes())
    return p


class SilentAudio:
    def __init__(self):
        self.enabled = True

    def play(self, kind: str):
        pass


class SoundEffectAudio:
    """Plays the synthesised clicks through QSoundEffect. Never raises into callers."""

    def __init__(self, sfx_dir=SFX_DIR, volume: float = 0.25):
        from PySide6.QtCore import QUrl
        from PySide6.QtMultimedia import QSoundEffect

        self.enabled = True
        self._effects = {}
        for kind, (freq, secs) in CLICKS.items():
            path = Path(sfx_dir) / f"{kind}.wav"
            try:
                if not path.exists():
                    synthesize_click(path, freq, secs)
            except OSError as e:
                log.warning("Could not write %s: %s", path, e)
                continue
            effect = QSoundEffect()
            effect.setSource(QUrl.fromLocalFile(str(path.resolve())))
            effect.setVolume(volume)
            self._effects[kind] = effect

    def play(self, kind: str):
        if not self.enabled:
            return
        effect = self._effects.get(kind)
        if effect is None:
            log.debug("No sound for %r", kind)
            return
        try:
            effect.play()
        except RuntimeError as e:
            log.warning("Sound playback failed: %s", e)
