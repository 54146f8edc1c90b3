# dashrun/game/audio.py
"""
Fire-and-forget sound signals.

The simulation only ever calls `jumped(pitch_hint)` and `collided()`; nothing
flows back. `ToneAudio` synthesises short tones with numpy and plays them
through the pygame mixer, `NullAudio` is the silent stand-in used by the
environment and by `--mute`.
"""
from __future__ import annotations
import logging
from typing import Dict, Optional, Protocol, Tuple

import numpy as np
import pygame

from .config import (
    SAMPLE_RATE, TONE_GAIN, JUMP_TONE_S, COLLISION_PITCH, COLLISION_TONE_S,
)

logger = logging.getLogger(__name__)


class AudioSignal(Protocol):
    def jumped(self, pitch_hint: float) -> None:
        ...

    def collided(self) -> None:
        ...


class NullAudio:
    def jumped(self, pitch_hint: float) -> None:
        pass

    def collided(self) -> None:
        pass


def synth_tone(freq: float, duration_s: float, waveform: str = "sine",
               rate: int = SAMPLE_RATE, gain: float = TONE_GAIN) -> np.ndarray:
    """Mono int16 samples for a constant-pitch tone ("sine" or "square")."""
    n = max(1, int(rate * duration_s))
    t = np.arange(n, dtype=np.float64) / rate
    wave = np.sin(2.0 * np.pi * freq * t)
    if waveform == "square":
        wave = np.where(wave >= 0.0, 1.0, -1.0)
    elif waveform != "sine":
        raise ValueError(f"unknown waveform {waveform!r}")
    return (wave * gain * 32767).astype(np.int16)


class ToneAudio:
    """Sine blip per jump (pitch = hint), square buzz on collision."""

    def __init__(self, gain: float = TONE_GAIN):
        self.gain = gain
        self._sounds: Dict[Tuple[float, str], pygame.mixer.Sound] = {}
        self._mixer: Optional[Tuple[int, int, int]] = None
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            self._mixer = pygame.mixer.get_init()
        except pygame.error as e:
            logger.warning("audio disabled, mixer unavailable: %s", e)

    @property
    def enabled(self) -> bool:
        return self._mixer is not None

    def jumped(self, pitch_hint: float) -> None:
        self._play(pitch_hint, JUMP_TONE_S, "sine")

    def collided(self) -> None:
        self._play(COLLISION_PITCH, COLLISION_TONE_S, "square")

    def _play(self, freq: float, duration_s: float, waveform: str):
        if self._mixer is None:
            return
        key = (freq, waveform)
        snd = self._sounds.get(key)
        if snd is None:
            snd = self._make_sound(freq, duration_s, waveform)
            self._sounds[key] = snd
        snd.play()

    def _make_sound(self, freq: float, duration_s: float, waveform: str) -> pygame.mixer.Sound:
        rate, _size, channels = self._mixer
        samples = synth_tone(freq, duration_s, waveform, rate=rate, gain=self.gain)
        if channels > 1:
            samples = np.repeat(samples[:, None], channels, axis=1)
        return pygame.sndarray.make_sound(np.ascontiguousarray(samples))
