# src/game/audio.py
from __future__ import annotations
import logging
from typing import Dict, Iterable, Optional

import numpy as np
import pygame

from .config import SFX_SAMPLE_RATE, SFX_TONES

logger = logging.getLogger(__name__)


def make_tone(freq: float, duration: float, volume: float = 0.3,
              sample_rate: int = SFX_SAMPLE_RATE) -> np.ndarray:
    """Square-wave blip with a fade-out, as int16 samples (mono)."""
    n = max(1, int(sample_rate * duration))
    t = np.arange(n, dtype=np.float32) / float(sample_rate)
    wave = np.sign(np.sin(2.0 * np.pi * freq * t))
    fade = 1.0 - np.sqrt(np.arange(n, dtype=np.float32) / n)
    return (wave * fade * volume * 32767).astype(np.int16)


class SoundBoard:
    """
    Plays one short sound per cue. Audio never affects the game: if the mixer
    can't start or a sound fails to play, the cue is dropped.
    """

    def __init__(self, muted: bool = False, sounds: Optional[Dict[str, object]] = None):
        self.muted = muted
        self.enabled = True
        if sounds is not None:
            self.sounds = dict(sounds)
            return
        self.sounds = {}
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=SFX_SAMPLE_RATE, size=-16, channels=1)
            for name, (freq, dur) in SFX_TONES.items():
                self.sounds[name] = self._build_sound(freq, dur)
        except pygame.error as e:
            logger.info("Audio disabled: %s", e)
            self.enabled = False

    @staticmethod
    def _build_sound(freq: float, duration: float):
        # the mixer may already be running (pygame.init) at its own rate
        rate, _, channels = pygame.mixer.get_init()
        samples = make_tone(freq, duration, sample_rate=rate)
        if channels > 1:
            samples = np.repeat(samples[:, None], channels, axis=1)
        return pygame.sndarray.make_sound(np.ascontiguousarray(samples))

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        return self.muted

    def play(self, cue) -> None:
        if self.muted or not self.enabled:
            return
        name = getattr(cue, "value", cue)
        sound = self.sounds.get(name)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as e:
            logger.debug("Dropped cue %s: %s", name, e)

    def play_all(self, cues: Iterable) -> None:
        for cue in cues:
            self.play(cue)
