"""Procedural sound generation and playback helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np
import pygame

from config import SFX_VOLUME
from logging_utils import log_line


@dataclass(frozen=True)
class SoundSpec:
    """Configuration for a procedurally generated sound."""

    frequency: int
    duration: float
    volume: float
    decay: float = 6.0
    # (multiple of the fundamental, relative amplitude)
    partials: Tuple[Tuple[float, float], ...] = ((1.0, 1.0), (2.0, 0.5), (3.0, 0.25), (4.2, 0.15))


COLLISION_SOUND = "collision"


class SoundManager:
    """Generate and play the game's sound cues."""

    SAMPLE_RATE = 44_100

    def __init__(self, enable_audio: bool = True, volume: float = SFX_VOLUME) -> None:
        self.sound_specs: Dict[str, SoundSpec] = {
            COLLISION_SOUND: SoundSpec(frequency=880, duration=0.9, volume=1.0),
        }
        self.volume = max(0.0, min(float(volume), 1.0))
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.enabled = False

        if enable_audio:
            try:
                if not pygame.mixer.get_init():
                    pygame.mixer.init(frequency=self.SAMPLE_RATE, size=-16, channels=2)
                # Pops come in bursts; give overlapping bells room to ring
                pygame.mixer.set_num_channels(16)
                self.enabled = True
            except pygame.error as exc:
                log_line(f"SoundManager mixer init failed: {exc}")
                self.enabled = False
        if self.enabled:
            log_line("SoundManager initialising procedural sounds")
            self._prepare_sounds()
        else:
            log_line("SoundManager running without audio output")

    def _prepare_sounds(self) -> None:
        for key, spec in self.sound_specs.items():
            try:
                self.sounds[key] = self._create_sound(spec)
                log_line(f"Prepared sound '{key}' with spec {spec}")
            except (RuntimeError, ValueError, pygame.error) as exc:
                log_line(f"Failed to prepare sound '{key}': {exc}")
                self.enabled = False
                self.sounds.clear()
                break

    def synthesize(self, spec: SoundSpec) -> np.ndarray:
        """Return a mono waveform in ``[-1, 1]`` for ``spec``."""
        sample_count = max(1, int(self.SAMPLE_RATE * spec.duration))
        times = np.linspace(0, spec.duration, sample_count, endpoint=False, dtype=np.float32)
        wave = np.zeros(sample_count, dtype=np.float32)
        for multiple, amplitude in spec.partials:
            # Upper partials die out faster, as on a struck bell
            envelope = np.exp(-spec.decay * multiple * times)
            wave += amplitude * envelope * np.sin(2 * np.pi * spec.frequency * multiple * times)
        peak = float(np.max(np.abs(wave)))
        if peak > 0:
            wave = wave / peak
        return wave

    def _create_sound(self, spec: SoundSpec) -> pygame.mixer.Sound:
        wave = self.synthesize(spec)
        audio = np.stack((wave, wave), axis=1)
        int_audio = np.ascontiguousarray((audio * 32_767).astype(np.int16))
        sndarray = getattr(pygame, "sndarray", None)
        if sndarray is None:
            raise RuntimeError("pygame.sndarray unavailable")
        sound = sndarray.make_sound(int_audio)
        sound.set_volume(spec.volume * self.volume)
        return sound

    def set_volume(self, volume: float) -> None:
        self.volume = max(0.0, min(float(volume), 1.0))
        for key, sound in self.sounds.items():
            sound.set_volume(self.sound_specs[key].volume * self.volume)

    def play(self, key: str) -> None:
        if not self.enabled:
            log_line(f"Skipped playing '{key}' (audio disabled)")
            return
        sound = self.sounds.get(key)
        if sound is None:
            log_line(f"Sound '{key}' not found")
            return
        sound.play()
        log_line(f"Played sound '{key}' once")

    def play_collision_sound(self) -> None:
        self.play(COLLISION_SOUND)
