"""
Audio feedback for Star Catch.

Plays a short rising chime each time a star is caught. The chime is
generated procedurally with numpy and handed to pygame's mixer, which plays
it asynchronously; play_collect() never blocks the frame loop.
"""

import random
from typing import Optional

import numpy as np
import pygame

from starcatch.logging import get_logger
from games.StarCatch import config

log = get_logger('feedback')

SAMPLE_RATE = 22050
CHIME_DURATION = 0.15      # seconds until the gain reaches zero
SWEEP_DURATION = 0.1       # seconds of exponential pitch sweep
SWEEP_END_FREQUENCY = 1000.0


def generate_chime(
    start_frequency: float,
    sample_rate: int = SAMPLE_RATE,
    volume: float = config.CHIME_VOLUME,
) -> np.ndarray:
    """Build one chime as a mono float waveform.

    The pitch sweeps exponentially from start_frequency to 1000 Hz over
    the first 100 ms while the gain falls linearly from volume to zero.

    Args:
        start_frequency: Starting pitch in Hz
        sample_rate: Samples per second
        volume: Peak gain (0..1)

    Returns:
        Array of samples in [-volume, volume]
    """
    num_samples = int(sample_rate * CHIME_DURATION)
    t = np.arange(num_samples) / sample_rate

    progress = np.clip(t / SWEEP_DURATION, 0.0, 1.0)
    frequencies = start_frequency * (SWEEP_END_FREQUENCY / start_frequency) ** progress

    phase = np.cumsum(2.0 * np.pi * frequencies / sample_rate)
    envelope = volume * (1.0 - t / CHIME_DURATION)
    return np.sin(phase) * envelope


class ChimePlayer:
    """Fire-and-forget collection chime.

    If the mixer cannot be initialized, audio is disabled and every play
    call becomes a no-op.

    Attributes:
        audio_enabled: Whether sounds are actually played
    """

    def __init__(self, audio_enabled: bool = config.AUDIO_ENABLED,
                 rng: Optional[random.Random] = None):
        """
        Args:
            audio_enabled: Whether to enable audio feedback
            rng: Random source for the chime pitch (default: unseeded)
        """
        self.audio_enabled = audio_enabled
        self._rng = rng or random.Random()
        self._channels = 2
        self._sample_rate = SAMPLE_RATE
        self.plays = 0

        if self.audio_enabled:
            self._init_audio()

    def _init_audio(self) -> None:
        """Initialize the pygame mixer."""
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512)
            frequency, _size, channels = pygame.mixer.get_init()
            self._sample_rate = frequency
            self._channels = channels
        except (pygame.error, TypeError) as e:
            log.warning("Audio initialization failed, chimes disabled: %s", e)
            self.audio_enabled = False

    def _make_sound(self, start_frequency: float) -> pygame.mixer.Sound:
        wave = generate_chime(start_frequency, sample_rate=self._sample_rate)
        samples = (wave * 32767).astype(np.int16)
        if self._channels > 1:
            samples = np.column_stack([samples] * self._channels)
        return pygame.sndarray.make_sound(np.ascontiguousarray(samples))

    def play_collect(self) -> None:
        """Play the collection chime now."""
        self.plays += 1
        if not self.audio_enabled:
            return

        start_frequency = 500 + self._rng.random() * 300
        try:
            self._make_sound(start_frequency).play()
        except pygame.error as e:
            log.warning("Could not play chime: %s", e)
