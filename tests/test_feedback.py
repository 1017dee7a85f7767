"""
Feedback Tests

Chime synthesis and the fire-and-forget player. The mixer is mocked so no
audio device is needed.
"""

import random
from unittest.mock import MagicMock, patch

import numpy as np
import pygame
import pytest

from games.StarCatch.feedback import (
    CHIME_DURATION,
    SAMPLE_RATE,
    ChimePlayer,
    generate_chime,
)


class TestGenerateChime:
    """Test procedural chime generation."""

    def test_length(self):
        """The chime lasts 150 ms."""
        wave = generate_chime(600.0)
        assert len(wave) == int(SAMPLE_RATE * CHIME_DURATION)

    def test_peak_bounded_by_volume(self):
        wave = generate_chime(600.0, volume=0.1)
        assert np.abs(wave).max() <= 0.1

    def test_fades_to_silence(self):
        """The linear envelope ends near zero."""
        wave = generate_chime(600.0)
        assert np.abs(wave[-20:]).max() < 0.001

    def test_pitch_rises(self):
        """More zero crossings at the end of the sweep than at the start."""
        wave = generate_chime(500.0, volume=1.0)
        window = int(SAMPLE_RATE * 0.02)

        def crossings(segment):
            return int(np.count_nonzero(np.diff(np.sign(segment))))

        start = crossings(wave[:window])
        end = crossings(wave[int(SAMPLE_RATE * 0.1):int(SAMPLE_RATE * 0.1) + window])
        assert end > start


class TestChimePlayer:
    """Test ChimePlayer."""

    def test_disabled_plays_nothing(self):
        """With audio disabled no sound is built."""
        player = ChimePlayer(audio_enabled=False)
        with patch.object(ChimePlayer, '_make_sound') as make_sound:
            player.play_collect()

        make_sound.assert_not_called()
        assert player.plays == 1

    def test_plays_sound(self):
        """An enabled player builds and plays one sound per catch."""
        sound = MagicMock()
        with patch('pygame.mixer.get_init', return_value=(22050, -16, 2)), \
                patch('pygame.sndarray.make_sound', return_value=sound) as make_sound:
            player = ChimePlayer(audio_enabled=True, rng=random.Random(1))
            player.play_collect()

        assert player.audio_enabled
        make_sound.assert_called_once()
        samples = make_sound.call_args.args[0]
        assert samples.dtype == np.int16
        assert samples.shape[1] == 2
        sound.play.assert_called_once()

    def test_mixer_failure_disables_audio(self):
        """A mixer that cannot start turns audio off instead of raising."""
        with patch('pygame.mixer.get_init', return_value=None), \
                patch('pygame.mixer.init', side_effect=pygame.error("no audio device")):
            player = ChimePlayer(audio_enabled=True)

        assert not player.audio_enabled
        player.play_collect()

    def test_playback_error_swallowed(self):
        """A failing play call is logged, not raised."""
        with patch('pygame.mixer.get_init', return_value=(22050, -16, 1)), \
                patch('pygame.sndarray.make_sound', side_effect=pygame.error("busy")):
            player = ChimePlayer(audio_enabled=True)
            player.play_collect()

        assert player.plays == 1

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_start_frequency_in_band(self, seed):
        """Start pitch is drawn from 500..800 Hz."""
        with patch('pygame.mixer.get_init', return_value=(22050, -16, 1)):
            player = ChimePlayer(audio_enabled=True, rng=random.Random(seed))
        with patch.object(player, '_make_sound') as make_sound:
            player.play_collect()

        frequency = make_sound.call_args.args[0]
        assert 500 <= frequency <= 800
