"""Tests for StarCatchMode and its rendering helpers."""

from unittest.mock import Mock

import numpy as np
import pygame

from starcatch.motion import MotionMask
from games.StarCatch.config import get_engine_settings
from games.StarCatch.game_mode import StarCatchMode, frame_to_surface

from conftest import black_frame


def make_mode(rng, clock, chime=None):
    return StarCatchMode(get_engine_settings('hybrid'), audio_enabled=False,
                         rng=rng, clock=clock, chime=chime)


class TestFrameToSurface:
    """Test camera frame conversion."""

    def test_scaled_to_screen(self, screen):
        surface = frame_to_surface(black_frame(), (320, 240))
        assert surface.get_size() == (320, 240)

    def test_mirrored_and_rgb(self, screen):
        """A blue pixel on the camera's left appears on the screen's right."""
        frame = np.zeros((4, 4, 3), dtype=np.uint8)
        frame[:, 0] = (255, 0, 0)  # BGR blue

        surface = frame_to_surface(frame, (4, 4))

        assert tuple(surface.get_at((3, 0)))[:3] == (0, 0, 255)
        assert tuple(surface.get_at((0, 0)))[:3] == (0, 0, 0)


class TestStarCatchMode:
    """Test per-session game logic."""

    def test_update_spawns_then_hit_tests(self, rng, clock, fallback_arbiter):
        """Stars spawned by update() are caught on a later frame and chime."""
        chime = Mock()
        mode = make_mode(rng, clock, chime=chime)

        mode.update(MotionMask.empty(), fallback_arbiter)
        star = mode.field.stars[0]
        fallback_arbiter.record_pointer(star.position.x, star.position.y)
        caught = mode.update(MotionMask.empty(), fallback_arbiter)

        assert caught == [star]
        assert mode.get_score() == 10
        chime.play_collect.assert_called_once()

    def test_reset(self, rng, clock, fallback_arbiter):
        mode = make_mode(rng, clock)
        mode.update(MotionMask.empty(), fallback_arbiter)
        mode.score.award(10)

        mode.reset()

        assert mode.get_score() == 0
        assert mode.field.stars == []

    def test_fallback_notice(self, rng, clock, fallback_arbiter, camera_arbiter):
        mode = make_mode(rng, clock)

        assert "camera disabled" in mode.fallback_notice(fallback_arbiter)
        assert mode.fallback_notice(camera_arbiter) is None

    def test_render_fallback_background(self, screen, rng, clock, fallback_arbiter):
        """Without video the background is a plain fill."""
        mode = make_mode(rng, clock)

        mode.render(screen, None, fallback_arbiter)

        assert tuple(screen.get_at((160, 230)))[:3] == (10, 10, 20)

    def test_render_camera_background(self, screen, rng, clock, camera_arbiter):
        """The dimmed camera frame is drawn behind the stars."""
        mode = make_mode(rng, clock)
        frame = np.full((480, 640, 3), 200, dtype=np.uint8)

        mode.render(screen, frame, camera_arbiter)

        r, g, b = tuple(screen.get_at((160, 230)))[:3]
        assert 100 < r < 200 and r == g == b

    def test_start_and_summary_screens(self, screen, rng, clock, fallback_arbiter):
        mode = make_mode(rng, clock)

        mode.render_start_screen(screen, fallback_arbiter)
        mode.render_summary(screen)

        assert pygame.surfarray.array3d(screen).max() > 0
