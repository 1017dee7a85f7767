"""
Star Catch game mode.

Catch the stars by waving at them in front of the camera, or by tapping and
dragging when no camera is available. The game is endless: stars keep
spawning and the score keeps accumulating until the player leaves.
"""
import random
from typing import Callable, List, Optional

import cv2
import numpy as np
import pygame

from models import InputMode
from starcatch.input.arbiter import InputArbiter
from starcatch.motion import MotionMask
from games.StarCatch import config
from games.StarCatch.config import EngineSettings
from games.StarCatch.feedback import ChimePlayer
from games.StarCatch.scoring import ScoreTracker
from games.StarCatch.star import Star
from games.StarCatch.target_field import TargetField

CAMERA_BADGE = "Motion mode"
FALLBACK_BADGE = "Touch mode (offline)"


def frame_to_surface(frame: np.ndarray, size: tuple[int, int]) -> pygame.Surface:
    """Convert a BGR camera frame to a mirrored surface of the given size."""
    mirrored = cv2.flip(frame, 1)
    rgb = cv2.cvtColor(mirrored, cv2.COLOR_BGR2RGB)
    surface = pygame.surfarray.make_surface(rgb.swapaxes(0, 1))
    return pygame.transform.smoothscale(surface, size)


class StarCatchMode:
    """Per-session game logic.

    Owns the score, the target field and the audio feedback. The game loop
    calls update() and render() once per frame.
    """

    NAME = "Star Catch"
    DESCRIPTION = "Wave at the stars to catch them, or tap them if there is no camera."

    def __init__(
        self,
        settings: EngineSettings,
        audio_enabled: bool = config.AUDIO_ENABLED,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
        chime: Optional[ChimePlayer] = None,
    ):
        """
        Args:
            settings: Engine parameters
            audio_enabled: Whether to play the collection chime
            rng: Random source for star placement (inject for tests)
            clock: Monotonic time source (inject for tests)
            chime: Audio feedback; built from audio_enabled if None
        """
        self.settings = settings
        self.score = ScoreTracker()
        self.chime = chime if chime is not None else ChimePlayer(audio_enabled=audio_enabled, rng=rng)
        self.field = TargetField(
            settings,
            self.score,
            on_collect=self.chime.play_collect,
            rng=rng,
            clock=clock,
        )

        self._font: Optional[pygame.font.Font] = None
        self._font_large: Optional[pygame.font.Font] = None

    def get_score(self) -> int:
        return self.score.score

    def reset(self) -> None:
        """Start a fresh session: zero score, no stars."""
        self.score.reset()
        self.field.clear()

    def update(self, mask: MotionMask, arbiter: InputArbiter) -> List[Star]:
        """Run the spawn policy, then hit-test and animate the stars.

        Returns:
            Stars caught this frame
        """
        self.field.try_spawn()
        return self.field.update(mask, arbiter, arbiter.camera_active)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, 32)
        return self._font

    def _get_font_large(self) -> pygame.font.Font:
        if self._font_large is None:
            self._font_large = pygame.font.Font(None, 72)
        return self._font_large

    def render_background(self, screen: pygame.Surface, frame: Optional[np.ndarray],
                          arbiter: InputArbiter) -> None:
        """Mirrored camera video when it is shown, plain fill otherwise."""
        if arbiter.show_video and frame is not None and frame.size > 0:
            screen.blit(frame_to_surface(frame, screen.get_size()), (0, 0))
            overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
            overlay.fill((0, 0, 0, config.VIDEO_DIM_ALPHA))
            screen.blit(overlay, (0, 0))
        else:
            screen.fill(config.BACKGROUND_COLOR)

    def render(self, screen: pygame.Surface, frame: Optional[np.ndarray],
               arbiter: InputArbiter) -> None:
        """Draw background, stars and HUD."""
        self.render_background(screen, frame, arbiter)
        self.field.render(screen)
        self._render_hud(screen, arbiter)

    def _render_hud(self, screen: pygame.Surface, arbiter: InputArbiter) -> None:
        self.score.render(screen)

        font = self._get_font()
        if arbiter.mode == InputMode.CAMERA:
            badge = font.render(CAMERA_BADGE, True, config.BADGE_CAMERA_COLOR)
        else:
            badge = font.render(FALLBACK_BADGE, True, config.BADGE_FALLBACK_COLOR)
        screen.blit(badge, (screen.get_width() - badge.get_width() - 20, 20))

    def fallback_notice(self, arbiter: InputArbiter) -> Optional[str]:
        """Text explaining why touch mode is active, None in camera mode."""
        if arbiter.mode != InputMode.FALLBACK:
            return None
        return (f"[{arbiter.fallback_reason}] No worries, you can still catch "
                f"the stars by tapping or dragging on the screen!")

    def render_start_screen(self, screen: pygame.Surface, arbiter: InputArbiter) -> None:
        """Title, mode badge, fallback notice and start prompt."""
        screen.fill(config.BACKGROUND_COLOR)
        width, height = screen.get_size()
        center_x = width // 2
        y = height // 2 - 120

        title = self._get_font_large().render(self.NAME, True, config.HUD_COLOR)
        screen.blit(title, (center_x - title.get_width() // 2, y))
        y += 90

        font = self._get_font()
        lines = [(self.DESCRIPTION, (200, 200, 200))]
        if arbiter.mode == InputMode.CAMERA:
            lines.append((CAMERA_BADGE, config.BADGE_CAMERA_COLOR))
        elif arbiter.mode == InputMode.FALLBACK:
            lines.append((FALLBACK_BADGE, config.BADGE_FALLBACK_COLOR))
            lines.append((self.fallback_notice(arbiter), config.BADGE_FALLBACK_COLOR))
        lines.append(("Click or press SPACE to start", (150, 150, 150)))

        for text, color in lines:
            surface = font.render(text, True, color)
            screen.blit(surface, (center_x - surface.get_width() // 2, y))
            y += 40

    def render_summary(self, screen: pygame.Surface) -> None:
        """Final score overlay shown after the session stops."""
        width, height = screen.get_size()
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 180))
        screen.blit(overlay, (0, 0))

        center_x = width // 2
        text = self._get_font_large().render(
            f"Final Score: {self.score.display_text}", True, config.HUD_COLOR
        )
        screen.blit(text, (center_x - text.get_width() // 2, height // 2 - 60))

        stats = self._get_font().render(
            f"Stars caught: {self.score.collected}", True, (200, 200, 200)
        )
        screen.blit(stats, (center_x - stats.get_width() // 2, height // 2 + 20))
