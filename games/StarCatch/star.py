"""
Star Catch - Star entity.

A star fades/grows in, waits to be caught, then bursts outward and expires.

    SPAWNING -> ACTIVE -> COLLECTED -> EXPIRED

SPAWNING and ACTIVE form one "alive" phase: the star is hit-testable from
its first frame and the fade-in is cosmetic only.
"""
from dataclasses import dataclass

import pygame

from models import Point2D, StarState
from games.StarCatch import config

GRADIENT_STEPS = 12


@dataclass
class Star:
    """A collectible target.

    Attributes:
        id: Creation timestamp in milliseconds (unique within a session)
        position: Fractional position in [0, 1] x [0, 1]
        size: Base radius in pixels
        hue: Halo hue in degrees, fixed at spawn
        scale: Animation progress; 0 -> 1 while spawning, grows past 1
            during the burst
        state: Lifecycle state
    """
    id: int
    position: Point2D
    size: float
    hue: float
    scale: float = 0.0
    state: StarState = StarState.SPAWNING

    @property
    def is_alive(self) -> bool:
        """Spawning or active: can still be caught."""
        return self.state in (StarState.SPAWNING, StarState.ACTIVE)

    @property
    def is_collected(self) -> bool:
        return self.state == StarState.COLLECTED

    @property
    def is_expired(self) -> bool:
        return self.state == StarState.EXPIRED

    def advance(self, spawn_rate: float, burst_rate: float, expire_scale: float) -> None:
        """Advance the animation by one frame.

        Args:
            spawn_rate: Scale gained per frame while spawning
            burst_rate: Scale gained per frame after collection
            expire_scale: Burst scale past which the star expires
        """
        if self.state == StarState.SPAWNING:
            self.scale = min(1.0, self.scale + spawn_rate)
            if self.scale >= 1.0:
                self.state = StarState.ACTIVE
        elif self.state == StarState.COLLECTED:
            self.scale += burst_rate
            if self.scale > expire_scale:
                self.state = StarState.EXPIRED

    def collect(self) -> bool:
        """Mark the star as caught.

        Returns:
            True on the first call for an alive star, False afterwards.
            Callers award points only when this returns True.
        """
        if not self.is_alive:
            return False
        self.state = StarState.COLLECTED
        return True

    def alpha(self, expire_scale: float) -> float:
        """Halo opacity in [0, 1]; fades out during the burst."""
        if self.is_collected:
            return max(0.0, 1.0 - self.scale / expire_scale)
        if self.is_expired:
            return 0.0
        return 0.8

    def render(self, screen: pygame.Surface, expire_scale: float) -> None:
        """Draw the star: radial gradient halo plus a solid core."""
        if self.is_expired or self.scale <= 0:
            return

        width, height = screen.get_size()
        cx, cy = self.position.to_pixels(width, height)
        radius = max(1, int(self.size * self.scale))
        alpha = self.alpha(expire_scale)

        halo = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        color = pygame.Color(0)
        # draw.circle overwrites alpha on an SRCALPHA surface, so outer rings
        # drawn first keep the fainter value only where inner rings don't reach
        for step in range(GRADIENT_STEPS):
            t = step / GRADIENT_STEPS
            ring_radius = max(1, int(radius * (1 - t)))
            color.hsla = (
                self.hue % 360,
                config.STAR_HALO_SATURATION,
                config.STAR_HALO_LIGHTNESS,
                100 * alpha * t,
            )
            pygame.draw.circle(halo, color, (radius, radius), ring_radius)
        screen.blit(halo, (cx - radius, cy - radius))

        core_radius = max(1, int(self.size / 4 * self.scale))
        pygame.draw.circle(screen, config.STAR_CORE_COLOR, (cx, cy), core_radius)
