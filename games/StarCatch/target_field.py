"""
Star Catch - Target field.

Owns the star collection: spawn policy, per-frame lifecycle, hit-testing
against the pointer signal and the camera motion mask, and rendering.
"""
import random
import time
from typing import Callable, List, Optional

import pygame

from models import Point2D
from starcatch.input.arbiter import InputArbiter
from starcatch.logging import get_logger
from starcatch.motion import MotionMask
from games.StarCatch import config
from games.StarCatch.config import EngineSettings
from games.StarCatch.scoring import ScoreTracker
from games.StarCatch.star import Star

log = get_logger('target_field')


class TargetField:
    """Manages the stars on screen.

    Hit policy, evaluated once per alive star per frame, first match wins:
    1. A pending pointer within pointer_hit_radius (fractional distance)
       hits, and the pointer signal is consumed.
    2. Otherwise, in camera mode with a non-empty mask, the star hits when
       more than motion_hit_threshold cells are flagged in the square
       neighbourhood of motion_radius cells around the star's grid cell.

    The first hit moves the star to COLLECTED, awards the reward once and
    fires on_collect. Collected stars are never hit-tested again.
    """

    def __init__(
        self,
        settings: EngineSettings,
        score_tracker: ScoreTracker,
        on_collect: Optional[Callable[[], None]] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Args:
            settings: Engine parameters (cap, interval, radii, thresholds)
            score_tracker: Receives the reward for each caught star
            on_collect: Called once per caught star (audio feedback)
            rng: Random source for placement, size and hue
            clock: Monotonic time source in seconds
        """
        self.settings = settings
        self._score = score_tracker
        self._on_collect = on_collect
        self._rng = rng or random.Random()
        self._clock = clock or time.monotonic

        self._stars: List[Star] = []
        self._last_spawn: Optional[float] = None
        self._last_id = -1

    @property
    def stars(self) -> List[Star]:
        return list(self._stars)

    @property
    def alive_count(self) -> int:
        """Stars that are spawning or active."""
        return sum(1 for star in self._stars if star.is_alive)

    def clear(self) -> None:
        """Remove all stars and restart the spawn cooldown."""
        self._stars = []
        self._last_spawn = None

    # -------------------------------------------------------------------------
    # Spawn policy
    # -------------------------------------------------------------------------

    def can_spawn(self, now: float) -> bool:
        if self.alive_count >= self.settings.max_stars:
            return False
        if self._last_spawn is None:
            return True
        return now - self._last_spawn > self.settings.spawn_interval

    def try_spawn(self) -> Optional[Star]:
        """Spawn a star if the cooldown has elapsed and the cap allows it.

        Returns:
            The new star, or None if no star was spawned
        """
        now = self._clock()
        if not self.can_spawn(now):
            return None

        star_id = max(int(now * 1000), self._last_id + 1)
        star = Star(
            id=star_id,
            position=Point2D(
                x=self._rng.uniform(*config.SPAWN_X_RANGE),
                y=self._rng.uniform(*config.SPAWN_Y_RANGE),
            ),
            size=self._rng.uniform(config.STAR_MIN_SIZE, config.STAR_MAX_SIZE),
            hue=self._rng.uniform(0, 360),
        )
        self._stars.append(star)
        self._last_spawn = now
        self._last_id = star_id
        log.debug("Spawned star %d at %s", star.id, star.position)
        return star

    # -------------------------------------------------------------------------
    # Lifecycle and hit-testing
    # -------------------------------------------------------------------------

    def update(self, mask: MotionMask, arbiter: InputArbiter, camera_active: bool) -> List[Star]:
        """Hit-test and animate every star, then drop expired ones.

        Args:
            mask: This frame's motion mask (may be empty)
            arbiter: Source of the one-shot pointer signal
            camera_active: Whether camera motion may count as a hit

        Returns:
            Stars caught this frame
        """
        caught: List[Star] = []
        use_motion = camera_active and not mask.is_empty
        use_pointer = self.settings.accept_pointer or not camera_active

        for star in self._stars:
            if star.is_alive and self._is_hit(star, mask, arbiter, use_motion, use_pointer):
                if star.collect():
                    self._score.award(self.settings.reward)
                    caught.append(star)
                    log.debug("Caught star %d, score %d", star.id, self._score.score)
                    if self._on_collect is not None:
                        self._on_collect()

            star.advance(
                self.settings.spawn_scale_rate,
                self.settings.burst_scale_rate,
                self.settings.expire_scale,
            )

        self._stars = [star for star in self._stars if not star.is_expired]
        return caught

    def _is_hit(self, star: Star, mask: MotionMask, arbiter: InputArbiter,
                use_motion: bool, use_pointer: bool) -> bool:
        pointer = arbiter.peek_pointer() if use_pointer else None
        if pointer is not None:
            if star.position.distance_to(pointer) < self.settings.pointer_hit_radius:
                arbiter.consume_pointer()
                return True

        if use_motion:
            return self.motion_hits(star, mask)
        return False

    def motion_hits(self, star: Star, mask: MotionMask) -> bool:
        """Whether enough motion surrounds the star's grid cell."""
        if mask.is_empty:
            return False
        gx, gy = mask.cell_for(star.position.x, star.position.y)
        flagged = mask.count_around(gx, gy, self.settings.motion_radius)
        return flagged > self.settings.motion_hit_threshold

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render(self, screen: pygame.Surface) -> None:
        """Draw all stars that have not expired."""
        for star in self._stars:
            star.render(screen, self.settings.expire_scale)
