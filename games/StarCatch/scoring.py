"""
Score tracking for Star Catch.

The score only ever grows during a session. It is awarded from exactly one
place, the collection transition in TargetField, so each star pays out at
most once.

Examples:
    >>> tracker = ScoreTracker()
    >>> tracker.award(10)
    >>> tracker.score
    10
    >>> tracker.display_text
    '010'
"""

from typing import Optional

import pygame

from models import ScoreData
from games.StarCatch import config


class ScoreTracker:
    """Monotonic session score.

    Holds an immutable ScoreData snapshot that is replaced on each award,
    so snapshots handed out by get_stats() never change underneath callers.
    """

    def __init__(self, score: Optional[ScoreData] = None):
        """Initialize score tracker.

        Args:
            score: Initial score data. If None, starts with zeros.
        """
        self._score = score if score is not None else ScoreData()
        self._font: Optional[pygame.font.Font] = None

    def award(self, points: int) -> None:
        """Add points for one caught star.

        Raises:
            ValueError: If points is negative
        """
        if points < 0:
            raise ValueError(f"Cannot award negative points: {points}")
        self._score = ScoreData(
            score=self._score.score + points,
            collected=self._score.collected + 1,
        )

    def reset(self) -> None:
        """Zero the counter at session start."""
        self._score = ScoreData()

    @property
    def score(self) -> int:
        return self._score.score

    @property
    def collected(self) -> int:
        return self._score.collected

    def get_stats(self) -> ScoreData:
        """Current immutable score snapshot."""
        return self._score

    @property
    def display_text(self) -> str:
        """Score zero-padded to three digits."""
        return f"{self.score:03d}"

    def render(self, screen: pygame.Surface, x: int = 20, y: int = 20) -> None:
        """Draw the score in the top-left corner."""
        if self._font is None:
            self._font = pygame.font.Font(None, 64)
        text = self._font.render(self.display_text, True, config.HUD_COLOR)
        screen.blit(text, (x, y))
