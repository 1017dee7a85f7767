"""Tests for ScoreTracker and ScoreData."""

import pygame
import pytest
from pydantic import ValidationError

from models import ScoreData
from games.StarCatch.scoring import ScoreTracker


class TestScoreData:
    """Test the immutable score model."""

    def test_defaults(self):
        data = ScoreData()
        assert data.score == 0
        assert data.collected == 0

    def test_negative_rejected(self):
        """Negative values fail validation."""
        with pytest.raises(ValidationError):
            ScoreData(score=-1)

    def test_frozen(self):
        data = ScoreData(score=10, collected=1)
        with pytest.raises(ValidationError):
            data.score = 20


class TestScoreTracker:
    """Test ScoreTracker."""

    def test_award(self):
        """Each award adds points and counts one star."""
        tracker = ScoreTracker()
        tracker.award(10)
        tracker.award(10)

        assert tracker.score == 20
        assert tracker.collected == 2

    def test_negative_award_rejected(self):
        tracker = ScoreTracker()
        with pytest.raises(ValueError):
            tracker.award(-10)
        assert tracker.score == 0

    def test_reset(self):
        tracker = ScoreTracker(ScoreData(score=50, collected=5))
        tracker.reset()
        assert tracker.score == 0
        assert tracker.collected == 0

    def test_stats_snapshot_unchanged_by_later_awards(self):
        """get_stats() returns a snapshot."""
        tracker = ScoreTracker()
        tracker.award(10)
        snapshot = tracker.get_stats()

        tracker.award(10)

        assert snapshot.score == 10
        assert tracker.get_stats().score == 20

    @pytest.mark.parametrize("points,text", [
        (0, "000"),
        (10, "010"),
        (990, "990"),
        (1230, "1230"),
    ])
    def test_display_text_padded(self, points, text):
        """Score is shown with at least three digits."""
        tracker = ScoreTracker(ScoreData(score=points))
        assert tracker.display_text == text

    def test_render(self, screen):
        """Rendering draws something in the HUD corner."""
        tracker = ScoreTracker(ScoreData(score=10))
        screen.fill((0, 0, 0))

        tracker.render(screen)

        assert pygame.surfarray.array3d(screen)[:100, :100].max() > 0
