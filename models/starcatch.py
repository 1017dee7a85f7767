"""
Star Catch models.

Enumerations for the star lifecycle and the input mode, and the validated,
immutable score state.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class StarState(str, Enum):
    """States a star moves through during its lifecycle.

    Attributes:
        SPAWNING: Fading/growing in; already hit-testable
        ACTIVE: Fully grown and waiting to be caught
        COLLECTED: Caught; playing its burst animation
        EXPIRED: Burst finished; removed from the field
    """
    SPAWNING = "spawning"
    ACTIVE = "active"
    COLLECTED = "collected"
    EXPIRED = "expired"


class InputMode(str, Enum):
    """Input modality chosen once per session.

    Attributes:
        CAMERA: Camera motion (pointer/touch still accepted)
        FALLBACK: Pointer/touch only; camera unavailable or disabled
    """
    CAMERA = "camera"
    FALLBACK = "fallback"


class ScoreData(BaseModel):
    """Immutable score state.

    Attributes:
        score: Points earned this session (non-negative)
        collected: Stars caught this session (non-negative)

    Examples:
        >>> ScoreData(score=30, collected=3).score
        30
    """
    score: int = 0
    collected: int = 0

    model_config = ConfigDict(frozen=True)

    @field_validator('score', 'collected')
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Validate score values are non-negative."""
        if v < 0:
            raise ValueError(f'Score values must be non-negative, got {v}')
        return v
