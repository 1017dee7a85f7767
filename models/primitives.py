"""
Shared primitive data types.

This module provides the basic geometric types used throughout the engine
and the game: fractional screen positions.
"""

import math

from pydantic import BaseModel, ConfigDict


class Point2D(BaseModel):
    """Immutable 2D point.

    Used for any 2D coordinate. Star positions and pointer positions are
    fractional coordinates in [0, 1] x [0, 1], independent of the window
    size; (0, 0) is the top-left corner.

    Attributes:
        x: X coordinate (horizontal)
        y: Y coordinate (vertical)

    Examples:
        >>> origin = Point2D(x=0.0, y=0.0)
        >>> origin.distance_to(Point2D(x=0.3, y=0.4))
        0.5
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def distance_to(self, other: 'Point2D') -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_pixels(self, width: int, height: int) -> tuple[int, int]:
        """Scale a fractional point to integer pixel coordinates."""
        return int(self.x * width), int(self.y * height)

    def __str__(self) -> str:
        return f"Point2D(x={self.x:.3f}, y={self.y:.3f})"
