"""
Pointer Event - a single pointer or touch sample.

Uses dataclass for immutability.
"""
from dataclasses import dataclass

from models import Point2D


@dataclass(frozen=True)
class PointerEvent:
    """Immutable pointer/touch sample from any source.

    Attributes:
        position: Fractional screen position in [0, 1] x [0, 1]
        timestamp: Time when the event occurred (seconds, from monotonic clock)
        touch: True if the sample came from a touch screen
    """
    position: Point2D
    timestamp: float
    touch: bool = False

    def __post_init__(self):
        """Validate timestamp is non-negative."""
        if self.timestamp < 0:
            raise ValueError(f'Timestamp must be non-negative, got {self.timestamp}')

    def __str__(self) -> str:
        source = "touch" if self.touch else "mouse"
        return (f"PointerEvent(pos=({self.position.x:.3f}, {self.position.y:.3f}), "
                f"t={self.timestamp:.3f}, {source})")
