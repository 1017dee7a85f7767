"""
Base Input Source - Abstract interface for pointer backends.
"""
from abc import ABC, abstractmethod
from typing import List

from starcatch.input.input_event import PointerEvent


class InputSource(ABC):
    """Abstract base class for input sources.

    All pointer backends must implement this interface.
    """

    @abstractmethod
    def poll_events(self) -> List[PointerEvent]:
        """Poll for new input events.

        Returns:
            List of PointerEvent objects since last poll.
        """

    @abstractmethod
    def update(self, dt: float) -> None:
        """Update the input source, collecting events.

        Args:
            dt: Delta time in seconds since last update.
        """

    def resize(self, width: int, height: int) -> None:
        """Called when the hosting surface changes size."""
