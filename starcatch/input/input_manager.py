"""
Input Manager - Collects pointer input from the active source.
"""
from typing import List, Optional

from starcatch.input.input_event import PointerEvent
from starcatch.input.sources.base import InputSource


class InputManager:
    """Manages input sources and collects events.

    The InputManager keeps game logic independent of the concrete input source.
    """

    def __init__(self, source: Optional[InputSource] = None):
        """Initialize with an optional input source."""
        self._source = source

    def get_source(self) -> Optional[InputSource]:
        return self._source

    def has_source(self) -> bool:
        return self._source is not None

    def update(self, dt: float) -> None:
        """Update the active input source.

        Args:
            dt: Delta time in seconds since last update.
        """
        if self._source is not None:
            self._source.update(dt)

    def get_events(self) -> List[PointerEvent]:
        """Get collected events since last update."""
        if self._source is None:
            return []
        return self._source.poll_events()

    def clear_events(self) -> None:
        """Clear any pending events from the active source."""
        if self._source is not None:
            self._source.poll_events()

    def resize(self, width: int, height: int) -> None:
        """Forward a surface size change to the active source."""
        if self._source is not None:
            self._source.resize(width, height)
