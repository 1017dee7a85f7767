"""
Pointer Input Source - mouse and touch input.

Converts pygame pointer events into PointerEvents in fractional screen
coordinates. A sample is produced on every press and on every move while a
button or finger is down.
"""
import time
from typing import List

import pygame

from models import Point2D
from starcatch.input.input_event import PointerEvent
from starcatch.input.sources.base import InputSource


class PointerInputSource(InputSource):
    """Mouse and touch input source using pygame events.

    Mouse positions are normalized by the current surface size; finger
    events already arrive normalized. Mouse events that SDL synthesizes
    from touches are skipped so a touch is not counted twice. Events this
    source does not consume are re-posted for the main loop.

    Examples:
        >>> source = PointerInputSource(1280, 720)
        >>> source.update(0.016)  # Process pygame events
        >>> events = source.poll_events()
    """

    def __init__(self, width: int, height: int):
        """
        Args:
            width: Width of the hosting surface in pixels
            height: Height of the hosting surface in pixels
        """
        self._event_queue: List[PointerEvent] = []
        self._width = 1
        self._height = 1
        self.resize(width, height)

    @property
    def size(self) -> tuple[int, int]:
        return self._width, self._height

    def resize(self, width: int, height: int) -> None:
        """Update the normalization size after a window resize."""
        self._width = max(1, int(width))
        self._height = max(1, int(height))

    def poll_events(self) -> List[PointerEvent]:
        """Get new pointer events since last poll."""
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def update(self, dt: float) -> None:
        """Process pygame events and collect pointer samples."""
        for event in pygame.event.get():
            if not self.handle_event(event):
                # Re-post for the main loop (QUIT, keys, resize...)
                pygame.event.post(event)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Convert one pygame event. Returns True if it was a pointer event."""
        if event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1 and not getattr(event, 'touch', False):
                self._add_mouse(event.pos)
            return True

        if event.type == pygame.MOUSEMOTION:
            if any(event.buttons) and not getattr(event, 'touch', False):
                self._add_mouse(event.pos)
            return True

        if event.type in (pygame.FINGERDOWN, pygame.FINGERMOTION):
            self._add(event.x, event.y, touch=True)
            return True

        if event.type in (pygame.MOUSEBUTTONUP, pygame.FINGERUP, pygame.MOUSEWHEEL):
            return True

        return False

    def _add_mouse(self, pos) -> None:
        pos_x, pos_y = pos
        self._add(pos_x / self._width, pos_y / self._height, touch=False)

    def _add(self, x: float, y: float, touch: bool) -> None:
        position = Point2D(x=min(max(x, 0.0), 1.0), y=min(max(y, 0.0), 1.0))
        self._event_queue.append(
            PointerEvent(position=position, timestamp=time.monotonic(), touch=touch)
        )

    def clear(self) -> None:
        """Clear the event queue."""
        self._event_queue.clear()
