"""
Input arbitration between camera motion and pointer/touch input.

The arbiter opens the camera once per session. If the camera cannot be
acquired it switches to fallback mode, records a human-readable reason and
hides the video background; it never raises and never retries.

Independently of the mode it holds the latest pointer position. The signal
is last-write-wins and one-shot: consuming it clears it, so a stationary
cursor over a star can trigger at most one hit before new pointer activity.
"""
from typing import Callable, Optional

import cv2
import numpy as np

from models import InputMode, Point2D
from starcatch.camera import CameraInterface, CameraUnavailableError, OpenCVCamera
from starcatch.logging import get_logger

log = get_logger('input')

CameraFactory = Callable[[], CameraInterface]

CAMERA_DISABLED_REASON = "camera disabled"
CAMERA_ERROR_REASON = "camera unavailable"


class InputArbiter:
    """Chooses the input mode and owns the transient pointer signal.

    Attributes:
        mode: CAMERA or FALLBACK; None until initialize() has run
        fallback_reason: Why fallback mode was chosen, None in camera mode
    """

    def __init__(self):
        self._mode: Optional[InputMode] = None
        self._fallback_reason: Optional[str] = None
        self._camera: Optional[CameraInterface] = None
        self._last_pointer: Optional[Point2D] = None

    # -------------------------------------------------------------------------
    # Mode selection
    # -------------------------------------------------------------------------

    def initialize(
        self,
        camera_factory: Optional[CameraFactory] = None,
        enabled: bool = True,
    ) -> InputMode:
        """
        Open the camera and pick the input mode.

        Args:
            camera_factory: Opens the camera; defaults to OpenCVCamera()
            enabled: False forces fallback mode without opening the camera

        Returns:
            The chosen mode. Once chosen it is fixed for the session, so
            later calls return it without opening the camera again.
        """
        if self._mode is not None:
            return self._mode

        if not enabled:
            self._set_fallback(CAMERA_DISABLED_REASON)
            return self._mode

        factory = camera_factory or OpenCVCamera
        try:
            self._camera = factory()
        except CameraUnavailableError as e:
            log.info("Switching to touch mode: %s", e)
            self._set_fallback(e.reason)
            return self._mode
        except (cv2.error, RuntimeError, OSError):
            log.exception("Camera failed to open, switching to touch mode")
            self._set_fallback(CAMERA_ERROR_REASON)
            return self._mode

        self._mode = InputMode.CAMERA
        log.info("Camera ready, motion mode enabled")
        return self._mode

    def _set_fallback(self, reason: str) -> None:
        self._camera = None
        self._mode = InputMode.FALLBACK
        self._fallback_reason = reason

    @property
    def mode(self) -> Optional[InputMode]:
        return self._mode

    @property
    def camera_active(self) -> bool:
        return self._mode == InputMode.CAMERA and self._camera is not None

    @property
    def fallback_reason(self) -> Optional[str]:
        return self._fallback_reason

    @property
    def show_video(self) -> bool:
        """Whether the hosting UI should draw the camera background."""
        return self.camera_active

    def read_frame(self) -> Optional[np.ndarray]:
        """Current camera frame, or None in fallback mode or before the stream is ready."""
        if not self.camera_active:
            return None
        return self._camera.read_frame()

    def release(self) -> None:
        """Release the camera handle if held. Safe to call repeatedly."""
        if self._camera is not None:
            self._camera.release()
            self._camera = None
            log.debug("Camera released")

    # -------------------------------------------------------------------------
    # Pointer signal
    # -------------------------------------------------------------------------

    def record_pointer(self, x: float, y: float) -> None:
        """Store the latest pointer position (fractional, clamped to [0, 1])."""
        self._last_pointer = Point2D(x=min(max(x, 0.0), 1.0), y=min(max(y, 0.0), 1.0))

    def consume_pointer(self) -> Optional[Point2D]:
        """Return the pending pointer position and clear it."""
        pointer, self._last_pointer = self._last_pointer, None
        return pointer

    def peek_pointer(self) -> Optional[Point2D]:
        """Return the pending pointer position without clearing it."""
        return self._last_pointer

    @property
    def has_pointer(self) -> bool:
        return self._last_pointer is not None

    def clear_pointer(self) -> None:
        self._last_pointer = None
