"""
Camera Interface for Star Catch

Provides the abstract frame source used by the motion detector and an
OpenCV implementation. Acquisition failures are reported as
CameraUnavailableError so the input arbiter can fall back to pointer input.
"""

import threading
import time
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Tuple

import cv2
import numpy as np

from starcatch.logging import get_logger

log = get_logger('camera')


class CameraFailure(str, Enum):
    """Why a camera could not be acquired."""
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    UNSUPPORTED = "unsupported"


FAILURE_REASONS = {
    CameraFailure.NOT_FOUND: "no camera detected",
    CameraFailure.PERMISSION_DENIED: "camera access restricted",
    CameraFailure.UNSUPPORTED: "camera capture not supported",
}


class CameraUnavailableError(RuntimeError):
    """Raised when no usable camera stream can be acquired."""

    def __init__(self, failure: CameraFailure, detail: str = ""):
        self.failure = failure
        self.detail = detail
        super().__init__(f"{self.reason}: {detail}" if detail else self.reason)

    @property
    def reason(self) -> str:
        """Human-readable reason for display in the HUD."""
        return FAILURE_REASONS[self.failure]


class CameraInterface(ABC):
    """Abstract live frame source."""

    @abstractmethod
    def read_frame(self) -> Optional[np.ndarray]:
        """
        Read the current frame.

        Returns:
            BGR image (numpy array), or None if no frame is ready yet
        """

    @abstractmethod
    def get_resolution(self) -> Tuple[int, int]:
        """
        Get camera resolution.

        Returns:
            (width, height) of camera
        """

    @abstractmethod
    def release(self) -> None:
        """Release camera resources."""


class OpenCVCamera(CameraInterface):
    """OpenCV-based camera implementation.

    Frames are captured on a background thread. read_frame() returns the
    most recent frame without waiting for the device, so the game loop keeps
    its own pace whatever the camera's frame rate.
    """

    WARMUP_FRAMES = 5
    JOIN_TIMEOUT = 2.0

    def __init__(
        self,
        camera_id: int = 0,
        resolution: Optional[Tuple[int, int]] = None,
        fps: int = 30,
    ):
        """
        Open the camera and start the capture thread.

        If the requested resolution produces no frames, the device is reopened
        once without constraints before giving up.

        Args:
            camera_id: OpenCV camera index (0 = default)
            resolution: Optional (width, height) to request
            fps: Requested frame rate, also the capture thread's pace

        Raises:
            CameraUnavailableError: If no usable stream could be opened
        """
        self.camera_id = camera_id
        self.camera: Optional[cv2.VideoCapture] = None
        self._lock = threading.Lock()
        self._frame: Optional[np.ndarray] = None
        self._running = False
        self._thread: Optional[threading.Thread] = None
        self._frame_interval = 1.0 / fps if fps > 0 else 0.0

        opened = self._open(resolution, fps)
        if not opened and resolution is not None:
            log.info("Camera %d gave no frames at %sx%s, retrying unconstrained",
                     camera_id, resolution[0], resolution[1])
            opened = self._open(None, fps)

        if not opened:
            self.release()
            raise CameraUnavailableError(
                CameraFailure.PERMISSION_DENIED,
                f"camera {camera_id} opened but delivered no frames",
            )

        self._running = True
        self._thread = threading.Thread(target=self._capture_loop, daemon=True)
        self._thread.start()

    def _open(self, resolution: Optional[Tuple[int, int]], fps: int) -> bool:
        """Open the device and warm it up. Returns True once a frame arrives."""
        self.release()
        try:
            self.camera = cv2.VideoCapture(self.camera_id)
            if not self.camera.isOpened():
                self.camera = None
                raise CameraUnavailableError(
                    CameraFailure.NOT_FOUND, f"could not open camera {self.camera_id}"
                )

            if resolution:
                self.camera.set(cv2.CAP_PROP_FRAME_WIDTH, resolution[0])
                self.camera.set(cv2.CAP_PROP_FRAME_HEIGHT, resolution[1])
            self.camera.set(cv2.CAP_PROP_FPS, fps)
            self.camera.set(cv2.CAP_PROP_BUFFERSIZE, 1)  # drop stale frames

            # First few frames can be dark or missing
            latest = None
            for _ in range(self.WARMUP_FRAMES):
                ret, frame = self.camera.read()
                if ret:
                    latest = frame
        except cv2.error as e:
            self.release()
            raise CameraUnavailableError(CameraFailure.UNSUPPORTED, str(e)) from e

        with self._lock:
            self._frame = latest
        return latest is not None

    def _capture_loop(self) -> None:
        """Keep the latest frame current until release() or a backend error."""
        capture = self.camera
        while self._running:
            t0 = time.perf_counter()

            try:
                ret, frame = capture.read()
            except cv2.error as e:
                log.warning("Camera %d stopped delivering frames: %s", self.camera_id, e)
                with self._lock:
                    self._frame = None
                self._running = False
                break

            if ret:
                with self._lock:
                    self._frame = frame

            sleep_time = self._frame_interval - (time.perf_counter() - t0)
            if sleep_time > 0:
                time.sleep(sleep_time)

    def read_frame(self) -> Optional[np.ndarray]:
        """Latest captured frame, or None if the stream has nothing."""
        with self._lock:
            return self._frame

    @property
    def capturing(self) -> bool:
        """Whether the capture thread is still running."""
        return self._thread is not None and self._thread.is_alive()

    def get_resolution(self) -> Tuple[int, int]:
        """Get actual camera resolution."""
        if self.camera is None:
            return (0, 0)
        width = int(self.camera.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(self.camera.get(cv2.CAP_PROP_FRAME_HEIGHT))
        return (width, height)

    def release(self) -> None:
        """Stop the capture thread and release the camera."""
        self._running = False
        if self._thread is not None:
            self._thread.join(timeout=self.JOIN_TIMEOUT)
            self._thread = None
        if self.camera is not None and self.camera.isOpened():
            self.camera.release()
        self.camera = None
        with self._lock:
            self._frame = None

    def __del__(self):
        self.release()
