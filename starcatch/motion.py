"""
Frame-differencing motion detector.

Each frame is downsampled to a small fixed grid (mirrored to match the
mirrored video the player sees) and compared cell by cell with the previous
sample. A cell is "in motion" when the summed absolute difference of its
three colour channels exceeds the sensitivity threshold.

Cost is O(grid size) per frame and the result is deterministic for any two
frames: there is no smoothing or denoising.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import cv2
import numpy as np

from starcatch.logging import get_logger

log = get_logger('motion')

DEFAULT_GRID_WIDTH = 64
DEFAULT_GRID_HEIGHT = 48
DEFAULT_THRESHOLD = 35


@dataclass(frozen=True)
class MotionMask:
    """Per-frame grid of booleans marking cells that changed.

    Attributes:
        cells: Boolean array of shape (height, width)
        width: Grid width in cells (0 for an empty mask)
        height: Grid height in cells (0 for an empty mask)
    """
    cells: np.ndarray
    width: int
    height: int

    @classmethod
    def empty(cls) -> 'MotionMask':
        """Mask for a frame that could not be sampled."""
        return cls(cells=np.zeros((0, 0), dtype=bool), width=0, height=0)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def count(self) -> int:
        """Number of flagged cells."""
        return int(np.count_nonzero(self.cells))

    def cell_for(self, x: float, y: float) -> Tuple[int, int]:
        """Map fractional coordinates onto a (column, row) grid cell.

        Coordinates outside [0, 1] are clamped to the edge cells.
        """
        gx = min(max(int(x * self.width), 0), self.width - 1)
        gy = min(max(int(y * self.height), 0), self.height - 1)
        return gx, gy

    def count_around(self, gx: int, gy: int, radius: int) -> int:
        """Count flagged cells in the square neighbourhood around a cell.

        The (2r+1) x (2r+1) window is clipped to the grid bounds.
        """
        if self.is_empty:
            return 0
        x0, x1 = max(gx - radius, 0), min(gx + radius + 1, self.width)
        y0, y1 = max(gy - radius, 0), min(gy + radius + 1, self.height)
        if x0 >= x1 or y0 >= y1:
            return 0
        return int(np.count_nonzero(self.cells[y0:y1, x0:x1]))


class MotionDetector:
    """Turns successive video frames into motion masks.

    Owns the previous sampled frame; it is overwritten on every successful
    sample and dropped by reset().
    """

    def __init__(
        self,
        grid_width: int = DEFAULT_GRID_WIDTH,
        grid_height: int = DEFAULT_GRID_HEIGHT,
        threshold: float = DEFAULT_THRESHOLD,
        mirror: bool = True,
    ):
        """
        Args:
            grid_width: Sampling grid width in cells
            grid_height: Sampling grid height in cells
            threshold: Per-cell summed channel difference needed to flag
                motion (lower = more sensitive)
            mirror: Flip horizontally to match the mirrored on-screen video

        Raises:
            ValueError: If the grid or threshold is not positive
        """
        if grid_width <= 0 or grid_height <= 0:
            raise ValueError(f"Grid must be positive, got {grid_width}x{grid_height}")
        if threshold <= 0:
            raise ValueError(f"Threshold must be positive, got {threshold}")

        self.grid_width = grid_width
        self.grid_height = grid_height
        self.threshold = threshold
        self.mirror = mirror
        self._previous: Optional[np.ndarray] = None

    @property
    def has_previous(self) -> bool:
        return self._previous is not None

    def reset(self) -> None:
        """Forget the previous frame; the next sample is all-clear."""
        self._previous = None

    def downsample(self, frame: np.ndarray) -> np.ndarray:
        """Shrink a BGR frame to the sampling grid (mirrored if configured)."""
        small = cv2.resize(
            frame, (self.grid_width, self.grid_height), interpolation=cv2.INTER_AREA
        )
        if self.mirror:
            small = cv2.flip(small, 1)
        return small.astype(np.int16)

    def sample(self, frame: Optional[np.ndarray]) -> MotionMask:
        """
        Compute the motion mask for the current frame.

        Args:
            frame: Current BGR frame, or None if the stream is not ready

        Returns:
            MotionMask over the sampling grid; empty if the frame is missing
            or has zero dimensions. The first sample after construction or
            reset() is all-clear.
        """
        if frame is None or frame.ndim != 3 or frame.shape[2] < 3:
            return MotionMask.empty()
        if frame.shape[0] == 0 or frame.shape[1] == 0:
            return MotionMask.empty()

        if frame.shape[2] > 3:
            frame = np.ascontiguousarray(frame[:, :, :3])
        current = self.downsample(frame)

        if self._previous is None:
            cells = np.zeros((self.grid_height, self.grid_width), dtype=bool)
        else:
            diff = np.abs(current - self._previous).sum(axis=2)
            cells = diff > self.threshold

        self._previous = current
        mask = MotionMask(cells=cells, width=self.grid_width, height=self.grid_height)
        log.trace("%d/%d cells in motion", mask.count(), cells.size)
        return mask
