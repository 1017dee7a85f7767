"""
Motion Detector Tests

Frame differencing over the sampling grid, mask helpers and degenerate
frames.

Run with: pytest tests/test_motion.py -v
"""

import numpy as np
import pytest

from starcatch.motion import MotionDetector, MotionMask

from conftest import black_frame


def white_block_frame(x0: int, x1: int) -> np.ndarray:
    frame = black_frame()
    frame[:, x0:x1] = 255
    return frame


class TestMotionDetectorInit:
    """Test MotionDetector construction."""

    def test_defaults(self):
        """Default grid is 64x48 with threshold 35."""
        detector = MotionDetector()
        assert (detector.grid_width, detector.grid_height) == (64, 48)
        assert detector.threshold == 35
        assert not detector.has_previous

    @pytest.mark.parametrize("kwargs", [
        {"grid_width": 0},
        {"grid_height": -1},
        {"threshold": 0},
    ])
    def test_invalid_arguments(self, kwargs):
        """Non-positive grid or threshold is rejected."""
        with pytest.raises(ValueError):
            MotionDetector(**kwargs)


class TestSample:
    """Test MotionDetector.sample()."""

    def test_first_sample_is_all_clear(self):
        """The first frame has nothing to compare against."""
        detector = MotionDetector()
        mask = detector.sample(white_block_frame(0, 320))

        assert mask.cells.shape == (48, 64)
        assert mask.count() == 0
        assert detector.has_previous

    def test_identical_frames_produce_no_motion(self):
        """Two identical frames flag no cells."""
        rng = np.random.default_rng(7)
        frame = rng.integers(0, 256, size=(480, 640, 3), dtype=np.uint8)
        detector = MotionDetector()

        detector.sample(frame)
        mask = detector.sample(frame.copy())

        assert not mask.is_empty
        assert mask.count() == 0

    def test_changed_region_is_mirrored(self):
        """A change on the left of the camera image shows up on the right of the grid."""
        detector = MotionDetector()
        detector.sample(black_frame())
        mask = detector.sample(white_block_frame(0, 160))

        # 160 of 640 pixels is a quarter of the grid width
        assert mask.cells[:, 48:].all()
        assert not mask.cells[:, :48].any()

    def test_without_mirroring(self):
        """mirror=False keeps camera orientation."""
        detector = MotionDetector(mirror=False)
        detector.sample(black_frame())
        mask = detector.sample(white_block_frame(0, 160))

        assert mask.cells[:, :16].all()
        assert not mask.cells[:, 16:].any()

    def test_threshold_monotonicity(self):
        """Raising the threshold never flags more cells."""
        rng = np.random.default_rng(42)
        prev = rng.integers(0, 256, size=(120, 160, 3), dtype=np.uint8)
        cur = rng.integers(0, 256, size=(120, 160, 3), dtype=np.uint8)

        masks = []
        for threshold in (10, 35, 80, 200):
            detector = MotionDetector(threshold=threshold)
            detector.sample(prev)
            masks.append(detector.sample(cur))

        for lower, higher in zip(masks, masks[1:]):
            assert not (higher.cells & ~lower.cells).any()
            assert higher.count() <= lower.count()

    def test_difference_must_exceed_threshold(self):
        """A summed difference equal to the threshold is not motion."""
        detector = MotionDetector(grid_width=4, grid_height=4, threshold=30)
        base = np.full((4, 4, 3), 100, dtype=np.uint8)
        detector.sample(base)

        same_as_threshold = base + 10  # 3 channels x 10 = 30
        assert detector.sample(same_as_threshold).count() == 0

        above = same_as_threshold + 1  # 3 channels x 1 = 3 more
        assert detector.sample(above).count() == 0
        assert detector.sample(above + 11).count() == 16

    def test_none_frame_gives_empty_mask(self):
        """A missing frame yields an empty mask and keeps the previous frame."""
        detector = MotionDetector()
        detector.sample(black_frame())

        mask = detector.sample(None)

        assert mask.is_empty
        assert detector.has_previous

    def test_zero_sized_frame_gives_empty_mask(self):
        """Frames with a zero dimension are skipped."""
        detector = MotionDetector()
        assert detector.sample(np.zeros((0, 640, 3), dtype=np.uint8)).is_empty
        assert detector.sample(np.zeros((480, 0, 3), dtype=np.uint8)).is_empty
        assert not detector.has_previous

    def test_grayscale_frame_gives_empty_mask(self):
        """Frames without colour channels are skipped."""
        detector = MotionDetector()
        assert detector.sample(np.zeros((480, 640), dtype=np.uint8)).is_empty

    def test_bgra_frame_is_accepted(self):
        """A fourth channel is ignored."""
        detector = MotionDetector()
        detector.sample(np.zeros((480, 640, 4), dtype=np.uint8))
        frame = np.zeros((480, 640, 4), dtype=np.uint8)
        frame[:, :, 3] = 255
        mask = detector.sample(frame)

        assert mask.count() == 0

    def test_reset_forgets_previous_frame(self):
        """After reset the next sample is all-clear again."""
        detector = MotionDetector()
        detector.sample(black_frame())
        detector.reset()

        mask = detector.sample(white_block_frame(0, 640))

        assert mask.count() == 0


class TestMotionMask:
    """Test MotionMask helpers."""

    def test_empty(self):
        """empty() has no cells."""
        mask = MotionMask.empty()
        assert mask.is_empty
        assert mask.count() == 0
        assert mask.count_around(0, 0, 3) == 0

    def test_cell_for_maps_and_clamps(self):
        """Fractional coordinates map to grid cells, clamped to the edges."""
        mask = MotionMask(cells=np.zeros((48, 64), dtype=bool), width=64, height=48)

        assert mask.cell_for(0.0, 0.0) == (0, 0)
        assert mask.cell_for(0.5, 0.5) == (32, 24)
        assert mask.cell_for(1.0, 1.0) == (63, 47)
        assert mask.cell_for(-0.2, 1.5) == (0, 47)

    def test_count_around_full_window(self):
        """A (2r+1)^2 window inside the grid."""
        mask = MotionMask(cells=np.ones((48, 64), dtype=bool), width=64, height=48)
        assert mask.count_around(32, 24, 2) == 25

    def test_count_around_clipped_at_corner(self):
        """Windows are clipped to the grid bounds."""
        mask = MotionMask(cells=np.ones((48, 64), dtype=bool), width=64, height=48)
        assert mask.count_around(0, 0, 2) == 9
        assert mask.count_around(63, 47, 1) == 4
