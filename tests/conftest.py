"""Shared fixtures for Star Catch tests.

pygame runs headless: the dummy SDL drivers are selected before pygame is
imported anywhere.
"""
import os

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import random
from typing import List, Optional, Tuple

import numpy as np
import pygame
import pytest

from starcatch.camera import CameraInterface
from starcatch.input.arbiter import InputArbiter


class FakeCamera(CameraInterface):
    """Camera that replays a list of frames; the last frame repeats."""

    def __init__(self, frames: Optional[List[np.ndarray]] = None,
                 resolution: Tuple[int, int] = (640, 480)):
        self.frames = list(frames or [])
        self.resolution = resolution
        self.reads = 0
        self.release_count = 0

    def read_frame(self) -> Optional[np.ndarray]:
        self.reads += 1
        if not self.frames:
            return None
        if len(self.frames) > 1:
            return self.frames.pop(0)
        return self.frames[0]

    def get_resolution(self) -> Tuple[int, int]:
        return self.resolution

    def release(self) -> None:
        self.release_count += 1


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def black_frame(width: int = 640, height: int = 480) -> np.ndarray:
    return np.zeros((height, width, 3), dtype=np.uint8)


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fallback_arbiter():
    """Arbiter in touch mode (camera disabled)."""
    arbiter = InputArbiter()
    arbiter.initialize(enabled=False)
    return arbiter


@pytest.fixture
def camera_arbiter():
    """Arbiter in motion mode backed by a FakeCamera."""
    arbiter = InputArbiter()
    arbiter.initialize(lambda: FakeCamera([black_frame()]))
    return arbiter


@pytest.fixture
def screen():
    """Headless display surface."""
    pygame.init()
    surface = pygame.display.set_mode((320, 240))
    yield surface
    pygame.quit()
