"""
Star Catch - Configuration loader.

Loads settings from .env file in the game directory, with sensible defaults.
Real environment variables take precedence over the .env file.
"""
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from game directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes', 'on')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Display
SCREEN_WIDTH = _get_int('SCREEN_WIDTH', 1280)
SCREEN_HEIGHT = _get_int('SCREEN_HEIGHT', 720)
FPS = _get_int('FPS', 60)

# Camera
CAMERA_ENABLED = _get_bool('CAMERA_ENABLED', True)
CAMERA_ID = _get_int('CAMERA_ID', 0)
CAMERA_WIDTH = _get_int('CAMERA_WIDTH', 640)
CAMERA_HEIGHT = _get_int('CAMERA_HEIGHT', 480)

# Motion sampling grid
MOTION_GRID_WIDTH = _get_int('MOTION_GRID_WIDTH', 64)
MOTION_GRID_HEIGHT = _get_int('MOTION_GRID_HEIGHT', 48)

# Scoring
STAR_REWARD = _get_int('STAR_REWARD', 10)

# Star appearance
STAR_MIN_SIZE = _get_float('STAR_MIN_SIZE', 30.0)  # base radius in pixels
STAR_MAX_SIZE = _get_float('STAR_MAX_SIZE', 60.0)

# Spawn area: centered sub-rectangle of the unit square
SPAWN_X_RANGE = (0.15, 0.85)
SPAWN_Y_RANGE = (0.2, 0.8)

# Audio
AUDIO_ENABLED = _get_bool('AUDIO_ENABLED', True)
CHIME_VOLUME = _get_float('CHIME_VOLUME', 0.1)

# Visual
BACKGROUND_COLOR = (10, 10, 20)
VIDEO_DIM_ALPHA = 70          # dark overlay drawn over the camera background
HUD_COLOR = (255, 255, 255)
BADGE_CAMERA_COLOR = (120, 220, 255)
BADGE_FALLBACK_COLOR = (255, 190, 90)
STAR_CORE_COLOR = (255, 255, 255)
STAR_HALO_SATURATION = 90
STAR_HALO_LIGHTNESS = 65


@dataclass(frozen=True)
class EngineSettings:
    """Every tunable parameter of the interaction engine.

    One engine serves both the camera-only and the camera-with-touch
    variants; they differ only in these values.
    """
    name: str
    sensitivity: float            # per-cell summed RGB difference threshold
    max_stars: int                # cap on spawning + active stars
    spawn_interval: float         # seconds between spawns
    pointer_hit_radius: float     # fractional distance counting as a pointer hit
    motion_radius: int            # neighbourhood radius in grid cells
    motion_hit_threshold: int     # flagged cells needed (strictly more than)
    expire_scale: float           # burst scale at which a collected star expires
    accept_pointer: bool = True   # pointer hits while the camera is active
    spawn_scale_rate: float = 0.1  # scale gained per frame while spawning
    burst_scale_rate: float = 0.2  # scale gained per frame after collection
    reward: int = STAR_REWARD

    @property
    def neighbourhood_cells(self) -> int:
        side = 2 * self.motion_radius + 1
        return side * side

    def with_overrides(self, **overrides) -> 'EngineSettings':
        """Copy with the given fields replaced; None values are ignored."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)

    def validate(self) -> 'EngineSettings':
        """Raise ValueError if any value is out of range."""
        if self.sensitivity <= 0:
            raise ValueError(f"sensitivity must be positive, got {self.sensitivity}")
        if self.max_stars < 1:
            raise ValueError(f"max_stars must be at least 1, got {self.max_stars}")
        if self.spawn_interval < 0:
            raise ValueError(f"spawn_interval must be non-negative, got {self.spawn_interval}")
        if not 0 < self.pointer_hit_radius <= 1:
            raise ValueError(f"pointer_hit_radius must be in (0, 1], got {self.pointer_hit_radius}")
        if self.motion_radius < 0:
            raise ValueError(f"motion_radius must be non-negative, got {self.motion_radius}")
        if not 0 <= self.motion_hit_threshold < self.neighbourhood_cells:
            raise ValueError(
                f"motion_hit_threshold must be in [0, {self.neighbourhood_cells}), "
                f"got {self.motion_hit_threshold}"
            )
        if self.expire_scale <= 1:
            raise ValueError(f"expire_scale must be greater than 1, got {self.expire_scale}")
        if self.spawn_scale_rate <= 0 or self.burst_scale_rate <= 0:
            raise ValueError("scale rates must be positive")
        if self.reward < 0:
            raise ValueError(f"reward must be non-negative, got {self.reward}")
        return self


# Variant presets
ENGINE_PRESETS = {
    'gesture': EngineSettings(
        name='gesture',           # camera motion; touch only in fallback
        sensitivity=40,
        max_stars=5,
        spawn_interval=1.5,
        pointer_hit_radius=0.15,
        motion_radius=3,
        motion_hit_threshold=20,  # of 49 cells (~40%)
        expire_scale=3.0,
        accept_pointer=False,
    ),
    'hybrid': EngineSettings(
        name='hybrid',            # camera with touch fallback
        sensitivity=35,
        max_stars=6,
        spawn_interval=1.0,
        pointer_hit_radius=0.15,
        motion_radius=2,
        motion_hit_threshold=9,   # of 25 cells (~36%)
        expire_scale=4.0,
    ),
}

DEFAULT_PRESET = os.getenv('STAR_PRESET', 'hybrid')


def get_engine_settings(name: Optional[str] = None, **overrides) -> EngineSettings:
    """Look up a preset by name and apply overrides.

    Raises:
        ValueError: If the preset is unknown or the result is invalid
    """
    name = name or DEFAULT_PRESET
    if name not in ENGINE_PRESETS:
        raise ValueError(f"Unknown preset '{name}', choose from {sorted(ENGINE_PRESETS)}")
    return ENGINE_PRESETS[name].with_overrides(**overrides).validate()
