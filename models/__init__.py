"""
Data models for Star Catch.

This package provides the Pydantic data models used across the system:
- Primitives: Basic geometric types (Point2D)
- Star Catch: Star lifecycle and input mode enums, validated score state

Usage:
    >>> from models import Point2D, ScoreData, StarState
"""

from .primitives import (
    Point2D,
)

from .starcatch import (
    StarState,
    InputMode,
    ScoreData,
)

__all__ = [
    'Point2D',
    'StarState',
    'InputMode',
    'ScoreData',
]
