"""
Input layer for Star Catch.

Pointer and touch input is normalized to fractional screen coordinates and
arbitrated against camera motion by the InputArbiter.
"""

from starcatch.input.input_event import PointerEvent
from starcatch.input.input_manager import InputManager
from starcatch.input.arbiter import InputArbiter

__all__ = ['PointerEvent', 'InputManager', 'InputArbiter']
