"""
Input source implementations.
"""

from starcatch.input.sources.base import InputSource
from starcatch.input.sources.pointer import PointerInputSource

__all__ = ['InputSource', 'PointerInputSource']
