"""
Star Catch engine.

Provides:
- camera: live frame source with graceful failure reporting
- motion: frame-differencing motion detector over a low-resolution grid
- input: pointer/touch sources and camera/pointer input arbitration
- logging: per-module loggers and structured session records
"""

__version__ = "1.0.0"
