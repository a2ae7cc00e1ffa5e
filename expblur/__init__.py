"""
expblur - Fixed-point exponential blur for RGBA8 pixel buffers
"""

__version__ = "0.1.0"

from .exceptions import ExpBlurError, InvalidBufferError, InvalidPrecisionError, InvalidRadiusError
from .kernel import (
    ACCUMULATOR_DTYPE,
    CHANNELS,
    DEFAULT_APREC,
    DEFAULT_ZPREC,
    accumulate,
    apply_blur,
    derive_alpha,
    sweep_line,
    sweep_lines,
)

__all__ = [
    # Core blur
    "apply_blur",
    "derive_alpha",
    "accumulate",
    "sweep_line",
    "sweep_lines",
    # Constants
    "ACCUMULATOR_DTYPE",
    "CHANNELS",
    "DEFAULT_APREC",
    "DEFAULT_ZPREC",
    # Errors
    "ExpBlurError",
    "InvalidBufferError",
    "InvalidPrecisionError",
    "InvalidRadiusError",
]
