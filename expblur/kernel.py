"""Exponential blur on RGBA8 pixel buffers.

Approximates a Gaussian blur with a cascade of first-order IIR filters in
fixed-point arithmetic. Every row is swept forward then backward, after which
every column of the row-blurred result is swept the same way.

Usage:
    from expblur.kernel import apply_blur

    pixels = bytearray(png_rgba_bytes)
    apply_blur(pixels, width=64, height=32, radius=5)
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Union

import numpy as np

from .exceptions import InvalidBufferError, InvalidPrecisionError, InvalidRadiusError

logger = logging.getLogger(__name__)

CHANNELS = 4

DEFAULT_APREC = 16
DEFAULT_ZPREC = 7

APREC_RANGE = (1, 16)
ZPREC_RANGE = (0, 8)

# Signed 64-bit: alpha * ((255 << 8) - z) stays below 2**32 at the widest
# precisions, and >> on a signed integer is a floor shift.
ACCUMULATOR_DTYPE = np.int64

PixelBuffer = Union[bytes, bytearray, memoryview, np.ndarray]


# ============================================================================
# Coefficient
# ============================================================================

def derive_alpha(radius: float, aprec: int = DEFAULT_APREC) -> int:
    """Decay coefficient for ``radius`` as a fixed-point fraction of ``1 << aprec``.

    The constant 2.3 is roughly ``-ln(0.1)``, so about 90% of the kernel's
    mass lies within ``radius`` pixels of the center.

    Raises:
        InvalidRadiusError: If ``radius`` is not finite or is not above -1.
    """
    _validate_radius(radius)
    if radius <= -1:
        raise InvalidRadiusError(f"radius must be greater than -1, got {radius}")
    return int(math.floor((1 << aprec) * (1.0 - math.exp(-2.3 / (radius + 1)))))


# ============================================================================
# Accumulator update
# ============================================================================

def accumulate(
    z: np.ndarray,
    samples: np.ndarray,
    alpha: int,
    aprec: int,
    zprec: int,
) -> tuple[np.ndarray, np.ndarray]:
    """Move the accumulator a step of ``alpha / 2**aprec`` toward ``samples``.

    Args:
        z: Accumulator state, ``ACCUMULATOR_DTYPE``, last axis is the channel.
        samples: Pixel samples with the same shape as ``z``.
        alpha: Decay coefficient from :func:`derive_alpha`.
        aprec: Fractional bits of ``alpha``.
        zprec: Extra fractional bits carried by ``z``.

    Returns:
        ``(new_z, smoothed)`` where ``smoothed`` is ``new_z >> zprec``.
    """
    target = samples.astype(ACCUMULATOR_DTYPE) << zprec
    z = z + ((alpha * (target - z)) >> aprec)
    return z, z >> zprec


# ============================================================================
# Line sweep
# ============================================================================

def sweep_lines(
    lines: np.ndarray,
    alpha: int,
    aprec: int = DEFAULT_APREC,
    zprec: int = DEFAULT_ZPREC,
    forward_only: bool = False,
) -> None:
    """Sweep a batch of independent lines in place.

    ``lines`` is a writable uint8 view shaped ``(n_lines, length, 4)``. Each
    line gets its own accumulator, seeded from its first pixel (clamp to
    edge). The forward pass visits positions ``0 .. length-2``, the backward
    pass ``length-2 .. 0`` continuing from the forward state.
    """
    length = lines.shape[1]
    z = lines[:, 0, :].astype(ACCUMULATOR_DTYPE) << zprec

    for index in range(length - 1):
        z, lines[:, index, :] = accumulate(z, lines[:, index, :], alpha, aprec, zprec)

    if forward_only:
        return

    for index in range(length - 2, -1, -1):
        z, lines[:, index, :] = accumulate(z, lines[:, index, :], alpha, aprec, zprec)


def sweep_line(
    pixels: np.ndarray,
    start: int,
    stride: int,
    length: int,
    alpha: int,
    aprec: int = DEFAULT_APREC,
    zprec: int = DEFAULT_ZPREC,
    forward_only: bool = False,
) -> None:
    """Sweep a single line of a flat, writable uint8 buffer in place.

    The line's ``i``-th pixel starts at byte offset ``start + i * stride``.
    Rows use ``stride=4``, columns ``stride=width*4``.
    """
    if not isinstance(pixels, np.ndarray) or pixels.dtype != np.uint8 or pixels.ndim != 1:
        raise InvalidBufferError(f"Expected a flat uint8 array, got {type(pixels).__name__}")
    if not pixels.flags.writeable:
        raise InvalidBufferError("Expected a writable pixel array")
    if length < 1:
        return
    if start < 0 or start + (length - 1) * stride + CHANNELS > pixels.size:
        raise InvalidBufferError(
            f"Line of {length} pixels at offset {start} with stride {stride} "
            f"exceeds buffer of {pixels.size} bytes"
        )
    itemsize = pixels.itemsize
    line = np.lib.stride_tricks.as_strided(
        pixels[start:],
        shape=(1, length, CHANNELS),
        strides=(0, stride * itemsize, itemsize),
        writeable=True,
    )
    sweep_lines(line, alpha, aprec, zprec, forward_only=forward_only)


# ============================================================================
# Orchestrator
# ============================================================================

def _validate_radius(radius: float) -> None:
    """Reject radii that are not finite real numbers."""
    if isinstance(radius, bool) or not isinstance(radius, numbers.Real):
        raise InvalidRadiusError(f"radius must be a real number, got {type(radius).__name__}")
    if not math.isfinite(radius):
        raise InvalidRadiusError(f"radius must be finite, got {radius}")


def _validate_precision(aprec: int, zprec: int) -> None:
    """Reject precisions whose intermediate products are not covered."""
    for label, value in (('aprec', aprec), ('zprec', zprec)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidPrecisionError(f"{label} must be an integer, got {value!r}")
    lo, hi = APREC_RANGE
    if not lo <= aprec <= hi:
        raise InvalidPrecisionError(f"aprec must be in [{lo}, {hi}], got {aprec}")
    lo, hi = ZPREC_RANGE
    if not lo <= zprec <= hi:
        raise InvalidPrecisionError(f"zprec must be in [{lo}, {hi}], got {zprec}")


def _as_pixel_array(pixels: PixelBuffer, width: int, height: int) -> np.ndarray:
    """View ``pixels`` as a flat uint8 array, validating its layout."""
    if width <= 0 or height <= 0:
        raise InvalidBufferError(f"Expected positive dimensions, got {width}x{height}")

    if isinstance(pixels, np.ndarray):
        if pixels.dtype != np.uint8:
            raise InvalidBufferError(f"Expected uint8 dtype, got {pixels.dtype}")
        if pixels.ndim == 3 and pixels.shape != (height, width, CHANNELS):
            raise InvalidBufferError(
                f"Expected image ({height}, {width}, {CHANNELS}), got shape {pixels.shape}"
            )
        if pixels.ndim not in (1, 3):
            raise InvalidBufferError(f"Expected flat or (H, W, 4) array, got shape {pixels.shape}")
        if not pixels.flags.c_contiguous:
            raise InvalidBufferError("Expected a C-contiguous pixel array")
        flat = pixels.reshape(-1)
    elif isinstance(pixels, (bytes, bytearray, memoryview)):
        flat = np.frombuffer(pixels, dtype=np.uint8)
    else:
        raise InvalidBufferError(f"Unsupported pixel buffer type: {type(pixels).__name__}")

    expected = width * height * CHANNELS
    if flat.size != expected:
        raise InvalidBufferError(
            f"Buffer of {flat.size} bytes does not match {width}x{height}x{CHANNELS} = {expected}"
        )
    return flat


def apply_blur(
    pixels: PixelBuffer,
    width: int,
    height: int,
    radius: float,
    aprec: int = DEFAULT_APREC,
    zprec: int = DEFAULT_ZPREC,
) -> PixelBuffer:
    """Blur an RGBA8 buffer in place and return it.

    Writable buffers (numpy arrays, ``bytearray``, writable ``memoryview``)
    are mutated and returned. Read-only buffers are blurred on a copy: a
    read-only array yields a new array of the same shape, ``bytes`` or a
    read-only ``memoryview`` yields new ``bytes`` of the same layout.

    A ``radius`` below 1 is a no-op.

    Raises:
        InvalidBufferError: If the buffer does not hold ``width*height*4`` bytes.
        InvalidPrecisionError: If ``aprec`` or ``zprec`` is out of range.
        InvalidRadiusError: If ``radius`` is not a finite real number.
    """
    _validate_radius(radius)
    _validate_precision(aprec, zprec)
    flat = _as_pixel_array(pixels, width, height)

    if radius < 1:
        logger.debug(f"Radius {radius} < 1, skipping blur of {width}x{height} buffer")
        return pixels

    readonly = not flat.flags.writeable
    if readonly:
        flat = flat.copy()

    alpha = derive_alpha(radius, aprec)
    logger.debug(f"Blurring {width}x{height} buffer: radius={radius} alpha={alpha} "
                 f"aprec={aprec} zprec={zprec}")

    image = flat.reshape(height, width, CHANNELS)
    # Rows first; columns read the row-blurred result.
    sweep_lines(image, alpha, aprec, zprec)
    sweep_lines(image.transpose(1, 0, 2), alpha, aprec, zprec)

    if readonly:
        if isinstance(pixels, np.ndarray):
            return image.reshape(pixels.shape)
        return flat.tobytes()
    return pixels
