# Pointillist - Frame
"""
Frame type shared by the codec, the transform and the sequence assembler.

A frame is a pixel grid plus the delay it is shown for. Pixel grids are
numpy arrays of shape (height, width, channels) with dtype uint8 and either
3 (RGB) or 4 (RGBA) channels.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import EmptyFrame, UnsupportedPixelFormat

# Fallback delay (in 1/100 s ticks) for frames that don't specify one
DEFAULT_DELAY = 10


def check_pixels(pixels: np.ndarray) -> np.ndarray:
    """Validate the layout of a pixel grid.

    :param pixels: Array to check
    :returns: The same array
    :raises UnsupportedPixelFormat: If it isn't a uint8 RGB/RGBA array
    """
    if not isinstance(pixels, np.ndarray):
        raise UnsupportedPixelFormat(f"Expected numpy array, got {type(pixels).__name__}")
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise UnsupportedPixelFormat(
            f"Expected RGB or RGBA image (H, W, 3|4), got shape {pixels.shape}"
        )
    if pixels.dtype != np.uint8:
        raise UnsupportedPixelFormat(f"Expected uint8 dtype, got {pixels.dtype}")
    return pixels


def check_not_empty(pixels: np.ndarray) -> None:
    """Raise :class:`EmptyFrame` if the grid has no pixels."""
    if pixels.shape[0] == 0 or pixels.shape[1] == 0:
        raise EmptyFrame(f"Frame has zero area: {pixels.shape[1]}x{pixels.shape[0]}")


@dataclass
class Frame:
    """One frame of an animation.

    :ivar pixels: uint8 array of shape (height, width, 3 or 4)
    :ivar delay: Display time in GIF ticks (1/100 s)
    """
    pixels: np.ndarray
    delay: int = DEFAULT_DELAY

    def __post_init__(self):
        check_pixels(self.pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def channels(self) -> int:
        return self.pixels.shape[2]

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple."""
        return (self.width, self.height)

    def with_pixels(self, pixels: np.ndarray, delay: int | None = None) -> 'Frame':
        """Create a new frame with other pixels, keeping the delay unless given."""
        return Frame(pixels=pixels, delay=self.delay if delay is None else delay)


__all__ = ['Frame', 'check_pixels', 'check_not_empty', 'DEFAULT_DELAY']
