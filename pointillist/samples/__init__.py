# Pointillist - Sample Animations
"""
Synthetic sample animations for demos and testing.

All samples are generated on the fly, so nothing needs to be shipped or
downloaded. Every function returns a list of RGBA :class:`Frame` objects.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from pointillist.frame import DEFAULT_DELAY, Frame


def solid(
    width: int = 16,
    height: int = 16,
    color: tuple[int, int, int, int] = (200, 40, 40, 255),
    frames: int = 1,
    delay: int = DEFAULT_DELAY,
) -> list[Frame]:
    """Frames filled with a single color."""
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[:, :] = color
    return [Frame(pixels.copy(), delay=delay) for _ in range(frames)]


def gradient(width: int = 64, height: int = 32, frames: int = 4, delay: int = DEFAULT_DELAY) -> list[Frame]:
    """Horizontal black to white gradient, shifting right every frame."""
    result = []
    for i in range(frames):
        xs = (np.arange(width) + i * max(1, width // max(frames, 1))) % width
        ramp = (xs * 255 // max(width - 1, 1)).astype(np.uint8)
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :, :3] = ramp[None, :, None]
        pixels[:, :, 3] = 255
        result.append(Frame(pixels, delay=delay))
    return result


def checkerboard(
    width: int = 64,
    height: int = 64,
    square: int = 8,
    frames: int = 2,
    delay: int = DEFAULT_DELAY,
) -> list[Frame]:
    """Black and white checkerboard, inverting every frame."""
    ys, xs = np.mgrid[0:height, 0:width]
    base = ((xs // square) + (ys // square)) % 2
    result = []
    for i in range(frames):
        cells = (base + i) % 2
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :, :3] = (cells * 255).astype(np.uint8)[:, :, None]
        pixels[:, :, 3] = 255
        result.append(Frame(pixels, delay=delay))
    return result


def bouncing_dot(
    width: int = 48,
    height: int = 48,
    frames: int = 8,
    dot_radius: int = 6,
    delay: int = DEFAULT_DELAY,
) -> list[Frame]:
    """A colored dot moving diagonally over a dark blue background."""
    ys, xs = np.mgrid[0:height, 0:width]
    result = []
    for i in range(frames):
        t = i / max(frames - 1, 1)
        cx = dot_radius + t * (width - 1 - 2 * dot_radius)
        cy = dot_radius + t * (height - 1 - 2 * dot_radius)
        inside = (xs - cx) ** 2 + (ys - cy) ** 2 <= dot_radius ** 2
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :] = (10, 20, 60, 255)
        pixels[inside] = (250, 200, 30, 255)
        result.append(Frame(pixels, delay=delay))
    return result


SAMPLES: dict[str, Callable[..., list[Frame]]] = {
    'solid': solid,
    'gradient': gradient,
    'checkerboard': checkerboard,
    'bouncing_dot': bouncing_dot,
}


def list_samples() -> list[str]:
    """List all available sample animations."""
    return list(SAMPLES)


def load(name: str, **kwargs) -> list[Frame]:
    """Generate a sample animation by name.

    Args:
        name: Sample name (see list_samples())
        **kwargs: Passed to the generator

    Returns:
        List of frames
    """
    if name not in SAMPLES:
        raise ValueError(f"Unknown sample: {name}. Available: {list_samples()}")
    return SAMPLES[name](**kwargs)


__all__ = ['solid', 'gradient', 'checkerboard', 'bouncing_dot', 'list_samples', 'load', 'SAMPLES']
