# Pointillist - Circle Rasterizer
"""
Rasterization of filled circles onto a canvas.

A pixel (x, y) belongs to a circle when ``(x - cx)^2 + (y - cy)^2 <= r^2``.
Each circle is confined to the bounds of the block that produced it, so the
write windows of different circles are disjoint and every canvas pixel ends
up either background or the color of exactly one circle.

Usage:
    from pointillist.raster import Circle, rasterize

    circles = [Circle(cx=3.5, cy=3.5, radius=2, color=(255, 0, 0, 255),
                      bounds=(0, 0, 8, 8))]
    canvas = rasterize(8, 8, circles, background=(0, 0, 0, 0), channels=4)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .blocks import Block


@dataclass(frozen=True)
class Circle:
    """Filled circle owned by one block.

    :ivar cx: Center x in pixel index coordinates
    :ivar cy: Center y in pixel index coordinates
    :ivar radius: Radius in pixels, 0 draws nothing
    :ivar color: Fill color, one value per canvas channel (extra values ignored)
    :ivar bounds: (x0, y0, x1, y1) region the circle may paint
    """
    cx: float
    cy: float
    radius: int
    color: tuple[int, ...]
    bounds: tuple[int, int, int, int]

    @property
    def center(self) -> tuple[float, float]:
        return (self.cx, self.cy)

    @property
    def area(self) -> float:
        """Area of the ideal circle."""
        return math.pi * self.radius ** 2

    def window(self) -> tuple[int, int, int, int]:
        """Pixel window (x0, y0, x1, y1) the circle can touch, clipped to its bounds."""
        bx0, by0, bx1, by1 = self.bounds
        x0 = max(bx0, math.ceil(self.cx - self.radius))
        y0 = max(by0, math.ceil(self.cy - self.radius))
        x1 = min(bx1, math.floor(self.cx + self.radius) + 1)
        y1 = min(by1, math.floor(self.cy + self.radius) + 1)
        return (x0, y0, max(x0, x1), max(y0, y1))


def circle_for_block(block: Block, radius: int, color: tuple[int, ...]) -> Circle:
    """Circle centered on a block's centroid."""
    cx, cy = block.center
    return Circle(cx=cx, cy=cy, radius=radius, color=tuple(color), bounds=block.to_bbox())


def new_canvas(width: int, height: int, background: tuple[int, ...], channels: int = 4) -> np.ndarray:
    """Allocate a canvas filled with the background color.

    :param background: RGBA color, truncated to the channel count
    """
    canvas = np.empty((height, width, channels), dtype=np.uint8)
    canvas[:, :] = np.asarray(background[:channels], dtype=np.uint8)
    return canvas


def draw_circle(canvas: np.ndarray, circle: Circle) -> int:
    """Paint a circle in place.

    :param canvas: uint8 array (H, W, C)
    :param circle: Circle to paint
    :returns: Number of pixels painted
    """
    if circle.radius <= 0:
        return 0
    x0, y0, x1, y1 = circle.window()
    if x0 >= x1 or y0 >= y1:
        return 0

    ys, xs = np.ogrid[y0:y1, x0:x1]
    mask = (xs - circle.cx) ** 2 + (ys - circle.cy) ** 2 <= circle.radius ** 2
    channels = canvas.shape[2]
    canvas[y0:y1, x0:x1][mask] = np.asarray(circle.color[:channels], dtype=np.uint8)
    return int(mask.sum())


def rasterize(
    width: int,
    height: int,
    circles: Iterable[Circle],
    background: tuple[int, ...] = (0, 0, 0, 0),
    channels: int = 4,
) -> np.ndarray:
    """Paint circles, in the given order, onto a fresh canvas.

    :returns: uint8 array (height, width, channels)
    """
    canvas = new_canvas(width, height, background, channels)
    for circle in circles:
        draw_circle(canvas, circle)
    return canvas


__all__ = ['Circle', 'circle_for_block', 'new_canvas', 'draw_circle', 'rasterize']
