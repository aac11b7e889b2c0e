# Pointillist - Frame Transformer
"""
The per-frame pointillism transform.

Partition -> Aggregate -> Map Radius -> Rasterize. The output frame has the
same size, channel count and delay as the input.

Usage:
    from pointillist import Frame, PointillistConfig
    from pointillist.transform import FrameTransformer

    transformer = FrameTransformer(PointillistConfig(block_size=8))
    out = transformer.apply(frame)
"""

from __future__ import annotations

import logging

import numpy as np

from .aggregate import aggregate_blocks, get_metric
from .blocks import partition_blocks
from .config import PointillistConfig
from .frame import Frame, check_not_empty, check_pixels
from .radius import RadiusMapper
from .raster import Circle, circle_for_block, rasterize

logger = logging.getLogger(__name__)


class FrameTransformer:
    """Redraws single frames as fields of circles.

    The configuration is validated once on construction; the transformer
    holds no per-frame state and can be shared between threads.

    :param config: Transform parameters, defaults if None
    """

    def __init__(self, config: PointillistConfig | None = None):
        self.config = (config or PointillistConfig()).validate()
        self.mapper = RadiusMapper(
            max_radius=self.config.max_radius,
            padding=self.config.padding,
            min_radius=self.config.min_radius,
            curve=self.config.radius_curve,
        )
        self._metric = get_metric(self.config.detail_metric)

    def plan(self, pixels: np.ndarray) -> list[Circle]:
        """Compute the circles for a pixel grid, one per block in row-major order.

        Blocks too small to hold a padded circle get a circle of radius 0.

        :raises UnsupportedPixelFormat: If pixels isn't uint8 RGB(A)
        :raises EmptyFrame: If the grid has zero area
        """
        check_pixels(pixels)
        check_not_empty(pixels)
        height, width = pixels.shape[:2]

        blocks = partition_blocks(width, height, self.config.block_size)
        stats = aggregate_blocks(pixels, blocks, self._metric)
        radii = self.mapper.radii(stats, blocks)

        dot_color = self.config.dot_color
        circles = [
            circle_for_block(block, radius, stat.color if dot_color is None else dot_color)
            for block, stat, radius in zip(blocks, stats, radii)
        ]
        logger.debug(
            f"Planned {len(circles)} circles for {width}x{height} frame "
            f"({sum(1 for c in circles if c.radius > 0)} visible)"
        )
        return circles

    def render(self, pixels: np.ndarray) -> np.ndarray:
        """Transform a pixel grid into a new grid of the same shape."""
        circles = self.plan(pixels)
        height, width, channels = pixels.shape
        return rasterize(width, height, circles, self.config.background, channels)

    def apply(self, frame: Frame) -> Frame:
        """Transform a frame, keeping its delay."""
        return frame.with_pixels(self.render(frame.pixels))

    def __call__(self, frame: Frame) -> Frame:
        return self.apply(frame)


def pointillize_frame(frame: Frame, config: PointillistConfig | None = None) -> Frame:
    """Transform a single frame with the given (or default) configuration."""
    return FrameTransformer(config).apply(frame)


__all__ = ['FrameTransformer', 'pointillize_frame']
