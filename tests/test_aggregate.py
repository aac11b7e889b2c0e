"""
Tests for the color aggregator and the detail metrics.
"""

import numpy as np
import pytest

from pointillist import InvalidParameter
from pointillist.aggregate import (
    DETAIL_METRICS,
    BlockStat,
    aggregate_block,
    aggregate_blocks,
    get_metric,
    luminance,
    register_metric,
)
from pointillist.blocks import Block, partition_blocks


def half_black_white() -> np.ndarray:
    """4x4 opaque RGBA, left half black, right half white."""
    pixels = np.zeros((4, 4, 4), dtype=np.uint8)
    pixels[:, 2:, :3] = 255
    pixels[:, :, 3] = 255
    return pixels


WHOLE = Block(row=0, column=0, x0=0, y0=0, x1=4, y1=4)


class TestColor:
    """Tests for the representative color."""

    def test_single_pixel(self):
        """A one pixel block yields that pixel's color and zero detail."""
        pixels = np.zeros((3, 3, 4), dtype=np.uint8)
        pixels[1, 2] = (12, 34, 56, 255)
        block = Block(row=1, column=2, x0=2, y0=1, x1=3, y1=2)
        for metric in ('mad', 'variance', 'range'):
            stat = aggregate_block(pixels, block, metric)
            assert stat.color == (12, 34, 56, 255)
            assert stat.detail == 0.0

    def test_mean_rounds_half_up(self):
        """Channel means are rounded half up."""
        pixels = np.zeros((1, 2, 3), dtype=np.uint8)
        pixels[0, 1] = (1, 3, 255)
        stat = aggregate_block(pixels, Block(0, 0, 0, 0, 2, 1))
        assert stat.color == (1, 2, 128)

    def test_rgb_grid(self):
        """RGB grids give three component colors."""
        pixels = np.full((4, 4, 3), 77, dtype=np.uint8)
        stat = aggregate_block(pixels, WHOLE)
        assert stat.color == (77, 77, 77)

    def test_color_within_channel_range(self, random_pixels):
        """Every channel of the mean lies within the block's min and max."""
        height, width = random_pixels.shape[:2]
        blocks = partition_blocks(width, height, 6)
        for block, stat in zip(blocks, aggregate_blocks(random_pixels, blocks)):
            region = random_pixels[block.slices].reshape(-1, 4)
            assert (np.array(stat.color) >= region.min(axis=0)).all()
            assert (np.array(stat.color) <= region.max(axis=0)).all()

    def test_deterministic(self, random_pixels):
        """The same block always produces the same statistic."""
        block = Block(0, 0, 3, 2, 20, 17)
        assert aggregate_block(random_pixels, block) == aggregate_block(random_pixels.copy(), block)


class TestMetrics:
    """Tests for the built-in detail metrics."""

    def test_luminance(self):
        """Luminance uses Rec. 709 weights and ignores alpha."""
        pixels = np.array([[[255, 0, 0, 0], [0, 255, 0, 255], [0, 0, 255, 9]]], dtype=np.uint8)
        assert luminance(pixels)[0] == pytest.approx([0.2126 * 255, 0.7152 * 255, 0.0722 * 255])

    def test_mad(self):
        """Half black, half white has a deviation of half the range."""
        stat = aggregate_block(half_black_white(), WHOLE, 'mad')
        assert stat.detail == pytest.approx(127.5)
        assert stat.luminance == pytest.approx(127.5)

    def test_variance(self):
        stat = aggregate_block(half_black_white(), WHOLE, 'variance')
        assert stat.detail == pytest.approx(127.5 ** 2)

    def test_range(self):
        stat = aggregate_block(half_black_white(), WHOLE, 'range')
        assert stat.detail == pytest.approx(255.0)

    def test_uniform_block_has_zero_detail(self):
        """A uniform block has exactly zero deviation, whatever its color."""
        pixels = np.full((7, 5, 4), (13, 200, 99, 255), dtype=np.uint8)
        block = Block(0, 0, 0, 0, 5, 7)
        assert aggregate_block(pixels, block, 'mad').detail == 0.0
        assert aggregate_block(pixels, block, 'variance').detail == 0.0

    def test_brightness(self):
        """Brightness is the perceived brightness, scaled by alpha."""
        white = np.full((2, 2, 4), 255, dtype=np.uint8)
        assert aggregate_block(white, Block(0, 0, 0, 0, 2, 2), 'brightness').detail == pytest.approx(255.0)

        white[0, :, 3] = 100  # below half alpha counts as black
        white[1, :, 3] = 204
        stat = aggregate_block(white, Block(0, 0, 0, 0, 2, 2), 'brightness')
        assert stat.detail == pytest.approx(255.0 * 0.8 / 2)

    def test_brightness_rgb(self):
        """RGB grids are treated as opaque."""
        gray = np.full((2, 2, 3), 100, dtype=np.uint8)
        stat = aggregate_block(gray, Block(0, 0, 0, 0, 2, 2), 'brightness')
        assert stat.detail == pytest.approx(100.0)

    def test_unknown_metric(self):
        """Unknown metric names raise InvalidParameter."""
        with pytest.raises(InvalidParameter):
            get_metric('entropy')
        with pytest.raises(InvalidParameter):
            aggregate_block(half_black_white(), WHOLE, 'entropy')

    def test_register_metric(self):
        """Custom metrics can be registered and selected by name."""
        @register_metric('max_luma')
        def max_luma(block_pixels, luma):
            return float(luma.max())

        try:
            assert get_metric('MAX_LUMA') is max_luma
            stat = aggregate_block(half_black_white(), WHOLE, 'max_luma')
            assert stat.detail == pytest.approx(255.0)
        finally:
            DETAIL_METRICS.pop('max_luma')

    def test_callable_metric(self):
        """A callable can be passed instead of a name."""
        stat = aggregate_block(half_black_white(), WHOLE, lambda px, luma: 42.0)
        assert isinstance(stat, BlockStat)
        assert stat.detail == 42.0

    def test_negative_metric_is_clamped(self):
        """Detail is never negative."""
        stat = aggregate_block(half_black_white(), WHOLE, lambda px, luma: -1.0)
        assert stat.detail == 0.0
