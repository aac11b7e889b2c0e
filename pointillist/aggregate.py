# Pointillist - Color Aggregator
"""
Per-block statistics: representative color and detail measure.

The representative color is the per-channel mean of the block, rounded half
up. The detail measure is produced by a named metric from
:data:`DETAIL_METRICS`, so the statistic that drives the circle radius can be
exchanged without touching the rest of the pipeline.

Built-in metrics:

- ``mad``: mean absolute deviation of luminance (default)
- ``variance``: variance of luminance
- ``range``: max minus min luminance
- ``brightness``: mean perceived brightness, weighted by alpha

Usage:
    from pointillist.aggregate import aggregate_block, register_metric

    stat = aggregate_block(pixels, block, metric='variance')

    @register_metric('max_luma')
    def max_luma(block_pixels, luma):
        return float(luma.max())
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from .blocks import Block
from .errors import InvalidParameter

# (block pixels uint8 (h, w, c), luminance float64 (h, w)) -> detail
DetailMetric = Callable[[np.ndarray, np.ndarray], float]

DETAIL_METRICS: dict[str, DetailMetric] = {}

# Rec. 709 luma weights
LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)


@dataclass(frozen=True)
class BlockStat:
    """Summary of one block.

    :ivar color: Mean color, one int per channel of the source grid
    :ivar detail: Value of the detail metric, >= 0
    :ivar luminance: Mean luminance (0-255)
    """
    color: tuple[int, ...]
    detail: float
    luminance: float


def register_metric(name: str) -> Callable[[DetailMetric], DetailMetric]:
    """Decorator to register a detail metric under a name."""
    def decorator(func: DetailMetric) -> DetailMetric:
        DETAIL_METRICS[name.lower()] = func
        return func
    return decorator


def get_metric(name: str) -> DetailMetric:
    """Look up a registered detail metric.

    :raises InvalidParameter: If no metric of that name exists
    """
    try:
        return DETAIL_METRICS[name.lower()]
    except KeyError:
        raise InvalidParameter(
            f"Unknown detail metric {name!r}, expected one of {sorted(DETAIL_METRICS)}"
        ) from None


def luminance(pixels: np.ndarray) -> np.ndarray:
    """Rec. 709 luminance of an RGB(A) array as float64, alpha ignored."""
    return pixels[..., :3].astype(np.float64) @ LUMA_WEIGHTS


def _is_flat(luma: np.ndarray) -> bool:
    # Averaging identical floats can leave a rounding residue; report exact zero.
    return bool(luma.max() == luma.min())


@register_metric('mad')
def mean_absolute_deviation(block_pixels: np.ndarray, luma: np.ndarray) -> float:
    if _is_flat(luma):
        return 0.0
    return float(np.abs(luma - luma.mean()).mean())


@register_metric('variance')
def luminance_variance(block_pixels: np.ndarray, luma: np.ndarray) -> float:
    if _is_flat(luma):
        return 0.0
    return float(luma.var())


@register_metric('range')
def luminance_range(block_pixels: np.ndarray, luma: np.ndarray) -> float:
    return float(luma.max() - luma.min())


@register_metric('brightness')
def perceived_brightness(block_pixels: np.ndarray, luma: np.ndarray) -> float:
    """Mean perceived brightness, sqrt(0.299 R^2 + 0.587 G^2 + 0.114 B^2).

    Each pixel is scaled by its alpha; pixels with alpha below 128 count as
    black.
    """
    rgb = block_pixels[..., :3].astype(np.float64)
    value = np.sqrt((rgb ** 2) @ np.array([0.299, 0.587, 0.114]))
    if block_pixels.shape[-1] == 4:
        alpha = block_pixels[..., 3].astype(np.float64)
        value = np.where(alpha < 128, 0.0, value * (alpha / 255.0))
    return float(value.mean())


def aggregate_block(pixels: np.ndarray, block: Block, metric: str | DetailMetric = 'mad') -> BlockStat:
    """Compute the statistic of one block.

    :param pixels: Source grid, uint8 (H, W, 3|4)
    :param block: Block inside the grid
    :param metric: Metric name or callable
    :returns: BlockStat for the block
    """
    metric_fn = get_metric(metric) if isinstance(metric, str) else metric
    region = pixels[block.slices]
    flat = region.reshape(-1, region.shape[-1]).astype(np.float64)
    mean = flat.mean(axis=0)
    color = np.clip(np.floor(mean + 0.5), 0, 255).astype(np.uint8)

    luma = luminance(region)
    return BlockStat(
        color=tuple(int(c) for c in color),
        detail=max(0.0, metric_fn(region, luma)),
        luminance=float(luma.mean()),
    )


def aggregate_blocks(
    pixels: np.ndarray,
    blocks: list[Block],
    metric: str | DetailMetric = 'mad',
) -> list[BlockStat]:
    """Compute the statistics of several blocks, in the given order."""
    metric_fn = get_metric(metric) if isinstance(metric, str) else metric
    return [aggregate_block(pixels, block, metric_fn) for block in blocks]


__all__ = [
    'BlockStat',
    'DetailMetric',
    'DETAIL_METRICS',
    'register_metric',
    'get_metric',
    'luminance',
    'aggregate_block',
    'aggregate_blocks',
]
