# Pointillist - Radius Mapper
"""
Mapping of block statistics to circle radii.

The detail of each block is normalized against the largest detail of its
frame, passed through a curve and scaled to ``max_radius``. The result is
clamped to ``[min_radius, bound]`` where the bound keeps ``padding`` pixels
between the circle and the edge of its block, so circles of neighboring
blocks never touch.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterable

from .aggregate import BlockStat
from .blocks import Block
from .errors import InvalidParameter

RadiusCurve = Callable[[float], float]

RADIUS_CURVES: dict[str, RadiusCurve] = {
    'linear': lambda ratio: ratio,
    # Dot area proportional to detail
    'sqrt': math.sqrt,
}


@dataclass(frozen=True)
class RadiusMapper:
    """Converts block statistics to radii.

    Parameters are validated on construction, so a mapper that exists can
    always produce a radius.

    :param max_radius: Radius given to the block with the largest detail
    :param padding: Pixels kept free between circle and block edge
    :param min_radius: Smallest radius for blocks with room for a circle
    :param curve: Name of a curve in :data:`RADIUS_CURVES`
    """
    max_radius: int
    padding: int
    min_radius: int = 1
    curve: str = 'linear'

    def __post_init__(self):
        if self.max_radius <= 0:
            raise InvalidParameter(f"max_radius must be positive, got {self.max_radius}")
        if self.padding < 0:
            raise InvalidParameter(f"padding must not be negative, got {self.padding}")
        if self.padding >= self.max_radius:
            raise InvalidParameter(
                f"padding ({self.padding}) must be smaller than max_radius ({self.max_radius})"
            )
        if self.min_radius < 0:
            raise InvalidParameter(f"min_radius must not be negative, got {self.min_radius}")
        if self.curve not in RADIUS_CURVES:
            raise InvalidParameter(
                f"Unknown radius curve {self.curve!r}, expected one of {sorted(RADIUS_CURVES)}"
            )

    def bound(self, block: Block) -> int:
        """Largest radius that fits the block with padding, at most max_radius."""
        return max(0, min(self.max_radius, block.shorter_side // 2 - self.padding))

    @staticmethod
    def reference(stats: Iterable[BlockStat]) -> float:
        """Largest detail of a frame, the value that maps to max_radius."""
        return max((stat.detail for stat in stats), default=0.0)

    def radius(self, stat: BlockStat, block: Block, reference: float) -> int:
        """Radius of the circle drawn for a block.

        :param stat: The block's statistic
        :param block: The block, bounding the radius
        :param reference: Frame reference detail, see :meth:`reference`
        :returns: Radius in pixels, 0 if the block is too small for a circle
        """
        cap = self.bound(block)
        if cap < max(self.min_radius, 1):
            return 0

        if reference <= 0:
            # Nothing to scale against: every block of the frame is uniform
            ratio = 1.0
        else:
            ratio = min(max(stat.detail / reference, 0.0), 1.0)

        scaled = math.floor(RADIUS_CURVES[self.curve](ratio) * self.max_radius + 0.5)
        return min(max(scaled, self.min_radius), cap)

    def radii(self, stats: list[BlockStat], blocks: list[Block]) -> list[int]:
        """Radii of all blocks of one frame, in block order."""
        reference = self.reference(stats)
        return [self.radius(stat, block, reference) for stat, block in zip(stats, blocks)]


__all__ = ['RadiusMapper', 'RADIUS_CURVES', 'RadiusCurve']
