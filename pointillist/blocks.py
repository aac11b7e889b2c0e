# Pointillist - Blocks
"""
Partitioning of a pixel grid into square blocks.

Blocks are produced in row-major order. All blocks are block_size x
block_size except the last column and row, which are clipped to the frame
boundary when the frame size isn't a multiple of the block size.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidParameter


@dataclass(frozen=True)
class Block:
    """A rectangular tile of a frame, with half-open pixel bounds.

    :ivar row: Row index in the block grid
    :ivar column: Column index in the block grid
    :ivar x0: Left edge (inclusive)
    :ivar y0: Top edge (inclusive)
    :ivar x1: Right edge (exclusive)
    :ivar y1: Bottom edge (exclusive)
    """
    row: int
    column: int
    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def shorter_side(self) -> int:
        return min(self.width, self.height)

    @property
    def center(self) -> tuple[float, float]:
        """Centroid in pixel index coordinates."""
        return ((self.x0 + self.x1 - 1) / 2, (self.y0 + self.y1 - 1) / 2)

    @property
    def slices(self) -> tuple[slice, slice]:
        """(rows, columns) slices selecting the block from a pixel array."""
        return (slice(self.y0, self.y1), slice(self.x0, self.x1))

    def to_bbox(self) -> tuple[int, int, int, int]:
        """Return (x0, y0, x1, y1) bounding box tuple."""
        return (self.x0, self.y0, self.x1, self.y1)


def grid_shape(width: int, height: int, block_size: int) -> tuple[int, int]:
    """Number of block rows and columns needed to cover a frame.

    :returns: (rows, columns)
    """
    _check(width, height, block_size)
    return (-(-height // block_size), -(-width // block_size))


def partition_blocks(width: int, height: int, block_size: int) -> list[Block]:
    """Tile a width x height grid with blocks of block_size.

    :param width: Grid width in pixels
    :param height: Grid height in pixels
    :param block_size: Nominal block edge length
    :returns: Blocks in row-major order
    :raises InvalidParameter: If block_size isn't positive
    """
    _check(width, height, block_size)
    blocks = []
    for row, y0 in enumerate(range(0, height, block_size)):
        y1 = min(y0 + block_size, height)
        for column, x0 in enumerate(range(0, width, block_size)):
            x1 = min(x0 + block_size, width)
            blocks.append(Block(row=row, column=column, x0=x0, y0=y0, x1=x1, y1=y1))
    return blocks


def _check(width: int, height: int, block_size: int) -> None:
    if block_size <= 0:
        raise InvalidParameter(f"block_size must be positive, got {block_size}")
    if width < 0 or height < 0:
        raise InvalidParameter(f"Grid size must not be negative, got {width}x{height}")


__all__ = ['Block', 'grid_shape', 'partition_blocks']
