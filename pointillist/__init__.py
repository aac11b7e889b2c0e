"""
Pointillist - Turns animated GIFs into fields of circles
"""

__version__ = "0.1.0"

from .errors import (
    PointillistError,
    InvalidParameter,
    EmptyFrame,
    UnsupportedPixelFormat,
    CodecError,
    EmptySequence,
)
from .frame import Frame, DEFAULT_DELAY
from .config import PointillistConfig, parse_color
from .blocks import Block, partition_blocks, grid_shape
from .aggregate import BlockStat, aggregate_block, aggregate_blocks, register_metric, DETAIL_METRICS
from .radius import RadiusMapper, RADIUS_CURVES
from .raster import Circle, rasterize
from .transform import FrameTransformer, pointillize_frame
from .sequence import SequenceAssembler, SequenceMetrics, pointillize
from .gif import read_gif, write_gif

__all__ = [
    "__version__",
    # Errors
    "PointillistError",
    "InvalidParameter",
    "EmptyFrame",
    "UnsupportedPixelFormat",
    "CodecError",
    "EmptySequence",
    # Data model
    "Frame",
    "DEFAULT_DELAY",
    "Block",
    "BlockStat",
    "Circle",
    # Configuration
    "PointillistConfig",
    "parse_color",
    # Pipeline stages
    "partition_blocks",
    "grid_shape",
    "aggregate_block",
    "aggregate_blocks",
    "register_metric",
    "DETAIL_METRICS",
    "RadiusMapper",
    "RADIUS_CURVES",
    "rasterize",
    "FrameTransformer",
    "pointillize_frame",
    "SequenceAssembler",
    "SequenceMetrics",
    "pointillize",
    # Codec
    "read_gif",
    "write_gif",
]
