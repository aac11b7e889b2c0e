# Pointillist - Configuration
"""
Configuration for the pointillism transform.

A single :class:`PointillistConfig` is shared by every frame of a sequence.
It is validated once, before any frame is touched, so that parameter errors
never surface halfway through an animation.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from .aggregate import DETAIL_METRICS
from .errors import InvalidParameter
from .radius import RADIUS_CURVES

RGBAColor = tuple[int, int, int, int]

# GIF frame delays are stored as unsigned 16 bit values
MAX_DELAY = 0xFFFF


def parse_color(text: str) -> RGBAColor:
    """Parse a color given as hex or as comma separated components.

    Accepted forms are ``#RGB``, ``#RRGGBB``, ``#RRGGBBAA``, ``r,g,b`` and
    ``r,g,b,a``. Missing alpha defaults to 255.

    :param text: The color text
    :returns: RGBA tuple
    :raises InvalidParameter: If the text can't be parsed
    """
    value = text.strip()
    try:
        if value.startswith('#'):
            digits = value[1:]
            if len(digits) == 3:
                digits = ''.join(c * 2 for c in digits)
            if len(digits) not in (6, 8):
                raise ValueError(value)
            components = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        else:
            components = [int(part) for part in value.split(',')]
    except ValueError:
        raise InvalidParameter(f"Invalid color: {text!r}") from None
    if len(components) == 3:
        components.append(255)
    if len(components) != 4:
        raise InvalidParameter(f"Invalid color: {text!r}")
    color = tuple(components)
    _check_color('color', color)
    return color


def _check_color(name: str, color) -> None:
    if len(color) != 4 or any(not 0 <= int(c) <= 255 for c in color):
        raise InvalidParameter(f"{name} must be an RGBA tuple with components 0-255, got {color!r}")


@dataclass
class PointillistConfig:
    """Parameters of the pointillism transform.

    :param block_size: Edge length of the square blocks in pixels
    :param padding: Margin reserved between a circle and its block edge
    :param max_radius: Largest radius a circle may have
    :param output_delay: Delay attached to every output frame, in GIF ticks
        (1/100 s)
    :param background: RGBA color of the canvas outside the circles
    :param dot_color: Fixed RGBA color for all circles, or None to use each
        block's average color
    :param detail_metric: Name of the block statistic driving the radius
    :param radius_curve: Name of the curve mapping detail to radius
    :param min_radius: Smallest radius drawn when a block has room for it
    :param loop: GIF loop count, 0 loops forever
    """
    block_size: int = 8
    padding: int = 2
    max_radius: int = 8
    output_delay: int = 5
    background: RGBAColor = (0, 0, 0, 0)
    dot_color: RGBAColor | None = None
    detail_metric: str = 'mad'
    radius_curve: str = 'linear'
    min_radius: int = 1
    loop: int = 0

    def validate(self) -> 'PointillistConfig':
        """Check every field.

        :returns: self, to allow chaining
        :raises InvalidParameter: Naming the first offending field
        """
        if self.block_size <= 0:
            raise InvalidParameter(f"block_size must be positive, got {self.block_size}")
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
        if not 0 <= self.output_delay <= MAX_DELAY:
            raise InvalidParameter(
                f"output_delay must be within 0-{MAX_DELAY}, got {self.output_delay}"
            )
        if self.loop < 0:
            raise InvalidParameter(f"loop must not be negative, got {self.loop}")
        _check_color('background', self.background)
        if self.dot_color is not None:
            _check_color('dot_color', self.dot_color)
        if self.detail_metric not in DETAIL_METRICS:
            raise InvalidParameter(
                f"Unknown detail metric {self.detail_metric!r}, "
                f"expected one of {sorted(DETAIL_METRICS)}"
            )
        if self.radius_curve not in RADIUS_CURVES:
            raise InvalidParameter(
                f"Unknown radius curve {self.radius_curve!r}, "
                f"expected one of {sorted(RADIUS_CURVES)}"
            )
        return self

    def replace(self, **changes) -> 'PointillistConfig':
        """Return a validated copy with some fields changed."""
        return dataclasses.replace(self, **changes).validate()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return dataclasses.asdict(self)


__all__ = ['PointillistConfig', 'parse_color', 'RGBAColor', 'MAX_DELAY']
