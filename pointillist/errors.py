# Pointillist - Errors
"""
Exception types raised by the pointillist package.

Every error derives from :class:`PointillistError` so callers can catch the
whole family at once. Parameter and frame errors also derive from
:class:`ValueError`.
"""


class PointillistError(Exception):
    """Base class for all pointillist errors."""


class InvalidParameter(PointillistError, ValueError):
    """A configuration value is out of range or inconsistent."""


class EmptyFrame(PointillistError, ValueError):
    """A frame has zero width or zero height."""


class UnsupportedPixelFormat(PointillistError, ValueError):
    """A pixel grid is not a uint8 RGB or RGBA array."""


class CodecError(PointillistError):
    """Reading or writing an animation file failed."""


class EmptySequence(PointillistError):
    """An animation has no frames."""


__all__ = [
    'PointillistError',
    'InvalidParameter',
    'EmptyFrame',
    'UnsupportedPixelFormat',
    'CodecError',
    'EmptySequence',
]
