# Pointillist - GIF Codec
"""
Reading and writing animated GIFs with Pillow.

Frames are decoded to full-canvas RGBA numpy arrays. Delays are converted
between Pillow's milliseconds and GIF ticks (1/100 s).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image as PILImage
from PIL import ImageSequence

from .errors import CodecError, EmptySequence
from .frame import DEFAULT_DELAY, Frame

logger = logging.getLogger(__name__)

# Pillow restores the canvas to the background after each frame with this
DISPOSE_TO_BACKGROUND = 2

PALETTE_SIZE = 256

# GIF transparency is binary: alpha below this is fully transparent
ALPHA_THRESHOLD = 128


def to_palette_image(pixels: np.ndarray) -> PILImage.Image:
    """Convert an RGB(A) grid to a palette image for GIF encoding.

    Frames with at most 256 distinct colors are stored exactly. Others are
    reduced with Pillow's median cut to 255 colors, keeping the last palette
    slot for transparency. Pixels with alpha below 128 become transparent.

    :param pixels: uint8 array (H, W, 3|4)
    :returns: Mode "P" image, with ``info['transparency']`` set when needed
    """
    height, width, channels = pixels.shape
    rgba = np.empty((height * width, 4), dtype=np.uint8)
    rgba[:, :3] = pixels.reshape(-1, channels)[:, :3]
    rgba[:, 3] = 255
    if channels == 4:
        clear = pixels.reshape(-1, 4)[:, 3] < ALPHA_THRESHOLD
        rgba[clear] = 0
    else:
        clear = np.zeros(height * width, dtype=bool)

    colors, inverse = np.unique(rgba, axis=0, return_inverse=True)
    transparency = None
    if len(colors) <= PALETTE_SIZE:
        index = inverse.reshape(height, width).astype(np.uint8)
        palette = colors[:, :3].flatten().tolist()
        clear_entries = np.flatnonzero(colors[:, 3] == 0)
        if len(clear_entries):
            transparency = int(clear_entries[0])
    else:
        rgb = PILImage.fromarray(rgba[:, :3].reshape(height, width, 3))
        quantized = rgb.quantize(colors=PALETTE_SIZE - 1)
        index = np.array(quantized, dtype=np.uint8)
        palette = quantized.getpalette()[:(PALETTE_SIZE - 1) * 3]
        palette += [0] * ((PALETTE_SIZE - 1) * 3 - len(palette))
        palette += [0, 0, 0]
        if clear.any():
            transparency = PALETTE_SIZE - 1
            index[clear.reshape(height, width)] = transparency

    image = PILImage.frombytes('P', (width, height), np.ascontiguousarray(index).tobytes())
    image.putpalette(palette)
    if transparency is not None:
        image.info['transparency'] = transparency
    return image


def read_gif(path: str | Path) -> list[Frame]:
    """Decode every frame of an animated GIF.

    :param path: File to read
    :returns: Frames in display order, each an RGBA grid of the full canvas
    :raises CodecError: If the file can't be opened or decoded
    :raises EmptySequence: If the file contains no frames
    """
    frames = []
    try:
        with PILImage.open(path) as im:
            for image in ImageSequence.Iterator(im):
                duration = image.info.get('duration')
                delay = DEFAULT_DELAY if duration is None else int(duration) // 10
                frames.append(Frame(np.array(image.convert('RGBA')), delay=delay))
    except (OSError, ValueError, EOFError) as e:
        raise CodecError(f"Failed to read GIF {path}: {e}") from e

    if not frames:
        raise EmptySequence(f"No frames found in {path}")
    logger.info(f"Decoded {len(frames)} frames ({frames[0].width}x{frames[0].height}) from {path}")
    return frames


def write_gif(path: str | Path, frames: Sequence[Frame], loop: int = 0) -> None:
    """Encode frames as an animated GIF.

    Each frame gets its own palette, see :func:`to_palette_image`.
    Consecutive identical frames are merged by Pillow into one frame with
    the summed delay.

    :param path: File to write
    :param frames: Frames in display order
    :param loop: Loop count, 0 loops forever
    :raises EmptySequence: If frames is empty
    :raises CodecError: If encoding or writing fails
    """
    if not frames:
        raise EmptySequence("Cannot write a GIF without frames")

    images = [to_palette_image(frame.pixels) for frame in frames]
    durations = [frame.delay * 10 for frame in frames]
    try:
        images[0].save(
            path,
            format='GIF',
            save_all=True,
            append_images=images[1:],
            duration=durations,
            loop=loop,
            disposal=DISPOSE_TO_BACKGROUND,
        )
    except (OSError, ValueError) as e:
        raise CodecError(f"Failed to write GIF {path}: {e}") from e
    logger.info(f"Wrote {len(frames)} frames to {path}")


__all__ = ['read_gif', 'write_gif']
