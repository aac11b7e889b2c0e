"""
Tests for reading and writing GIF files.
"""

import numpy as np
import pytest

from pointillist import CodecError, EmptySequence, pointillize, read_gif, write_gif
from pointillist.gif import to_palette_image
from pointillist import samples


class TestGifRoundTrip:
    """Tests writing animations and reading them back."""

    def test_frames_and_delays(self, tmp_path, animation):
        path = tmp_path / "dots.gif"
        write_gif(path, pointillize(animation))

        frames = read_gif(path)
        assert len(frames) == len(animation)
        assert all(f.size == (48, 48) for f in frames)
        assert all(f.channels == 4 for f in frames)
        assert [f.delay for f in frames] == [5] * len(animation)

    def test_transparent_background(self, tmp_path, animation):
        """Fully transparent canvas pixels stay transparent."""
        path = tmp_path / "clear.gif"
        write_gif(path, pointillize(animation))
        first = read_gif(path)[0]
        assert first.pixels[0, 0, 3] == 0

    def test_colors_survive(self, tmp_path):
        """Frames with few colors are stored without loss."""
        frames = samples.solid(8, 8, color=(250, 200, 30, 255), frames=1, delay=12)
        frames += samples.solid(8, 8, color=(10, 20, 60, 255), frames=1, delay=4)
        path = tmp_path / "solid.gif"
        write_gif(path, frames)

        result = read_gif(path)
        assert [f.delay for f in result] == [12, 4]
        assert tuple(result[0].pixels[4, 4]) == (250, 200, 30, 255)
        assert tuple(result[1].pixels[4, 4]) == (10, 20, 60, 255)

    def test_rgb_frames(self, tmp_path):
        path = tmp_path / "rgb.gif"
        pixels = np.zeros((6, 6, 3), dtype=np.uint8)
        pixels[:3] = (255, 0, 0)
        write_gif(path, [samples.solid(6, 6)[0].with_pixels(pixels)])
        result = read_gif(path)
        assert tuple(result[0].pixels[0, 0]) == (255, 0, 0, 255)
        assert tuple(result[0].pixels[5, 5]) == (0, 0, 0, 255)

    def test_identical_frames_keep_total_duration(self, tmp_path):
        """Repeated frames are stored once with the summed delay."""
        frames = pointillize(samples.solid(16, 16, frames=3))
        path = tmp_path / "static.gif"
        write_gif(path, frames)

        result = read_gif(path)
        assert [f.delay for f in result] == [15]
        assert sum(f.delay for f in result) == sum(f.delay for f in frames)
        opaque = frames[0].pixels[:, :, 3] == 255
        assert np.array_equal(result[0].pixels[:, :, 3], frames[0].pixels[:, :, 3])
        assert np.array_equal(result[0].pixels[opaque], frames[0].pixels[opaque])

    def test_repeats_split_by_change(self, tmp_path):
        """Only consecutive repeats are merged."""
        red = samples.solid(8, 8, color=(255, 0, 0, 255), frames=2, delay=4)
        blue = samples.solid(8, 8, color=(0, 0, 255, 255), frames=1, delay=6)
        path = tmp_path / "runs.gif"
        write_gif(path, red + blue + red[:1])

        assert [f.delay for f in read_gif(path)] == [8, 6, 4]


class TestPalette:
    """Tests for the conversion to palette images."""

    def test_exact_palette(self):
        """Frames with few colors map each color to one palette entry."""
        pixels = np.zeros((4, 4, 4), dtype=np.uint8)
        pixels[:2] = (255, 0, 0, 255)
        pixels[2:] = (0, 0, 0, 0)
        image = to_palette_image(pixels)
        assert image.mode == 'P'
        index = np.array(image)
        transparent = image.info['transparency']
        assert (index[2:] == transparent).all()
        assert (index[:2] != transparent).all()
        palette = image.getpalette()
        entry = int(index[0, 0])
        assert palette[entry * 3:entry * 3 + 3] == [255, 0, 0]

    def test_half_transparent_alpha(self):
        """Alpha below 128 is transparent, above is opaque."""
        pixels = np.full((1, 2, 4), 200, dtype=np.uint8)
        pixels[0, 0, 3] = 127
        pixels[0, 1, 3] = 128
        image = to_palette_image(pixels)
        index = np.array(image)
        assert index[0, 0] == image.info['transparency']
        assert index[0, 1] != image.info['transparency']

    def test_opaque_has_no_transparency(self):
        image = to_palette_image(np.full((3, 3, 3), 9, dtype=np.uint8))
        assert 'transparency' not in image.info

    def test_many_colors_are_quantized(self):
        """More than 256 colors are reduced, keeping the last slot transparent."""
        rng = np.random.default_rng(7)
        pixels = rng.integers(0, 256, size=(32, 32, 4), dtype=np.uint8)
        pixels[..., 3] = 255
        pixels[:4, :, 3] = 0
        image = to_palette_image(pixels)
        index = np.array(image)
        assert image.info['transparency'] == 255
        assert (index[:4] == 255).all()
        assert (index[4:] < 255).all()


class TestGifErrors:
    """Tests for codec failures."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(CodecError):
            read_gif(tmp_path / "missing.gif")

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "notes.gif"
        path.write_text("definitely not a gif")
        with pytest.raises(CodecError) as exc_info:
            read_gif(path)
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_write_empty(self, tmp_path):
        with pytest.raises(EmptySequence):
            write_gif(tmp_path / "empty.gif", [])

    def test_write_to_missing_directory(self, tmp_path):
        with pytest.raises(CodecError):
            write_gif(tmp_path / "nope" / "out.gif", samples.solid(4, 4))
