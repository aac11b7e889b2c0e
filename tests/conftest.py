"""
Pytest fixtures for pointillist tests
"""

import numpy as np
import pytest

from pointillist import Frame, PointillistConfig
from pointillist import samples


@pytest.fixture
def default_config() -> PointillistConfig:
    """Default configuration: block 8, padding 2, radius 8, delay 5."""
    return PointillistConfig()


@pytest.fixture
def uniform_frame() -> Frame:
    """16x16 opaque frame of a single color."""
    return samples.solid(16, 16, color=(200, 40, 40, 255))[0]


@pytest.fixture
def random_pixels() -> np.ndarray:
    """Reproducible 37x29 RGBA noise, not a multiple of common block sizes."""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(29, 37, 4), dtype=np.uint8)


@pytest.fixture
def animation() -> list[Frame]:
    """8 frame animation of a moving dot."""
    return samples.bouncing_dot(48, 48, frames=8)
