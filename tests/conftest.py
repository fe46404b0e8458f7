"""Pytest configuration and shared fixtures for spritekeys.

Sprites are built in memory as small numpy arrays so the exhaustive key
pixel search stays fast.
"""
import sys
import tempfile
import logging
from pathlib import Path
from typing import Callable, List

import numpy as np
import pytest

# Add the project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from spritekeys.core.logging_config import logging_manager
from spritekeys.utils.image_utils import ArrayRaster


# Disable some verbose loggers during testing
logging.getLogger('PIL').setLevel(logging.WARNING)


@pytest.fixture(autouse=True)
def reset_logging():
    """Remove handlers a test (usually the CLI) may have installed."""
    yield
    logging_manager.shutdown()
    logging_manager.clear_correlation_id()


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_sprite() -> Callable[..., np.ndarray]:
    """Factory for a uniformly filled sprite array."""
    def _make(width: int = 5, height: int = 5, components: int = 3, fill: int = 128) -> np.ndarray:
        if components == 1:
            return np.full((height, width), fill, dtype=np.uint8)
        return np.full((height, width, components), fill, dtype=np.uint8)
    return _make


@pytest.fixture
def two_pixel_sprites(make_sprite) -> List[np.ndarray]:
    """Four 5x5 RGB sprites identical everywhere except pixels (2, 2) and (3, 3).

    Each of the two pixels alone only splits the sprites in halves, so at
    least two key pixels are needed to tell all four apart.
    """
    sprites = []
    for a, b in ((0, 0), (0, 255), (255, 0), (255, 255)):
        sprite = make_sprite(5, 5, 3, fill=128)
        sprite[2, 2] = (a, a, a)
        sprite[3, 3] = (b, 0, b)
        sprites.append(sprite)
    return sprites


@pytest.fixture
def gray_sprites(make_sprite) -> List[np.ndarray]:
    """Three 4x4 single-component sprites differing only at pixel (1, 0)."""
    sprites = []
    for value in (10, 20, 30):
        sprite = make_sprite(4, 4, 1, fill=0)
        sprite[0, 1] = value
        sprites.append(sprite)
    return sprites


@pytest.fixture
def rgb_rasters(two_pixel_sprites) -> List[ArrayRaster]:
    return [ArrayRaster(s) for s in two_pixel_sprites]


@pytest.fixture
def canvas_with_sprite(two_pixel_sprites) -> Callable[[int, int, int], np.ndarray]:
    """Factory pasting one of the sprites into a larger 20x12 canvas."""
    def _paste(index: int, offset_x: int, offset_y: int) -> np.ndarray:
        canvas = np.zeros((12, 20, 3), dtype=np.uint8)
        sprite = two_pixel_sprites[index]
        h, w = sprite.shape[:2]
        canvas[offset_y:offset_y + h, offset_x:offset_x + w] = sprite
        return canvas
    return _paste
