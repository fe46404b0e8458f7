"""Sampling of key pixel color vectors from a sprite collection."""

import logging
from typing import Iterable, Tuple

from ..core.entities import SpriteProfile
from ..utils.validation import validate_key_pixels, validate_rasters

logger = logging.getLogger(__name__)


def build_profiles(rasters: Iterable, key_pixels: Iterable,
                   offset_x: int = 0, offset_y: int = 0) -> Tuple[SpriteProfile, ...]:
    """Read the color vector at every key pixel of every sprite.

    Args:
        rasters: Sprites sharing width, height and component count
        key_pixels: Key pixel locations as PixelCoordinates or (x, y) pairs
        offset_x: Horizontal position of the sprite inside a larger canvas
        offset_y: Vertical position of the sprite inside a larger canvas

    Returns:
        One profile per sprite, in input order, each holding one color
        vector per key pixel, in key pixel order.
    """
    sprites, width, height, _ = validate_rasters(rasters)
    coordinates = validate_key_pixels(key_pixels, width, height, offset_x, offset_y)

    profiles = tuple(
        tuple(sprite.get_pixel(p.x + offset_x, p.y + offset_y) for p in coordinates)
        for sprite in sprites
    )
    logger.debug(f"Sampled {len(coordinates)} key pixels from {len(sprites)} sprites")
    return profiles
