"""
Sprite identification by a few key pixels.
"""

__version__ = "1.0.0"

from .core.entities import MatcherState, MatchResult, PixelCoordinate
from .core.combinations import CombinationEnumerator
from .services.matcher import SpriteKeyPixelMatcher
from .services.discovery import DiscoveryDriver, find_key_pixels
from .services.setup_codec import parse_setup, serialize_setup
from .utils.geometry import distance_nd
from .utils.image_utils import ArrayRaster, load_raster, load_sprites

__all__ = [
    "MatcherState", "MatchResult", "PixelCoordinate", "CombinationEnumerator",
    "SpriteKeyPixelMatcher", "DiscoveryDriver", "find_key_pixels",
    "parse_setup", "serialize_setup", "distance_nd",
    "ArrayRaster", "load_raster", "load_sprites",
]
