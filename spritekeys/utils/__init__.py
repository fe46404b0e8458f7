"""Utility functions package."""

from .geometry import distance_nd, pixel_domain_bound, coordinate_from_index, to_coordinate
from .image_utils import ArrayRaster, Raster, as_raster, load_raster, load_sprites, raster_from_pil
from .validation import validate_rasters, validate_key_pixels, validate_profiles, validate_search_range

__all__ = [
    "distance_nd", "pixel_domain_bound", "coordinate_from_index", "to_coordinate",
    "ArrayRaster", "Raster", "as_raster", "load_raster", "load_sprites", "raster_from_pil",
    "validate_rasters", "validate_key_pixels", "validate_profiles", "validate_search_range",
]
