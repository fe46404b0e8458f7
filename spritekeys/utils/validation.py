"""Input validation for sprite collections, key pixels and profiles.

Every matcher construction path funnels through these helpers, so a matcher
either holds a fully validated :class:`MatcherState` or is never created.
Nothing here clamps, truncates or otherwise coerces bad input.
"""
import logging
import operator
from typing import Iterable, List, Optional, Sequence, Tuple

from ..core.entities import MatcherState, PixelCoordinate, SpriteProfile
from ..core.exceptions import (
    DimensionMismatchError, InvalidArgumentError,
    NullOrEmptyInputError, OutOfBoundsError,
)
from .geometry import contains, to_coordinate
from .image_utils import Raster, as_raster, component_count

logger = logging.getLogger(__name__)

# Color components and setup string fields are 32-bit signed integers
INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


def validate_rasters(rasters: Optional[Iterable]) -> Tuple[List[Raster], int, int, int]:
    """Check that every sprite shares width, height and component count.

    Returns:
        The sprites as rasters, plus the common width, height and
        component count.

    Raises:
        NullOrEmptyInputError: The collection or one of its sprites is missing.
        DimensionMismatchError: Sprites disagree on width, height or components.
    """
    if rasters is None:
        raise NullOrEmptyInputError("Sprite collection is None.")
    rasters = list(rasters)
    if not rasters:
        raise NullOrEmptyInputError("Sprite collection is empty.")

    converted: List[Raster] = []
    for i, sprite in enumerate(rasters):
        if sprite is None:
            raise NullOrEmptyInputError(f"Sprite {i} is None.")
        converted.append(as_raster(sprite))

    first = converted[0]
    width, height = first.width, first.height
    if width < 1 or height < 1:
        raise NullOrEmptyInputError(f"Sprite 0 has no pixels ({width}x{height}).")
    components = component_count(first)

    for i, sprite in enumerate(converted[1:], start=1):
        if sprite.width != width:
            raise DimensionMismatchError(
                f"Sprites must have the same width: sprite {i} is {sprite.width}, expected {width}.")
        if sprite.height != height:
            raise DimensionMismatchError(
                f"Sprites must have the same height: sprite {i} is {sprite.height}, expected {height}.")
        if component_count(sprite) != components:
            raise DimensionMismatchError(
                "Sprites' colors must have the same amount of components: "
                f"sprite {i} has {component_count(sprite)}, expected {components}.")

    return converted, width, height, components


def validate_key_pixels(key_pixels: Optional[Iterable],
                        width: Optional[int] = None,
                        height: Optional[int] = None,
                        offset_x: int = 0,
                        offset_y: int = 0) -> Tuple[PixelCoordinate, ...]:
    """Normalise key pixel locations and check them against the sprite extent.

    Coordinates are always non-negative. When ``width`` and ``height`` are
    given, each location shifted by the offset must lie within them.
    """
    if key_pixels is None:
        raise NullOrEmptyInputError("Key pixel location collection is None.")
    coordinates = tuple(to_coordinate(p) for p in key_pixels)
    if not coordinates:
        raise NullOrEmptyInputError("Key pixel location collection is empty.")

    for point in coordinates:
        if point.x < 0 or point.y < 0:
            raise OutOfBoundsError(f"Key pixel {point.as_tuple()} has a negative coordinate.")
        if width is not None and height is not None:
            shifted = point.offset(offset_x, offset_y)
            if not contains(shifted, width, height):
                raise OutOfBoundsError(
                    f"Key pixel {shifted.as_tuple()} must lie within the {width}x{height} sprites.")
    return coordinates


def _normalize_profile(sprite_index: int, profile, key_pixel_count: int) -> SpriteProfile:
    if profile is None:
        raise NullOrEmptyInputError(f"Profile of sprite {sprite_index} is None.")
    profile = list(profile)
    if len(profile) != key_pixel_count:
        raise DimensionMismatchError(
            f"Profile of sprite {sprite_index} holds {len(profile)} key pixels, "
            f"expected {key_pixel_count} to match the key pixel locations.")

    vectors = []
    for key_index, vector in enumerate(profile):
        if vector is None:
            raise NullOrEmptyInputError(
                f"Color vector {key_index} of sprite {sprite_index} is None.")
        try:
            vector = tuple(operator.index(v) for v in vector)
        except TypeError as e:
            raise InvalidArgumentError(
                f"Color vector {key_index} of sprite {sprite_index} must hold integers.") from e
        if not vector:
            raise NullOrEmptyInputError(
                f"Color vector {key_index} of sprite {sprite_index} is empty.")
        if min(vector) < INT_MIN or max(vector) > INT_MAX:
            raise InvalidArgumentError(
                f"Color vector {key_index} of sprite {sprite_index} has a component "
                f"outside [{INT_MIN}, {INT_MAX}].")
        vectors.append(vector)
    return tuple(vectors)


def validate_profiles(profiles: Optional[Iterable[Sequence]],
                      key_pixels: Optional[Iterable]) -> MatcherState:
    """Build a validated :class:`MatcherState` from profiles and locations.

    Every profile must hold one color vector per key pixel, and every color
    vector in the state must have the same, non-zero amount of components.
    """
    coordinates = validate_key_pixels(key_pixels)
    if profiles is None:
        raise NullOrEmptyInputError("Sprite profile collection is None.")
    profiles = list(profiles)
    if not profiles:
        raise NullOrEmptyInputError("Sprite profile collection is empty.")

    normalized = tuple(
        _normalize_profile(i, profile, len(coordinates))
        for i, profile in enumerate(profiles)
    )

    components = len(normalized[0][0])
    for sprite_index, profile in enumerate(normalized):
        for key_index, vector in enumerate(profile):
            if len(vector) != components:
                raise DimensionMismatchError(
                    f"Color vector {key_index} of sprite {sprite_index} has {len(vector)} "
                    f"components, expected {components}.")

    return MatcherState(key_pixels=coordinates, profiles=normalized)


def validate_search_range(minimum: int, maximum: int) -> None:
    """Key pixel amount bounds for discovery: integers, 0 <= minimum <= maximum."""
    for name, value in (("minimum", minimum), ("maximum", maximum)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgumentError(f"{name} must be an integer, got {value!r}.")
        if value < 0:
            raise InvalidArgumentError(f"{name} must not be negative, got {value}.")
    if minimum > maximum:
        raise InvalidArgumentError(
            f"minimum must not exceed maximum ({minimum} > {maximum}).")
