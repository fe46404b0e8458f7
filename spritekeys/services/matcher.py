"""Sprite matching by sampling a few key pixels.

A :class:`SpriteKeyPixelMatcher` identifies which member of a known sprite
collection an image shows by reading only the key pixels, instead of
comparing whole images. The ways to build one:

* ``SpriteKeyPixelMatcher.find_key_pixels(sprites, 1, 10)`` searches for the
  smallest key pixel set that tells every sprite apart. This is the preferred
  way to build a new matcher.
* ``SpriteKeyPixelMatcher.from_rasters(sprites, [(2, 2), (3, 3)])`` samples the
  sprites at the given locations. Such a matcher is only guaranteed to tell
  the sprites apart if the locations came from ``find_key_pixels``.
* ``SpriteKeyPixelMatcher.from_profiles(profiles, key_pixels)`` uses color
  vectors already read from the sprites.
* ``SpriteKeyPixelMatcher.from_setup("0c0a0d0")`` restores a matcher from
  :meth:`SpriteKeyPixelMatcher.get_setup`, so discovery runs only once per
  sprite collection across program runs.

Matching is then::

    for sprite in sprites:
        print(matcher.match(sprite).index)

The input image does not have to be cropped to a sprite: the offsets tell
where in a larger image the sprite's first pixel is.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

import numpy as np

from ..core.entities import MatcherState, MatchResult, PixelCoordinate, SpriteProfile
from ..core.exceptions import ComponentCountMismatchError, NullOrEmptyInputError
from ..utils.geometry import distance_nd
from ..utils.image_utils import as_raster, component_count
from ..utils.validation import validate_profiles
from .profile_builder import build_profiles
from .setup_codec import parse_setup, serialize_setup

logger = logging.getLogger(__name__)


class SpriteKeyPixelMatcher:
    """Nearest-neighbour classifier over key pixel samples."""

    __slots__ = ("_state", "_profile_array")

    distance_nd = staticmethod(distance_nd)

    def __init__(self, state: MatcherState):
        """Wrap an already built state; it is re-validated."""
        if state is None:
            raise NullOrEmptyInputError("Matcher state is None.")
        state = validate_profiles(state.profiles, state.key_pixels)
        profile_array = np.asarray(state.profiles, dtype=np.float64)
        profile_array.flags.writeable = False
        self._state = state
        self._profile_array = profile_array  # (sprites, key pixels, components)

    # ------------------------------------------------------------------
    # Construction paths
    # ------------------------------------------------------------------

    @classmethod
    def from_rasters(cls, sprites: Iterable, key_pixels: Iterable) -> SpriteKeyPixelMatcher:
        """Build a matcher by sampling the sprites at the key pixel locations."""
        if key_pixels is not None:
            key_pixels = tuple(key_pixels)
        profiles = build_profiles(sprites, key_pixels)
        return cls(validate_profiles(profiles, key_pixels))

    @classmethod
    def from_profiles(cls, profiles: Iterable[Sequence],
                      key_pixels: Iterable) -> SpriteKeyPixelMatcher:
        """Build a matcher from color vectors already read from the sprites.

        ``profiles[s][k]`` is the color vector of sprite ``s`` at
        ``key_pixels[k]``; the index returned by :meth:`match` is ``s``.
        """
        return cls(validate_profiles(profiles, key_pixels))

    @classmethod
    def from_setup(cls, setup: str) -> SpriteKeyPixelMatcher:
        """Restore a matcher from a string returned by :meth:`get_setup`."""
        return cls(parse_setup(setup))

    @staticmethod
    def find_key_pixels(sprites: Iterable, minimum: int, maximum: int,
                        max_workers: int = 0,
                        batch_size: int = 256) -> Optional[SpriteKeyPixelMatcher]:
        """Search for a matcher using as few key pixels as possible.

        Every combination of ``minimum`` key pixels is tried, then every
        combination of ``minimum + 1``, up to ``maximum``. The first matcher
        that maps each sprite back to its own index is returned, or ``None``
        when no key pixel amount in the range achieves that.
        """
        from .discovery import find_key_pixels
        return find_key_pixels(sprites, minimum, maximum,
                               max_workers=max_workers, batch_size=batch_size)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> MatcherState:
        return self._state

    @property
    def key_pixels(self) -> Tuple[PixelCoordinate, ...]:
        return self._state.key_pixels

    @property
    def profiles(self) -> Tuple[SpriteProfile, ...]:
        return self._state.profiles

    @property
    def sprite_count(self) -> int:
        return self._state.sprite_count

    @property
    def key_pixel_count(self) -> int:
        return self._state.key_pixel_count

    @property
    def component_count(self) -> int:
        return self._state.component_count

    def get_key_pixels(self) -> Tuple[PixelCoordinate, ...]:
        return self._state.key_pixels

    def get_setup(self) -> str:
        """String that rebuilds this matcher through :meth:`from_setup`."""
        return serialize_setup(self._state)

    def describe(self) -> Dict[str, Any]:
        return {
            "sprite_count": self.sprite_count,
            "key_pixel_count": self.key_pixel_count,
            "component_count": self.component_count,
            "setup": self.get_setup(),
        }

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def match(self, image, offset_x: int = 0, offset_y: int = 0) -> MatchResult:
        """Match the image to the closest sprite.

        Any image is matched to some sprite, however different it is; the
        returned distance tells an exact match (zero) from a noisy or merely
        similar one.

        Args:
            image: Raster, numpy array or PIL image to be matched
            offset_x: Location of the sprite's first pixel in the image, in x
            offset_y: Location of the sprite's first pixel in the image, in y

        Raises:
            NullOrEmptyInputError: ``image`` is None.
            ComponentCountMismatchError: The image's pixels have a different
                amount of color components than the sprites.
            OutOfBoundsError: A shifted key pixel lies outside the image.
        """
        if image is None:
            raise NullOrEmptyInputError("Image is None.")
        raster = as_raster(image)
        components = self.component_count
        if component_count(raster) != components:
            raise ComponentCountMismatchError(
                "Image contains a different amount of color components than the "
                f"images used in the construction of this matcher ({component_count(raster)} "
                f"instead of {components}).")

        samples = []
        for point in self._state.key_pixels:
            color = raster.get_pixel(point.x + offset_x, point.y + offset_y)
            if len(color) != components:
                raise ComponentCountMismatchError(
                    f"Pixel ({point.x + offset_x}, {point.y + offset_y}) has {len(color)} "
                    f"color components, expected {components}.")
            samples.append(color)
        sampled = np.asarray(samples, dtype=np.float64)

        distances = np.sqrt(((self._profile_array - sampled) ** 2).sum(axis=2)).sum(axis=1)
        # argmin keeps the earliest sprite among equal distances
        index = int(np.argmin(distances))
        return MatchResult(index=index, distance=float(distances[index]))

    def matches_own_sprites(self, sprites: Sequence) -> bool:
        """Whether every sprite is matched back to its own index."""
        for index, sprite in enumerate(sprites):
            if self.match(sprite, 0, 0).index != index:
                return False
        return True

    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpriteKeyPixelMatcher):
            return NotImplemented
        return self._state == other._state

    def __hash__(self) -> int:
        return hash(self._state)

    def __repr__(self) -> str:
        return (f"SpriteKeyPixelMatcher(sprites={self.sprite_count}, "
                f"key_pixels={self.key_pixel_count}, components={self.component_count})")

    def __str__(self) -> str:
        return (f"sprite amount: {self.sprite_count}; key pixel amount: {self.key_pixel_count}; "
                f"pixel color component amount: {self.component_count}; setup:\n{self.get_setup()}")
