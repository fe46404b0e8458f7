"""Domain entities (data-only structures) used across services."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

ColorVector = Tuple[int, ...]  # one integer per color component
SpriteProfile = Tuple[ColorVector, ...]  # one color vector per key pixel

@dataclass(frozen=True, slots=True)
class PixelCoordinate:
    x: int
    y: int

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def offset(self, dx: int, dy: int) -> PixelCoordinate:
        return PixelCoordinate(self.x + dx, self.y + dy)

    @classmethod
    def from_linear_index(cls, index: int, width: int) -> PixelCoordinate:
        """Map a row-major linear pixel index back to (x, y)."""
        return cls(index % width, index // width)

@dataclass(frozen=True, slots=True)
class MatchResult:
    """Index of the matched sprite and how close the match was.

    ``distance`` is zero for an exact match. A small value usually means an
    exact match with noise, larger values mean the input merely resembles
    the closest known sprite; what counts as small depends on the sprites.
    """
    index: int
    distance: float

    def __str__(self) -> str:
        return f"index: {self.index}; distance: {self.distance}"

@dataclass(frozen=True, slots=True)
class MatcherState:
    """Discriminating state of a matcher.

    ``profiles`` is indexed by sprite, then key pixel, then color component.
    The key pixel index inside every profile matches the index in
    ``key_pixels``. Instances are only built through the validation helpers
    in ``spritekeys.utils.validation``.
    """
    key_pixels: Tuple[PixelCoordinate, ...]
    profiles: Tuple[SpriteProfile, ...]

    @property
    def sprite_count(self) -> int:
        return len(self.profiles)

    @property
    def key_pixel_count(self) -> int:
        return len(self.key_pixels)

    @property
    def component_count(self) -> int:
        return len(self.profiles[0][0])
