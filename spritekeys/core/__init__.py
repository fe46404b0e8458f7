"""Core domain entities, errors and the combination enumerator."""

from .entities import ColorVector, MatcherState, MatchResult, PixelCoordinate, SpriteProfile
from .exceptions import (
    ApplicationError, ComponentCountMismatchError, ConfigError, DimensionMismatchError,
    ImageLoadError, InvalidArgumentError, MalformedSetupStringError, NullOrEmptyInputError,
    OutOfBoundsError,
)
from .combinations import CombinationEnumerator, count_combinations

__all__ = [
    "ColorVector", "MatcherState", "MatchResult", "PixelCoordinate", "SpriteProfile",
    "ApplicationError", "ComponentCountMismatchError", "ConfigError", "DimensionMismatchError",
    "ImageLoadError", "InvalidArgumentError", "MalformedSetupStringError",
    "NullOrEmptyInputError", "OutOfBoundsError",
    "CombinationEnumerator", "count_combinations",
]
