"""Setup string encoding of a matcher's state.

Layout: ``<locations>a<profiles>``

* locations: ``<x>c<y>`` per key pixel, joined by ``b``
* profiles: one block per sprite, joined by ``b``; a block is its color
  vectors joined by ``c``; a vector is its decimal components joined by ``d``

For example two key pixels over three single-component sprites::

    2c2b3c3a0c0b0c1b1c0

The letters never occur inside a number, so the string splits back
unambiguously and ``parse_setup(serialize_setup(state)) == state``.
"""
import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, List, Union

from ..core.entities import MatcherState, PixelCoordinate
from ..core.exceptions import MalformedSetupStringError, NullOrEmptyInputError
from ..utils.validation import INT_MAX, INT_MIN, validate_profiles

if TYPE_CHECKING:
    from .matcher import SpriteKeyPixelMatcher

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "a"
ITEM_SEPARATOR = "b"
KEY_PIXEL_SEPARATOR = "c"
COMPONENT_SEPARATOR = "d"

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_MAX_DIGITS = len(str(INT_MAX))


def serialize_setup(state: MatcherState) -> str:
    """Render a validated state as a setup string."""
    if state is None:
        raise NullOrEmptyInputError("Matcher state is None.")
    locations = ITEM_SEPARATOR.join(
        f"{p.x}{KEY_PIXEL_SEPARATOR}{p.y}" for p in state.key_pixels
    )
    profiles = ITEM_SEPARATOR.join(
        KEY_PIXEL_SEPARATOR.join(
            COMPONENT_SEPARATOR.join(str(component) for component in vector)
            for vector in profile
        )
        for profile in state.profiles
    )
    return f"{locations}{SECTION_SEPARATOR}{profiles}"


def _parse_int(field: str, what: str) -> int:
    if not _INTEGER_PATTERN.fullmatch(field):
        raise MalformedSetupStringError(f"{what} is not an integer: {field!r}.")
    # more significant digits than INT_MAX has cannot fit; int() never sees them
    if len(field.lstrip("+-").lstrip("0")) > _MAX_DIGITS:
        raise MalformedSetupStringError(f"{what} is out of range: {field[:20]!r}...")
    value = int(field)
    if not INT_MIN <= value <= INT_MAX:
        raise MalformedSetupStringError(
            f"{what} {value} is outside [{INT_MIN}, {INT_MAX}].")
    return value


def _split_nonblank(text: str, separator: str, what: str) -> List[str]:
    fields = text.split(separator)
    for field in fields:
        if not field.strip():
            raise MalformedSetupStringError(f"A {what} is empty.")
    return fields


def parse_setup(setup: str) -> MatcherState:
    """Parse a setup string into a validated :class:`MatcherState`.

    Raises:
        MalformedSetupStringError: The string does not follow the layout or
            holds a field that is not an integer.
        DimensionMismatchError: A sprite holds a different amount of key
            pixels than there are key pixel locations, or color vectors
            disagree on their amount of components.
    """
    if not isinstance(setup, str):
        raise MalformedSetupStringError(
            f"setup must be a string, got {type(setup).__name__}.")

    sections = setup.split(SECTION_SEPARATOR)
    if len(sections) != 2:
        raise MalformedSetupStringError(
            "setup must contain one section for key pixel locations "
            "and then one for key pixel values.")
    locations_text, profiles_text = sections
    if not locations_text.strip() or not profiles_text.strip():
        raise MalformedSetupStringError("At least one of setup's sections is empty.")

    key_pixels = []
    for location in _split_nonblank(locations_text, ITEM_SEPARATOR, "key pixel location"):
        fields = location.split(KEY_PIXEL_SEPARATOR)
        if len(fields) != 2:
            raise MalformedSetupStringError(
                f"Key pixel location must have x and y values: {location!r}.")
        key_pixels.append(PixelCoordinate(
            _parse_int(fields[0].strip(), "Key pixel x"),
            _parse_int(fields[1].strip(), "Key pixel y"),
        ))

    profiles = []
    for block in _split_nonblank(profiles_text, ITEM_SEPARATOR, "key pixel value array"):
        profile = []
        for vector in _split_nonblank(block, KEY_PIXEL_SEPARATOR, "key pixel value"):
            profile.append(tuple(
                _parse_int(component, "Color component")
                for component in _split_nonblank(vector, COMPONENT_SEPARATOR, "color component")
            ))
        profiles.append(tuple(profile))

    return validate_profiles(profiles, key_pixels)


def save_setup(state: Union[MatcherState, "SpriteKeyPixelMatcher"], path: Union[str, Path]) -> Path:
    """Write the setup string of a state or matcher to a UTF-8 text file."""
    if hasattr(state, "get_setup"):
        setup = state.get_setup()
    else:
        setup = serialize_setup(state)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(setup + "\n", encoding="utf-8")
    logger.info(f"Setup saved to {path}")
    return path


def load_setup(path: Union[str, Path]) -> MatcherState:
    """Read and parse a setup file written by :func:`save_setup`."""
    path = Path(path)
    text = path.read_text(encoding="utf-8").strip()
    logger.debug(f"Setup read from {path} ({len(text)} characters)")
    return parse_setup(text)
