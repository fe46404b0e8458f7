"""Unit tests for input validation helpers."""
import numpy as np
import pytest

from spritekeys.core.entities import MatcherState, PixelCoordinate
from spritekeys.core.exceptions import (
    DimensionMismatchError, InvalidArgumentError,
    NullOrEmptyInputError, OutOfBoundsError,
)
from spritekeys.utils.validation import (
    validate_key_pixels, validate_profiles, validate_rasters, validate_search_range,
)


class TestValidateRasters:

    def test_returns_common_dimensions(self, two_pixel_sprites):
        rasters, width, height, components = validate_rasters(two_pixel_sprites)
        assert len(rasters) == 4
        assert (width, height, components) == (5, 5, 3)

    def test_accepts_generators(self, two_pixel_sprites):
        rasters, *_ = validate_rasters(s for s in two_pixel_sprites)
        assert len(rasters) == 4

    @pytest.mark.parametrize("collection", [None, []])
    def test_null_or_empty_collection(self, collection):
        with pytest.raises(NullOrEmptyInputError):
            validate_rasters(collection)

    def test_null_sprite(self, two_pixel_sprites):
        with pytest.raises(NullOrEmptyInputError, match="Sprite 1"):
            validate_rasters([two_pixel_sprites[0], None])

    def test_width_mismatch(self, make_sprite):
        with pytest.raises(DimensionMismatchError, match="width"):
            validate_rasters([make_sprite(5, 5), make_sprite(6, 5)])

    def test_height_mismatch(self, make_sprite):
        with pytest.raises(DimensionMismatchError, match="height"):
            validate_rasters([make_sprite(5, 5), make_sprite(5, 4)])

    def test_component_mismatch(self, make_sprite):
        with pytest.raises(DimensionMismatchError, match="components"):
            validate_rasters([make_sprite(5, 5, 3), make_sprite(5, 5, 4)])


class TestValidateKeyPixels:

    def test_normalises_pairs(self):
        assert validate_key_pixels([(0, 1), PixelCoordinate(2, 3)]) == (
            PixelCoordinate(0, 1), PixelCoordinate(2, 3))

    @pytest.mark.parametrize("key_pixels", [None, []])
    def test_null_or_empty(self, key_pixels):
        with pytest.raises(NullOrEmptyInputError):
            validate_key_pixels(key_pixels)

    def test_null_location(self):
        with pytest.raises(NullOrEmptyInputError):
            validate_key_pixels([(0, 0), None])

    def test_negative_coordinates(self):
        with pytest.raises(OutOfBoundsError):
            validate_key_pixels([(-1, 0)])

    @pytest.mark.parametrize("point", [(5, 0), (0, 5), (5, 5)])
    def test_outside_extent(self, point):
        with pytest.raises(OutOfBoundsError):
            validate_key_pixels([point], width=5, height=5)

    def test_edges_are_inside(self):
        validate_key_pixels([(0, 0), (4, 4)], width=5, height=5)

    def test_offset_is_applied(self):
        validate_key_pixels([(1, 1)], width=5, height=5, offset_x=3, offset_y=3)
        with pytest.raises(OutOfBoundsError):
            validate_key_pixels([(1, 1)], width=5, height=5, offset_x=4, offset_y=0)


class TestValidateProfiles:

    def test_builds_state(self):
        state = validate_profiles([[[1, 2]], [[3, 4]]], [(0, 0)])
        assert state == MatcherState(
            key_pixels=(PixelCoordinate(0, 0),),
            profiles=(((1, 2),), ((3, 4),)),
        )

    def test_accepts_numpy_values(self):
        profiles = np.array([[[1, 2, 3]], [[4, 5, 6]]], dtype=np.uint8)
        state = validate_profiles(profiles, [(1, 1)])
        assert state.profiles == (((1, 2, 3),), ((4, 5, 6),))
        assert all(type(v) is int for v in state.profiles[0][0])

    def test_key_pixel_count_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            validate_profiles([[[1], [2]], [[3]]], [(0, 0), (1, 1)])

    def test_component_count_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            validate_profiles([[[1, 2]], [[3, 4, 5]]], [(0, 0)])

    def test_component_count_mismatch_within_profile(self):
        with pytest.raises(DimensionMismatchError):
            validate_profiles([[[1, 2], [3]]], [(0, 0), (0, 1)])

    def test_empty_vector(self):
        with pytest.raises(NullOrEmptyInputError):
            validate_profiles([[[]]], [(0, 0)])

    @pytest.mark.parametrize("profiles", [None, []])
    def test_null_or_empty_profiles(self, profiles):
        with pytest.raises(NullOrEmptyInputError):
            validate_profiles(profiles, [(0, 0)])

    def test_null_profile_and_vector(self):
        with pytest.raises(NullOrEmptyInputError):
            validate_profiles([None], [(0, 0)])
        with pytest.raises(NullOrEmptyInputError):
            validate_profiles([[None]], [(0, 0)])

    def test_non_integer_components(self):
        with pytest.raises(InvalidArgumentError):
            validate_profiles([[[1.5]]], [(0, 0)])


class TestValidateSearchRange:

    def test_valid_ranges(self):
        validate_search_range(0, 0)
        validate_search_range(1, 10)

    @pytest.mark.parametrize("minimum,maximum", [(-1, 2), (1, -2), (3, 2), (1.0, 2), (True, 2)])
    def test_invalid_ranges(self, minimum, maximum):
        with pytest.raises(InvalidArgumentError):
            validate_search_range(minimum, maximum)

    @pytest.mark.parametrize("component", [2 ** 31, -2 ** 31 - 1, 10 ** 400])
    def test_components_outside_32_bit_range(self, component):
        with pytest.raises(InvalidArgumentError):
            validate_profiles([[[component]]], [(0, 0)])

    def test_32_bit_limits_are_accepted(self):
        state = validate_profiles([[[2 ** 31 - 1, -2 ** 31]]], [(0, 0)])
        assert state.profiles == (((2 ** 31 - 1, -2 ** 31),),)
