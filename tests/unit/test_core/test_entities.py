"""Unit tests for core entities."""
import pytest
from dataclasses import FrozenInstanceError

from spritekeys.core.entities import MatcherState, MatchResult, PixelCoordinate


class TestPixelCoordinate:

    def test_from_linear_index_is_row_major(self):
        assert PixelCoordinate.from_linear_index(0, 5) == PixelCoordinate(0, 0)
        assert PixelCoordinate.from_linear_index(4, 5) == PixelCoordinate(4, 0)
        assert PixelCoordinate.from_linear_index(5, 5) == PixelCoordinate(0, 1)
        assert PixelCoordinate.from_linear_index(18, 5) == PixelCoordinate(3, 3)

    def test_offset(self):
        assert PixelCoordinate(2, 3).offset(10, -1) == PixelCoordinate(12, 2)

    def test_immutability(self):
        point = PixelCoordinate(1, 2)
        with pytest.raises(FrozenInstanceError):
            point.x = 5

    def test_hashable(self):
        assert len({PixelCoordinate(1, 2), PixelCoordinate(1, 2), PixelCoordinate(2, 1)}) == 2


class TestMatchResult:

    def test_string_form(self):
        assert str(MatchResult(index=3, distance=0.0)) == "index: 3; distance: 0.0"

    def test_immutability(self):
        result = MatchResult(index=0, distance=1.5)
        with pytest.raises(FrozenInstanceError):
            result.index = 1


class TestMatcherState:

    def test_counts(self):
        state = MatcherState(
            key_pixels=(PixelCoordinate(0, 0), PixelCoordinate(1, 1)),
            profiles=(((1, 2, 3), (4, 5, 6)), ((7, 8, 9), (1, 1, 1)), ((0, 0, 0), (2, 2, 2))),
        )
        assert state.sprite_count == 3
        assert state.key_pixel_count == 2
        assert state.component_count == 3

    def test_field_equality(self):
        a = MatcherState(key_pixels=(PixelCoordinate(0, 0),), profiles=(((1,),), ((2,),)))
        b = MatcherState(key_pixels=(PixelCoordinate(0, 0),), profiles=(((1,),), ((2,),)))
        c = MatcherState(key_pixels=(PixelCoordinate(0, 0),), profiles=(((2,),), ((1,),)))
        assert a == b
        assert a != c
