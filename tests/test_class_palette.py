"""
Tests for class, label and track colors.
"""
import pytest

from class_palette import (
    CLASS_COLORS_F,
    CLASS_COLORS_I8,
    WHITE,
    WHITE_I8,
    color_for,
    color_for_f,
    cyrb53,
    str_to_color,
    uuid_to_color,
)


def test_palette_size():
    assert len(CLASS_COLORS_I8) == 21
    assert len(CLASS_COLORS_F) == 21


def test_background_transparent():
    assert color_for(0).a == 0


def test_color_for_bounds():
    assert color_for(1).as_tuple() == (230, 25, 75, 200)
    assert color_for(21) == WHITE_I8
    assert color_for(-1) == WHITE_I8
    assert color_for_f(100) == WHITE


def test_float_palette():
    c = color_for_f(4)
    assert (c.r, c.g, c.b, c.a) == pytest.approx((0.0, 130 / 255, 200 / 255, 200 / 255))


def test_cyrb53_deterministic():
    assert cyrb53("person") == cyrb53("person")
    assert cyrb53("person") != cyrb53("car")
    assert 0 <= cyrb53("person") < 2 ** 53


def test_str_to_color_range():
    c = str_to_color("person")
    assert 0.0 <= c.r <= 1.0
    assert 0.0 <= c.g <= 1.0
    # blue keeps the original divisor and never exceeds 1/16
    assert 0.0 <= c.b <= 1.0 / 16
    assert c.a == 1.0


def test_uuid_to_color():
    c = uuid_to_color("12345678-9abc-def0")
    assert (c.r, c.g, c.b, c.a) == pytest.approx((0x12 / 255, 0x34 / 255, 0x56 / 255, 1.0))


def test_uuid_to_color_uppercase_and_short():
    assert uuid_to_color("ABCDEF12") == uuid_to_color("abcdef12")
    c = uuid_to_color("ff")
    assert c.b == pytest.approx(0.0)
    assert c.a == 1.0
