"""Tests for the resolved value model: display, hex parsing, arithmetic."""

import pytest

from tokencraft.core.errors import ResolutionError, TypeMismatchError
from tokencraft.core.ir.values import (
    Color,
    Number,
    NumberUnit,
    Opaque,
    divide,
    format_decimal,
    format_number,
    multiply,
    to_display,
)


class TestDisplay:
    """to_display renders each value kind in its canonical text form."""

    def test_opaque_color_is_six_digits(self):
        assert to_display(Color(r=1.0, g=0.0, b=1.0)) == "#ff00ff"

    def test_translucent_color_carries_alpha(self):
        assert to_display(Color(r=0.0, g=0.0, b=0.0, a=0.5)) == "#00000080"

    def test_channels_are_clamped(self):
        assert to_display(Color(r=1.4, g=-0.2, b=0.0, a=1.7)) == "#ff0000"

    def test_numbers(self):
        assert to_display(Number(magnitude=4)) == "4"
        assert to_display(Number(magnitude=2, unit=NumberUnit.PIXELS)) == "2px"
        assert to_display(Number(magnitude=90, unit=NumberUnit.PERCENTAGE)) == "90%"
        assert to_display(Number(magnitude=1.5, unit=NumberUnit.PIXELS)) == "1.5px"

    def test_opaque_is_verbatim(self):
        assert to_display(Opaque(text="Open Sans")) == "Open Sans"

    def test_format_number(self):
        assert format_number(12.0) == "12"
        assert format_number(-0.25) == "-0.25"

    def test_format_decimal_always_has_point(self):
        assert format_decimal(4) == "4.0"
        assert format_decimal(0.9) == "0.9"
        assert format_decimal(1e22) == "1.0e+22"


class TestHexParsing:
    """Color.from_hex accepts the CSS hex forms."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("#ff00ff", "#ff00ff"),
            ("ff00ff", "#ff00ff"),
            ("#f0f", "#ff00ff"),
            ("#f0f8", "#ff00ff88"),
            ("#FF00FF80", "#ff00ff80"),
        ],
    )
    def test_forms(self, text, expected):
        assert Color.from_hex(text).to_hex() == expected

    @pytest.mark.parametrize("text", ["#", "#ff", "#fffff", "#gggggg", "red"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            Color.from_hex(text)

    def test_rgba8(self):
        assert Color.from_hex("#336699cc").to_rgba8() == (0x33, 0x66, 0x99, 0xCC)


class TestColorArithmetic:
    """Color arithmetic is componentwise across all four channels."""

    def test_multiply(self):
        result = multiply(
            Color(r=0.5, g=1.0, b=0.2, a=1.0),
            Color(r=0.5, g=0.5, b=1.0, a=0.5),
        )
        assert result == Color(r=0.25, g=0.5, b=0.2, a=0.5)

    def test_divide(self):
        result = divide(
            Color(r=0.5, g=0.5, b=0.5, a=0.5),
            Color(r=1.0, g=0.5, b=1.0, a=1.0),
        )
        assert result == Color(r=0.5, g=1.0, b=0.5, a=0.5)

    def test_divide_by_zero_channel(self):
        with pytest.raises(ResolutionError, match="Division by zero"):
            divide(Color(r=1, g=1, b=1), Color(r=1, g=0, b=1))


class TestNumberArithmetic:
    """Number arithmetic works on magnitudes and keeps the left unit."""

    def test_left_unit_kept(self):
        result = multiply(
            Number(magnitude=2, unit=NumberUnit.PIXELS),
            Number(magnitude=3),
        )
        assert result == Number(magnitude=6, unit=NumberUnit.PIXELS)

    def test_unitless_left_stays_unitless(self):
        result = multiply(Number(magnitude=2), Number(magnitude=3, unit=NumberUnit.PIXELS))
        assert result == Number(magnitude=6)

    def test_same_units(self):
        result = divide(
            Number(magnitude=9, unit=NumberUnit.PIXELS),
            Number(magnitude=3, unit=NumberUnit.PIXELS),
        )
        assert result == Number(magnitude=3, unit=NumberUnit.PIXELS)

    def test_unit_mismatch_is_error(self):
        with pytest.raises(TypeMismatchError, match="Unit mismatch"):
            divide(
                Number(magnitude=10, unit=NumberUnit.PIXELS),
                Number(magnitude=50, unit=NumberUnit.PERCENTAGE),
            )

    def test_divide_by_zero(self):
        with pytest.raises(ResolutionError, match="Division by zero"):
            divide(Number(magnitude=1), Number(magnitude=0))

    def test_overflow_is_error(self):
        with pytest.raises(ResolutionError, match="Number out of range"):
            multiply(Number(magnitude=1e300), Number(magnitude=1e300))
        with pytest.raises(ResolutionError, match="Number out of range"):
            divide(Number(magnitude=1e300), Number(magnitude=1e-300))


class TestMixedKinds:
    """Pairs of different kinds are a type mismatch."""

    @pytest.mark.parametrize(
        "left,right",
        [
            (Color(r=1, g=1, b=1), Number(magnitude=2)),
            (Number(magnitude=2), Color(r=1, g=1, b=1)),
            (Opaque(text="bold"), Number(magnitude=2)),
            (Opaque(text="a"), Opaque(text="b")),
        ],
    )
    def test_multiply(self, left, right):
        with pytest.raises(TypeMismatchError):
            multiply(left, right)

    def test_divide(self):
        with pytest.raises(TypeMismatchError, match="Cannot divide number by opaque"):
            divide(Number(magnitude=2), Opaque(text="x"))
