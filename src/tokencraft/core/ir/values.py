"""
Resolved token values.

A value is one of a closed set:
- Color: RGBA with 0-1 float channels
- Number: magnitude with a unit (none, pixels, percentage)
- Opaque: any other text (font names, keywords)

Arithmetic is defined pairwise between values of the same kind only.
"""

from __future__ import annotations

import math
import re
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from tokencraft.core import colorspace
from tokencraft.core.errors import ResolutionError, TypeMismatchError

_HEX_RE = re.compile(r"#?([0-9a-fA-F]+)")


class NumberUnit(StrEnum):
    """Units a number literal can carry."""

    NONE = "none"
    PIXELS = "px"
    PERCENTAGE = "%"


def format_number(value: float) -> str:
    """Shortest text for a magnitude: integral values drop the fraction."""
    if float(value).is_integer():
        return str(int(value))
    return repr(value)


def format_decimal(value: float) -> str:
    """Float text that always carries a decimal point (4 -> '4.0')."""
    text = repr(float(value))
    if "." not in text and "e" in text:
        mantissa, exponent = text.split("e")
        text = f"{mantissa}.0e{exponent}"
    return text


class Color(BaseModel):
    """An sRGB color with alpha. Channels are floats, nominally 0-1."""

    r: float
    g: float
    b: float
    a: float = 1.0

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.to_hex()

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """Parse a CSS hex color (#rgb, #rgba, #rrggbb, #rrggbbaa).

        Raises:
            ValueError: If the text is not a valid hex color.
        """
        m = _HEX_RE.fullmatch(text.strip())
        if m is None:
            raise ValueError(f"Invalid hex color: {text!r}")
        digits = m.group(1)
        if len(digits) in (3, 4):
            digits = "".join(c * 2 for c in digits)
        if len(digits) not in (6, 8):
            raise ValueError(f"Invalid hex color length: {text!r}")
        channels = [int(digits[i : i + 2], 16) / 255 for i in range(0, len(digits), 2)]
        if len(channels) == 3:
            channels.append(1.0)
        r, g, b, a = channels
        return cls(r=r, g=g, b=b, a=a)

    def to_rgba8(self) -> tuple[int, int, int, int]:
        """Channels as clamped 0-255 bytes."""
        return tuple(  # type: ignore[return-value]
            int(min(max(c, 0.0), 1.0) * 255 + 0.5) for c in (self.r, self.g, self.b, self.a)
        )

    def to_hex(self) -> str:
        """Lowercase #rrggbb, or #rrggbbaa when not fully opaque."""
        r, g, b, a = self.to_rgba8()
        if a < 255:
            return f"#{r:02x}{g:02x}{b:02x}{a:02x}"
        return f"#{r:02x}{g:02x}{b:02x}"

    def to_hsla(self) -> tuple[float, float, float, float]:
        """(hue degrees, saturation, lightness, alpha)."""
        h, s, lightness = colorspace.rgb_to_hsl(self.r, self.g, self.b)
        return h, s, lightness, self.a

    @classmethod
    def from_hsla(cls, h: float, s: float, lightness: float, a: float = 1.0) -> Color:
        r, g, b = colorspace.hsl_to_rgb(h, s, lightness)
        return cls(r=r, g=g, b=b, a=a)

    def to_lcha(self) -> tuple[float, float, float, float]:
        """(CIE lightness, chroma, hue degrees, alpha)."""
        L, C, H = colorspace.rgb_to_lch(self.r, self.g, self.b)
        return L, C, H, self.a

    @classmethod
    def from_lcha(cls, L: float, C: float, H: float, a: float = 1.0) -> Color:
        r, g, b = colorspace.lch_to_rgb(L, C, H)
        return cls(r=r, g=g, b=b, a=a)


class Number(BaseModel):
    """A magnitude with a unit."""

    magnitude: float = Field(description="Numeric magnitude")
    unit: NumberUnit = Field(default=NumberUnit.NONE, description="Unit suffix")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        text = format_number(self.magnitude)
        if self.unit == NumberUnit.NONE:
            return text
        return f"{text}{self.unit.value}"

    def with_unit(self, unit: NumberUnit) -> Number:
        return Number(magnitude=self.magnitude, unit=unit)


class Opaque(BaseModel):
    """Text that is neither a color nor a number."""

    text: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.text


Value = Color | Number | Opaque


def to_display(value: Value) -> str:
    """Display form: hex for colors, unit-suffixed numbers, verbatim text."""
    if isinstance(value, Color):
        return value.to_hex()
    return str(value)


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------


def multiply(left: Value, right: Value) -> Value:
    """Componentwise for colors; magnitude-only for numbers (left unit kept)."""
    if isinstance(left, Color) and isinstance(right, Color):
        return Color(
            r=left.r * right.r,
            g=left.g * right.g,
            b=left.b * right.b,
            a=left.a * right.a,
        )
    if isinstance(left, Number) and isinstance(right, Number):
        _check_units("*", left, right)
        return _number_result(left.magnitude * right.magnitude, left.unit, "*", left, right)
    raise TypeMismatchError(f"Cannot multiply {_kind(left)} by {_kind(right)}")


def divide(left: Value, right: Value) -> Value:
    """Componentwise for colors; magnitude-only for numbers (left unit kept)."""
    if isinstance(left, Color) and isinstance(right, Color):
        if 0.0 in (right.r, right.g, right.b, right.a):
            raise ResolutionError("Division by zero")
        return Color(
            r=left.r / right.r,
            g=left.g / right.g,
            b=left.b / right.b,
            a=left.a / right.a,
        )
    if isinstance(left, Number) and isinstance(right, Number):
        _check_units("/", left, right)
        if right.magnitude == 0:
            raise ResolutionError("Division by zero")
        return _number_result(left.magnitude / right.magnitude, left.unit, "/", left, right)
    raise TypeMismatchError(f"Cannot divide {_kind(left)} by {_kind(right)}")


def _number_result(
    magnitude: float, unit: NumberUnit, op: str, left: Number, right: Number
) -> Number:
    if not math.isfinite(magnitude):
        raise ResolutionError(f"Number out of range: {left} {op} {right}")
    return Number(magnitude=magnitude, unit=unit)


def _check_units(op: str, left: Number, right: Number) -> None:
    """Two different real units cannot be combined; unitless always can."""
    if NumberUnit.NONE in (left.unit, right.unit):
        return
    if left.unit != right.unit:
        raise TypeMismatchError(f"Unit mismatch: {left} {op} {right}")


def _kind(value: Value) -> str:
    return type(value).__name__.lower()
