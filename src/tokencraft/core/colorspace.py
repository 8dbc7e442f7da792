"""
Pure-Python color space conversions.

Converts sRGB channel tuples (0-1 floats) to and from HSL and CIE LCH
(D65 white point). No external color libraries required.
"""

from __future__ import annotations

import colorsys
import math

# D65 reference white
_WHITE_X = 0.95047
_WHITE_Y = 1.0
_WHITE_Z = 1.08883

_EPSILON = (6 / 29) ** 3
_KAPPA = 3 * (6 / 29) ** 2


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert sRGB to HSL.

    Returns:
        (hue, saturation, lightness). Hue is in degrees (0-360),
        saturation and lightness are 0-1.
    """
    h, lightness, s = colorsys.rgb_to_hls(r, g, b)
    return h * 360.0, s, lightness


def hsl_to_rgb(h: float, s: float, lightness: float) -> tuple[float, float, float]:
    """Convert HSL (hue in degrees) back to sRGB."""
    return colorsys.hls_to_rgb((h / 360.0) % 1.0, lightness, s)


def _to_linear(c: float) -> float:
    if abs(c) <= 0.04045:
        return c / 12.92
    return math.copysign(((abs(c) + 0.055) / 1.055) ** 2.4, c)


def _from_linear(c: float) -> float:
    if abs(c) <= 0.0031308:
        return c * 12.92
    return math.copysign(1.055 * abs(c) ** (1 / 2.4) - 0.055, c)


def _lab_f(t: float) -> float:
    if t > _EPSILON:
        return math.copysign(abs(t) ** (1 / 3), t)
    return t / _KAPPA + 4 / 29


def _lab_f_inv(t: float) -> float:
    if t > 6 / 29:
        return t**3
    return _KAPPA * (t - 4 / 29)


def rgb_to_lch(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert sRGB to CIE LCH.

    Returns:
        (lightness 0-100, chroma, hue in degrees 0-360).
    """
    lr, lg, lb = _to_linear(r), _to_linear(g), _to_linear(b)

    x = 0.4124564 * lr + 0.3575761 * lg + 0.1804375 * lb
    y = 0.2126729 * lr + 0.7151522 * lg + 0.0721750 * lb
    z = 0.0193339 * lr + 0.1191920 * lg + 0.9503041 * lb

    fx = _lab_f(x / _WHITE_X)
    fy = _lab_f(y / _WHITE_Y)
    fz = _lab_f(z / _WHITE_Z)

    L = 116 * fy - 16
    a = 500 * (fx - fy)
    b_ = 200 * (fy - fz)

    C = math.hypot(a, b_)
    H = math.degrees(math.atan2(b_, a)) % 360.0
    return L, C, H


def lch_to_rgb(L: float, C: float, H: float) -> tuple[float, float, float]:
    """Convert CIE LCH (hue in degrees) back to sRGB.

    Out-of-gamut results are returned unclamped.
    """
    a = C * math.cos(math.radians(H))
    b_ = C * math.sin(math.radians(H))

    fy = (L + 16) / 116
    fx = fy + a / 500
    fz = fy - b_ / 200

    x = _WHITE_X * _lab_f_inv(fx)
    y = _WHITE_Y * _lab_f_inv(fy)
    z = _WHITE_Z * _lab_f_inv(fz)

    lr = 3.2404542 * x - 1.5371385 * y - 0.4985314 * z
    lg = -0.9692660 * x + 1.8760108 * y + 0.0415560 * z
    lb = 0.0556434 * x - 0.2040259 * y + 1.0572252 * z

    return _from_linear(lr), _from_linear(lg), _from_linear(lb)
