"""
Extension transforms applied to resolved token values.

Supported "studio.tokens" modify combinations:
- hsl + lighten: l' = l + l * amount
- hsl + darken:  l' = l - l * amount
- lch + alpha:   a' = a + a * amount

Transforms are only defined for colors.
"""

from __future__ import annotations

from tokencraft.core.errors import TypeMismatchError
from tokencraft.core.ir.tokens import ColorSpace, ModifyExtension, TransformType
from tokencraft.core.ir.values import Color, Value


def apply_extension(extension: ModifyExtension, base: Value) -> Value:
    """Rewrite a resolved value with a modify extension.

    Raises:
        TypeMismatchError: If the base is not a color, or the
            (type, space) combination is not supported.
    """
    if not isinstance(base, Color):
        raise TypeMismatchError(f"Unexpected base value for color transform: {base}")

    space = extension.color_space
    kind = extension.transform_type
    amount = extension.amount

    if space == ColorSpace.HSL:
        h, s, lightness, a = base.to_hsla()
        if kind == TransformType.LIGHTEN:
            lightness = lightness + lightness * amount
        elif kind == TransformType.DARKEN:
            lightness = lightness - lightness * amount
        else:
            raise TypeMismatchError(f"Invalid transform for hsl: {kind!r}")
        return Color.from_hsla(h, s, lightness, a)

    if space == ColorSpace.LCH:
        L, C, H, a = base.to_lcha()
        if kind != TransformType.ALPHA:
            raise TypeMismatchError(f"Invalid transform for lch: {kind!r}")
        return Color.from_lcha(L, C, H, a + a * amount)

    raise TypeMismatchError(f"Unsupported color space: {space!r}")
