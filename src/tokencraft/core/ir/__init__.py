"""
Intermediate representation for design tokens.

- values: resolved values (Color, Number, Opaque) and their arithmetic
- expressions: the parsed form of a token's raw value
- tokens: the document tree (Document, Group, Token, extensions)
"""

from tokencraft.core.ir.expressions import BinaryExpr, BinaryOp, Expr, Literal, Reference
from tokencraft.core.ir.tokens import (
    ColorSpace,
    Document,
    Group,
    ModifyExtension,
    Token,
    TokenCategory,
    TransformType,
)
from tokencraft.core.ir.values import Color, Number, NumberUnit, Opaque, Value, to_display

__all__ = [
    # Values
    "Color",
    "Number",
    "NumberUnit",
    "Opaque",
    "Value",
    "to_display",
    # Expressions
    "BinaryExpr",
    "BinaryOp",
    "Expr",
    "Literal",
    "Reference",
    # Tokens
    "ColorSpace",
    "Document",
    "Group",
    "ModifyExtension",
    "Token",
    "TokenCategory",
    "TransformType",
]
