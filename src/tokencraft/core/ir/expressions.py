"""
Expression AST for token values.

A token's raw value parses into a small immutable tree:
- Literal: a resolved value (color, number, opaque text)
- Reference: a path to another token, {group.token}
- BinaryExpr: left * right or left / right
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from tokencraft.core.ir.values import Value, to_display

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators. Both share one precedence level, left-associative."""

    MUL = "*"
    DIV = "/"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """A terminal value."""

    value: Value = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return to_display(self.value)


class Reference(BaseModel):
    """
    Reference to another token by tree path.

    Examples:
        - Reference(path=("Color", "Brand")) → {Color.Brand}
        - {Color/Brand} and {Color.Brand} flatten to the same path
    """

    path: tuple[str, ...] = Field(description="Group names down to the token")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "{" + ".".join(self.path) + "}"


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"


def multiply(left: Expr, right: Expr) -> BinaryExpr:
    return BinaryExpr(op=BinaryOp.MUL, left=left, right=right)


def divide(left: Expr, right: Expr) -> BinaryExpr:
    return BinaryExpr(op=BinaryOp.DIV, left=left, right=right)


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | Reference | BinaryExpr

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()
