"""
Expression evaluator for token values.

Tree-walking interpreter over the closed set of AST node types.
References are resolved through a caller-supplied function, which is
where lookup and cycle detection live (see tokencraft.core.resolver).
"""

from __future__ import annotations

from collections.abc import Callable

from tokencraft.core.errors import ResolutionError
from tokencraft.core.ir.expressions import BinaryExpr, BinaryOp, Expr, Literal, Reference
from tokencraft.core.ir.values import Value, divide, multiply

ReferenceResolver = Callable[[tuple[str, ...]], Value]


def evaluate(expr: Expr, resolve_reference: ReferenceResolver) -> Value:
    """Evaluate an expression to a value.

    Args:
        expr: Parsed expression AST.
        resolve_reference: Called with a reference path, returns the fully
            evaluated value of the referenced token.

    Returns:
        The computed value.

    Raises:
        ResolutionError: If evaluation fails.
    """
    if isinstance(expr, Literal):
        return expr.value

    if isinstance(expr, Reference):
        return resolve_reference(expr.path)

    if isinstance(expr, BinaryExpr):
        return _interpret_binary(expr, resolve_reference)

    raise ResolutionError(f"Unknown expression type: {type(expr).__name__}")


def _interpret_binary(expr: BinaryExpr, resolve_reference: ReferenceResolver) -> Value:
    left = evaluate(expr.left, resolve_reference)
    right = evaluate(expr.right, resolve_reference)

    if expr.op == BinaryOp.MUL:
        return multiply(left, right)
    if expr.op == BinaryOp.DIV:
        return divide(left, right)

    raise ResolutionError(f"Unknown binary op: {expr.op}")
