"""
Token value expression language.

Tokenizer, parser, and evaluator for the values found in design token
documents: colors, numbers with units, free text, {references}, and
* / arithmetic.

Usage:
    from tokencraft.core.expression_lang import parse_expr, evaluate

    expr = parse_expr("{Spacing.Base} * 2")
    result = evaluate(expr, resolver.resolve)
"""

from tokencraft.core.expression_lang.evaluator import evaluate
from tokencraft.core.expression_lang.parser import ExpressionParseError, parse_expr

__all__ = ["ExpressionParseError", "evaluate", "parse_expr"]
