"""
Recursive descent parser for token value expressions.

Grammar:
    expr     → operand (("*" | "/") operand)*
    operand  → reference | literal
    reference → "{" segment ("." segment)* "}"      segments split again on "/"
    literal  → color | percentage | pixels | number | text

Literal forms are tried in the order listed; the first one that matches
the whole operand wins, so "90%" is a percentage and never text.
"""

from __future__ import annotations

import math
import re

from tokencraft.core.errors import ParseError
from tokencraft.core.expression_lang.tokenizer import (
    ExpressionTokenError,
    Token,
    TokenKind,
    tokenize,
)
from tokencraft.core.ir.expressions import Expr, Literal, Reference, divide, multiply
from tokencraft.core.ir.values import Color, Number, NumberUnit, Opaque

_NUMBER = r"-?[0-9]+\.?[0-9]*"

_COLOR_RE = re.compile(r"#[a-zA-Z0-9]*")
_PERCENT_RE = re.compile(rf"({_NUMBER})%")
_PIXELS_RE = re.compile(rf"({_NUMBER})px")
_NUMBER_RE = re.compile(_NUMBER)
_TEXT_RE = re.compile(r"[a-zA-Z0-9#%\-. ]*")


class ExpressionParseError(ParseError):
    """Error during expression parsing."""

    def __init__(self, message: str, source: str, pos: int = 0) -> None:
        super().__init__(f"{message} in {source!r}", fragment=source)
        self.source = source
        self.pos = pos


class _Parser:
    """Recursive descent parser for expressions."""

    def __init__(self, tokens: list[Token], source: str) -> None:
        self.tokens = tokens
        self.source = source
        self.pos = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def error(self, message: str, tok: Token) -> ExpressionParseError:
        return ExpressionParseError(message, self.source, tok.pos)

    # -- Grammar rules --

    def parse_expr(self) -> Expr:
        """operand (('*' | '/') operand)*"""
        left = self.parse_operand()
        while self.current.kind in (TokenKind.STAR, TokenKind.SLASH):
            combine = multiply if self.current.kind == TokenKind.STAR else divide
            self.advance()
            left = combine(left, self.parse_operand())
        return left

    def parse_operand(self) -> Expr:
        """reference | literal"""
        tok = self.current

        if tok.kind == TokenKind.REFERENCE:
            self.advance()
            return _parse_reference(tok, self)

        if tok.kind == TokenKind.OPERAND:
            self.advance()
            return _parse_literal(tok, self)

        if tok.kind == TokenKind.EOF:
            raise self.error("Expected operand at end of expression", tok)
        raise self.error(f"Expected operand, got {tok.value!r}", tok)


def _parse_reference(tok: Token, parser: _Parser) -> Reference:
    """Flatten {a.b/c} into ("a", "b", "c")."""
    path: list[str] = []
    for segment in tok.value.split("."):
        path.extend(segment.split("/"))
    if any(part == "" for part in path):
        raise parser.error(f"Empty segment in reference {{{tok.value}}}", tok)
    return Reference(path=tuple(path))


def _number_literal(digits: str, unit: NumberUnit, tok: Token, parser: _Parser) -> Literal:
    magnitude = float(digits)
    if not math.isfinite(magnitude):
        raise parser.error(f"Number out of range {digits!r}", tok)
    return Literal(value=Number(magnitude=magnitude, unit=unit))


def _parse_literal(tok: Token, parser: _Parser) -> Literal:
    """Classify an operand run: color, %, px, number, then free text."""
    text = tok.value

    if _COLOR_RE.fullmatch(text):
        try:
            return Literal(value=Color.from_hex(text))
        except ValueError as e:
            raise parser.error(str(e), tok) from e

    if m := _PERCENT_RE.fullmatch(text):
        return _number_literal(m.group(1), NumberUnit.PERCENTAGE, tok, parser)

    if m := _PIXELS_RE.fullmatch(text):
        return _number_literal(m.group(1), NumberUnit.PIXELS, tok, parser)

    if _NUMBER_RE.fullmatch(text):
        return _number_literal(text, NumberUnit.NONE, tok, parser)

    if _TEXT_RE.fullmatch(text):
        return Literal(value=Opaque(text=text))

    raise parser.error(f"Unrecognized literal {text!r}", tok)


def parse_expr(source: str) -> Expr:
    """Parse a raw token value into an expression AST.

    Args:
        source: Raw value text (e.g., "{Spacing.Base} * 2")

    Returns:
        Parsed expression AST. An empty or blank value is Opaque("").

    Raises:
        ExpressionParseError: If the value is not a valid expression.
    """
    try:
        tokens = tokenize(source)
    except ExpressionTokenError as e:
        raise ExpressionParseError(str(e), source, e.pos) from e

    if tokens[0].kind == TokenKind.EOF:
        return Literal(value=Opaque(text=""))

    parser = _Parser(tokens, source)
    expr = parser.parse_expr()

    # Ensure all tokens consumed
    if parser.current.kind != TokenKind.EOF:
        raise parser.error(
            f"Unexpected token after expression: {parser.current.value!r}",
            parser.current,
        )

    return expr
