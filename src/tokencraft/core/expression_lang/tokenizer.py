"""
Tokenizer for token value expressions.

Splits a raw value into references, operand text runs, and operators.
Operand runs are classified (color, number, text) by the parser.
"""

from __future__ import annotations

from enum import StrEnum, auto


class TokenKind(StrEnum):
    """Lexical token types for the expression language."""

    REFERENCE = auto()  # {a.b}, value is the text between the braces
    OPERAND = auto()  # literal text run, trimmed
    STAR = auto()
    SLASH = auto()
    EOF = auto()


class Token:
    """A single lexical token."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: str, pos: int) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


# Characters allowed in an operand run (literals and free text)
_OPERAND_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789#%-. "
)


class ExpressionTokenError(Exception):
    """Error during expression tokenization."""

    def __init__(self, message: str, pos: int) -> None:
        super().__init__(message)
        self.pos = pos


def tokenize(source: str) -> list[Token]:
    """Tokenize a raw token value into a list of tokens."""
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        # Skip whitespace between tokens
        if c in " \t\n\r":
            i += 1
            continue

        if c == "{":
            end = source.find("}", i + 1)
            if end == -1:
                raise ExpressionTokenError("Unterminated reference", i)
            tokens.append(Token(TokenKind.REFERENCE, source[i + 1 : end], i))
            i = end + 1
            continue

        if c == "*":
            tokens.append(Token(TokenKind.STAR, c, i))
            i += 1
            continue

        if c == "/":
            tokens.append(Token(TokenKind.SLASH, c, i))
            i += 1
            continue

        if c in _OPERAND_CHARS:
            start = i
            while i < n and source[i] in _OPERAND_CHARS:
                i += 1
            tokens.append(Token(TokenKind.OPERAND, source[start:i].strip(), start))
            continue

        raise ExpressionTokenError(f"Unexpected character: {c!r}", i)

    tokens.append(Token(TokenKind.EOF, "", n))
    return tokens
