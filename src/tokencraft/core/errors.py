"""
Error types for token loading, expression parsing, and resolution.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


class TokenError(Exception):
    """Base exception for all tokencraft errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message

    def with_context(self, context: ErrorContext) -> TokenError:
        """Attach context if none is set yet. Returns self for re-raising."""
        if self.context is None:
            self.context = context
            self.args = (self._format_message(),)
        return self


class ParseError(TokenError):
    """
    Raised when a token's raw value cannot be parsed into an expression.

    Examples:
    - Characters outside the expression alphabet
    - Unterminated or empty references
    - Malformed hex colors
    - Missing operands around * or /
    """

    def __init__(
        self,
        message: str,
        fragment: str = "",
        context: ErrorContext | None = None,
    ):
        self.fragment = fragment
        super().__init__(message, context)


class LoadError(TokenError):
    """
    Raised when a token document does not have the expected shape.

    Examples:
    - Unreadable JSON
    - Group children that are not mappings
    - Unsupported raw value types
    - Malformed extension payloads
    """

    pass


class ResolutionError(TokenError):
    """Raised when an expression cannot be evaluated to a value."""

    pass


class PathLookupError(ResolutionError):
    """Raised when a reference path does not name a token."""

    def __init__(self, path: Sequence[str], reason: str = "no such path"):
        self.path = tuple(path)
        super().__init__(f"{reason}: {format_path(self.path)}")


class CycleError(ResolutionError):
    """Raised when references loop back onto a token being resolved."""

    def __init__(self, chain: Sequence[Sequence[str]]):
        self.chain = [tuple(p) for p in chain]
        rendered = " -> ".join(format_path(p) for p in self.chain)
        super().__init__(f"circular reference: {rendered}")


class TypeMismatchError(ResolutionError):
    """
    Raised when an operation meets values it is not defined for.

    Examples:
    - Multiplying a color by a number
    - Dividing pixels by a percentage
    - Applying a color extension to a number
    - An extension with an unknown (type, space) combination
    """

    pass


class CompositeValueError(TypeMismatchError):
    """Raised when a composite token is used where a single value is needed."""

    def __init__(self, path: Sequence[str]):
        self.path = tuple(path)
        super().__init__(f"cannot resolve composite as scalar: {format_path(self.path)}")


class ManifestError(TokenError):
    """Raised when tokencraft.toml is missing required settings or is invalid."""

    pass


class BuildError(TokenError):
    """Raised when build output cannot be written."""

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside the token tree.

    Attributes:
        document: Name of the document being processed
        path: Token path (group names down to the token)
    """

    document: str
    path: tuple[str, ...] = ()

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "ambient: Color.Brand"
        """
        if self.path:
            return f"{self.document}: {format_path(self.path)}"
        return self.document


def format_path(path: Sequence[str]) -> str:
    """Render a token path the way references spell it."""
    return ".".join(path)
