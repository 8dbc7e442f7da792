"""
Path lookup and reference resolution over a token document.

Resolution is recomputed on every call: there is no cache, so a token
referenced from many places is evaluated each time. Paths currently
being resolved are tracked on a stack and a reference back into that
stack raises CycleError instead of recursing forever.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tokencraft.core.errors import (
    CompositeValueError,
    CycleError,
    ErrorContext,
    PathLookupError,
    ResolutionError,
)
from tokencraft.core.expression_lang.evaluator import evaluate
from tokencraft.core.extensions import apply_extension
from tokencraft.core.ir.expressions import Expr
from tokencraft.core.ir.tokens import Document, Group, Token
from tokencraft.core.ir.values import Value

logger = logging.getLogger(__name__)


class TokenResolver:
    """Resolves token paths and expressions against one document."""

    def __init__(self, document: Document) -> None:
        self.document = document
        self._in_progress: list[tuple[str, ...]] = []

    def lookup(self, path: Sequence[str]) -> Token:
        """Walk the group chain one segment per level.

        Raises:
            PathLookupError: If the path runs off the tree, stops at a
                group, or continues past a token.
        """
        path = tuple(path)
        node: Token | Group = self.document.root
        for depth, segment in enumerate(path):
            if isinstance(node, Token):
                raise PathLookupError(path, f"path continues past token {'.'.join(path[:depth])}")
            child = node.children.get(segment)
            if child is None:
                raise PathLookupError(path)
            node = child
        if isinstance(node, Group):
            raise PathLookupError(path, "path names a group, not a token")
        return node

    def resolve(self, path: Sequence[str]) -> Value:
        """Evaluate the token at path, following references transitively.

        The referenced token's expression is evaluated; its extension is
        not applied.

        Raises:
            PathLookupError: If the path does not name a token.
            CompositeValueError: If the token is composite.
            CycleError: If the path is already being resolved.
        """
        path = tuple(path)
        if path in self._in_progress:
            start = self._in_progress.index(path)
            raise CycleError([*self._in_progress[start:], path])

        token = self.lookup(path)
        if token.is_composite:
            raise CompositeValueError(path)

        self._in_progress.append(path)
        try:
            return self.evaluate(token.value)  # type: ignore[arg-type]
        finally:
            self._in_progress.pop()

    def evaluate(self, expr: Expr) -> Value:
        """Evaluate an expression, resolving references in this document."""
        return evaluate(expr, self.resolve)

    def evaluate_at(self, path: Sequence[str], expr: Expr) -> Value:
        """Evaluate an expression owned by the token at path.

        The owning path is on the in-progress stack while evaluating, so
        a reference back to it is reported as a cycle. Errors raised
        without context get the document and path attached.
        """
        path = tuple(path)
        self._in_progress.append(path)
        try:
            return self.evaluate(expr)
        except ResolutionError as e:
            raise e.with_context(ErrorContext(self.document.name, path))
        finally:
            self._in_progress.pop()

    def resolve_token(self, path: Sequence[str], token: Token) -> Value:
        """Final value of a scalar token: evaluated, then its extension applied."""
        if token.is_composite:
            raise CompositeValueError(path).with_context(
                ErrorContext(self.document.name, tuple(path))
            )
        value = self.evaluate_at(path, token.value)  # type: ignore[arg-type]
        if token.extension is None:
            return value
        logger.debug("Applying %s extension to %s", token.extension.transform_type, path)
        try:
            return apply_extension(token.extension, value)
        except ResolutionError as e:
            raise e.with_context(ErrorContext(self.document.name, tuple(path)))
