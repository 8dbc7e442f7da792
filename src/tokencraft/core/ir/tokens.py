"""
Token tree types.

A Document holds a root Group. Groups map names to Tokens or nested
Groups, in document order. Tokens hold either a single expression or a
composite mapping of sub-property name to expression.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from tokencraft.core.ir.expressions import Expr


class TokenCategory(StrEnum):
    """Token type tags that drive stylesheet property naming."""

    BORDER = "border"
    TYPOGRAPHY = "typography"
    OTHER = "other"

    @classmethod
    def from_tag(cls, tag: str) -> TokenCategory:
        """Map a document type tag to a category; unknown tags are OTHER."""
        return _CATEGORY_ALIASES.get(tag, cls.OTHER)


_CATEGORY_ALIASES: dict[str, TokenCategory] = {
    "border": TokenCategory.BORDER,
    "typography": TokenCategory.TYPOGRAPHY,
    "custom-fontStyle": TokenCategory.TYPOGRAPHY,
}


class TransformType(StrEnum):
    LIGHTEN = "lighten"
    DARKEN = "darken"
    ALPHA = "alpha"


class ColorSpace(StrEnum):
    HSL = "hsl"
    LCH = "lch"


class ModifyExtension(BaseModel):
    """
    A "studio.tokens" modify extension: a color transform applied after
    the token's value is resolved.

    transform_type and color_space are kept as raw text so that unknown
    combinations load fine and fail when applied.
    """

    transform_type: str = Field(description="lighten, darken, or alpha")
    amount: float = Field(description="Multiplicative factor")
    color_space: str = Field(description="hsl or lch")

    model_config = ConfigDict(frozen=True)


class Token(BaseModel):
    """A leaf design value."""

    value: Expr | dict[str, Expr] = Field(description="Single or composite expression")
    category: TokenCategory = Field(default=TokenCategory.OTHER)
    extension: ModifyExtension | None = Field(default=None)

    model_config = ConfigDict(frozen=True)

    @property
    def is_composite(self) -> bool:
        return isinstance(self.value, dict)


class Group(BaseModel):
    """Ordered mapping of names to tokens or nested groups."""

    children: dict[str, Token | Group] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def walk(self, prefix: tuple[str, ...] = ()) -> Iterator[tuple[tuple[str, ...], Token]]:
        """Yield (path, token) pairs depth-first in document order."""
        for name, child in self.children.items():
            path = (*prefix, name)
            if isinstance(child, Token):
                yield path, child
            else:
                yield from child.walk(path)


class Document(BaseModel):
    """A named token tree. The name namespaces every emitted identifier."""

    name: str = Field(description="Namespace for emitted identifiers")
    root: Group = Field(default_factory=Group)

    model_config = ConfigDict(frozen=True)

    def tokens(self) -> Iterator[tuple[tuple[str, ...], Token]]:
        return self.root.walk()


Group.model_rebuild()
