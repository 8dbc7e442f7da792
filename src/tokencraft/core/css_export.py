"""
Stylesheet generation from token documents.

Scalar tokens become custom properties scoped to the document's root
selector. Composite tokens become a rule block of regular properties.
References stay live as var(--...) lookups and arithmetic becomes
calc(), so nothing is pre-folded except tokens carrying an extension.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from tokencraft.core.errors import BuildError
from tokencraft.core.ir.expressions import BinaryExpr, Expr, Literal, Reference
from tokencraft.core.ir.tokens import Document, Group, Token, TokenCategory
from tokencraft.core.ir.values import Number, NumberUnit, to_display
from tokencraft.core.resolver import TokenResolver
from tokencraft.core.strings import slugify_css, to_kebab_case

logger = logging.getLogger(__name__)

# (category, sub-key) -> CSS property; anything else is kebab-cased
_PROPERTY_NAMES: dict[TokenCategory, dict[str, str]] = {
    TokenCategory.BORDER: {
        "color": "border-color",
        "width": "border-width",
        "style": "border-style",
    },
    TokenCategory.TYPOGRAPHY: {
        "textCase": "text-transform",
        "text-case": "text-transform",
        "lineHeight": "line-height",
    },
}


def css_property(category: TokenCategory, key: str) -> str:
    """CSS property name for a composite token entry."""
    mapped = _PROPERTY_NAMES.get(category, {}).get(key)
    if mapped is not None:
        return mapped
    return to_kebab_case(key)


def css_variable(path: Iterable[str]) -> str:
    """Custom property name for a token path: ("Color", "Brand") -> --color-brand."""
    return "--" + "-".join(slugify_css(segment) for segment in path)


def expression_to_css(expr: Expr) -> str:
    """Render an expression as CSS, keeping references live."""
    if isinstance(expr, Literal):
        return to_display(expr.value)
    if isinstance(expr, Reference):
        return f"var({css_variable(expr.path)})"
    if isinstance(expr, BinaryExpr):
        return f"calc({expression_to_css(expr.left)} {expr.op.value} {expression_to_css(expr.right)})"
    raise TypeError(f"Unknown expression type: {type(expr).__name__}")


def css_value(expr: Expr) -> str:
    """Top-level value text. Bare numbers are pixels in stylesheets."""
    if isinstance(expr, Literal) and isinstance(expr.value, Number):
        if expr.value.unit == NumberUnit.NONE:
            return str(expr.value.with_unit(NumberUnit.PIXELS))
    return expression_to_css(expr)


class StylesheetGenerator:
    """Walks one document and emits its stylesheet text."""

    def __init__(self, document: Document, root_selector: str | None = None) -> None:
        self.document = document
        self.root_selector = root_selector or f".{slugify_css(document.name)}"
        self.resolver = TokenResolver(document)

    def generate(self) -> str:
        return "\n".join(self._walk(self.document.root, ()))

    def _walk(self, group: Group, path: tuple[str, ...]) -> list[str]:
        lines: list[str] = []
        for name, child in group.children.items():
            child_path = (*path, name)
            if isinstance(child, Token):
                lines.append(self._render_token(child_path, child))
            else:
                lines.extend(self._walk(child, child_path))
        return lines

    def _render_token(self, path: tuple[str, ...], token: Token) -> str:
        variable = css_variable(path)

        if isinstance(token.value, dict):
            if token.extension is not None:
                logger.warning("Ignoring extension on composite token %s", ".".join(path))
            entries = "\n".join(
                f"{css_property(token.category, key)}: {self._checked_value(path, expr)};"
                for key, expr in token.value.items()
            )
            return f"{self.root_selector} .{variable[2:]} {{\n{entries}\n}}"

        if token.extension is not None:
            value = to_display(self.resolver.resolve_token(path, token))
        else:
            value = self._checked_value(path, token.value)
        return f"{self.root_selector} {{ {variable}: {value}; }}"

    def _checked_value(self, path: tuple[str, ...], expr: Expr) -> str:
        """CSS text for an expression, after confirming it resolves.

        References stay live in the output, but a dangling reference,
        cycle, or type error must still fail the run.
        """
        self.resolver.evaluate_at(path, expr)
        return css_value(expr)


def generate_stylesheet(document: Document, root_selector: str | None = None) -> str:
    """Generate stylesheet text for one document.

    Args:
        document: Token document.
        root_selector: Selector scoping the declarations. Defaults to
            ".<document name>".

    Returns:
        Stylesheet text, one declaration or rule block per line group.
    """
    return StylesheetGenerator(document, root_selector).generate()


def generate_stylesheets(documents: Iterable[Document], root_selector: str | None = None) -> str:
    """Generate one stylesheet covering several documents, in order."""
    return "\n".join(generate_stylesheet(doc, root_selector) for doc in documents)


def export_stylesheet_file(
    documents: Iterable[Document],
    output_path: Path,
    root_selector: str | None = None,
) -> Path:
    """Generate the stylesheet and write it to a file.

    Args:
        documents: Token documents.
        output_path: Path to write the stylesheet.
        root_selector: Optional selector override.

    Returns:
        Path to the written file.

    Raises:
        BuildError: If the file cannot be written.
    """
    css = generate_stylesheets(documents, root_selector)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(css + "\n", encoding="utf-8")
    except OSError as e:
        raise BuildError(f"Cannot write {output_path}: {e}") from e
    logger.info("Wrote stylesheet to %s", output_path)

    return output_path
