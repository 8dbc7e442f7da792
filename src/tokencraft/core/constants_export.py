"""
Typed constant generation from token documents.

Emits Python source: one class per document acting as a namespace, one
Final-annotated constant per token. Every value is fully resolved, so
the output holds no references.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from tokencraft.core.errors import BuildError
from tokencraft.core.ir.tokens import Document, Group, Token
from tokencraft.core.ir.values import Number, NumberUnit, Value, format_decimal, to_display
from tokencraft.core.resolver import TokenResolver
from tokencraft.core.strings import to_constant_name

logger = logging.getLogger(__name__)

MODULE_HEADER = '''"""Design token constants generated by tokencraft. Do not edit."""

from typing import Final
'''

_COMPOSITE_TYPE = "tuple[tuple[str, str], ...]"


def python_literal(value: Value) -> str:
    """Python source for a resolved value.

    Numbers become floats (percentages as fractions); everything else is
    a string literal of its display form.
    """
    if isinstance(value, Number):
        magnitude = value.magnitude
        if value.unit == NumberUnit.PERCENTAGE:
            magnitude = magnitude / 100
        return format_decimal(magnitude)
    return _string_literal(to_display(value))


def python_type(value: Value) -> str:
    return "float" if isinstance(value, Number) else "str"


def python_text(value: Value) -> str:
    """String literal holding a value's constant text, for composite entries."""
    if isinstance(value, Number):
        return _string_literal(python_literal(value))
    return python_literal(value)


def _string_literal(text: str) -> str:
    # JSON string escapes are a subset of Python's
    return json.dumps(text, ensure_ascii=False)


def namespace_name(document: Document) -> str:
    """Class name for a document ("ambient" -> "AMBIENT")."""
    return _identifier(to_constant_name(document.name))


def _identifier(name: str) -> str:
    if not name or name[0].isdigit():
        return f"_{name}"
    return name


class ConstantsGenerator:
    """Walks one document and emits its constant declarations."""

    def __init__(self, document: Document, indent: str = "    ") -> None:
        self.document = document
        self.indent = indent
        self.resolver = TokenResolver(document)

    def generate(self) -> str:
        """Class block for the document."""
        lines = self._walk(self.document.root, ())
        body = "\n".join(f"{self.indent}{line}" for line in lines) or f"{self.indent}pass"
        return f"class {namespace_name(self.document)}:\n{body}\n"

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
        name = _identifier("_".join(to_constant_name(segment) for segment in path))

        if isinstance(token.value, dict):
            pairs = [
                f"({_string_literal(key)}, {python_text(self.resolver.evaluate_at(path, expr))})"
                for key, expr in token.value.items()
            ]
            if len(pairs) == 1:
                literal = f"({pairs[0]},)"
            else:
                literal = f"({', '.join(pairs)})"
            return f"{name}: Final[{_COMPOSITE_TYPE}] = {literal}"

        value = self.resolver.resolve_token(path, token)
        return f"{name}: Final[{python_type(value)}] = {python_literal(value)}"


def generate_constants(document: Document) -> str:
    """Generate the namespace class for one document."""
    return ConstantsGenerator(document).generate()


def generate_constants_module(documents: Iterable[Document]) -> str:
    """Generate a complete Python module for several documents.

    Args:
        documents: Token documents, emitted in order.

    Returns:
        Module source text.
    """
    seen: set[str] = set()
    blocks: list[str] = []
    for document in documents:
        name = namespace_name(document)
        if name in seen:
            logger.warning("Namespace %s emitted twice; the later one wins", name)
        seen.add(name)
        blocks.append(generate_constants(document))
    return "\n\n".join([MODULE_HEADER, *blocks])


def export_constants_file(documents: Iterable[Document], output_path: Path) -> Path:
    """Generate the constants module and write it to a file.

    Args:
        documents: Token documents.
        output_path: Path to write the .py module.

    Returns:
        Path to the written file.

    Raises:
        BuildError: If the file cannot be written.
    """
    source = generate_constants_module(documents)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(source, encoding="utf-8")
    except OSError as e:
        raise BuildError(f"Cannot write {output_path}: {e}") from e
    logger.info("Wrote constants to %s", output_path)

    return output_path
