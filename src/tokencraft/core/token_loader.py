"""
Token document loading.

Reads design token JSON exports into Document trees. Two file shapes
are accepted:

- a list of {"fileName": ..., "body": {...}} entries, one document each
- a bare mapping, loaded as a single document under the default name

Several files are combined by concatenating their documents in order.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from tokencraft.core.errors import ErrorContext, LoadError, ParseError, TokenError
from tokencraft.core.expression_lang.parser import parse_expr
from tokencraft.core.ir.expressions import Expr, Literal
from tokencraft.core.ir.tokens import Document, Group, ModifyExtension, Token, TokenCategory
from tokencraft.core.ir.values import Number, NumberUnit

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT_NAME = "ambient"

_VALUE_KEYS = ("value", "$value")
_TYPE_KEYS = ("type", "$type")
_EXTENSIONS_KEY = "$extensions"
_STUDIO_NAMESPACE = "studio.tokens"


# =============================================================================
# Values
# =============================================================================


def parse_raw_expression(raw: Any) -> Expr:
    """Parse a raw JSON value (string or number) into an expression."""
    if isinstance(raw, str):
        return parse_expr(raw)
    # bool is an int subclass but never a number here
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            magnitude = float(raw)
        except OverflowError:
            magnitude = math.inf
        if not math.isfinite(magnitude):
            raise ParseError(f"Number out of range: {raw!r}", fragment=repr(raw))
        return Literal(value=Number(magnitude=magnitude, unit=NumberUnit.NONE))
    raise ParseError(f"Unsupported value type: {type(raw).__name__}", fragment=repr(raw))


def _parse_token_value(raw: Any) -> Expr | dict[str, Expr]:
    if isinstance(raw, Mapping):
        return {str(key): parse_raw_expression(sub) for key, sub in raw.items()}
    return parse_raw_expression(raw)


def _parse_extension(raw: Any) -> ModifyExtension | None:
    """Read a studio.tokens modify extension; other extensions are ignored."""
    if not isinstance(raw, Mapping):
        raise LoadError(f"{_EXTENSIONS_KEY} must be an object")

    studio = raw.get(_STUDIO_NAMESPACE)
    for namespace in raw:
        if namespace != _STUDIO_NAMESPACE:
            logger.debug("Ignoring extension namespace %s", namespace)
    if not isinstance(studio, Mapping) or "modify" not in studio:
        return None

    modify = studio["modify"]
    if not isinstance(modify, Mapping):
        raise LoadError("studio.tokens modify must be an object")
    missing = [key for key in ("type", "value", "space") if key not in modify]
    if missing:
        raise LoadError(f"studio.tokens modify is missing {', '.join(missing)}")

    try:
        amount = float(modify["value"])
    except (TypeError, ValueError) as e:
        raise LoadError(f"Invalid modify amount: {modify['value']!r}") from e

    return ModifyExtension(
        transform_type=str(modify["type"]),
        amount=amount,
        color_space=str(modify["space"]),
    )


# =============================================================================
# Nodes
# =============================================================================


def _first_key(data: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        if key in data:
            return key
    return None


def _looks_like_token(data: Mapping[str, Any]) -> bool:
    return (
        _first_key(data, _VALUE_KEYS) is not None and _first_key(data, _TYPE_KEYS) is not None
    )


def parse_token(data: Mapping[str, Any]) -> Token:
    """Decode a token-shaped mapping (value + type, optional $extensions)."""
    value_key = _first_key(data, _VALUE_KEYS)
    type_key = _first_key(data, _TYPE_KEYS)
    if value_key is None or type_key is None:
        raise LoadError("Token needs both a value and a type")

    type_tag = data[type_key]
    if not isinstance(type_tag, str):
        raise LoadError(f"Token type must be a string, got {type(type_tag).__name__}")

    extension = None
    if _EXTENSIONS_KEY in data:
        extension = _parse_extension(data[_EXTENSIONS_KEY])

    return Token(
        value=_parse_token_value(data[value_key]),
        category=TokenCategory.from_tag(type_tag),
        extension=extension,
    )


def parse_group(data: Mapping[str, Any], path: tuple[str, ...] = ()) -> Group:
    """Decode a group mapping, recursing into children in document order."""
    children: dict[str, Token | Group] = {}
    for name, child in data.items():
        if name.startswith("$"):
            logger.debug("Skipping metadata key %s at %s", name, ".".join(path) or "<root>")
            continue
        if not isinstance(child, Mapping):
            raise LoadError(
                f"Expected a token or group at {'.'.join((*path, name))}, "
                f"got {type(child).__name__}"
            )
        children[name] = parse_node(child, (*path, name))
    return Group(children=children)


def parse_node(data: Mapping[str, Any], path: tuple[str, ...] = ()) -> Token | Group:
    """Decode a node: token shape first, falling back to group shape.

    If a token-shaped mapping fails to decode as a token and also fails
    as a group, the token error is raised.
    """
    if not _looks_like_token(data):
        return parse_group(data, path)

    try:
        return parse_token(data)
    except TokenError as token_error:
        try:
            return parse_group(data, path)
        except TokenError:
            raise token_error.with_context(ErrorContext("", path)) from None


# =============================================================================
# Documents
# =============================================================================


def document_name(file_name: str | None, default: str = DEFAULT_DOCUMENT_NAME) -> str:
    """Derive a document name from an export fileName.

    "tokens.light.json" -> "light"; a name without dots is used whole.
    """
    if not file_name:
        return default
    parts = file_name.split(".")
    return parts[1] if len(parts) > 1 else parts[0]


def parse_document(body: Any, name: str) -> Document:
    if not isinstance(body, Mapping):
        raise LoadError(f"Document {name!r} body must be an object")
    try:
        root = parse_group(body)
    except TokenError as e:
        raise _with_document(e, name)
    return Document(name=name, root=root)


def _with_document(error: TokenError, name: str) -> TokenError:
    """Fill in the document name on context attached below document level."""
    if error.context is not None and not error.context.document:
        error.context.document = name
        error.args = (error._format_message(),)
    return error.with_context(ErrorContext(name))


def parse_documents(data: Any, default_name: str = DEFAULT_DOCUMENT_NAME) -> list[Document]:
    """Decode the JSON content of one token file into documents."""
    if isinstance(data, list):
        documents = []
        for index, entry in enumerate(data):
            if not isinstance(entry, Mapping) or "body" not in entry:
                raise LoadError(f"Entry {index} needs a 'body' object")
            name = document_name(entry.get("fileName"), default_name)
            documents.append(parse_document(entry["body"], name))
        return documents
    if isinstance(data, Mapping):
        return [parse_document(data, default_name)]
    raise LoadError(f"Expected a list or object at top level, got {type(data).__name__}")


def load_token_file(path: Path, default_name: str = DEFAULT_DOCUMENT_NAME) -> list[Document]:
    """Load documents from a JSON token file.

    Raises:
        LoadError: If the file cannot be read or has the wrong shape.
        ParseError: If a token value is not a valid expression.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise LoadError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LoadError(f"Invalid JSON in {path}: {e}") from e

    documents = parse_documents(data, default_name)
    logger.info("Loaded %d document(s) from %s", len(documents), path)
    return documents


def load_documents(
    paths: Iterable[Path], default_name: str = DEFAULT_DOCUMENT_NAME
) -> list[Document]:
    """Load several token files and concatenate their documents in order."""
    documents: list[Document] = []
    for path in paths:
        documents.extend(load_token_file(path, default_name))
    return documents
