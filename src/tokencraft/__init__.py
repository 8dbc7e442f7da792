"""
tokencraft - design token expression engine.

Turns design token exports into a stylesheet of custom properties and a
module of typed constants.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core import ir
from .core.constants_export import generate_constants_module
from .core.css_export import generate_stylesheets
from .core.errors import (
    CompositeValueError,
    CycleError,
    LoadError,
    ParseError,
    PathLookupError,
    ResolutionError,
    TokenError,
    TypeMismatchError,
)
from .core.expression_lang import parse_expr
from .core.resolver import TokenResolver
from .core.token_loader import load_documents


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    # In editable mode, read directly from pyproject.toml for live updates
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    # Fall back to installed metadata
    try:
        return _metadata_version("tokencraft")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "parse_expr",
    "load_documents",
    "generate_stylesheets",
    "generate_constants_module",
    "TokenResolver",
    # Errors
    "TokenError",
    "ParseError",
    "LoadError",
    "ResolutionError",
    "PathLookupError",
    "CycleError",
    "TypeMismatchError",
    "CompositeValueError",
]
