"""
String utility functions for tokencraft.

Slugs for emitted identifiers and case conversion for property names.
"""

from __future__ import annotations

import re
import unicodedata

# Characters with a dedicated replacement, applied before lower-casing
_SLUG_REPLACEMENTS = {
    ",": "c",
    "+": "p",
    ".": "d",
    "(": "_",
    ")": "_",
}

_WORD_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATOR_RE = re.compile(r"[\s_\-]+")
_NON_IDENTIFIER_RE = re.compile(r"[^a-z0-9_]")


def transliterate(text: str) -> str:
    """Reduce text to ASCII, dropping accents and anything unmappable."""
    normalized = unicodedata.normalize("NFKD", text)
    return normalized.encode("ascii", "ignore").decode("ascii")


def slugify(text: str, sep: str) -> str:
    """
    Convert a token or group name into an identifier fragment.

    Examples:
        >>> slugify("Brand Primary", "-")
        'brand-primary'
        >>> slugify("Size 1.5", "_")
        'size_1d5'
        >>> slugify("Rounded (lg)", "-")
        'rounded-_lg_'
    """
    for char, replacement in _SLUG_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    text = transliterate(text.replace(" ", sep).lower())
    return re.sub(r"[^a-z0-9_\-]", sep, text)


def slugify_css(text: str) -> str:
    return slugify(text, "-")


def slugify_py(text: str) -> str:
    return slugify(text, "_")


def split_words(text: str) -> list[str]:
    """Split camelCase, PascalCase, snake_case, kebab-case and spaced text."""
    text = _WORD_BOUNDARY_RE.sub(" ", text)
    return [w for w in _SEPARATOR_RE.split(text) if w]


def to_kebab_case(text: str) -> str:
    """
    Convert a key to kebab-case.

    Examples:
        >>> to_kebab_case("lineHeight")
        'line-height'
        >>> to_kebab_case("paragraph_spacing")
        'paragraph-spacing'
    """
    return "-".join(w.lower() for w in split_words(text))


def to_constant_name(text: str) -> str:
    """
    Upper-case a slug into a Python identifier fragment.

    Hyphens become underscores.

    Examples:
        >>> to_constant_name("Brand Primary")
        'BRAND_PRIMARY'
        >>> to_constant_name("gray-100")
        'GRAY_100'
    """
    return _NON_IDENTIFIER_RE.sub("_", slugify_py(text)).upper()
