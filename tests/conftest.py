"""Shared pytest fixtures for tokencraft tests."""

import json
from pathlib import Path

import pytest

from tokencraft.core.ir import Document
from tokencraft.core.token_loader import parse_document


@pytest.fixture
def brand_body() -> dict:
    """Two colors, one referencing the other."""
    return {
        "Color": {
            "Brand": {"value": "#ff00ff", "type": "none"},
            "Accent": {"value": "{Color.Brand}", "type": "none"},
        }
    }


@pytest.fixture
def brand_document(brand_body: dict) -> Document:
    return parse_document(brand_body, "ambient")


@pytest.fixture
def design_body() -> dict:
    """A small but representative token tree."""
    return {
        "Spacing": {
            "Base": {"value": "4", "type": "spacing"},
            "Large": {"value": "{Spacing.Base} * 4", "type": "spacing"},
        },
        "Opacity": {
            "Muted": {"value": "60%", "type": "opacity"},
        },
        "Font": {
            "Family": {"value": "Open Sans", "type": "fontFamilies"},
        },
        "Border": {
            "Card": {
                "value": {"color": "#000000", "width": "1px", "style": "solid"},
                "type": "border",
            }
        },
        "Color": {
            "Base": {"value": "#cc0000", "type": "color"},
            "Light": {
                "value": "{Color.Base}",
                "type": "color",
                "$extensions": {
                    "studio.tokens": {
                        "modify": {"type": "lighten", "value": "0.5", "space": "hsl"}
                    }
                },
            },
        },
    }


@pytest.fixture
def design_document(design_body: dict) -> Document:
    return parse_document(design_body, "ambient")


@pytest.fixture
def token_file(tmp_path: Path, brand_body: dict) -> Path:
    """A bare-mapping token file on disk."""
    path = tmp_path / "tokens.json"
    path.write_text(json.dumps(brand_body))
    return path
