"""Tests for token document loading."""

import json
import logging
from pathlib import Path

import pytest

from tokencraft.core.errors import LoadError, ParseError
from tokencraft.core.ir.expressions import Literal, Reference
from tokencraft.core.ir.tokens import Group, Token, TokenCategory
from tokencraft.core.ir.values import Number, NumberUnit
from tokencraft.core.token_loader import (
    document_name,
    load_documents,
    load_token_file,
    parse_document,
    parse_documents,
    parse_node,
    parse_raw_expression,
)


class TestRawValues:
    def test_string_is_parsed(self):
        assert parse_raw_expression("{a.b}") == Reference(path=("a", "b"))

    def test_json_number(self):
        assert parse_raw_expression(4) == Literal(value=Number(magnitude=4))
        assert parse_raw_expression(0.5) == Literal(value=Number(magnitude=0.5))

    @pytest.mark.parametrize("raw", [True, None, [1, 2]])
    def test_unsupported(self, raw):
        with pytest.raises(ParseError, match="Unsupported value type"):
            parse_raw_expression(raw)

    @pytest.mark.parametrize("raw", [float("inf"), float("nan"), 10**400])
    def test_number_out_of_range(self, raw):
        with pytest.raises(ParseError, match="Number out of range"):
            parse_raw_expression(raw)


class TestNodes:
    """Two-phase decode: token shape first, then group shape."""

    def test_token(self):
        node = parse_node({"value": "4px", "type": "spacing"})
        assert isinstance(node, Token)
        assert node.value == Literal(value=Number(magnitude=4, unit=NumberUnit.PIXELS))
        assert node.category == TokenCategory.OTHER

    def test_dollar_keys(self):
        node = parse_node({"$value": "#000", "$type": "border"})
        assert isinstance(node, Token)
        assert node.category == TokenCategory.BORDER

    def test_group(self):
        node = parse_node({"Base": {"value": "4", "type": "spacing"}})
        assert isinstance(node, Group)
        assert list(node.children) == ["Base"]

    def test_value_without_type_is_a_group(self):
        node = parse_node({"value": {"value": "1", "type": "x"}})
        assert isinstance(node, Group)
        assert isinstance(node.children["value"], Token)

    def test_group_with_token_field_names(self):
        node = parse_node(
            {
                "value": {"value": "1", "type": "sizing"},
                "type": {"value": "bold", "type": "fontWeights"},
            }
        )
        assert isinstance(node, Group)
        assert list(node.children) == ["value", "type"]

    def test_bad_token_reports_token_error(self):
        with pytest.raises(ParseError, match="Unexpected character"):
            parse_node({"value": "a + b", "type": "other"}, ("Bad",))

    def test_composite(self):
        node = parse_node({"value": {"width": "1px", "style": "solid"}, "type": "border"})
        assert isinstance(node, Token)
        assert node.is_composite
        assert list(node.value) == ["width", "style"]

    @pytest.mark.parametrize(
        "tag,category",
        [
            ("border", TokenCategory.BORDER),
            ("typography", TokenCategory.TYPOGRAPHY),
            ("custom-fontStyle", TokenCategory.TYPOGRAPHY),
            ("color", TokenCategory.OTHER),
        ],
    )
    def test_categories(self, tag, category):
        assert parse_node({"value": "x", "type": tag}).category == category


class TestExtensions:
    def _token(self, extensions) -> Token:
        return parse_node({"value": "#cc0000", "type": "color", "$extensions": extensions})

    def test_modify(self):
        token = self._token(
            {"studio.tokens": {"modify": {"type": "darken", "value": "0.25", "space": "hsl"}}}
        )
        assert token.extension is not None
        assert token.extension.transform_type == "darken"
        assert token.extension.amount == 0.25
        assert token.extension.color_space == "hsl"

    def test_other_namespaces_ignored(self):
        token = self._token({"com.figma": {"hiddenFromPublishing": True}})
        assert token.extension is None

    def test_studio_without_modify(self):
        assert self._token({"studio.tokens": {}}).extension is None

    def test_missing_fields(self):
        with pytest.raises(LoadError, match="missing space"):
            self._token({"studio.tokens": {"modify": {"type": "lighten", "value": 1}}})

    def test_bad_amount(self):
        with pytest.raises(LoadError, match="Invalid modify amount"):
            self._token(
                {"studio.tokens": {"modify": {"type": "lighten", "value": "lots", "space": "hsl"}}}
            )


class TestDocuments:
    def test_group_order_preserved(self):
        doc = parse_document(
            {
                "z": {"value": "1", "type": "x"},
                "a": {"value": "2", "type": "x"},
                "m": {"n": {"value": "3", "type": "x"}},
            },
            "ambient",
        )
        assert [path for path, _ in doc.tokens()] == [("z",), ("a",), ("m", "n")]

    def test_metadata_keys_skipped(self):
        doc = parse_document(
            {"$description": "palette", "Color": {"$type": "color"}},
            "ambient",
        )
        assert list(doc.root.children) == ["Color"]
        assert doc.root.children["Color"].children == {}

    def test_non_mapping_child(self):
        with pytest.raises(LoadError, match="Expected a token or group at Color.Brand") as exc:
            parse_document({"Color": {"Brand": "#fff"}}, "ambient")
        assert exc.value.context.document == "ambient"

    def test_error_context_names_document_and_path(self):
        with pytest.raises(ParseError) as exc:
            parse_document({"Color": {"Bad": {"value": "{}", "type": "color"}}}, "light")
        assert str(exc.value).startswith("light: Color.Bad\n")

    @pytest.mark.parametrize(
        "file_name,expected",
        [
            ("tokens.light.json", "light"),
            ("colors", "colors"),
            (None, "ambient"),
            ("", "ambient"),
        ],
    )
    def test_document_name(self, file_name, expected):
        assert document_name(file_name) == expected

    def test_list_of_entries(self):
        docs = parse_documents(
            [
                {"fileName": "tokens.light.json", "body": {}},
                {"fileName": "tokens.dark.json", "body": {}},
                {"body": {}},
            ]
        )
        assert [d.name for d in docs] == ["light", "dark", "ambient"]

    def test_bare_mapping_uses_default_name(self):
        docs = parse_documents({}, "brand")
        assert [d.name for d in docs] == ["brand"]

    def test_entry_without_body(self):
        with pytest.raises(LoadError, match="Entry 0"):
            parse_documents([{"fileName": "x.y"}])

    def test_bad_top_level(self):
        with pytest.raises(LoadError):
            parse_documents("tokens")


class TestFiles:
    def test_load(self, token_file: Path, caplog):
        with caplog.at_level(logging.INFO, logger="tokencraft"):
            docs = load_token_file(token_file)
        assert [d.name for d in docs] == ["ambient"]
        assert "Loaded 1 document(s)" in caplog.text

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(LoadError, match="Cannot read"):
            load_token_file(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(LoadError, match="Invalid JSON"):
            load_token_file(path)

    def test_files_concatenate_in_order(self, tmp_path: Path, token_file: Path):
        second = tmp_path / "themes.json"
        second.write_text(json.dumps([{"fileName": "tokens.dark.json", "body": {}}]))
        docs = load_documents([token_file, second])
        assert [d.name for d in docs] == ["ambient", "dark"]
