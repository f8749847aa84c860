"""Tests for the field-selection parser."""

import pytest

from blograph.api.selection import FieldNode, SelectionError, parse_selection


class TestParseSelection:
    def test_blank_means_default(self):
        assert parse_selection(None) is None
        assert parse_selection("   ") is None

    def test_flat(self):
        assert parse_selection("id name") == (FieldNode("id"), FieldNode("name"))

    def test_commas_optional(self):
        assert parse_selection("id, name,") == parse_selection("id name")

    def test_nested(self):
        sel = parse_selection("title author { name } comments { text author { email } }")
        assert sel == (
            FieldNode("title"),
            FieldNode("author", (FieldNode("name"),)),
            FieldNode("comments", (
                FieldNode("text"),
                FieldNode("author", (FieldNode("email"),)),
            )),
        )

    def test_outer_braces(self):
        assert parse_selection("{ id posts { title } }") == parse_selection("id posts { title }")

    @pytest.mark.parametrize("text", [
        "id {",
        "id }",
        "posts { }",
        "{ id",
        "{ id } name",
        "id $name",
        ",,,",
    ])
    def test_malformed(self, text):
        with pytest.raises(SelectionError):
            parse_selection(text)
