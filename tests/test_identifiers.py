"""Tests for identifier and literal quoting."""

import pytest

from pgreconcile.identifiers import (
    format_identifier,
    format_role,
    needs_quoting,
    qualified_name,
    quote_literal,
)
from pgreconcile.keywords import KeywordCategory, lookup_keyword


class TestFormatIdentifier:
    """When names must be double-quoted."""

    @pytest.mark.parametrize("name", ["foo", "_x1", "t_2024", "abort", "name", "data"])
    def test_plain_names_stay_bare(self, name):
        assert format_identifier(name) == name

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Foo", '"Foo"'),
            ("select", '"select"'),
            ("user", '"user"'),
            ("int", '"int"'),
            ("left", '"left"'),
            ("1abc", '"1abc"'),
            ("my table", '"my table"'),
            ("a-b", '"a-b"'),
            ("", '""'),
        ],
    )
    def test_quoted_names(self, name, expected):
        assert format_identifier(name) == expected

    def test_embedded_quotes_are_doubled(self):
        assert format_identifier('a"b') == '"a""b"'

    def test_non_ascii_is_quoted(self):
        assert needs_quoting("café")

    def test_qualified_name(self):
        assert qualified_name("public", "Foo") == 'public."Foo"'
        assert qualified_name("order", "t") == '"order".t'


class TestKeywords:
    def test_categories(self):
        assert lookup_keyword("select") is KeywordCategory.RESERVED
        assert lookup_keyword("left") is KeywordCategory.TYPE_FUNC_NAME
        assert lookup_keyword("between") is KeywordCategory.COL_NAME

    def test_unreserved_and_unknown_words(self):
        assert lookup_keyword("abort") is None
        assert lookup_keyword("xyzzy") is None

    def test_lookup_is_case_insensitive(self):
        assert lookup_keyword("SELECT") is KeywordCategory.RESERVED


class TestLiterals:
    def test_role_public(self):
        assert format_role("") == "PUBLIC"
        assert format_role("Admin") == '"Admin"'

    def test_quote_literal(self):
        assert quote_literal("it's") == "'it''s'"

    def test_backslash_uses_escape_string(self):
        assert quote_literal("a\\b") == "E'a\\\\b'"
