"""
Unit tests for lexical quoting (identifiers, attribute names, literals).
"""

import io

import pytest

from lazyrepr import (
    RESERVED_KEYWORDS,
    is_reserved_keyword,
    is_var_name,
    print_attribute_name,
    print_elided,
    print_identifier,
    print_literal_bool,
    print_literal_string,
)
from lazyrepr.ansi import ANSI_FAINT, ANSI_MAGENTA, ANSI_NORMAL


def render(fn, *args, **kwargs) -> str:
    out = io.StringIO()
    fn(out, *args, **kwargs)
    return out.getvalue()


class TestReservedKeywords:
    """Test the keyword set."""

    @pytest.mark.parametrize("kw", ["if", "then", "else", "assert", "with",
                                    "let", "in", "rec", "inherit"])
    def test_keywords_are_reserved(self, kw):
        """Every language keyword is reserved."""
        assert is_reserved_keyword(kw)

    def test_or_is_not_reserved(self):
        """`or` can be used as an attribute name without quoting."""
        assert not is_reserved_keyword("or")

    def test_set_is_closed(self):
        """The keyword set has exactly nine entries."""
        assert len(RESERVED_KEYWORDS) == 9


class TestLiteralString:
    """Test string literal escaping and truncation."""

    def test_plain(self):
        """Plain text is just quoted."""
        assert render(print_literal_string, "hello") == '"hello"'

    def test_empty(self):
        """Empty string renders as a pair of quotes."""
        assert render(print_literal_string, "") == '""'

    def test_escapes(self):
        """Quotes, backslashes, newlines, CRs and tabs are escaped."""
        text = 'a"b\\c\nd\re\tf'
        assert render(print_literal_string, text) == '"a\\"b\\\\c\\nd\\re\\tf"'

    def test_interpolation_escaped(self):
        """`${` is escaped so it cannot be read as interpolation."""
        assert render(print_literal_string, "${x}") == '"\\${x}"'

    def test_bare_dollar_untouched(self):
        """A `$` not followed by `{` is left alone."""
        assert render(print_literal_string, "$x $") == '"$x $"'

    def test_double_dollar_brace(self):
        """Only the dollar directly before the brace is escaped."""
        assert render(print_literal_string, "$${") == '"$\\${"'

    def test_truncation_plural(self):
        """Truncated strings close the quote and report omitted bytes."""
        assert render(print_literal_string, "abcdef", 2) == '"ab" «4 bytes elided»'

    def test_truncation_singular(self):
        """A single omitted byte uses the singular noun."""
        assert render(print_literal_string, "abc", 2) == '"ab" «1 byte elided»'

    def test_exact_length_not_truncated(self):
        """A string exactly at the limit is printed whole."""
        assert render(print_literal_string, "abc", 3) == '"abc"'

    def test_zero_length(self):
        """A limit of zero elides everything."""
        assert render(print_literal_string, "ab", 0) == '"" «2 bytes elided»'

    def test_truncation_counts_utf8_bytes(self):
        """The omitted count is the UTF-8 size of the remainder."""
        assert render(print_literal_string, "aéé", 1) == '"a" «4 bytes elided»'

    def test_colors(self):
        """Colored literals are wrapped in magenta."""
        out = render(print_literal_string, "x", ansi_colors=True)
        assert out == f'{ANSI_MAGENTA}"x"{ANSI_NORMAL}'

    def test_colors_truncated(self):
        """The elision marker is faint and closes the color region."""
        out = render(print_literal_string, "xy", 1, True)
        assert out == f'{ANSI_MAGENTA}"x" {ANSI_FAINT}«1 byte elided»{ANSI_NORMAL}'


class TestIdentifier:
    """Test print_identifier quoting rules."""

    @pytest.mark.parametrize("name", ["foo", "_x", "a-b", "a'", "Foo_Bar9", "x-1'"])
    def test_plain_identifiers(self, name):
        """Valid identifiers print verbatim."""
        assert render(print_identifier, name) == name

    def test_empty(self):
        """The empty name is quoted."""
        assert render(print_identifier, "") == '""'

    def test_keyword(self):
        """Keywords are quoted."""
        assert render(print_identifier, "let") == '"let"'

    @pytest.mark.parametrize("name,expected", [
        ("1abc", '"1abc"'),
        ("-a", '"-a"'),
        ("'a", "\"'a\""),
        ("a.b", '"a.b"'),
        ("a b", '"a b"'),
        ("é", '"é"'),
        ("a\"b", '"a\\"b"'),
    ])
    def test_invalid_identifiers_quoted(self, name, expected):
        """Names outside the identifier class are printed as literals."""
        assert render(print_identifier, name) == expected


class TestAttributeName:
    """Test is_var_name and print_attribute_name."""

    def test_var_names(self):
        """Ordinary names are valid variable names."""
        assert is_var_name("foo")
        assert is_var_name("_foo'-1")

    @pytest.mark.parametrize("name", ["", "1a", "-a", "'a", "in", "a.b", "a b"])
    def test_not_var_names(self, name):
        """Empty, keyword, bad-start and bad-char names are rejected."""
        assert not is_var_name(name)

    def test_print_plain(self):
        """Valid names print unquoted."""
        assert render(print_attribute_name, "outPath") == "outPath"

    def test_print_quoted(self):
        """Invalid names print as escaped literals."""
        assert render(print_attribute_name, "with") == '"with"'
        assert render(print_attribute_name, "") == '""'
        assert render(print_attribute_name, "${x}") == '"\\${x}"'


class TestBoolAndElided:
    """Test boolean literals and elision markers."""

    def test_bools(self):
        """Booleans use lowercase keywords."""
        assert render(print_literal_bool, True) == "true"
        assert render(print_literal_bool, False) == "false"

    def test_elided_plural(self):
        """Counts other than one use the plural noun."""
        assert render(print_elided, 3, "item", "items") == "«3 items elided»"
        assert render(print_elided, 0, "item", "items") == "«0 items elided»"

    def test_elided_singular(self):
        """A count of one uses the singular noun."""
        assert render(print_elided, 1, "attribute", "attributes") == "«1 attribute elided»"
