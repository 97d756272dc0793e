"""Tests for tagexpander.scanner module."""

import pytest

from tagexpander.scanner import (
    Act,
    Lit,
    Tag,
    TagParseError,
    join_segments,
    parse_modifier,
    parse_tag,
    scan_segments,
)


class TestScanner:
    """Tests for scan_segments tokenizer."""

    def _scan(self, rule: str):
        """Helper to convert segments to tuples for easier comparison."""
        out = []
        for s in scan_segments(rule):
            if isinstance(s, Lit):
                out.append(("LIT", s.raw))
            elif isinstance(s, Tag):
                out.append(("TAG", s.raw))
            else:
                out.append(("ACT", s.raw))
        return out

    def test_literal_only(self):
        assert self._scan("abc") == [("LIT", "abc")]

    def test_tag(self):
        assert self._scan("a #b# c") == [("LIT", "a "), ("TAG", "b"), ("LIT", " c")]

    def test_tag_with_modifiers(self):
        assert self._scan("#animal.s.capitalize#") == [("TAG", "animal.s.capitalize")]

    def test_action(self):
        assert self._scan("[hero:Ana]#hero#") == [("ACT", "hero:Ana"), ("TAG", "hero")]

    def test_nested_brackets(self):
        assert self._scan("[a:[b]c]d") == [("ACT", "a:[b]c"), ("LIT", "d")]

    def test_hash_inside_action(self):
        assert self._scan("[hero:#name#]x") == [("ACT", "hero:#name#"), ("LIT", "x")]

    def test_action_inside_tag(self):
        assert self._scan("#[hero:#name#]story#") == [("TAG", "[hero:#name#]story")]

    def test_pop_and_call(self):
        assert self._scan("[a:POP][#setup#]") == [("ACT", "a:POP"), ("ACT", "#setup#")]

    def test_escaped_hash_kept_verbatim(self):
        assert self._scan("\\#a\\#") == [("LIT", "\\#a\\#")]

    def test_escaped_bracket(self):
        assert self._scan("x\\[y") == [("LIT", "x\\[y")]

    def test_escape_inside_tag(self):
        assert self._scan("#a\\#b#") == [("TAG", "a\\#b")]

    def test_none_input(self):
        scan = scan_segments(None)
        assert len(scan) == 0
        assert scan.errors == ()

    def test_empty_string(self):
        scan = scan_segments("")
        assert len(scan) == 0
        assert scan.errors == ()

    def test_no_empty_plaintext(self):
        assert self._scan("#a##b#") == [("TAG", "a"), ("TAG", "b")]


class TestScannerErrors:
    """Tests for non-fatal scan errors."""

    def test_balanced_has_no_errors(self):
        assert scan_segments("a #b# [c:d] #[e:f]g.s# h").errors == ()

    def test_unclosed_tag(self):
        scan = scan_segments("a #b")
        assert scan.errors == ("Unclosed tag",)
        # the tail is still returned
        assert [s.raw for s in scan] == ["a ", "b"]

    def test_too_many_open(self):
        assert scan_segments("a [b").errors == ("Too many [",)

    def test_too_many_close(self):
        scan = scan_segments("a ]b")
        assert scan.errors == ("Too many ]",)
        assert [s.raw for s in scan] == ["a ]b"]

    def test_empty_tag(self):
        scan = scan_segments("a##")
        assert scan.errors == ("2: empty tag",)
        assert scan[1] == Tag("")

    def test_empty_action(self):
        scan = scan_segments("[]x")
        assert scan.errors == ("1: empty action",)
        assert scan[0] == Act("")


class TestJoinSegments:
    """Reassembling segments gives back the rule text."""

    @pytest.mark.parametrize(
        "rule",
        [
            "plain text",
            "The #animal.s# ate #[food:#fruit#]meal#.",
            "[hero:#name#][place:sea,sky]#hero# went to the #place#",
            "a [b:[c]d] e",
            "\\#not a tag\\# and \\\\",
            "#a##b#[c:POP]",
        ],
    )
    def test_round_trip(self, rule):
        assert join_segments(scan_segments(rule)) == rule


class TestParseTag:
    """Tests for parse_tag."""

    def test_symbol_only(self):
        parts = parse_tag("animal")
        assert parts.symbol == "animal"
        assert parts.modifiers == []
        assert parts.preactions == []

    def test_modifiers_in_order(self):
        parts = parse_tag("animal.s.capitalize")
        assert parts.symbol == "animal"
        assert parts.modifiers == ["s", "capitalize"]

    def test_preactions(self):
        parts = parse_tag("[hero:#name#][place:sea]story.a")
        assert parts.symbol == "story"
        assert parts.modifiers == ["a"]
        assert parts.preactions == ["hero:#name#", "place:sea"]

    def test_no_symbol(self):
        parts = parse_tag("[a:b]")
        assert parts.symbol == ""
        assert parts.preactions == ["a:b"]

    def test_multiple_main_sections_raises(self):
        with pytest.raises(TagParseError, match="multiple main sections"):
            parse_tag("a[b:c]d")

    def test_scan_errors_carried(self):
        parts = parse_tag("[a:b")
        assert parts.errors == ["Too many ["]


class TestParseModifier:
    """Tests for parse_modifier."""

    def test_plain_name(self):
        assert parse_modifier("capitalize") == ("capitalize", [])

    def test_params(self):
        assert parse_modifier("replace(a,b)") == ("replace", ["a", "b"])

    def test_empty_parens_not_parsed(self):
        assert parse_modifier("replace()") == ("replace()", [])

    def test_leading_paren_not_parsed(self):
        assert parse_modifier("(x)") == ("(x)", [])
