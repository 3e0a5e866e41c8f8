"""Tests for the lexical scanner state machine."""

from __future__ import annotations

from sourcepick.source.scanner import (
    GroupSpan,
    find_matching_close,
    iter_call_sites,
    match_group,
    skip_block_comment,
    skip_line_comment,
    skip_non_code,
    skip_string,
    value_end,
)


class TestMatchGroup:
    def test_simple_group(self) -> None:
        assert match_group("A(b)", 1) == GroupSpan(4, True)

    def test_mixed_brackets_share_one_stack(self) -> None:
        assert match_group("f({[()]})", 1) == GroupSpan(9, True)

    def test_mismatched_closer_is_ignored(self) -> None:
        """``]`` does not pop ``(``; the real ``)`` closes the group."""
        assert match_group("(a]b)", 0) == GroupSpan(5, True)

    def test_paren_inside_string_is_skipped(self) -> None:
        assert match_group("('x)')", 0) == GroupSpan(6, True)

    def test_triple_quoted_string(self) -> None:
        text = '(""" ) """)'
        assert match_group(text, 0) == GroupSpan(len(text), True)

    def test_escaped_quote_stays_in_string(self) -> None:
        text = "('it\\'s )')"
        assert match_group(text, 0) == GroupSpan(len(text), True)

    def test_single_line_string_stops_at_newline(self) -> None:
        """An unclosed single-line string ends at the bare newline."""
        assert match_group("('abc\n)", 0) == GroupSpan(7, True)

    def test_line_comment_is_skipped(self) -> None:
        assert match_group("(a // )\n)", 0) == GroupSpan(9, True)

    def test_block_comment_is_skipped(self) -> None:
        assert match_group("(/* ) */)", 0) == GroupSpan(9, True)

    def test_raw_string_is_skipped(self) -> None:
        assert match_group("(r')')", 0) == GroupSpan(6, True)

    def test_unterminated_group_runs_to_end(self) -> None:
        assert match_group("(a, (b)", 0) == GroupSpan(7, False)

    def test_unterminated_block_comment_runs_to_end(self) -> None:
        assert match_group("(/* )", 0) == GroupSpan(5, False)

    def test_non_opener_returns_unbalanced_start(self) -> None:
        assert match_group("abc", 0) == GroupSpan(0, False)

    def test_find_matching_close(self) -> None:
        assert find_matching_close("x(y(z))", 1) == 7


class TestSkipHelpers:
    def test_unterminated_string_runs_to_end(self) -> None:
        assert skip_string("'abc", 0) == 4

    def test_line_comment_consumes_newline(self) -> None:
        assert skip_line_comment("// x\ny", 0) == 5

    def test_line_comment_at_end_of_text(self) -> None:
        assert skip_line_comment("// x", 0) == 4

    def test_unterminated_block_comment(self) -> None:
        assert skip_block_comment("/* x", 0) == 4

    def test_skip_non_code_leaves_code_alone(self) -> None:
        assert skip_non_code("a / b", 2) == 2

    def test_skip_non_code_raw_prefix(self) -> None:
        assert skip_non_code("r'x' + y", 0) == 4


class TestCallSites:
    def test_only_capitalised_code_calls(self) -> None:
        text = "Foo(Bar(), baz(), 'Qux()', // Zed(\n Mid ())"
        names = [site.name for site in iter_call_sites(text)]
        assert names == ["Foo", "Bar", "Mid"]

    def test_mid_word_identifiers_ignored(self) -> None:
        names = [site.name for site in iter_call_sites("aFoo(1) _Bar(2)")]
        assert names == []

    def test_end_limits_open_paren(self) -> None:
        sites = list(iter_call_sites("A(B(", end=2))
        assert [site.name for site in sites] == ["A"]
        assert sites[0].start == 0
        assert sites[0].open_paren == 1

    def test_name_filter_matches_whole_identifier_any_case(self) -> None:
        text = "foo(1); RichText(2); text(3); // foo(4)\n foo (5)"
        sites = list(iter_call_sites(text, name="foo"))
        assert [site.start for site in sites] == [0, text.rindex("foo")]
        assert [site.name for site in sites] == ["foo", "foo"]


class TestValueEnd:
    def test_stops_at_top_level_comma(self) -> None:
        assert value_end("a: f(1, 2), b", 2) == 10

    def test_stops_at_enclosing_closer(self) -> None:
        assert value_end("x: 1)", 2) == 4

    def test_comma_inside_string_ignored(self) -> None:
        assert value_end("'a, b', c", 0) == 6
