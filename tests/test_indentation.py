"""Tests for the indent stack and inline-block detection."""

from __future__ import annotations

from sqlpretty.indentation import Indentation
from sqlpretty.inline import InlineBlock


class TestIndentation:
    def test_empty(self) -> None:
        ind = Indentation()
        assert ind.depth == 0
        assert ind.get_indent() == ""

    def test_unit_repeated_per_level(self) -> None:
        ind = Indentation("\t")
        ind.increase_toplevel()
        ind.increase_block_level()
        assert ind.get_indent() == "\t\t"

    def test_decrease_toplevel_pops_clause(self) -> None:
        ind = Indentation()
        ind.increase_toplevel()
        ind.decrease_toplevel()
        assert ind.depth == 0

    def test_decrease_toplevel_leaves_nesting(self) -> None:
        ind = Indentation()
        ind.increase_block_level()
        ind.decrease_toplevel()
        assert ind.depth == 1

    def test_decrease_block_discards_inner_clauses(self) -> None:
        ind = Indentation()
        ind.increase_toplevel()
        ind.increase_block_level()
        ind.increase_toplevel()
        ind.increase_toplevel()
        ind.decrease_block_level()
        assert ind.depth == 1
        assert ind.get_indent() == "  "

    def test_decrease_block_stops_at_innermost_nesting(self) -> None:
        ind = Indentation()
        ind.increase_block_level()
        ind.increase_block_level()
        ind.decrease_block_level()
        assert ind.depth == 1

    def test_never_underflows(self) -> None:
        ind = Indentation()
        ind.decrease_toplevel()
        ind.decrease_block_level()
        assert ind.depth == 0


class TestInlineBlock:
    def test_short_group(self, lex) -> None:
        tokens = lex("(a, b)")
        assert InlineBlock().is_inline_block(tokens, 0)

    def test_too_long(self, lex) -> None:
        tokens = lex("(" + "x" * 49 + ")")
        assert not InlineBlock().is_inline_block(tokens, 0)

    def test_exactly_max_length(self, lex) -> None:
        tokens = lex("(" + "x" * 48 + ")")
        assert InlineBlock().is_inline_block(tokens, 0)

    def test_nested_bracket(self, lex) -> None:
        assert not InlineBlock().is_inline_block(lex("(a (b))"), 0)

    def test_clause_keyword(self, lex) -> None:
        assert not InlineBlock().is_inline_block(lex("(SELECT 1)"), 0)

    def test_newline_keyword(self, lex) -> None:
        assert not InlineBlock().is_inline_block(lex("(a AND b)"), 0)

    def test_line_comment(self, lex) -> None:
        assert not InlineBlock().is_inline_block(lex("(a -- c\n)"), 0)

    def test_semicolon(self, lex) -> None:
        assert not InlineBlock().is_inline_block(lex("(a; b)"), 0)

    def test_unclosed(self, lex) -> None:
        assert not InlineBlock().is_inline_block(lex("(a, b"), 0)

    def test_scan_starts_at_index(self, lex) -> None:
        tokens = lex("f(a)")
        assert InlineBlock().is_inline_block(tokens, 1)

    def test_custom_max_length(self, lex) -> None:
        assert not InlineBlock(max_length=3).is_inline_block(lex("(ab)"), 0)

    def test_begin_and_end(self, lex) -> None:
        block = InlineBlock()
        block.begin_if_possible(lex("(a)"), 0)
        assert block.is_active
        block.end()
        assert not block.is_active

    def test_begin_rejected(self, lex) -> None:
        block = InlineBlock()
        block.begin_if_possible(lex("(SELECT a)"), 0)
        assert not block.is_active


class _IndexOnly(list):
    def __getitem__(self, key):
        if isinstance(key, slice):
            raise AssertionError("token list was sliced")
        return super().__getitem__(key)


class TestInlineScan:
    def test_scan_does_not_copy_tokens(self, lex) -> None:
        tokens = _IndexOnly(lex("SELECT f(a), g(b)"))
        open_index = next(i for i, t in enumerate(tokens) if t.value == "(")
        assert InlineBlock().is_inline_block(tokens, open_index)

    def test_many_groups(self, fmt) -> None:
        source = "SELECT " + ", ".join(["f(a)"] * 500)
        lines = fmt(source).splitlines()
        assert len(lines) == 501
        assert lines[-1] == "  f(a)"
