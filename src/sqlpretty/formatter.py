"""Formatter: re-derives all whitespace of a SQL token stream."""

from __future__ import annotations

import logging
import re

from sqlpretty.config import PrinterConfig
from sqlpretty.indentation import Indentation
from sqlpretty.inline import InlineBlock
from sqlpretty.lexer import Lexer
from sqlpretty.params import Params
from sqlpretty.tokens import Token, TokenType

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")

# An open bracket keeps the space before it only after these token types
_KEEP_SPACE_BEFORE_PAREN = frozenset(
    {TokenType.WHITESPACE, TokenType.OPEN_PAREN, TokenType.LINE_COMMENT}
)


class _Output:
    """Append-only text buffer that can trim trailing whitespace."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, text: str) -> None:
        self._parts.append(text)

    def trim_end(self) -> None:
        while self._parts:
            last = self._parts[-1].rstrip()
            if last:
                self._parts[-1] = last
                return
            self._parts.pop()

    def getvalue(self) -> str:
        return "".join(self._parts)


def equalize_whitespace(text: str) -> str:
    """Replace every whitespace run with a single space."""
    return _WHITESPACE_RUN.sub(" ", text)


class Formatter:
    """Format SQL in a single left-to-right pass over its tokens.

    All per-query state (indent stack, inline-block flag, parameter cursor,
    last clause keyword) is rebuilt at the start of every ``format`` call, so
    one instance can format any number of queries in sequence.
    """

    def __init__(self, config: PrinterConfig, lexer: Lexer) -> None:
        self.config = config
        self.lexer = lexer
        self._row_limit_words = frozenset(w.upper() for w in config.row_limit_words)
        self._reset([])

    def _reset(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.index = 0
        self.indentation = Indentation(self.config.indent)
        self.inline_block = InlineBlock(self.config.inline_max_length)
        self.params = Params(self.config.params)
        self.previous_reserved_word: Token | None = None
        self._out = _Output()

    def format(self, query: str) -> str:
        """Format a SQL string. Never raises; ``""`` formats to ``""``."""
        tokens = self.lexer.tokenize(query)
        self._reset(tokens)
        for index, token in enumerate(tokens):
            self.index = index
            self._format_token(token)
        logger.debug("formatted %d tokens, final indent depth %d", len(tokens), self.indentation.depth)
        return self._out.getvalue().strip()

    def _format_token(self, token: Token) -> None:
        tt = token.type
        if tt is TokenType.WHITESPACE:
            # All spacing is re-derived below
            return
        if tt is TokenType.LINE_COMMENT:
            self._format_line_comment(token)
        elif tt is TokenType.BLOCK_COMMENT:
            self._format_block_comment(token)
        elif tt is TokenType.RESERVED_TOPLEVEL:
            self._format_toplevel_reserved_word(token)
            self.previous_reserved_word = token
        elif tt is TokenType.RESERVED_NEWLINE:
            self._format_newline_reserved_word(token)
            self.previous_reserved_word = token
        elif tt is TokenType.OPEN_PAREN:
            self._format_opening_paren(token)
        elif tt is TokenType.CLOSE_PAREN:
            self._format_closing_paren(token)
        elif tt is TokenType.PLACEHOLDER:
            self._format_placeholder(token)
        elif token.value == ",":
            self._format_comma(token)
        elif token.value == ":":
            self._format_with_space_after(token)
        elif token.value == ".":
            self._format_without_spaces(token)
        elif token.value == ";":
            self._format_query_separator(token)
        else:
            self._format_with_spaces(token)

    # ------------------------------------------------------------------
    # Comments and keywords
    # ------------------------------------------------------------------

    def _format_line_comment(self, token: Token) -> None:
        self._out.append(token.value)
        self._add_newline()

    def _format_block_comment(self, token: Token) -> None:
        self._add_newline()
        self._out.append(token.value.replace("\n", "\n" + self.indentation.get_indent()))
        self._add_newline()

    def _format_toplevel_reserved_word(self, token: Token) -> None:
        self.indentation.decrease_toplevel()
        self._add_newline()
        self.indentation.increase_toplevel()
        self._out.append(equalize_whitespace(token.value))
        self._add_newline()

    def _format_newline_reserved_word(self, token: Token) -> None:
        self._add_newline()
        self._out.append(equalize_whitespace(token.value) + " ")

    # ------------------------------------------------------------------
    # Brackets
    # ------------------------------------------------------------------

    def _format_opening_paren(self, token: Token) -> None:
        previous = self._previous_token()
        if previous is None or previous.type not in _KEEP_SPACE_BEFORE_PAREN:
            self._out.trim_end()
        self._out.append(token.value)

        self.inline_block.begin_if_possible(self.tokens, self.index)
        if not self.inline_block.is_active:
            self.indentation.increase_block_level()
            self._add_newline()

    def _format_closing_paren(self, token: Token) -> None:
        if self.inline_block.is_active:
            self.inline_block.end()
            self._format_with_space_after(token)
        else:
            self.indentation.decrease_block_level()
            self._add_newline()
            self._format_with_spaces(token)

    # ------------------------------------------------------------------
    # Placeholders and punctuation
    # ------------------------------------------------------------------

    def _format_placeholder(self, token: Token) -> None:
        self._out.append(f"{self.params.get(token)} ")

    def _format_comma(self, token: Token) -> None:
        """Commas start a new line, except inline or after a row limit clause."""
        self._format_with_space_after(token)
        if self.inline_block.is_active:
            return
        if self._after_row_limit():
            return
        self._add_newline()

    def _after_row_limit(self) -> bool:
        if self.previous_reserved_word is None:
            return False
        word = equalize_whitespace(self.previous_reserved_word.value).upper()
        return word in self._row_limit_words

    def _format_with_space_after(self, token: Token) -> None:
        self._trim_trailing_whitespace()
        self._out.append(token.value + " ")

    def _format_without_spaces(self, token: Token) -> None:
        self._trim_trailing_whitespace()
        self._out.append(token.value)

    def _format_with_spaces(self, token: Token) -> None:
        self._out.append(token.value + " ")

    def _format_query_separator(self, token: Token) -> None:
        self._trim_trailing_whitespace()
        self._out.append(f"\n{token.value}\n")

    # ------------------------------------------------------------------
    # Whitespace helpers
    # ------------------------------------------------------------------

    def _add_newline(self) -> None:
        self._out.trim_end()
        self._out.append("\n" + self.indentation.get_indent())

    def _trim_trailing_whitespace(self) -> None:
        # A line comment's line break must survive the trim
        self._out.trim_end()
        previous = self._previous_non_whitespace_token()
        if previous is not None and previous.type is TokenType.LINE_COMMENT:
            self._out.append("\n")

    def _previous_token(self, offset: int = 1) -> Token | None:
        index = self.index - offset
        if index < 0:
            return None
        return self.tokens[index]

    def _previous_non_whitespace_token(self) -> Token | None:
        offset = 1
        while True:
            token = self._previous_token(offset)
            if token is None or token.type is not TokenType.WHITESPACE:
                return token
            offset += 1
