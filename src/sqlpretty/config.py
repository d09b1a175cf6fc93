"""Immutable lexer and printer configuration."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

DEFAULT_INDENT = "  "
DEFAULT_LANGUAGE = "sql"
INLINE_MAX_LENGTH = 50
ROW_LIMIT_WORDS = ("LIMIT",)

# A mapping of name -> value, or values consumed in order of appearance
Parameters = Mapping[str, str] | Sequence[str]


@dataclass(frozen=True, slots=True)
class LexerConfig:
    """Dialect description compiled into matchers by ``Lexer``.

    Reserved words may contain spaces (``"GROUP BY"``); any whitespace run
    between the parts matches. ``string_types`` selects from ``"``"``,
    ``"[]"``, ``'""'``, ``"''"`` and ``"N''"``.
    """

    reserved_words: tuple[str, ...] = ()
    reserved_toplevel_words: tuple[str, ...] = ()
    reserved_newline_words: tuple[str, ...] = ()
    string_types: tuple[str, ...] = ()
    open_parens: tuple[str, ...] = ("(",)
    close_parens: tuple[str, ...] = (")",)
    indexed_placeholder_types: tuple[str, ...] = ()
    named_placeholder_types: tuple[str, ...] = ()
    line_comment_types: tuple[str, ...] = ()
    special_word_chars: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PrinterConfig:
    """Options for one ``Formatter``.

    ``language`` is carried for dialect lookup only; the formatter does not
    interpret it. ``inline_max_length`` and ``row_limit_words`` come from the
    dialect table.
    """

    indent: str = DEFAULT_INDENT
    language: str = DEFAULT_LANGUAGE
    params: Parameters | None = None
    inline_max_length: int = INLINE_MAX_LENGTH
    row_limit_words: tuple[str, ...] = ROW_LIMIT_WORDS
