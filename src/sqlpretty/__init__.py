"""SQL pretty-printer: a lexer and rule-based formatter, no parser."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlpretty.config import DEFAULT_INDENT, DEFAULT_LANGUAGE

if TYPE_CHECKING:
    from sqlpretty.config import Parameters

__version__ = "0.1.0"


def format(
    query: str,
    indent: str = DEFAULT_INDENT,
    language: str = DEFAULT_LANGUAGE,
    params: Parameters | None = None,
) -> str:
    """Format a SQL query in the given dialect.

    Raises ``UnknownDialectError`` for an unsupported ``language``; any
    string ``query`` formats without error.
    """
    from sqlpretty.config import PrinterConfig
    from sqlpretty.dialects import get_dialect, get_lexer
    from sqlpretty.formatter import Formatter

    dialect = get_dialect(language)
    config = PrinterConfig(
        indent=indent,
        language=dialect.name,
        params=params,
        inline_max_length=dialect.inline_max_length,
        row_limit_words=dialect.row_limit_words,
    )
    return Formatter(config, get_lexer(dialect.name)).format(query)
