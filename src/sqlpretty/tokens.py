"""Token types and the token record."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    WHITESPACE = auto()  # run of spaces, tabs, newlines
    WORD = auto()  # identifier or other bare word
    STRING = auto()  # quoted literal or quoted identifier
    NUMBER = auto()
    OPERATOR = auto()  # punctuation, multi-char operators, any other char
    PLACEHOLDER = auto()  # ?, ?1, :name, @name, @"quoted name"

    # Reserved words, by formatting class
    RESERVED = auto()  # plain keyword, stays inline
    RESERVED_TOPLEVEL = auto()  # clause keyword: SELECT, FROM, WHERE
    RESERVED_NEWLINE = auto()  # continuation keyword: AND, OR, JOIN

    # Brackets, including keyword brackets like CASE ... END
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()

    LINE_COMMENT = auto()  # -- ... or # ..., includes the line break
    BLOCK_COMMENT = auto()  # /* ... */


RESERVED_TYPES = frozenset(
    {TokenType.RESERVED, TokenType.RESERVED_TOPLEVEL, TokenType.RESERVED_NEWLINE}
)


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with canonical value and original source text.

    ``value`` equals ``raw`` except for brackets and reserved words, whose
    value is upper-cased. ``key`` is the lookup name of a placeholder and
    empty for every other token type.
    """

    type: TokenType
    value: str
    raw: str
    key: str = ""
