"""SQL lexer: converts source text into a flat token stream.

The lexer never fails. At each position it tries an ordered tuple of
matchers, first match wins; the last matcher accepts any single character,
so every call makes progress and the token ``raw`` texts concatenate back to
the input.
"""

from __future__ import annotations

import logging
import re

from sqlpretty.config import LexerConfig
from sqlpretty.tokens import Token, TokenType

logger = logging.getLogger(__name__)

# Quote styles selectable through LexerConfig.string_types. An unterminated
# literal runs to the end of the input.
#  ``  backtick, `` escapes
#  []  square brackets, ]] escapes
#  ""  double quotes, "" or \" escapes
#  ''  single quotes, '' or \' escapes
#  N'' national character string, same escapes as ''
_STRING_PATTERNS = {
    "``": r"(?:`[^`]*(?:`|\Z))+",
    "[]": r"(?:\[[^\]]*(?:\]|\Z))(?:\][^\]]*(?:\]|\Z))*",
    '""': r'(?:"[^"\\]*(?:\\.?[^"\\]*)*(?:"|\Z))+',
    "''": r"(?:'[^'\\]*(?:\\.?[^'\\]*)*(?:'|\Z))+",
    "N''": r"N(?:'[^'\\]*(?:\\.?[^'\\]*)*(?:'|\Z))+",
}

_WHITESPACE = re.compile(r"\s+")
_BLOCK_COMMENT = re.compile(r"/\*.*?(?:\*/|\Z)", re.DOTALL)
_NUMBER = re.compile(r"(?:(?:-\s*)?[0-9]+(?:\.[0-9]+)?|0x[0-9a-fA-F]+|0b[01]+)\b")
_OPERATOR = re.compile(
    r"!=|<>|==|<=|>=|!<|!>|\|\||::|->>|->|~~\*|~~|!~~\*|!~~|~\*|!~\*|!~|.",
    re.DOTALL,
)
_IDENT_KEY = r"[a-zA-Z0-9._$]+"
_INDEX_KEY = r"[0-9]*"

_CLOSING_QUOTE = {"[": "]"}


# ---------------------------------------------------------------------------
# Matchers
# ---------------------------------------------------------------------------


class Matcher:
    """Try to read one token of a fixed type at a position."""

    def __init__(self, token_type: TokenType, pattern: re.Pattern[str]) -> None:
        self.token_type = token_type
        self.pattern = pattern

    def match(self, text: str, pos: int, previous: Token | None) -> Token | None:
        m = self.pattern.match(text, pos)
        if m is None or m.end() == pos:
            return None
        raw = m.group()
        return Token(self.token_type, self.canonical(raw), raw)

    def canonical(self, raw: str) -> str:
        return raw

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.token_type.name}, {self.pattern.pattern!r})"


class UpperMatcher(Matcher):
    """Matcher for brackets, whose value is upper-cased."""

    def canonical(self, raw: str) -> str:
        return raw.upper()


class KeywordMatcher(UpperMatcher):
    """Upper-casing matcher that never fires right after a ``.`` token.

    In ``mytable.from`` the ``from`` is a column name, not a keyword.
    """

    def match(self, text: str, pos: int, previous: Token | None) -> Token | None:
        if previous is not None and previous.value == ".":
            return None
        return super().match(text, pos, previous)


class PlaceholderMatcher(Matcher):
    """Matcher that fills ``Token.key`` from the pattern's ``key`` group."""

    def __init__(self, pattern: re.Pattern[str], *, quoted: bool = False) -> None:
        super().__init__(TokenType.PLACEHOLDER, pattern)
        self.quoted = quoted

    def match(self, text: str, pos: int, previous: Token | None) -> Token | None:
        m = self.pattern.match(text, pos)
        if m is None or m.end() == pos:
            return None
        key = m.group("key")
        if self.quoted:
            key = unquote(key)
        raw = m.group()
        return Token(TokenType.PLACEHOLDER, raw, raw, key)


def unquote(quoted: str) -> str:
    """Strip the quotes from a string literal and undo quote escapes."""
    if quoted.startswith("N'"):
        quoted = quoted[1:]
    opening = quoted[:1]
    closing = _CLOSING_QUOTE.get(opening, opening)
    inner = quoted[1:]
    if inner.endswith(closing):
        inner = inner[:-1]
    return inner.replace("\\" + closing, closing).replace(closing * 2, closing)


# ---------------------------------------------------------------------------
# Pattern construction
# ---------------------------------------------------------------------------


def _alternation(items: tuple[str, ...]) -> str:
    # Longest first so that "INSERT INTO" wins over "INSERT"
    ordered = sorted(items, key=len, reverse=True)
    return "|".join(r"\s+".join(re.escape(part) for part in item.split()) for item in ordered)


def string_pattern(string_types: tuple[str, ...]) -> str:
    """Return a regex alternation for the enabled quote styles."""
    patterns = []
    for string_type in string_types:
        if string_type not in _STRING_PATTERNS:
            raise ValueError(f"unknown string type: {string_type!r}")
        patterns.append(_STRING_PATTERNS[string_type])
    return "|".join(patterns)


def _keyword_regex(words: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile(rf"(?:{_alternation(words)})\b", re.IGNORECASE)


def _bracket_matchers(token_type: TokenType, brackets: tuple[str, ...]) -> list[Matcher]:
    symbols = tuple(b for b in brackets if len(b) == 1)
    words = tuple(b for b in brackets if len(b) > 1)
    matchers: list[Matcher] = []
    if symbols:
        pattern = re.compile("|".join(re.escape(s) for s in symbols))
        matchers.append(UpperMatcher(token_type, pattern))
    if words:
        pattern = re.compile(rf"\b(?:{_alternation(words)})\b", re.IGNORECASE)
        matchers.append(KeywordMatcher(token_type, pattern))
    return matchers


def _placeholder_matchers(config: LexerConfig) -> list[Matcher]:
    matchers: list[Matcher] = []
    if config.named_placeholder_types:
        prefix = _alternation(config.named_placeholder_types)
        matchers.append(PlaceholderMatcher(re.compile(rf"(?:{prefix})(?P<key>{_IDENT_KEY})")))
        quoted = string_pattern(config.string_types)
        if quoted:
            pattern = re.compile(rf"(?:{prefix})(?P<key>{quoted})", re.DOTALL)
            matchers.append(PlaceholderMatcher(pattern, quoted=True))
    if config.indexed_placeholder_types:
        prefix = _alternation(config.indexed_placeholder_types)
        matchers.append(PlaceholderMatcher(re.compile(rf"(?:{prefix})(?P<key>{_INDEX_KEY})")))
    return matchers


def build_matchers(config: LexerConfig) -> tuple[Matcher, ...]:
    """Compile a dialect config into the ordered matcher cascade.

    Matchers for features the dialect leaves empty are omitted. The operator
    matcher is always last and always matches.
    """
    matchers: list[Matcher] = [Matcher(TokenType.WHITESPACE, _WHITESPACE)]

    if config.line_comment_types:
        prefix = _alternation(config.line_comment_types)
        pattern = re.compile(rf"(?:{prefix})[^\r\n]*(?:\r\n|\r|\n|\Z)")
        matchers.append(Matcher(TokenType.LINE_COMMENT, pattern))
    matchers.append(Matcher(TokenType.BLOCK_COMMENT, _BLOCK_COMMENT))

    if config.string_types:
        pattern = re.compile(string_pattern(config.string_types), re.DOTALL)
        matchers.append(Matcher(TokenType.STRING, pattern))

    matchers.extend(_bracket_matchers(TokenType.OPEN_PAREN, config.open_parens))
    matchers.extend(_bracket_matchers(TokenType.CLOSE_PAREN, config.close_parens))
    matchers.extend(_placeholder_matchers(config))
    matchers.append(Matcher(TokenType.NUMBER, _NUMBER))

    for token_type, words in (
        (TokenType.RESERVED_TOPLEVEL, config.reserved_toplevel_words),
        (TokenType.RESERVED_NEWLINE, config.reserved_newline_words),
        (TokenType.RESERVED, config.reserved_words),
    ):
        if words:
            matchers.append(KeywordMatcher(token_type, _keyword_regex(words)))

    special = "".join(re.escape(ch) for ch in config.special_word_chars)
    matchers.append(Matcher(TokenType.WORD, re.compile(rf"[\w{special}]+")))
    matchers.append(Matcher(TokenType.OPERATOR, _OPERATOR))
    return tuple(matchers)


# ---------------------------------------------------------------------------
# Lexer
# ---------------------------------------------------------------------------


class Lexer:
    """Tokenize SQL text using matchers compiled once from a ``LexerConfig``.

    The compiled matchers are read-only, so one Lexer may serve any number of
    ``tokenize`` calls, including concurrent ones.
    """

    def __init__(self, config: LexerConfig) -> None:
        self.config = config
        self.matchers = build_matchers(config)
        logger.debug("compiled %d matchers", len(self.matchers))

    def tokenize(self, text: str) -> list[Token]:
        """Tokenize the full text and return the token list."""
        tokens: list[Token] = []
        pos = 0
        previous: Token | None = None
        while pos < len(text):
            token = self._next_token(text, pos, previous)
            tokens.append(token)
            pos += len(token.raw)
            previous = token
        return tokens

    def _next_token(self, text: str, pos: int, previous: Token | None) -> Token:
        for matcher in self.matchers:
            token = matcher.match(text, pos, previous)
            if token is not None:
                return token
        # Only reachable if the operator matcher was removed from the cascade
        return Token(TokenType.OPERATOR, text[pos], text[pos])


def tokenize(text: str, config: LexerConfig) -> list[Token]:
    """Convenience function: tokenize text with a one-off Lexer."""
    return Lexer(config).tokenize(text)
