"""Shared test fixtures and helpers."""

from __future__ import annotations

import textwrap

import pytest

import sqlpretty
from sqlpretty.dialects import get_lexer
from sqlpretty.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source with a dialect's lexer."""

    def _lex(source: str, language: str = "sql") -> list[Token]:
        return get_lexer(language).tokenize(source)

    return _lex


@pytest.fixture
def fmt():
    """Return a helper that formats source; keyword args go to sqlpretty.format."""

    def _fmt(source: str, **kwargs) -> str:
        return sqlpretty.format(source, **kwargs)

    return _fmt


def dedent(text: str) -> str:
    """Dedent an expected-output block and drop the surrounding blank lines."""
    return textwrap.dedent(text).strip("\n")


def significant(tokens: list[Token]) -> list[Token]:
    """Drop whitespace tokens."""
    return [t for t in tokens if t.type != TokenType.WHITESPACE]


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def find_tokens(tokens: list[Token], tt: TokenType) -> list[Token]:
    """Return all tokens of the given type."""
    return [t for t in tokens if t.type == tt]
