"""Detection of bracketed groups short enough to stay on one line."""

from __future__ import annotations

from sqlpretty.config import INLINE_MAX_LENGTH
from sqlpretty.tokens import Token, TokenType

# Tokens that always force a bracket group onto multiple lines
_BREAKING_TYPES = frozenset(
    {
        TokenType.RESERVED_TOPLEVEL,
        TokenType.RESERVED_NEWLINE,
        TokenType.LINE_COMMENT,
        TokenType.BLOCK_COMMENT,
    }
)


class InlineBlock:
    """Tracks whether the formatter is inside a bracket rendered inline.

    The decision is made once, when the bracket opens, by scanning ahead to
    its matching close. Inline blocks never contain other brackets, so a
    single flag is enough.
    """

    def __init__(self, max_length: int = INLINE_MAX_LENGTH) -> None:
        self.max_length = max_length
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def begin_if_possible(self, tokens: list[Token], index: int) -> None:
        """Activate inline mode if the bracket at ``index`` qualifies."""
        if not self._active and self.is_inline_block(tokens, index):
            self._active = True

    def end(self) -> None:
        self._active = False

    def is_inline_block(self, tokens: list[Token], index: int) -> bool:
        """Return True if the group opened at ``index`` fits on one line.

        A group is disqualified by its length (whitespace included), by a
        comment, clause keyword or ``;`` inside it, by a
        nested bracket, or by reaching the end of input unclosed.
        """
        length = 0
        level = 0
        for i in range(index, len(tokens)):
            token = tokens[i]
            length += len(token.value)
            if length > self.max_length:
                return False
            if token.type is TokenType.OPEN_PAREN:
                level += 1
                if level > 1:
                    return False
            elif token.type is TokenType.CLOSE_PAREN:
                level -= 1
                if level == 0:
                    return True
            elif token.type in _BREAKING_TYPES or token.value == ";":
                return False
        return False
