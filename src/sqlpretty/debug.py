"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from sqlpretty.tokens import Token, TokenType


def dump_tokens(tokens: list[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one line per token to *file*."""
    width = len(str(len(tokens)))
    for index, token in enumerate(tokens):
        line = f"{index:>{width}} {token.type.name} {token.value!r}"
        if token.type is TokenType.PLACEHOLDER:
            line += f" key={token.key!r}"
        file.write(line + "\n")
