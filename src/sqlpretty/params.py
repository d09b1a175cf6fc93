"""Placeholder substitution from user-supplied parameters."""

from __future__ import annotations

from collections.abc import Mapping

from sqlpretty.config import Parameters
from sqlpretty.tokens import Token


class Params:
    """Resolve placeholder tokens against a mapping or a sequence of values.

    A mapping is looked up by ``token.key``. A sequence is consumed in order
    of appearance: every placeholder takes the next value, whatever index the
    placeholder itself spells out. Anything unresolved is left as written.
    """

    def __init__(self, params: Parameters | None = None) -> None:
        self.params = params
        self.index = 0

    def get(self, token: Token) -> str:
        if self.params is None:
            return token.value
        if isinstance(self.params, Mapping):
            return self.params.get(token.key, token.value)
        if self.index < len(self.params):
            value = self.params[self.index]
            self.index += 1
            return value
        return token.value
