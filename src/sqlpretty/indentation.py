"""Indent tracking for the formatter."""

from __future__ import annotations

from enum import Enum, auto


class IndentType(Enum):
    CLAUSE = auto()  # body of a toplevel keyword such as SELECT or FROM
    NESTING = auto()  # contents of a bracket that is not rendered inline


class Indentation:
    """Stack of indent markers, each recording why its level exists.

    The indent prefix is the unit repeated once per marker. Popping never
    underflows: on an empty stack it does nothing.
    """

    def __init__(self, indent: str = "  ") -> None:
        self.indent = indent
        self._stack: list[IndentType] = []

    @property
    def depth(self) -> int:
        return len(self._stack)

    def get_indent(self) -> str:
        return self.indent * len(self._stack)

    def increase_toplevel(self) -> None:
        self._stack.append(IndentType.CLAUSE)

    def increase_block_level(self) -> None:
        self._stack.append(IndentType.NESTING)

    def decrease_toplevel(self) -> None:
        """Pop a clause marker if it is on top; nesting markers stay put."""
        if self._stack and self._stack[-1] is IndentType.CLAUSE:
            self._stack.pop()

    def decrease_block_level(self) -> None:
        """Pop through the innermost nesting marker.

        Clause markers pushed inside the bracket go with it, so a subquery's
        clauses cannot leak indentation past its closing bracket.
        """
        self._pop_through(IndentType.NESTING)

    def _pop_through(self, target: IndentType) -> None:
        while self._stack:
            if self._stack.pop() is target:
                break
