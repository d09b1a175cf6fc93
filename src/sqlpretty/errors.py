"""Error types raised outside the formatting core.

Formatting itself never fails; these cover dialect lookup and CLI
configuration.
"""

from __future__ import annotations

from pathlib import Path


class UnknownDialectError(ValueError):
    """Raised when a ``language`` names no known dialect."""

    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        self.known = known
        super().__init__(f"Unsupported SQL dialect: {name}")

    def format(self) -> str:
        return f"error: {self}\n  = known dialects: {', '.join(self.known)}"


class ConfigError(Exception):
    """Raised on an unreadable or malformed config file."""

    def __init__(self, message: str, path: Path) -> None:
        self.message = message
        self.path = path
        super().__init__(self.format())

    def format(self) -> str:
        return f"error: {self.message}\n  --> {self.path}"
