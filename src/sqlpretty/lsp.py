"""Minimal LSP server for SQL: whole-document formatting."""

from __future__ import annotations

import logging
import re

from lsprotocol.types import (
    TEXT_DOCUMENT_FORMATTING,
    DocumentFormattingParams,
    FormattingOptions,
    Position,
    Range,
    TextDocumentSyncKind,
    TextEdit,
)
from pygls.lsp.server import LanguageServer

import sqlpretty
from sqlpretty.config import DEFAULT_LANGUAGE
from sqlpretty.dialects import DIALECTS

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

server = LanguageServer("sqlpretty-lsp", sqlpretty.__version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _indent_for(options: FormattingOptions) -> str:
    if options.insert_spaces:
        return " " * options.tab_size
    return "\t"


def _end_of(source: str) -> Position:
    """Return the position just past the last character of *source*."""
    lines = _LINE_BREAK.split(source)
    # LSP columns count UTF-16 code units
    return Position(line=len(lines) - 1, character=len(lines[-1].encode("utf-16-le")) // 2)


def _format_document(ls: LanguageServer, params: DocumentFormattingParams) -> list[TextEdit]:
    """Format a whole document, returning at most one replacing edit."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    source = doc.source
    language_id = (doc.language_id or "").lower()
    language = language_id if language_id in DIALECTS else DEFAULT_LANGUAGE

    formatted = sqlpretty.format(source, indent=_indent_for(params.options), language=language)
    if formatted:
        formatted += "\n"
    if formatted == source:
        return []

    logger.debug("formatting %s as %s", params.text_document.uri, language)
    edit_range = Range(start=Position(line=0, character=0), end=_end_of(source))
    return [TextEdit(range=edit_range, new_text=formatted)]


@server.feature(TEXT_DOCUMENT_FORMATTING)
def formatting(ls: LanguageServer, params: DocumentFormattingParams) -> list[TextEdit]:
    return _format_document(ls, params)


def main() -> None:
    server.start_io()
