"""Tests for the LSP server: document formatting."""

from __future__ import annotations

import pytest
from lsprotocol.types import (
    DocumentFormattingParams,
    FormattingOptions,
    TextDocumentIdentifier,
    TextDocumentItem,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from sqlpretty.lsp import _format_document

URI = "file:///test.sql"


@pytest.fixture
def lsp_env():
    """Create a LanguageServer with an initialized workspace."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    def put(source: str, language_id: str = "sql") -> None:
        ws.put_text_document(
            TextDocumentItem(uri=URI, language_id=language_id, version=0, text=source)
        )

    return ls, put


def _params(tab_size: int = 2, insert_spaces: bool = True) -> DocumentFormattingParams:
    return DocumentFormattingParams(
        text_document=TextDocumentIdentifier(uri=URI),
        options=FormattingOptions(tab_size=tab_size, insert_spaces=insert_spaces),
    )


class TestFormatting:
    def test_single_whole_document_edit(self, lsp_env) -> None:
        ls, put = lsp_env
        put("select a\nfrom t\n")
        edits = _format_document(ls, _params())

        assert len(edits) == 1
        edit = edits[0]
        assert edit.new_text == "SELECT\n  a\nFROM\n  t\n"
        assert edit.range.start.line == 0
        assert edit.range.start.character == 0
        assert edit.range.end.line == 2
        assert edit.range.end.character == 0

    def test_already_formatted_returns_no_edits(self, lsp_env) -> None:
        ls, put = lsp_env
        put("SELECT\n  a\nFROM\n  t\n")
        assert _format_document(ls, _params()) == []

    def test_tabs(self, lsp_env) -> None:
        ls, put = lsp_env
        put("select a")
        edits = _format_document(ls, _params(insert_spaces=False))
        assert edits[0].new_text == "SELECT\n\ta\n"

    def test_tab_size(self, lsp_env) -> None:
        ls, put = lsp_env
        put("select a")
        edits = _format_document(ls, _params(tab_size=4))
        assert edits[0].new_text == "SELECT\n    a\n"

    def test_dialect_from_language_id(self, lsp_env) -> None:
        ls, put = lsp_env
        put("select {'a': 1}", language_id="n1ql")
        edits = _format_document(ls, _params())
        assert edits[0].new_text == "SELECT\n  {'a': 1}\n"

    def test_unknown_language_id_uses_default(self, lsp_env) -> None:
        ls, put = lsp_env
        put("select a", language_id="mysql")
        edits = _format_document(ls, _params())
        assert edits[0].new_text == "SELECT\n  a\n"

    def test_empty_document(self, lsp_env) -> None:
        ls, put = lsp_env
        put("")
        assert _format_document(ls, _params()) == []

    def test_language_id_case_insensitive(self, lsp_env) -> None:
        ls, put = lsp_env
        put("select {'a': 1}", language_id="N1QL")
        edits = _format_document(ls, _params())
        assert edits[0].new_text == "SELECT\n  {'a': 1}\n"


class TestEditRange:
    def test_end_without_trailing_newline(self, lsp_env) -> None:
        ls, put = lsp_env
        put("select a\nfrom tab")
        end = _format_document(ls, _params())[0].range.end
        assert (end.line, end.character) == (1, 8)

    def test_end_counts_utf16_units(self, lsp_env) -> None:
        ls, put = lsp_env
        put("select '\U0001f600'")
        end = _format_document(ls, _params())[0].range.end
        assert (end.line, end.character) == (0, 11)

    def test_end_after_crlf(self, lsp_env) -> None:
        ls, put = lsp_env
        put("select a\r\n")
        end = _format_document(ls, _params())[0].range.end
        assert (end.line, end.character) == (1, 0)
