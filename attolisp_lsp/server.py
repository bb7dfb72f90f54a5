from __future__ import annotations

"""
A minimal pygls-based Language Server for AttoLisp.

Features:
- Text synchronization and document store
- Diagnostics: parser errors, unmatched parens
- Hover: builtin signatures and locally defined symbols
- Completion: builtins, special forms and local definitions
- Signature Help: for known builtins
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_SIGNATURE_HELP,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    SignatureHelp,
    SignatureHelpOptions,
    SignatureHelpParams,
)
from pygls.server import LanguageServer

from attolisp import __version__
from attolisp_lsp.diagnostics import build_diagnostics
from attolisp_lsp.features import completion_items, document_symbols, hover_text, signature_help
from attolisp_lsp.indexer import DocumentIndex, build_index

logger = logging.getLogger(__name__)


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class AttoLanguageServer(LanguageServer):
    CMD_NAME = "attolisp-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.documents: Dict[str, DocumentState] = {}

    def update_document(self, uri: str, text: str) -> DocumentState:
        state = DocumentState(text=text, index=build_index(text))
        self.documents[uri] = state
        self.publish_diagnostics(uri, build_diagnostics(state.index))
        return state


ls = AttoLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(server: AttoLanguageServer, params: DidOpenTextDocumentParams):
    server.update_document(params.text_document.uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(server: AttoLanguageServer, params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    # the workspace has already applied the changes
    doc = server.workspace.get_text_document(uri)
    server.update_document(uri, doc.source)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(server: AttoLanguageServer, params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    server.documents.pop(uri, None)
    server.publish_diagnostics(uri, [])


# --- Hover ---
@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(server: AttoLanguageServer, params: HoverParams) -> Optional[Hover]:
    state = server.documents.get(params.text_document.uri)
    if not state:
        return None
    contents = hover_text(state.text, state.index, params.position)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(server: AttoLanguageServer, params: CompletionParams) -> CompletionList:
    state = server.documents.get(params.text_document.uri)
    index = state.index if state else DocumentIndex()
    return CompletionList(is_incomplete=False, items=completion_items(index))


# --- Signature Help ---
@ls.feature(TEXT_DOCUMENT_SIGNATURE_HELP, SignatureHelpOptions(trigger_characters=["(", " "]))
def on_signature_help(server: AttoLanguageServer, params: SignatureHelpParams) -> Optional[SignatureHelp]:
    state = server.documents.get(params.text_document.uri)
    if not state:
        return None
    return signature_help(state.text, params.position)


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(server: AttoLanguageServer, params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = server.documents.get(params.text_document.uri)
    if not state:
        return None
    return document_symbols(state.index)


def main() -> None:
    # Run the language server over stdio
    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    logger.debug("Starting %s", AttoLanguageServer.CMD_NAME)
    ls.start_io()


if __name__ == "__main__":
    main()
