"""Editor features computed from a document's text and index.

Kept free of server state so each feature can be exercised directly.
"""

from __future__ import annotations

from typing import List, Optional

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    DocumentSymbol,
    ParameterInformation,
    Position,
    Range,
    SignatureHelp,
    SignatureInformation,
    SymbolKind,
)

from attolisp_lsp.indexer import BUILTIN_SIGNATURES, DocumentIndex

WORD_BREAKS = " \t()\n\r'\""


def get_line_prefix(text: str, pos: Position) -> str:
    # Return the text from start of line up to pos
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return ""
    return lines[pos.line][: pos.character]


def extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = min(pos.character, len(line))
    while start > 0 and line[start - 1] not in WORD_BREAKS:
        start -= 1
    end = pos.character
    while end < len(line) and line[end] not in WORD_BREAKS:
        end += 1
    word = line[start:end]
    return word or None


def extract_callee_name(prefix: str) -> Optional[str]:
    # find last '(' and take following token
    lp = prefix.rfind('(')
    if lp == -1:
        return None
    tail = prefix[lp + 1:].strip()
    if not tail:
        return None
    return tail.split()[0].rstrip(')') or None


def hover_text(text: str, idx: DocumentIndex, pos: Position) -> Optional[str]:
    word = extract_word_at(text, pos)
    if not word:
        return None
    if word in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[word]
    if word in idx.symbols:
        sdef = idx.symbols[word]
        return f"{word} ({sdef.kind}, defined at {sdef.line + 1}:{sdef.col + 1})"
    return None


def completion_items(idx: DocumentIndex) -> List[CompletionItem]:
    items = [
        CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig)
        for name, sig in BUILTIN_SIGNATURES.items()
    ]
    for name, sdef in idx.symbols.items():
        kind = CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable
        items.append(CompletionItem(label=name, kind=kind))
    return items


def signature_help(text: str, pos: Position) -> Optional[SignatureHelp]:
    callee = extract_callee_name(get_line_prefix(text, pos))
    if not callee:
        return None
    sig = BUILTIN_SIGNATURES.get(callee)
    if not sig:
        return None

    # parameters are the words after the callee name
    params_list = sig.strip("()").split()[1:]
    parameters = [ParameterInformation(label=p) for p in params_list]
    return SignatureHelp(
        signatures=[SignatureInformation(label=sig, parameters=parameters)],
        active_signature=0,
        active_parameter=0,
    )


def document_symbols(idx: DocumentIndex) -> List[DocumentSymbol]:
    symbols: List[DocumentSymbol] = []
    for name, sdef in idx.symbols.items():
        rng = Range(
            start=Position(line=sdef.line, character=sdef.col),
            end=Position(line=sdef.line, character=sdef.col + len(name)),
        )
        symbols.append(
            DocumentSymbol(
                name=name,
                kind=SymbolKind.Function if sdef.kind == "function" else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols
