from __future__ import annotations

from typing import List

from lsprotocol.types import Diagnostic, DiagnosticSeverity, Position, Range

from attolisp_lsp.indexer import DocumentIndex

SOURCE = "attolisp-ls"


def _mk_range(line: int, col: int) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + 1))


def build_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []

    if idx.syntax_error is not None:
        err = idx.syntax_error
        diags.append(
            Diagnostic(
                range=_mk_range(err.line, err.col),
                message=err.message,
                severity=DiagnosticSeverity.Error,
                source=SOURCE,
            )
        )

    # Unmatched parens
    if idx.paren_balance != 0:
        detail = "missing ')'" if idx.paren_balance > 0 else "extra ')'"
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message=f"Unmatched parentheses detected ({detail})",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )

    return diags
