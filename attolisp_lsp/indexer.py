from __future__ import annotations

"""
Lightweight indexer for AttoLisp files without evaluating code.

The document is scanned with the interpreter's own tokenizer, which never
fails, so partial buffers still index. We record:
- top-level definitions: (define name ...), (define (name ...) ...),
  (define name (params...) body...)
- the paren balance of the whole buffer
- the first syntax error reported by the parser, if any

Positions are 0-based (line, col), as the LSP expects.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from attolisp.errors import AttoSyntaxError
from attolisp.reader.parser import parse_all
from attolisp.reader.tokenizer import Token, TokenType, tokenize


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int


@dataclass
class SyntaxIssue:
    message: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    paren_balance: int = 0
    syntax_error: Optional[SyntaxIssue] = None


def _operand_starts(tokens: List[Token], open_index: int) -> tuple[List[int], int]:
    """Indices of the direct operands of the list opened at `open_index`, and its close index."""
    starts: List[int] = []
    depth = 0
    i = open_index + 1
    pending_quote = False
    while i < len(tokens):
        tok = tokens[i]
        if tok.type is TokenType.END_OF_INPUT:
            break
        if depth == 0 and not pending_quote and tok.type is not TokenType.RIGHT_PAREN:
            starts.append(i)
        pending_quote = depth == 0 and tok.type is TokenType.QUOTE_MARK
        if tok.type is TokenType.LEFT_PAREN:
            depth += 1
        elif tok.type is TokenType.RIGHT_PAREN:
            if depth == 0:
                return starts, i
            depth -= 1
        i += 1
    return starts, i


def _record_define(idx: DocumentIndex, tokens: List[Token], operands: List[int]) -> None:
    # operands[0] is the `define` symbol itself
    if len(operands) < 2:
        return
    target = tokens[operands[1]]
    if target.type is TokenType.LEFT_PAREN:
        name_tok = tokens[operands[1] + 1]
        if name_tok.type is not TokenType.SYMBOL:
            return
        kind = "function"
    elif target.type is TokenType.SYMBOL:
        name_tok = target
        is_fn_shape = len(operands) > 3 and tokens[operands[2]].type is TokenType.LEFT_PAREN
        kind = "function" if is_fn_shape else "var"
    else:
        return
    idx.symbols[name_tok.value] = SymbolDef(
        name=name_tok.value, kind=kind, line=name_tok.line - 1, col=name_tok.column - 1
    )


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = tokenize(text)

    depth = 0
    for i, tok in enumerate(tokens):
        if tok.type is TokenType.LEFT_PAREN:
            if depth == 0:
                operands, _ = _operand_starts(tokens, i)
                if operands and tokens[operands[0]].type is TokenType.SYMBOL and tokens[operands[0]].value == "define":
                    _record_define(idx, tokens, operands)
            depth += 1
            idx.paren_balance += 1
        elif tok.type is TokenType.RIGHT_PAREN:
            depth = max(depth - 1, 0)
            idx.paren_balance -= 1

    try:
        parse_all(tokens)
    except AttoSyntaxError as ex:
        line = (ex.line or 1) - 1
        col = (ex.column or 1) - 1
        idx.syntax_error = SyntaxIssue(message=ex.reason, line=line, col=col)

    return idx


SPECIAL_FORM_SIGNATURES: Dict[str, str] = {
    "quote": "(quote expr)",
    "if": "(if test then else)",
    "and": "(and exprs...)",
    "or": "(or exprs...)",
    "define": "(define name value)",
    "set!": "(set! name value)",
    "lambda": "(lambda (params...) body...)",
    "cond": "(cond (test exprs...)...)",
    "let": "(let ((name value)...) body...)",
    "let*": "(let* ((name value)...) body...)",
    "letrec": "(letrec ((name value)...) body...)",
}

# Builtin signatures for quick hover/signature help without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    "+": "(+ nums...)",
    "-": "(- x nums...)",
    "*": "(* nums...)",
    "/": "(/ x nums...)",
    "=": "(= a b more...)",
    "<": "(< a b more...)",
    ">": "(> a b more...)",
    "<=": "(<= a b more...)",
    ">=": "(>= a b more...)",
    "min": "(min x nums...)",
    "max": "(max x nums...)",
    "sin": "(sin x)",
    "cos": "(cos x)",
    "tan": "(tan x)",
    "sqrt": "(sqrt x)",
    "exp": "(exp x)",
    "log": "(log x base)",
    "concat": "(concat values...)",
    "str-length": "(str-length s)",
    "substr": "(substr s start length)",
    "index-of": "(index-of s needle)",
    "to-lower": "(to-lower s)",
    "now": "(now)",
    "date-year": "(date-year d)",
    "date-month": "(date-month d)",
    "date-day": "(date-day d)",
    "list": "(list xs...)",
    "car": "(car xs)",
    "cdr": "(cdr xs)",
    "cons": "(cons x xs)",
    "nth": "(nth xs index)",
    "empty?": "(empty? xs)",
    "list?": "(list? x)",
    "number?": "(number? x)",
    "not": "(not x)",
    "xor": "(xor a b)",
    "number": "(number s)",
    "symbol": "(symbol s)",
    "print": "(print values...)",
    **SPECIAL_FORM_SIGNATURES,
}
