"""
  Lisp Reader: recursive-descent parser over the token list.

Emits Python primitives instead of Cons cells (code is data):

    - nil (any case)  -> Nil
    - t (any case)    -> True
    - lists           -> Python list
    - symbols         -> Symbol (original case kept)
    - strings         -> str
    - numbers         -> int, or Decimal when the literal has a '.'
    - #d"..."         -> datetime
    - 'expr           -> [Symbol("quote"), expr]
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal
from typing import Iterator, Sequence

from attolisp import SExpression
from attolisp.errors import AttoSyntaxError
from attolisp.reader.tokenizer import Token, TokenType, tokenize
from attolisp.types.nil import Nil
from attolisp.types.symbol import Symbol

QUOTE = Symbol("quote")

NUMBER_LITERAL = re.compile(r"-?[0-9]+(\.[0-9]*)?")

# Accepted after ISO-8601, which datetime.fromisoformat already covers
_DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
)


def parse_number(text: str) -> int | Decimal:
    """Integer when the literal has no '.', else Decimal. Raises ValueError.

    Only the literal grammar is accepted: an optional '-', ASCII digits and at
    most one '.' after the first digit.
    """
    if not NUMBER_LITERAL.fullmatch(text):
        raise ValueError(f"Invalid number literal: {text}")
    if "." in text:
        return Decimal(text)
    return int(text)


def parse_date(text: str) -> datetime:
    """Parse date text into a naive datetime (aware inputs become local time)."""
    raw = text.strip()
    try:
        value = datetime.fromisoformat(raw)
    except ValueError:
        for fmt in _DATE_FORMATS:
            try:
                value = datetime.strptime(raw, fmt)
                break
            except ValueError:
                continue
        else:
            raise ValueError(f"Invalid date format: {text}") from None
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


class TokenStream:
    """Cursor over a token sequence; reading past the end yields END_OF_INPUT."""

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        if not self.tokens or self.tokens[-1].type is not TokenType.END_OF_INPUT:
            last = self.tokens[-1] if self.tokens else None
            self.tokens.append(
                Token(
                    TokenType.END_OF_INPUT,
                    "",
                    last.position + len(last.value) if last else 0,
                    last.line if last else 1,
                    last.column + len(last.value) if last else 1,
                )
            )
        self.index = 0

    def peek(self) -> Token:
        return self.tokens[self.index]

    def advance(self) -> Token:
        tok = self.tokens[self.index]
        if self.index < len(self.tokens) - 1:
            self.index += 1
        return tok

    def at_end(self) -> bool:
        return self.peek().type is TokenType.END_OF_INPUT

    def parse_expr(self) -> SExpression:
        tok = self.peek()

        match tok.type:
            case TokenType.NUMBER:
                self.advance()
                try:
                    return parse_number(tok.value)
                except ValueError:
                    raise AttoSyntaxError(
                        f"Invalid number literal: {tok.value}", tok.line, tok.column
                    ) from None

            case TokenType.STRING:
                self.advance()
                return tok.value

            case TokenType.DATE_LITERAL:
                self.advance()
                try:
                    return parse_date(tok.value)
                except ValueError:
                    raise AttoSyntaxError(
                        f"Invalid date format: {tok.value}", tok.line, tok.column
                    ) from None

            case TokenType.SYMBOL:
                self.advance()
                lowered = tok.value.lower()
                if lowered == "nil":
                    return Nil
                if lowered == "t":
                    return True
                return Symbol(tok.value)

            case TokenType.LEFT_PAREN:
                return self._parse_list()

            case TokenType.QUOTE_MARK:
                self.advance()
                if self.at_end():
                    end = self.peek()
                    raise AttoSyntaxError("Expected an expression after quote", end.line, end.column)
                return [QUOTE, self.parse_expr()]

            case TokenType.END_OF_INPUT:
                # sentinel: callers check at_end() to tell it from a literal nil
                return Nil

            case TokenType.RIGHT_PAREN:
                raise AttoSyntaxError("Unexpected ')'", tok.line, tok.column)

        raise AttoSyntaxError(f"Unexpected token: {tok.type.name}", tok.line, tok.column)

    def _parse_list(self) -> list[SExpression]:
        self.advance()  # consume '('
        items: list[SExpression] = []
        while True:
            tok = self.peek()
            if tok.type is TokenType.RIGHT_PAREN:
                self.advance()
                return items
            if tok.type is TokenType.END_OF_INPUT:
                raise AttoSyntaxError("Expected ')' at end of list", tok.line, tok.column)
            items.append(self.parse_expr())

    def parse_all(self) -> Iterator[SExpression]:
        while not self.at_end():
            yield self.parse_expr()


def parse_one(tokens: Sequence[Token]) -> SExpression:
    """Parse a single top-level form; Nil when there is nothing to parse."""
    return TokenStream(tokens).parse_expr()


def parse_all(tokens: Sequence[Token]) -> list[SExpression]:
    """Parse every top-level form until end of input."""
    return list(TokenStream(tokens).parse_all())


def read(source: str) -> SExpression:
    """Tokenize and parse the first form of `source`."""
    return parse_one(tokenize(source))


def read_all(source: str) -> list[SExpression]:
    """Tokenize and parse every form of `source`."""
    return parse_all(tokenize(source))
