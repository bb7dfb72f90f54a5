"""
  Lisp Tokenizer

Single pass over source text producing a flat token list that always ends
with an END_OF_INPUT token. Each token carries the UTF-8 byte offset, 1-based line
and 1-based column of its first character.

   - ( )           -> LEFT_PAREN / RIGHT_PAREN
   - 42 -7 3.14    -> NUMBER (raw literal text, decimal-ness decided later)
   - "a\\n"        -> STRING (escapes already processed)
   - #d"2024-01-15" -> DATE_LITERAL (raw quoted text)
   - 'x            -> QUOTE_MARK
   - ; to end of line is a comment
   - anything else -> SYMBOL, up to whitespace, a paren or ';'
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class TokenType(Enum):
    LEFT_PAREN = "lparen"
    RIGHT_PAREN = "rparen"
    NUMBER = "number"
    STRING = "string"
    SYMBOL = "symbol"
    DATE_LITERAL = "date"
    QUOTE_MARK = "quote"
    END_OF_INPUT = "eof"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    position: int
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


STRING_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
}

SYMBOL_TERMINATORS = frozenset("();")


def _utf8_width(ch: str) -> int:
    code = ord(ch)
    if code < 0x80:
        return 1
    if code < 0x800:
        return 2
    if code < 0x10000:
        return 3
    return 4


def lex(source: str) -> Iterator[Token]:
    """Token generator; the final token is always END_OF_INPUT."""
    pos = 0
    offset = 0  # UTF-8 byte offset of source[pos]
    line = 1
    column = 1
    n = len(source)

    def advance() -> str:
        nonlocal pos, offset, line, column
        ch = source[pos]
        pos += 1
        offset += _utf8_width(ch)
        if ch == "\n":
            line += 1
            column = 1
        else:
            column += 1
        return ch

    def skip_whitespace_and_comments() -> None:
        while pos < n:
            ch = source[pos]
            if ch.isspace():
                advance()
            elif ch == ";":
                while pos < n and source[pos] != "\n":
                    advance()
            else:
                break

    def read_string() -> str:
        # opening quote already consumed; an unterminated string runs to end of input
        chars: list[str] = []
        while pos < n and source[pos] != '"':
            ch = advance()
            if ch == "\\" and pos < n:
                escaped = advance()
                chars.append(STRING_ESCAPES.get(escaped, escaped))
            else:
                chars.append(ch)
        if pos < n:
            advance()  # closing quote
        return "".join(chars)

    def read_raw_quoted() -> str:
        advance()  # opening quote
        chars: list[str] = []
        while pos < n and source[pos] != '"':
            chars.append(advance())
        if pos < n:
            advance()
        return "".join(chars)

    def read_number() -> str:
        chars: list[str] = []
        if source[pos] == "-":
            chars.append(advance())
        seen_dot = False
        while pos < n:
            ch = source[pos]
            if ch.isdigit():
                chars.append(advance())
            elif ch == "." and not seen_dot:
                seen_dot = True
                chars.append(advance())
            else:
                break
        return "".join(chars)

    def read_symbol() -> str:
        chars: list[str] = []
        while pos < n:
            ch = source[pos]
            if ch.isspace() or ch in SYMBOL_TERMINATORS:
                break
            chars.append(advance())
        return "".join(chars)

    while True:
        skip_whitespace_and_comments()
        if pos >= n:
            break

        start, start_line, start_col = offset, line, column
        current_char = source[pos]

        if current_char == "(":
            advance()
            yield Token(TokenType.LEFT_PAREN, "(", start, start_line, start_col)
        elif current_char == ")":
            advance()
            yield Token(TokenType.RIGHT_PAREN, ")", start, start_line, start_col)
        elif current_char == "'":
            advance()
            yield Token(TokenType.QUOTE_MARK, "'", start, start_line, start_col)
        elif current_char == '"':
            advance()
            yield Token(TokenType.STRING, read_string(), start, start_line, start_col)
        elif source.startswith('#d"', pos):
            advance()
            advance()
            yield Token(TokenType.DATE_LITERAL, read_raw_quoted(), start, start_line, start_col)
        elif current_char.isdigit() or (
            current_char == "-" and pos + 1 < n and source[pos + 1].isdigit()
        ):
            yield Token(TokenType.NUMBER, read_number(), start, start_line, start_col)
        else:
            yield Token(TokenType.SYMBOL, read_symbol(), start, start_line, start_col)

    yield Token(TokenType.END_OF_INPUT, "", offset, line, column)


def tokenize(source: str) -> list[Token]:
    """Tokenize the whole source text."""
    return list(lex(source))
