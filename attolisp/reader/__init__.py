from attolisp.reader.tokenizer import Token, TokenType, lex, tokenize
from attolisp.reader.parser import TokenStream, parse_one, parse_all, read, read_all

__all__ = [
    "Token",
    "TokenType",
    "lex",
    "tokenize",
    "TokenStream",
    "parse_one",
    "parse_all",
    "read",
    "read_all",
]
