from __future__ import annotations


class AttoError(Exception):
    """ Base class for all AttoLisp errors"""
    pass


class AttoSyntaxError(AttoError):
    """ Raised by the tokenizer or parser on malformed source"""

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.reason = message
        if line is not None and column is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)
        self.line = line
        self.column = column


class AttoUndefinedSymbol(AttoError):
    """ Raised when a symbol is evaluated before it is bound"""


class AttoUndefinedVariable(AttoError):
    """ Raised when set! targets a name that is bound nowhere in the scope chain"""


class AttoTypeError(AttoError):
    """ Raised when a value of the wrong kind reaches a special form or builtin"""


class AttoArityError(AttoError):
    """ Raised when the number of arguments passed to a function is incorrect"""


class AttoDivisionByZero(AttoError):
    """ Raised when dividing by a zero-valued argument"""


class AttoDomainError(AttoError):
    """ Raised when a math builtin receives an input outside its domain"""
