"""Helpers over the closed set of runtime values.

Every consumer that needs to tell value kinds apart goes through these
functions, so the Integer/Boolean overlap of Python's `bool` is handled in
exactly one place.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from attolisp import LispValue
from attolisp.errors import AttoTypeError
from attolisp.types.lambda_fn import Lambda, Builtin
from attolisp.types.nil import Nil, NilType
from attolisp.types.symbol import Symbol


def is_integer(v: LispValue) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def is_decimal(v: LispValue) -> bool:
    return isinstance(v, Decimal)


def is_number(v: LispValue) -> bool:
    return is_integer(v) or is_decimal(v)


def is_boolean(v: LispValue) -> bool:
    return v is True or v is False


def is_function(v: LispValue) -> bool:
    return isinstance(v, (Lambda, Builtin))


def is_truthy(v: LispValue) -> bool:
    """Only Nil and Boolean false are falsy; 0, "" and () are truthy."""
    return not (v is Nil or v is False)


def type_name(v: LispValue) -> str:
    match v:
        case NilType():
            return "Nil"
        case bool():
            return "Boolean"
        case int():
            return "Integer"
        case Decimal():
            return "DecimalNumber"
        case str():
            return "String"
        case Symbol():
            return "Symbol"
        case datetime():
            return "Date"
        case list():
            return "List"
        case Lambda() | Builtin():
            return "Function"
        case _:
            return type(v).__name__


# -------------------------------
# Equality and ordering
# -------------------------------
def values_equal(a: LispValue, b: LispValue) -> bool:
    """Equality used by `=`.

    Numbers compare across the tower, strings by content, dates by instant and
    symbols by name. Anything else is equal only to itself.
    """
    if is_number(a) and is_number(b):
        return Decimal(a) == Decimal(b)
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    if isinstance(a, datetime) and isinstance(b, datetime):
        return a == b
    if isinstance(a, Symbol) and isinstance(b, Symbol):
        return a.name == b.name
    return a is b


def is_less_than(a: LispValue, b: LispValue) -> bool:
    """Strict ordering used by the comparison builtins.

    Nil sorts below everything else so recursive list predicates can compare
    against the result of an empty list; Nil is not less than Nil.
    """
    if a is Nil or b is Nil:
        return a < b if a is Nil else False
    if is_number(a) and is_number(b):
        if is_integer(a) and is_integer(b):
            return a < b
        return Decimal(a) < Decimal(b)
    if isinstance(a, str) and isinstance(b, str):
        return a < b
    if isinstance(a, datetime) and isinstance(b, datetime):
        return a < b
    raise AttoTypeError(f"Cannot compare {type_name(a)} and {type_name(b)}")


# -------------------------------
# Printing
# -------------------------------
_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


def _format_decimal(d: Decimal) -> str:
    text = format(d, "f")
    if "." not in text and d.is_finite():
        text += ".0"
    return text


def _format_string(s: str) -> str:
    return '"' + "".join(_STRING_ESCAPES.get(ch, ch) for ch in s) + '"'


def to_lisp_string(v: LispValue) -> str:
    """Printed form of a value; atoms read back as equal values."""
    match v:
        case NilType():
            return "nil"
        case bool():
            return "t" if v else "nil"
        case int():
            return str(v)
        case Decimal():
            return _format_decimal(v)
        case str():
            return _format_string(v)
        case Symbol():
            return v.name
        case datetime():
            return f'#d"{v:%Y-%m-%d %H:%M:%S}"'
        case list():
            return "(" + " ".join(to_lisp_string(e) for e in v) + ")"
        case Lambda() | Builtin():
            return str(v)
        case _:
            return str(v)
