"""Built-in functions for the AttoLisp global environment.

Every builtin has the signature `fn(env, args)` where `args` are already
evaluated. Arithmetic and the math library live in `numeric`; this module
adds comparison, string, date, list, logic and conversion builtins and the
`register` routine that installs the whole table into an Environment.
"""

from __future__ import annotations

import sys
from datetime import datetime
from decimal import Decimal

from attolisp import LispValue
from attolisp.builtin.numeric import NUMERIC_BUILTINS, BuiltinFn
from attolisp.errors import AttoArityError, AttoTypeError
from attolisp.reader.parser import parse_number
from attolisp.types.environment import Environment
from attolisp.types.lambda_fn import Builtin
from attolisp.types.nil import Nil
from attolisp.types.symbol import Symbol
from attolisp.types.value import (
    is_decimal,
    is_integer,
    is_number,
    is_less_than,
    is_truthy,
    to_lisp_string,
    type_name,
    values_equal,
)


def _expect_arity(name: str, args: list[LispValue], n: int) -> None:
    if len(args) != n:
        plural = "argument" if n == 1 else "arguments"
        raise AttoArityError(f"{name} expects {n} {plural}, got {len(args)}")


def _expect_string(name: str, v: LispValue) -> str:
    if not isinstance(v, str):
        raise AttoTypeError(f"{name} expected a String, got {type_name(v)}")
    return v


def _expect_date(name: str, v: LispValue) -> datetime:
    if not isinstance(v, datetime):
        raise AttoTypeError(f"{name} expected a Date, got {type_name(v)}")
    return v


def _expect_list(name: str, v: LispValue) -> list[LispValue]:
    if not isinstance(v, list):
        raise AttoTypeError(f"{name} expected a List, got {type_name(v)}")
    return v


def _to_index(name: str, v: LispValue) -> int:
    if is_integer(v):
        return v
    if is_decimal(v):
        return int(v)
    raise AttoTypeError(f"{name} expected a number, got {type_name(v)}")


# -------------------------------
# Comparison
# -------------------------------
def _check_comparison(name: str, args: list[LispValue]) -> None:
    if len(args) < 2:
        raise AttoArityError(f"{name} requires at least 2 arguments")


def equals(env: Environment, args: list[LispValue]) -> bool:
    """True if every argument equals the first."""
    _check_comparison("=", args)
    first = args[0]
    return all(values_equal(first, other) for other in args[1:])


def lt(env: Environment, args: list[LispValue]) -> bool:
    _check_comparison("<", args)
    return all(is_less_than(a, b) for a, b in zip(args, args[1:]))


def gt(env: Environment, args: list[LispValue]) -> bool:
    _check_comparison(">", args)
    return all(is_less_than(b, a) for a, b in zip(args, args[1:]))


def lte(env: Environment, args: list[LispValue]) -> bool:
    """Every adjacent pair satisfies a <= b."""
    _check_comparison("<=", args)
    return all(
        values_equal(a, b) or not is_less_than(b, a) for a, b in zip(args, args[1:])
    )


def gte(env: Environment, args: list[LispValue]) -> bool:
    """Every adjacent pair satisfies a >= b."""
    _check_comparison(">=", args)
    return all(
        values_equal(a, b) or not is_less_than(a, b) for a, b in zip(args, args[1:])
    )


# -------------------------------
# Strings
# -------------------------------
def concat(env: Environment, args: list[LispValue]) -> str:
    """Join strings verbatim and every other value by its printed form."""
    return "".join(a if isinstance(a, str) else to_lisp_string(a) for a in args)


def str_length(env: Environment, args: list[LispValue]) -> int:
    _expect_arity("str-length", args, 1)
    return len(_expect_string("str-length", args[0]))


def substr(env: Environment, args: list[LispValue]) -> str:
    """(substr string start length); out-of-range requests give "" or are clipped."""
    _expect_arity("substr", args, 3)
    s = _expect_string("substr", args[0])
    start = _to_index("substr", args[1])
    length = _to_index("substr", args[2])
    if start < 0 or length < 0 or start > len(s):
        return ""
    return s[start:start + length]


def index_of(env: Environment, args: list[LispValue]) -> int:
    _expect_arity("index-of", args, 2)
    s = _expect_string("index-of", args[0])
    needle = _expect_string("index-of", args[1])
    return s.find(needle)


def to_lower(env: Environment, args: list[LispValue]) -> str:
    _expect_arity("to-lower", args, 1)
    return _expect_string("to-lower", args[0]).lower()


# -------------------------------
# Dates
# -------------------------------
def now(env: Environment, args: list[LispValue]) -> datetime:
    _expect_arity("now", args, 0)
    return datetime.now()


def date_year(env: Environment, args: list[LispValue]) -> int:
    _expect_arity("date-year", args, 1)
    return _expect_date("date-year", args[0]).year


def date_month(env: Environment, args: list[LispValue]) -> int:
    _expect_arity("date-month", args, 1)
    return _expect_date("date-month", args[0]).month


def date_day(env: Environment, args: list[LispValue]) -> int:
    _expect_arity("date-day", args, 1)
    return _expect_date("date-day", args[0]).day


# -------------------------------
# Lists (never mutated; every operation builds a new list)
# -------------------------------
def list_builtin(env: Environment, args: list[LispValue]) -> list[LispValue]:
    return list(args)


def car(env: Environment, args: list[LispValue]) -> LispValue:
    """First element of a list; Nil for the empty list."""
    _expect_arity("car", args, 1)
    lst = _expect_list("car", args[0])
    return lst[0] if lst else Nil


def cdr(env: Environment, args: list[LispValue]) -> LispValue:
    """All but the first element as a new list; Nil for the empty list."""
    _expect_arity("cdr", args, 1)
    lst = _expect_list("cdr", args[0])
    return lst[1:] if lst else Nil


def cons(env: Environment, args: list[LispValue]) -> list[LispValue]:
    """Prepend to a list, or pair two values when the second is not a list."""
    _expect_arity("cons", args, 2)
    head, tail = args
    if isinstance(tail, list):
        return [head, *tail]
    return [head, tail]


def nth(env: Environment, args: list[LispValue]) -> LispValue:
    _expect_arity("nth", args, 2)
    lst = _expect_list("nth", args[0])
    index = _to_index("nth", args[1])
    if 0 <= index < len(lst):
        return lst[index]
    return Nil


def is_empty(env: Environment, args: list[LispValue]) -> bool:
    _expect_arity("empty?", args, 1)
    v = args[0]
    return v is Nil or (isinstance(v, list) and not v)


def is_list(env: Environment, args: list[LispValue]) -> bool:
    _expect_arity("list?", args, 1)
    return isinstance(args[0], list)


def number_p(env: Environment, args: list[LispValue]) -> bool:
    _expect_arity("number?", args, 1)
    return is_number(args[0])


# -------------------------------
# Logic, conversion and output
# -------------------------------
def logical_not(env: Environment, args: list[LispValue]) -> bool:
    _expect_arity("not", args, 1)
    return not is_truthy(args[0])


def logical_xor(env: Environment, args: list[LispValue]) -> bool:
    _expect_arity("xor", args, 2)
    return is_truthy(args[0]) != is_truthy(args[1])


def to_number(env: Environment, args: list[LispValue]) -> int | Decimal:
    """Parse a String with the numeric literal rules; numbers pass through."""
    _expect_arity("number", args, 1)
    v = args[0]
    if is_number(v):
        return v
    text = _expect_string("number", v).strip()
    try:
        return parse_number(text)
    except ValueError:
        raise AttoTypeError(f"Cannot convert {to_lisp_string(v)} to a number") from None


def to_symbol(env: Environment, args: list[LispValue]) -> Symbol:
    _expect_arity("symbol", args, 1)
    v = args[0]
    if isinstance(v, Symbol):
        return v
    return Symbol(_expect_string("symbol", v))


def print_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """Write the printed forms of all arguments, then a newline."""
    sys.stdout.write("".join(to_lisp_string(a) for a in args) + "\n")
    sys.stdout.flush()
    return Nil


BUILTINS: dict[str, BuiltinFn] = {
    **NUMERIC_BUILTINS,
    "=": equals,
    "<": lt,
    ">": gt,
    "<=": lte,
    ">=": gte,
    "concat": concat,
    "str-length": str_length,
    "substr": substr,
    "index-of": index_of,
    "to-lower": to_lower,
    "now": now,
    "date-year": date_year,
    "date-month": date_month,
    "date-day": date_day,
    "list": list_builtin,
    "car": car,
    "cdr": cdr,
    "cons": cons,
    "nth": nth,
    "empty?": is_empty,
    "list?": is_list,
    "number?": number_p,
    "not": logical_not,
    "xor": logical_xor,
    "number": to_number,
    "symbol": to_symbol,
    "print": print_builtin,
}


def register(env: Environment) -> None:
    """Install every builtin into `env` as a named Builtin function value."""
    env.update({Symbol(name): Builtin(name, fn) for name, fn in BUILTINS.items()})
