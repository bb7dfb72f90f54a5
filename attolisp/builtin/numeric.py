"""Numeric tower builtins: arithmetic, min/max and the math library.

Integers are Python ints (arbitrary precision); DecimalNumbers are
`decimal.Decimal` values computed in DECIMAL_CONTEXT. If any argument of an
arithmetic builtin is a DecimalNumber the whole operation runs in decimal,
otherwise it stays exact integer arithmetic. Division always yields a
DecimalNumber. Nil counts as zero inside arithmetic.
"""

from __future__ import annotations

import math
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    ROUND_HALF_EVEN,
)
from functools import wraps
from typing import Callable

from attolisp import LispValue
from attolisp.config import DECIMAL_PRECISION
from attolisp.errors import AttoArityError, AttoDivisionByZero, AttoDomainError, AttoTypeError
from attolisp.types.environment import Environment
from attolisp.types.nil import Nil
from attolisp.types.value import is_decimal, is_integer, type_name

DECIMAL_CONTEXT = Context(
    prec=DECIMAL_PRECISION,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

BuiltinFn = Callable[[Environment, list[LispValue]], LispValue]


def decimal_guard(fn: BuiltinFn) -> BuiltinFn:
    """Translate decimal context traps into AttoLisp errors."""

    @wraps(fn)
    def wrapper(env: Environment, args: list[LispValue]) -> LispValue:
        try:
            return fn(env, args)
        except DivisionByZero:
            raise AttoDivisionByZero("Division by zero") from None
        except (InvalidOperation, Overflow) as ex:
            raise AttoDomainError(f"{fn.__name__}: result out of range ({ex.__class__.__name__})") from None

    return wrapper


# -------------------------------
# Coercion
# -------------------------------
def to_integer(v: LispValue, name: str) -> int:
    if v is Nil:
        return 0
    if is_integer(v):
        return v
    if is_decimal(v):
        return int(v)
    raise AttoTypeError(f"{name} expected a number, got {type_name(v)}")


def to_decimal(v: LispValue, name: str) -> Decimal:
    if v is Nil:
        return Decimal(0)
    if is_decimal(v):
        return v
    if is_integer(v):
        d = Decimal(v)
        # exact promotion only: more digits than the context holds would round
        if d.adjusted() >= DECIMAL_PRECISION:
            raise AttoDomainError(f"{name}: integer is too large for decimal arithmetic")
        return d
    raise AttoTypeError(f"{name} expected a number, got {type_name(v)}")


def any_decimal(args: list[LispValue]) -> bool:
    return any(is_decimal(a) for a in args)


# -------------------------------
# Arithmetic
# -------------------------------
@decimal_guard
def add(env: Environment, args: list[LispValue]) -> LispValue:
    """Sum of all arguments; (+) is 0."""
    if any_decimal(args):
        total = Decimal(0)
        for a in args:
            total = DECIMAL_CONTEXT.add(total, to_decimal(a, "+"))
        return total
    return sum(to_integer(a, "+") for a in args)


@decimal_guard
def sub(env: Environment, args: list[LispValue]) -> LispValue:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    if not args:
        raise AttoArityError("- requires at least one argument")
    if any_decimal(args):
        result = to_decimal(args[0], "-")
        if len(args) == 1:
            return DECIMAL_CONTEXT.minus(result)
        for a in args[1:]:
            result = DECIMAL_CONTEXT.subtract(result, to_decimal(a, "-"))
        return result
    result_int = to_integer(args[0], "-")
    if len(args) == 1:
        return -result_int
    for a in args[1:]:
        result_int -= to_integer(a, "-")
    return result_int


@decimal_guard
def mul(env: Environment, args: list[LispValue]) -> LispValue:
    """Product of all arguments; (*) is 1."""
    if any_decimal(args):
        product = Decimal(1)
        for a in args:
            product = DECIMAL_CONTEXT.multiply(product, to_decimal(a, "*"))
        return product
    product_int = 1
    for a in args:
        product_int *= to_integer(a, "*")
    return product_int


@decimal_guard
def div(env: Environment, args: list[LispValue]) -> LispValue:
    """Divide left-to-right, always in decimal; one argument gives its reciprocal."""
    if not args:
        raise AttoArityError("/ requires at least one argument")
    operands = [to_decimal(a, "/") for a in args]
    if len(operands) == 1:
        operands.insert(0, Decimal(1))
    result = operands[0]
    for d in operands[1:]:
        if d.is_zero():
            raise AttoDivisionByZero("Division by zero")
        result = DECIMAL_CONTEXT.divide(result, d)
    return result


def _extremum(args: list[LispValue], name: str, pick_new: Callable[[object, object], bool]) -> LispValue:
    if not args:
        raise AttoArityError(f"{name} expects at least one argument")
    convert = to_decimal if any_decimal(args) else to_integer
    best = convert(args[0], name)
    for a in args[1:]:
        v = convert(a, name)
        if pick_new(v, best):
            best = v
    return best


def min_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    return _extremum(args, "min", lambda v, best: v < best)


def max_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    return _extremum(args, "max", lambda v, best: v > best)


# -------------------------------
# Math library (results are always DecimalNumbers)
# -------------------------------
def _to_float(v: LispValue, name: str) -> float:
    return float(to_decimal(v, name))


def _from_float(x: float, name: str) -> Decimal:
    if math.isnan(x) or math.isinf(x):
        raise AttoDomainError(f"{name} domain error: result is not a finite number")
    return Decimal(repr(x))


def _call_math(name: str, fn: Callable[..., float], *xs: float) -> Decimal:
    try:
        return _from_float(fn(*xs), name)
    except (ValueError, OverflowError, ZeroDivisionError) as ex:
        raise AttoDomainError(f"{name} domain error: {ex}") from None


def _unary_math(name: str, fn: Callable[[float], float]) -> BuiltinFn:
    def builtin(env: Environment, args: list[LispValue]) -> LispValue:
        if len(args) != 1:
            raise AttoArityError(f"{name} expects exactly one argument")
        return _call_math(name, fn, _to_float(args[0], name))

    builtin.__name__ = name
    return builtin


sin_builtin = _unary_math("sin", math.sin)
cos_builtin = _unary_math("cos", math.cos)
tan_builtin = _unary_math("tan", math.tan)
exp_builtin = _unary_math("exp", math.exp)


def sqrt_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    if len(args) != 1:
        raise AttoArityError("sqrt expects exactly one argument")
    x = to_decimal(args[0], "sqrt")
    if x < 0:
        raise AttoDomainError("sqrt domain error: negative input")
    return _call_math("sqrt", math.sqrt, float(x))


def log_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """(log x) is the natural logarithm; (log x base) uses the given base."""
    if len(args) == 1:
        x = to_decimal(args[0], "log")
        if x <= 0:
            raise AttoDomainError("log domain error: non-positive input")
        return _call_math("log", math.log, float(x))
    if len(args) == 2:
        x = to_decimal(args[0], "log")
        base = to_decimal(args[1], "log")
        if x <= 0 or base <= 0 or base == 1:
            raise AttoDomainError("log domain error: invalid base or input")
        return _call_math("log", math.log, float(x), float(base))
    raise AttoArityError("log expects one or two arguments")


NUMERIC_BUILTINS: dict[str, BuiltinFn] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "min": min_builtin,
    "max": max_builtin,
    "sin": sin_builtin,
    "cos": cos_builtin,
    "tan": tan_builtin,
    "sqrt": sqrt_builtin,
    "exp": exp_builtin,
    "log": log_builtin,
}
