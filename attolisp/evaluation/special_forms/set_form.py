from attolisp import EvaluatorFn, LispValue, SExpression
from attolisp.errors import AttoArityError, AttoTypeError
from attolisp.types.environment import Environment
from attolisp.types.symbol import Symbol
from attolisp.types.value import type_name


def set_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    if len(tail) != 2:
        raise AttoArityError("set! expects exactly 2 arguments: (set! name value)")
    var_sym, val_expr = tail
    if not isinstance(var_sym, Symbol):
        raise AttoTypeError(f"set! expects a symbol as the first argument, got {type_name(var_sym)}")
    value = evaluate_fn(val_expr, env)
    env.set(var_sym, value)
    return value
