from attolisp import EvaluatorFn, LispValue, SExpression
from attolisp.errors import AttoArityError, AttoTypeError
from attolisp.evaluation.special_forms.lambda_form import parse_formals
from attolisp.types.environment import Environment
from attolisp.types.lambda_fn import Lambda
from attolisp.types.symbol import Symbol
from attolisp.types.value import type_name


def define_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """
    (define name value)              -> binds the evaluated value, returns it
    (define name (params...) body...) -> binds a named closure, returns it
    (define (name params...) body...) -> same, Scheme-style header
    Closures capture the defining environment; bindings go into `env` itself.
    """
    if len(tail) < 2:
        raise AttoArityError("define expects at least 2 arguments")

    target = tail[0]

    # (define (name params...) body...)
    if isinstance(target, list) and target and isinstance(target[0], Symbol):
        name = target[0]
        fn = Lambda(parse_formals(target[1:], "define"), list(tail[1:]), env, name.name)
        env.define(name, fn)
        return fn

    if not isinstance(target, Symbol):
        raise AttoTypeError(f"define expects a symbol as the first argument, got {type_name(target)}")

    # (define name (params...) body...)
    params = tail[1]
    if len(tail) > 2 and isinstance(params, list) and all(isinstance(p, Symbol) for p in params):
        fn = Lambda(list(params), list(tail[2:]), env, target.name)
        env.define(target, fn)
        return fn

    if len(tail) != 2:
        raise AttoArityError("define expects exactly 2 arguments: (define name value)")

    value = evaluate_fn(params, env)
    env.define(target, value)
    return value
