from attolisp import EvaluatorFn, LispValue, SExpression
from attolisp.errors import AttoArityError, AttoTypeError
from attolisp.types.environment import Environment
from attolisp.types.lambda_fn import Lambda
from attolisp.types.symbol import Symbol
from attolisp.types.value import type_name


def parse_formals(params: SExpression, form_name: str) -> list[Symbol]:
    """Validate a parameter list: a list whose every element is a Symbol."""
    if not isinstance(params, list):
        raise AttoTypeError(f"{form_name} expects a parameter list, got {type_name(params)}")
    for p in params:
        if not isinstance(p, Symbol):
            raise AttoTypeError(f"{form_name} parameters must be symbols, got {type_name(p)}")
    return list(params)


def lambda_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    # (lambda (params...) body...) captures the current environment.
    if len(tail) < 2:
        raise AttoArityError("lambda expects at least 2 arguments: (lambda (params...) body...)")

    formals = parse_formals(tail[0], "lambda")
    return Lambda(formals, list(tail[1:]), env)
