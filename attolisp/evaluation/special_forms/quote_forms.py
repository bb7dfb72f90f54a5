from attolisp import EvaluatorFn, LispValue, SExpression
from attolisp.errors import AttoArityError
from attolisp.types.environment import Environment


def quote_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    if len(tail) != 1:
        raise AttoArityError("quote expects exactly one argument")
    return tail[0]
