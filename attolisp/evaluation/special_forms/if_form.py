import logging

from attolisp import EvaluatorFn, LispValue, SExpression
from attolisp.errors import AttoArityError
from attolisp.types.environment import Environment
from attolisp.types.nil import Nil
from attolisp.types.value import is_truthy, to_lisp_string

logger = logging.getLogger(__name__)


def if_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """(if test then [else]); a false test with no else clause yields nil."""
    if len(tail) not in (2, 3):
        raise AttoArityError("if expects 2 or 3 arguments: (if condition then-expr [else-expr])")

    condition = evaluate_fn(tail[0], env)
    is_true = is_truthy(condition)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("if condition %s => %s", to_lisp_string(condition), "true" if is_true else "false")

    if is_true:
        return evaluate_fn(tail[1], env)
    elif len(tail) == 3:
        return evaluate_fn(tail[2], env)
    else:
        return Nil
