from attolisp import EvaluatorFn, LispValue, SExpression
from attolisp.types.environment import Environment
from attolisp.types.nil import Nil
from attolisp.types.value import is_truthy


def and_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """Short-circuiting logical AND special form.

    (and a b c ...) evaluates each operand left-to-right and stops at the
    first falsy value, returning nil. If every operand is truthy, returns the
    value of the last one. With zero operands, returns t.
    """
    result: LispValue = True
    for expr in tail:
        result = evaluate_fn(expr, env)
        if not is_truthy(result):
            return Nil
    return result


def or_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """Short-circuiting logical OR special form.

    (or a b c ...) evaluates each operand left-to-right and returns the first
    truthy value. If none is truthy (or there are no operands), returns nil.
    """
    for expr in tail:
        val = evaluate_fn(expr, env)
        if is_truthy(val):
            return val
    return Nil
