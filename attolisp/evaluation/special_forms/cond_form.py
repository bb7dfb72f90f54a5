"""Special form: cond, the multi-branch conditional."""

from attolisp import EvaluatorFn, LispValue, SExpression
from attolisp.errors import AttoArityError, AttoTypeError
from attolisp.evaluation.apply import eval_body
from attolisp.types.environment import Environment
from attolisp.types.nil import Nil
from attolisp.types.symbol import Symbol
from attolisp.types.value import is_truthy

ELSE = Symbol("else")


def cond_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """Evaluate a (cond (test expr...) ...).

    For each clause in order:
    - A clause headed by the symbol `else` is selected without evaluating anything.
    - Otherwise the test is evaluated; a truthy test selects the clause.
    A selected clause evaluates its body and returns the last value. A clause
    with only a test returns the test's value (t for a bare else).
    If no clause matches, return Nil.
    """
    if not tail:
        raise AttoArityError("cond expects at least one clause")

    for clause in tail:
        if not isinstance(clause, list) or not clause:
            raise AttoTypeError("cond clauses must be non-empty lists")
        test, body = clause[0], clause[1:]

        if test == ELSE:
            test_val: LispValue = True
        else:
            test_val = evaluate_fn(test, env)
            if not is_truthy(test_val):
                continue

        if not body:
            return test_val
        return eval_body(body, env, evaluate_fn)

    return Nil
