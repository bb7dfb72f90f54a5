"""Application engine for AttoLisp.

Centralizes function application so the evaluator and special forms share
one definition of how closures and builtins are called:
- Lambda: arity is checked, a fresh frame is chained onto the captured
  environment, and the body forms are evaluated in order.
- Builtin: the host callable receives the caller env and evaluated args.
- Anything else is a type error.
"""

from __future__ import annotations

from attolisp import EvaluatorFn, LispValue, SExpression
from attolisp.errors import AttoTypeError
from attolisp.types.environment import Environment
from attolisp.types.lambda_fn import Lambda, Builtin
from attolisp.types.nil import Nil
from attolisp.types.value import type_name


def eval_body(body: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """Evaluate forms in order and return the last value; Nil for an empty body."""
    result: LispValue = Nil
    for form in body:
        result = evaluate_fn(form, env)
    return result


def apply(
    fn: Lambda | Builtin | object,
    args: list[LispValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply a closure or builtin to already-evaluated arguments."""
    if isinstance(fn, Lambda):
        return eval_body(fn.body, fn.extend_env(args), evaluate_fn)
    if isinstance(fn, Builtin):
        return fn(env, args)
    raise AttoTypeError(f"Cannot call {type_name(fn)} as a function")
