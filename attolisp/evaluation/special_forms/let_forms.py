"""Special forms: let, let* and letrec.

All three share the surface syntax (let ((name value) ...) body...) and differ
only in which environment each value expression is evaluated in:
- let:    the outer environment; bindings do not see each other.
- let*:   the new frame, so each value sees the bindings before it.
- letrec: the new frame after every name has been pre-bound to nil, so
          value expressions may refer to any binding of the group.
"""

from __future__ import annotations

from attolisp import EvaluatorFn, LispValue, SExpression
from attolisp.errors import AttoArityError, AttoTypeError
from attolisp.evaluation.apply import eval_body
from attolisp.types.environment import Environment
from attolisp.types.nil import Nil
from attolisp.types.symbol import Symbol


def _parse_bindings(tail: list[SExpression], form_name: str) -> list[tuple[Symbol, SExpression]]:
    if len(tail) < 2:
        raise AttoArityError(f"{form_name} expects a bindings list and at least one body expression")
    bindings = tail[0]
    if not isinstance(bindings, list):
        raise AttoTypeError(f"{form_name} expects a list of bindings as its first argument")

    pairs: list[tuple[Symbol, SExpression]] = []
    for binding in bindings:
        if not isinstance(binding, list) or len(binding) != 2:
            raise AttoTypeError(f"{form_name} bindings must be lists of the form (name value)")
        name, value_expr = binding
        if not isinstance(name, Symbol):
            raise AttoTypeError(f"{form_name} binding name must be a symbol")
        pairs.append((name, value_expr))
    return pairs


def let_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    pairs = _parse_bindings(tail, "let")
    values = [(name, evaluate_fn(value_expr, env)) for name, value_expr in pairs]
    local_env = Environment(outer=env)
    for name, value in values:
        local_env.define(name, value)
    return eval_body(tail[1:], local_env, evaluate_fn)


def let_star_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    pairs = _parse_bindings(tail, "let*")
    local_env = Environment(outer=env)
    for name, value_expr in pairs:
        local_env.define(name, evaluate_fn(value_expr, local_env))
    return eval_body(tail[1:], local_env, evaluate_fn)


def letrec_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    pairs = _parse_bindings(tail, "letrec")
    local_env = Environment(outer=env)
    for name, _ in pairs:
        local_env.define(name, Nil)
    for name, value_expr in pairs:
        local_env.set(name, evaluate_fn(value_expr, local_env))
    return eval_body(tail[1:], local_env, evaluate_fn)
