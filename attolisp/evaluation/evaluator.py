"""Core tree-walking evaluator for the AttoLisp interpreter.

Dispatches on the shape of the expression: self-evaluating atoms, symbol
lookups, special forms and function application. Each Evaluator owns its
global environment, populated once with the builtin table at construction,
so independent interpreters can coexist in one process.

There is no tail-call elimination: evaluation depth is bounded by the Python
call stack.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from attolisp import SExpression, LispValue
from attolisp.builtin.env_builtin import register
from attolisp.errors import AttoTypeError, AttoUndefinedSymbol
from attolisp.evaluation.apply import apply
from attolisp.evaluation.special_forms import SPECIAL_FORMS
from attolisp.types.environment import Environment
from attolisp.types.lambda_fn import Lambda, Builtin
from attolisp.types.nil import NilType
from attolisp.types.symbol import Symbol
from attolisp.types.value import is_function, to_lisp_string, type_name

logger = logging.getLogger(__name__)

SELF_EVALUATING = (int, Decimal, str, datetime, NilType, Lambda, Builtin)


class Evaluator:
    """Evaluates forms against a global environment holding the builtins."""

    def __init__(self, trace: bool = False):
        self.trace = trace
        self._depth = 0
        self.global_env: Environment = Environment()
        register(self.global_env)

    def eval(self, expr: SExpression, env: Environment | None = None) -> LispValue:
        """Evaluate one form in `env` (the global environment by default)."""
        if env is None:
            env = self.global_env
        if not self.trace:
            return self._eval(expr, env)

        indent = "  " * self._depth
        logger.debug("%s%s", indent, to_lisp_string(expr))
        self._depth += 1
        try:
            result = self._eval(expr, env)
        finally:
            self._depth -= 1
        logger.debug("%s=> %s", indent, to_lisp_string(result))
        return result

    def _eval(self, expr: SExpression, env: Environment) -> LispValue:
        match expr:
            case Symbol():
                value = env.lookup(expr)
                if value is None:
                    raise AttoUndefinedSymbol(f"Undefined symbol: {expr}")
                return value

            case []:
                return expr

            case [head, *tail_args]:
                if isinstance(head, Symbol) and head in SPECIAL_FORMS:
                    return SPECIAL_FORMS[head](tail_args, env, self.eval)

                fn = self.eval(head, env)
                if not is_function(fn):
                    raise AttoTypeError(f"Cannot call {type_name(fn)} as a function")
                args = [self.eval(arg, env) for arg in tail_args]
                return apply(fn, args, env, self.eval)

            case _ if isinstance(expr, SELF_EVALUATING):
                return expr

        raise AttoTypeError(f"Cannot evaluate {type_name(expr)}")
