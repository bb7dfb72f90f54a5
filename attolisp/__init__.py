# Core type aliases for the AttoLisp data model.
# Runtime values are plain Python objects (int, Decimal, str, list, datetime,
# bool) plus a handful of small classes: Symbol, NilType, Lambda and Builtin.
# No Cons type is defined; lists are Python lists that are never mutated
# once built.
#
# Naming guidance:
# - SExpression: use in reader/parser code to denote syntactic forms.
# - LispValue:  use in evaluator/runtime code to denote evaluated values.
# Both resolve to `Any`; code is data, so the two are interchangeable.

from typing import Any, Callable

LispValue = Any
SExpression = LispValue

# Evaluator function type handed to special forms: (expr, env) -> value
EvaluatorFn = Callable[..., LispValue]

__version__ = "0.2.0"
