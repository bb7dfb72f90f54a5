"""Function values: user closures (Lambda) and native builtins (Builtin)."""

from __future__ import annotations

from io import StringIO
from typing import Callable

from attolisp import SExpression, LispValue
from attolisp.errors import AttoArityError
from attolisp.types.environment import Environment
from attolisp.types.symbol import Symbol


class Lambda:
    """A first-class closure: formal parameters, body forms and the defining env."""

    __slots__ = ("formals", "body", "env", "name")

    def __init__(
        self,
        formals: list[Symbol],
        body: list[SExpression],
        env: Environment,
        name: str = "lambda",
    ):
        self.formals: list[Symbol] = formals
        self.body: list[SExpression] = body
        self.env: Environment = env
        self.name = name

    @property
    def arity(self) -> int:
        return len(self.formals)

    def __str__(self) -> str:
        return f"#<function:{self.name}>"

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(λ (")
            buffer.write(" ".join(str(f) for f in self.formals))
            buffer.write(")")
            for form in self.body:
                buffer.write(" ")
                buffer.write(repr(form))
            buffer.write(")")
            return buffer.getvalue()

    def extend_env(self, args: list[LispValue]) -> Environment:
        """
        Bind the given argument values to this lambda's formal parameters in a
        fresh frame whose parent is the captured environment.
        """
        if len(args) != len(self.formals):
            raise AttoArityError(
                f"{self.name} expects {len(self.formals)} arguments, got {len(args)}"
            )
        new_env = Environment(outer=self.env)
        for formal, arg in zip(self.formals, args):
            new_env.define(formal, arg)
        return new_env


class Builtin:
    """A native function: a name plus a host callable taking (env, args)."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: Callable[[Environment, list[LispValue]], LispValue]):
        self.name = name
        self.fn = fn

    def __call__(self, env: Environment, args: list[LispValue]) -> LispValue:
        return self.fn(env, args)

    def __str__(self) -> str:
        return f"#<function:{self.name}>"

    def __repr__(self) -> str:
        return f"Builtin({self.name!r})"
