"""Runtime environment for AttoLisp.

An Environment is one frame of a lexical scope chain: a mapping of Symbols to
evaluated values plus an `outer` link to the enclosing frame (None for the
global frame). Closures hold a reference to the frame they were created in,
so a frame stays alive for as long as any closure or active call uses it.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from attolisp import LispValue
from attolisp.errors import AttoUndefinedVariable
from attolisp.types.symbol import Symbol


def _key(name: Symbol | str) -> Symbol:
    return name if isinstance(name, Symbol) else Symbol(name)


class Environment:
    """Hierarchical mapping from Symbols to Lisp values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer

    def define(self, name: Symbol | str, value: LispValue) -> None:
        """Bind `name` to `value` in this frame only, overwriting any existing binding."""
        self.vars[_key(name)] = value

    def find(self, name: Symbol | str) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `name`."""
        symbol = _key(name)
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: Symbol | str) -> LispValue | None:
        """Return the value bound to `name`, searching outward; None when unbound.

        Never raises: the caller decides which error an unbound name is.
        """
        symbol = _key(name)
        env = self.find(symbol)
        if env is None:
            return None
        return env.vars[symbol]

    def set(self, name: Symbol | str, value: LispValue) -> None:
        """Overwrite the binding of `name` in the nearest frame that has one.

        Raises AttoUndefinedVariable if no frame in the chain binds `name`.
        """
        symbol = _key(name)
        env = self.find(symbol)
        if env is None:
            raise AttoUndefinedVariable(f"Undefined variable: {symbol}")
        env.vars[symbol] = value

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, (Symbol, str)):
            return False
        return self.find(name) is not None

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Chain representation for debugging; the global frame is abbreviated."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            chain = []
            env: Optional[Environment] = self
            while env is not None:
                if env.outer is None:
                    chain.append(f"<global: {len(env.vars)} bindings>")
                else:
                    with StringIO() as frame:
                        env._write_vars(frame)
                        chain.append(frame.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
