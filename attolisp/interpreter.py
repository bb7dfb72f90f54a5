from __future__ import annotations

from pathlib import Path
from typing import Callable, Literal

from attolisp import LispValue, SExpression
from attolisp.evaluation.evaluator import Evaluator
from attolisp.reader.parser import read_all
from attolisp.types.environment import Environment
from attolisp.types.nil import Nil


class Interpreter:
    """
    Orchestrates reading and evaluating AttoLisp source text.
    Owns one Evaluator, so definitions persist across calls.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto', *, trace: bool = False):
        self.evaluator = Evaluator(trace=trace)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            # Lazy import to avoid circular imports
            from attolisp.modules.script_loader import load_prelude
            load_prelude(self)
        elif prelude:
            self.eval_prelude(prelude)

    @property
    def env(self) -> Environment:
        return self.evaluator.global_env

    def eval_prelude(self, code: str, on_form: Callable[[SExpression], None] | None = None) -> None:
        """Evaluate every form of `code` for its definitions; results are discarded.

        All forms are parsed before the first one runs. `on_form` sees each
        parsed form just before it is evaluated.
        """
        for expr in read_all(code):
            if on_form is not None:
                on_form(expr)
            self.evaluator.eval(expr)

    def eval(self, code: str) -> LispValue:
        """Evaluate every form of `code` in order and return the last value (Nil if none)."""
        result: LispValue = Nil
        for expr in read_all(code):
            result = self.evaluator.eval(expr)
        return result

    def load_file(self, path: str | Path, on_form: Callable[[SExpression], None] | None = None) -> None:
        from attolisp.modules.script_loader import load_script
        load_script(self, path, on_form)
