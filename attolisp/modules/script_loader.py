from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Protocol

from attolisp import SExpression
from attolisp.config import PRELUDE_FILE, get_prelude_root

logger = logging.getLogger(__name__)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str, on_form: Callable[[SExpression], None] | None = None) -> None: ...


def load_script(
    itp: _HasEvalPrelude,
    path: str | Path,
    on_form: Callable[[SExpression], None] | None = None,
) -> None:
    """Evaluate every top-level form of a script file for its side effects.

    The whole file is parsed before anything runs, so a syntax error anywhere
    means no form is evaluated. An evaluation error abandons the remaining
    forms and propagates to the caller.
    """
    p = Path(path)
    code = p.read_text(encoding='utf-8')
    logger.info("Loading script %s", p)
    itp.eval_prelude(code, on_form)


def resolve_prelude() -> Path | None:
    candidate = get_prelude_root() / PRELUDE_FILE
    return candidate if candidate.is_file() else None


def load_prelude(itp: _HasEvalPrelude) -> None:
    """Load the standard library prelude; a missing prelude is skipped with a debug note."""
    p = resolve_prelude()
    if p is None:
        logger.debug("No prelude found under %s", get_prelude_root())
        return
    logger.debug("Loading prelude %s", p)
    itp.eval_prelude(p.read_text(encoding='utf-8'))
