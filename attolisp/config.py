from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Resolve installation dir (attolisp package directory)
_ATTOLISP_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _ATTOLISP_DIR / 'prelude'
_DEFAULT_RECURSION_LIMIT = 10000

PRELUDE_FILE = 'stdlib.al'

# Significant digits for DecimalNumber arithmetic
DECIMAL_PRECISION = 28


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_prelude_root() -> Path:
    roots = paths_from_env('ATTOLISP_PRELUDE_PATH', [_DEFAULT_PRELUDE_DIR])
    # treat as single directory; if a file path is set, return its parent
    p = roots[0]
    return p if p.is_dir() else p.parent


def get_recursion_limit() -> int:
    raw = os.environ.get('ATTOLISP_RECURSION_LIMIT')
    if not raw:
        return _DEFAULT_RECURSION_LIMIT
    try:
        return max(int(raw), 100)
    except ValueError:
        return _DEFAULT_RECURSION_LIMIT
