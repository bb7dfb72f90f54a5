"""Runtime value types: symbols, nil, environments and function values."""

from attolisp.types.symbol import Symbol
from attolisp.types.nil import Nil, NilType
from attolisp.types.environment import Environment
from attolisp.types.lambda_fn import Lambda, Builtin

__all__ = ["Symbol", "Nil", "NilType", "Environment", "Lambda", "Builtin"]
