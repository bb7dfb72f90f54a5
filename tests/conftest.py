import pytest

from attolisp.evaluation.evaluator import Evaluator
from attolisp.interpreter import Interpreter
from attolisp.reader.parser import read_all
from attolisp.types.nil import Nil


@pytest.fixture
def evaluator():
    """Fresh evaluator (builtins only, no prelude) for each test."""
    return Evaluator()


@pytest.fixture
def run(evaluator):
    """Evaluate every form of a source string; returns the last value."""

    def _run(source: str):
        result = Nil
        for expr in read_all(source):
            result = evaluator.eval(expr)
        return result

    return _run


@pytest.fixture
def interp():
    """Interpreter with the bundled standard library loaded."""
    return Interpreter()


@pytest.fixture
def bare_interp():
    return Interpreter(prelude=None)
