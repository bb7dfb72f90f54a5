import pytest

from attolisp.debug_utils.pprint import pformat_form
from attolisp.reader.parser import read


@pytest.mark.parametrize(
    "source,expected",
    [
        ("5", "5"),
        ("()", "()"),
        ('(print "hi" 1)', '(print "hi" 1)'),
        ("(define (sq x) (* x x))", "(define\n  (sq x)\n  (* x x)\n)"),
        ("(if x (f y) 2)", "(if x\n  (f y)\n  2\n)"),
        ("((f) 1)", "(\n  (f)\n  1\n)"),
        ("(let ((x 1)) x)", "(let\n  (\n    (x 1)\n  )\n  x\n)"),
        ("'(a b)", "(quote\n  (a b)\n)"),
    ],
)
def test_layout(source, expected):
    assert pformat_form(read(source)) == expected


def test_starting_indent():
    assert pformat_form(read("(a b)"), indent=1) == "  (a b)"
    assert pformat_form(read("(g (h))"), indent=1) == "  (g\n    (h)\n  )"
