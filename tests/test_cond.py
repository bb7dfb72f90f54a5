import pytest

from attolisp.errors import AttoArityError, AttoTypeError
from attolisp.types.nil import Nil


@pytest.mark.parametrize(
    "source,expected",
    [
        ('(cond ((= 1 2) "a") ((= 1 1) "b") (else "c"))', "b"),
        ('(cond ((= 1 2) "a") (else "c"))', "c"),
        ("(cond (5))", 5),
        ("(cond (nil) ((+ 1 2)))", 3),
        ("(cond (t 1 2 3))", 3),
        ("(cond (t 1) ((/ 1 0) 2))", 1),
    ],
)
def test_cond_selects_first_truthy_clause(run, source, expected):
    assert run(source) == expected


def test_cond_without_match_is_nil(run):
    assert run("(cond ((= 1 2) 1) (nil 2))") is Nil


def test_bare_else_is_true(run):
    assert run("(cond (nil 1) (else))") is True


def test_cond_with_function_of_classification(run):
    run(
        """
        (define (sign n)
          (cond ((< n 0) 'negative)
                ((= n 0) 'zero)
                (else 'positive)))
        """
    )
    assert [str(run(f"(sign {n})")) for n in (-3, 0, 8)] == ["negative", "zero", "positive"]


def test_cond_needs_clauses(run):
    with pytest.raises(AttoArityError):
        run("(cond)")


@pytest.mark.parametrize("source", ["(cond 5)", "(cond ())", "(cond (nil 1) x)"])
def test_cond_clause_shape(run, source):
    with pytest.raises(AttoTypeError):
        run(source)
