from datetime import datetime
from decimal import Decimal

import pytest

from attolisp.errors import AttoArityError, AttoTypeError
from attolisp.types.nil import Nil
from attolisp.types.symbol import Symbol


# --- lists ---
@pytest.mark.parametrize(
    "source,expected",
    [
        ("(list 1 2 3)", [1, 2, 3]),
        ("(list)", []),
        ("(list 1 (list 2 3))", [1, [2, 3]]),
        ("(car (list 1 2))", 1),
        ("(car '(a b))", Symbol("a")),
        ("(cdr (list 1 2 3))", [2, 3]),
        ("(cdr (list 1))", []),
        ("(cons 1 (list 2 3))", [1, 2, 3]),
        ("(cons 1 (list))", [1]),
        ("(cons 1 2)", [1, 2]),
        ("(nth (list 10 20 30) 1)", 20),
        ("(nth (list 10 20 30) 1.0)", 20),
    ],
)
def test_list_builtins(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize("source", ["(car (list))", "(cdr (list))", "(nth (list 1 2) 5)", "(nth (list 1 2) -1)"])
def test_out_of_range_list_access_is_nil(run, source):
    assert run(source) is Nil


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(empty? (list))", True),
        ("(empty? nil)", True),
        ("(empty? (list 1))", False),
        ('(empty? "")', False),
        ("(list? (list))", True),
        ("(list? '(1))", True),
        ("(list? 5)", False),
        ("(list? nil)", False),
        ("(number? 1)", True),
        ("(number? 1.5)", True),
        ('(number? "1")', False),
        ("(number? t)", False),
    ],
)
def test_list_predicates(run, source, expected):
    assert run(source) is expected


def test_list_operations_never_mutate(run):
    run("(define a (list 1 2))")
    assert run("(cons 0 a)") == [0, 1, 2]
    assert run("(cdr a)") == [2]
    assert run("a") == [1, 2]


def test_cdr_returns_a_new_list(run):
    run("(define a (list 1 2 3))")
    assert run("(cdr a)") is not run("a")


@pytest.mark.parametrize("source", ["(car 5)", '(cdr "abc")', "(nth 5 0)", "(nth (list 1) 'x)"])
def test_list_type_errors(run, source):
    with pytest.raises(AttoTypeError):
        run(source)


@pytest.mark.parametrize("source", ["(car)", "(cdr (list) (list))", "(cons 1)", "(nth (list 1))", "(empty?)"])
def test_list_arity_errors(run, source):
    with pytest.raises(AttoArityError):
        run(source)


# --- strings ---
@pytest.mark.parametrize(
    "source,expected",
    [
        ('(concat "a" "b" "c")', "abc"),
        ("(concat)", ""),
        ('(concat "n=" 5)', "n=5"),
        ('(concat "x" 1.5)', "x1.5"),
        ('(concat "xs=" (list 1 "two"))', 'xs=(1 "two")'),
        ('(concat "v" nil)', "vnil"),
        ('(str-length "hello")', 5),
        ('(str-length "")', 0),
        ('(substr "hello" 1 3)', "ell"),
        ('(substr "hello" 3 10)', "lo"),
        ('(substr "hello" 5 1)', ""),
        ('(substr "hello" 10 2)', ""),
        ('(substr "hello" -1 2)', ""),
        ('(substr "hello" 1 -2)', ""),
        ('(index-of "hello world" "world")', 6),
        ('(index-of "abc" "z")', -1),
        ('(to-lower "HeLLo")', "hello"),
    ],
)
def test_string_builtins(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source",
    ["(str-length 5)", '(substr 5 0 1)', '(substr "abc" "0" 1)', '(index-of "abc" 1)', "(to-lower 'x)"],
)
def test_string_type_errors(run, source):
    with pytest.raises(AttoTypeError):
        run(source)


@pytest.mark.parametrize("source", ['(str-length "a" "b")', '(substr "abc" 1)', '(index-of "abc")', "(to-lower)"])
def test_string_arity_errors(run, source):
    with pytest.raises(AttoArityError):
        run(source)


# --- conversion and output ---
@pytest.mark.parametrize(
    "source,expected",
    [
        ('(number "42")', 42),
        ('(number " 12 ")', 12),
        ('(number "-3")', -3),
        ('(number "3.5")', Decimal("3.5")),
        ("(number 7)", 7),
        ('(symbol "foo")', Symbol("foo")),
        ("(symbol 'bar)", Symbol("bar")),
    ],
)
def test_conversions(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source",
    ['(number "abc")', '(number "")', "(number nil)", "(symbol 1)", '(number "1_000")', '(number "2_5.0")', '(number "+5")'],
)
def test_conversion_errors(run, source):
    with pytest.raises(AttoTypeError):
        run(source)


def test_print_writes_printed_forms_and_returns_nil(run, capsys):
    assert run('(print "n=" 5 (list 1 2))') is Nil
    assert capsys.readouterr().out == '"n="5(1 2)\n'


def test_print_with_no_arguments_writes_newline(run, capsys):
    run("(print)")
    assert capsys.readouterr().out == "\n"


# --- dates ---
@pytest.mark.parametrize(
    "source,expected",
    [
        ('(date-year #d"2024-01-15")', 2024),
        ('(date-month #d"2024-01-15")', 1),
        ('(date-day #d"2024-01-15")', 15),
        ('(date-day #d"2024-03-05 14:30:00")', 5),
    ],
)
def test_date_parts(run, source, expected):
    assert run(source) == expected


def test_date_literal_evaluates_to_itself(run):
    assert run('#d"2024-03-05 14:30:00"') == datetime(2024, 3, 5, 14, 30)


def test_now_is_current_local_time(run):
    before = datetime.now()
    value = run("(now)")
    after = datetime.now()
    assert isinstance(value, datetime)
    assert before <= value <= after


def test_dates_order_chronologically(run):
    assert run('(< #d"2023-12-31" #d"2024-01-01" (now))') is True


@pytest.mark.parametrize("source", ["(date-year 2024)", '(date-month "2024-01-01")', "(date-day nil)"])
def test_date_type_errors(run, source):
    with pytest.raises(AttoTypeError):
        run(source)


@pytest.mark.parametrize("source", ["(now 1)", "(date-year)"])
def test_date_arity_errors(run, source):
    with pytest.raises(AttoArityError):
        run(source)
