import pytest

from attolisp.errors import (
    AttoArityError,
    AttoDivisionByZero,
    AttoTypeError,
    AttoUndefinedSymbol,
    AttoUndefinedVariable,
)
from attolisp.evaluation.evaluator import Evaluator
from attolisp.reader.parser import read
from attolisp.types.environment import Environment
from attolisp.types.lambda_fn import Builtin, Lambda
from attolisp.types.nil import Nil
from attolisp.types.symbol import Symbol


# --- quote ---
def test_quote(run):
    assert run("(quote (a b))") == [Symbol("a"), Symbol("b")]
    assert run("'x") == Symbol("x")
    assert run("''x") == [Symbol("quote"), Symbol("x")]


@pytest.mark.parametrize("source", ["(quote)", "(quote a b)"])
def test_quote_arity(run, source):
    with pytest.raises(AttoArityError):
        run(source)


# --- if ---
@pytest.mark.parametrize(
    "source,expected",
    [
        ("(if t 1 2)", 1),
        ("(if nil 1 2)", 2),
        ("(if (= 1 2) 1 2)", 2),
        ("(if 0 1 2)", 1),
        ('(if "" 1 2)', 1),
        ("(if () 1 2)", 1),
        ("(if (list) 1 2)", 1),
    ],
)
def test_if_truthiness(run, source, expected):
    assert run(source) == expected


def test_if_without_else_yields_nil(run):
    assert run("(if nil 1)") is Nil


def test_if_evaluates_only_the_chosen_branch(run):
    assert run("(if t 1 (/ 1 0))") == 1
    assert run("(if nil (/ 1 0) 2)") == 2


@pytest.mark.parametrize("source", ["(if t)", "(if)", "(if t 1 2 3)"])
def test_if_arity(run, source):
    with pytest.raises(AttoArityError):
        run(source)


# --- define ---
def test_define_value_returns_and_binds(run):
    assert run("(define x (+ 2 3))") == 5
    assert run("x") == 5


def test_define_scheme_style_function(run):
    fn = run("(define (sq x) (* x x))")
    assert isinstance(fn, Lambda)
    assert fn.name == "sq"
    assert fn.arity == 1
    assert run("(sq 4)") == 16


def test_define_name_then_params_function(run):
    fn = run("(define add (a b) (+ a b))")
    assert isinstance(fn, Lambda)
    assert run("(add 2 3)") == 5


def test_define_overwrites_in_same_frame(run):
    run("(define x 1)")
    run("(define x 2)")
    assert run("x") == 2


def test_define_inside_function_is_local(run):
    run("(define x 1)")
    run("(define (f) (define x 2) x)")
    assert run("(f)") == 2
    assert run("x") == 1


@pytest.mark.parametrize("source", ["(define x)", "(define)", "(define x 1 2)"])
def test_define_arity(run, source):
    with pytest.raises(AttoArityError):
        run(source)


@pytest.mark.parametrize("source", ["(define 5 1)", '(define "x" 1)', "(define (f 1) 1)"])
def test_define_shape_errors(run, source):
    with pytest.raises(AttoTypeError):
        run(source)


# --- set! ---
def test_set_updates_existing_binding(run):
    run("(define x 1)")
    assert run("(set! x 2)") == 2
    assert run("x") == 2


def test_set_from_closure_updates_defining_frame(run):
    run("(define counter 0)")
    run("(define (inc!) (set! counter (+ counter 1)))")
    run("(inc!) (inc!)")
    assert run("counter") == 2


def test_set_unbound_name_fails(run):
    with pytest.raises(AttoUndefinedVariable):
        run("(set! never-bound 1)")


def test_set_shape_errors(run):
    with pytest.raises(AttoTypeError):
        run("(set! 1 2)")
    with pytest.raises(AttoArityError):
        run("(set! x)")


# --- lambda and application ---
def test_lambda_application(run):
    assert run("((lambda (x y) (+ x y)) 1 2)") == 3
    assert run("((lambda () 1 2 3))") == 3


def test_closures_capture_defining_environment(run):
    run("(define (make-adder n) (lambda (x) (+ x n)))")
    run("(define add5 (make-adder 5))")
    run("(define add10 (make-adder 10))")
    assert run("(add5 1)") == 6
    assert run("(add10 1)") == 11


def test_closures_share_a_captured_frame(run):
    run(
        """
        (define (make-counter)
          (let ((n 0))
            (lambda () (set! n (+ n 1)) n)))
        (define c1 (make-counter))
        (define c2 (make-counter))
        (c1) (c1)
        """
    )
    assert run("(c1)") == 3
    assert run("(c2)") == 1


def test_recursion_is_exact_for_big_integers(run):
    run("(define (fact n) (if (<= n 1) 1 (* n (fact (- n 1)))))")
    assert run("(fact 20)") == 2432902008176640000
    assert run("(fact 30)") == 265252859812191058636308480000000


@pytest.mark.parametrize("source", ["((lambda (x) x))", "((lambda (x) x) 1 2)", "(lambda (x))", "(lambda)"])
def test_lambda_arity(run, source):
    with pytest.raises(AttoArityError):
        run(source)


def test_named_function_arity_message(run):
    run("(define (sq x) (* x x))")
    with pytest.raises(AttoArityError, match="sq expects 1 arguments, got 2"):
        run("(sq 1 2)")


@pytest.mark.parametrize("source", ["(lambda x x)", "(lambda (1) 1)", '(lambda ("a") 1)'])
def test_lambda_parameter_errors(run, source):
    with pytest.raises(AttoTypeError):
        run(source)


def test_arguments_evaluate_left_to_right(run):
    run('(define trail "")')
    run("(define (note s) (set! trail (concat trail s)) s)")
    assert run('(list (note "a") (note "b") (note "c"))') == ["a", "b", "c"]
    assert run("trail") == "abc"


def test_failing_argument_prevents_the_call(run):
    run("(define called nil)")
    run("(define (f x) (set! called t) x)")
    with pytest.raises(AttoDivisionByZero):
        run("(f (/ 1 0))")
    assert run("called") is Nil


@pytest.mark.parametrize("source", ["(1 2)", '("f" 1)', "((list 1) 2)"])
def test_calling_a_non_function(run, source):
    with pytest.raises(AttoTypeError, match="as a function"):
        run(source)


def test_undefined_symbol(run):
    with pytest.raises(AttoUndefinedSymbol, match="Undefined symbol: nope"):
        run("nope")
    with pytest.raises(AttoUndefinedSymbol):
        run("(nope 1)")


def test_special_form_names_are_case_sensitive(run):
    with pytest.raises(AttoUndefinedSymbol):
        run("(IF t 1 2)")


# --- evaluator entry point ---
def test_eval_in_explicit_environment(evaluator):
    env = Environment(outer=evaluator.global_env)
    env.define("y", 10)
    assert evaluator.eval(read("(+ y 1)"), env) == 11
    assert evaluator.global_env.lookup("y") is None


def test_empty_list_is_self_evaluating(evaluator):
    assert evaluator.eval([]) == []


def test_function_values_are_self_evaluating(evaluator):
    plus = evaluator.eval(Symbol("+"))
    assert isinstance(plus, Builtin)
    assert evaluator.eval(plus) is plus
    assert evaluator.eval([plus, 1, 2]) == 3


@pytest.mark.parametrize("host_value", [object(), 1.5, {"a": 1}])
def test_host_objects_cannot_be_evaluated(evaluator, host_value):
    with pytest.raises(AttoTypeError):
        evaluator.eval(host_value)


def test_evaluators_are_independent():
    first, second = Evaluator(), Evaluator()
    first.eval(read("(define only-here 1)"))
    with pytest.raises(AttoUndefinedSymbol):
        second.eval(read("only-here"))


def test_builtins_can_be_shadowed_per_evaluator():
    first, second = Evaluator(), Evaluator()
    first.eval(read("(define (car x) 42)"))
    assert first.eval(read("(car (list 1))")) == 42
    assert second.eval(read("(car (list 1))")) == 1
