from functools import reduce

import pytest
from hypothesis import given, strategies as st

from lispy.interpreter import Interpreter


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2 3)", "6"),
        ("(- 10 3 2)", "5"),
        ("(* 2 3 4)", "24"),
        ("(/ 12 3)", "4"),
        ("(+ (* 2 3) (- 10 4))", "12"),
        ("(/ (+ 20 10) (* 2 5))", "3"),
        ("(+ -1 5 -3)", "1"),
        ("(- -10 -5)", "-5"),
        ("(- 5)", "-5"),
        ("(-5)", "-5"),
        ("(+ 5)", "5"),
        ("(* 1 2 3 4 5 6)", "720"),
        ("(/ 7 2)", "3"),
        ("(/ -7 2)", "-3"),
        ("(/ 7 -2)", "-3"),
        ("(% 7 3)", "1"),
        ("(% -7 3)", "-1"),
        ("(% 7 -3)", "1"),
        ("(add 1 2)", "3"),
        ("(sub 5 1)", "4"),
        ("(mul 3 4)", "12"),
        ("(div 9 3)", "3"),
        ("(mod 9 4)", "1"),
    ],
)
def test_arithmetic(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(/ 1 0)", "Error: Division by zero."),
        ("(% 1 0)", "Error: Division by zero."),
        ("(/ 10 2 0 5)", "Error: Division by zero."),
        ("(+ 1 {2})", "Error: Cannot operate on 'Q-Expression'. Expected Number."),
        ("(* 2 +)", "Error: Cannot operate on 'Function'. Expected Number."),
        # Arguments are evaluated before the operation runs
        ("(/ 1 0 (bad))", "Error: Unbound symbol 'bad'"),
        ("(+ 1 (/ 1 0) (bad))", "Error: Division by zero."),
    ],
)
def test_arithmetic_errors(run, source, expected):
    assert run(source) == expected


def test_numbers_are_unbounded_after_reading(run):
    assert run("(* 9223372036854775807 2)") == "18446744073709551614"


ints = st.integers(min_value=-(10 ** 12), max_value=10 ** 12)


@given(st.lists(ints, min_size=1, max_size=8))
def test_addition_folds_left(xs):
    itp = Interpreter(prelude=None)
    assert itp.eval(f"+ {' '.join(map(str, xs))}").value == sum(xs)


@given(st.lists(ints, min_size=2, max_size=8))
def test_subtraction_folds_left(xs):
    itp = Interpreter(prelude=None)
    expected = reduce(lambda a, b: a - b, xs)
    assert itp.eval(f"- {' '.join(map(str, xs))}").value == expected


@given(ints, ints.filter(lambda n: n != 0))
def test_division_and_remainder_agree(a, b):
    itp = Interpreter(prelude=None)
    q = itp.eval(f"/ {a} {b}").value
    r = itp.eval(f"% {a} {b}").value
    assert q * b + r == a
    assert abs(r) < abs(b)
    assert r == 0 or (r < 0) == (a < 0)
