import pytest

from lispy.builtin.env_builtin import register
from lispy.evaluation.apply import apply
from lispy.evaluation.evaluator import evaluate
from lispy.types.environment import Environment
from lispy.types.symbol import Symbol
from lispy.types.value import Error, Function, Number, QExpression, SExpression


@pytest.fixture
def env():
    """Fresh environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.mark.parametrize(
    "source,expected",
    [
        ("()", "()"),
        ("(5)", "5"),
        ("((5))", "5"),
        ("(((+ 1 2)))", "3"),
        ("{+ 1 (bad)}", "{+ 1 (bad)}"),
        ("+", "<builtin>"),
        ("(head)", "<builtin>"),
        ("x", "Error: Unbound symbol 'x'"),
        ("(1 2)", "Error: S-expression must start with a function. Got 'Number'"),
        ("({1} 2)", "Error: S-expression must start with a function. Got 'Q-Expression'"),
        ("(() 2)", "Error: S-expression must start with a function. Got 'S-Expression'"),
        ("99999999999999999999", "Error: Invalid number."),
    ],
)
def test_evaluation_rules(run, source, expected):
    assert run(source) == expected


def test_first_error_wins(run):
    assert run("(+ (bad-a) (bad-b))") == "Error: Unbound symbol 'bad-a'"
    assert run("(head (bad) (/ 1 0))") == "Error: Unbound symbol 'bad'"


def test_errors_are_values(run):
    assert run("(== {99999999999999999999} {99999999999999999999})") == "1"
    assert run("(head {99999999999999999999 1})") == "{Error: Invalid number.}"


def test_atoms_evaluate_to_themselves(env):
    n = Number(3)
    assert evaluate(env, n) is n
    q = QExpression([Symbol("x")])
    assert evaluate(env, q) is q
    e = Error("boom")
    assert evaluate(env, e) is e


def test_symbol_lookup_returns_copy(env):
    env.put(Symbol("xs"), QExpression([Number(1)]))
    got = evaluate(env, Symbol("xs"))
    got.add(Number(2))
    assert str(env.get(Symbol("xs"))) == "{1}"


def test_evaluate_sexpression_directly(env):
    expr = SExpression([Symbol("*"), Number(6), SExpression([Symbol("+"), Number(3), Number(4)])])
    assert evaluate(env, expr) == Number(42)


def test_evaluating_a_builtin_symbol(env):
    assert str(evaluate(env, Symbol("eval"))) == "<builtin>"
    assert evaluate(env, Symbol("nope")) == Error("Unbound symbol 'nope'")


def test_recursive_definition(run):
    run("(def {fact} (\\ {n} {if (== n 0) {1} {* n (fact (- n 1))}}))")
    assert run("(fact 5)") == "120"
    assert run("(fact 20)") == "2432902008176640000"


def test_apply_rejects_values_that_are_not_callable(env):
    assert apply(Function(), SExpression([Number(1)]), env, evaluate) == Error(
        "Cannot apply non-function 'Function'"
    )
