import pytest
from hypothesis import given, strategies as st

from lispy.errors import LispySyntaxError
from lispy.reader.parser import end_position, lex, parse, parse_expressions


def kinds(source):
    return [(t.kind, t.text) for t in lex(source)]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 -2)", [("lparen", "("), ("symbol", "+"), ("number", "1"), ("number", "-2"), ("rparen", ")")]),
        ("{a b}", [("lbrace", "{"), ("symbol", "a"), ("symbol", "b"), ("rbrace", "}")]),
        ("-", [("symbol", "-")]),
        ("-abc", [("symbol", "-abc")]),
        ("12abc", [("number", "12"), ("symbol", "abc")]),
        ("\\ {x}", [("symbol", "\\"), ("lbrace", "{"), ("symbol", "x"), ("rbrace", "}")]),
        ("== != >= <= & %", [("symbol", s) for s in ["==", "!=", ">=", "<=", "&", "%"]]),
        ("1 ; a comment (\n2", [("number", "1"), ("number", "2")]),
        ("", []),
    ],
)
def test_lexer_basic(source, expected):
    assert kinds(source) == expected


def test_token_positions():
    toks = list(lex("a\n  (b)"))
    assert [(t.text, t.line, t.column) for t in toks] == [
        ("a", 1, 1),
        ("(", 2, 3),
        ("b", 2, 4),
        (")", 2, 5),
    ]


@given(st.integers(min_value=-(2 ** 70), max_value=2 ** 70))
def test_integer_literals_lex_as_one_number(n):
    assert kinds(str(n)) == [("number", str(n))]


def test_parse_root_tree():
    root = parse("(1 {x})")
    assert root.tag == ">"
    assert [c.tag for c in root.children] == ["regex", "expression|sexpression|>", "regex"]

    sexpr = root.children[1]
    assert [c.tag for c in sexpr.children] == [
        "char",
        "expression|number|regex",
        "expression|qexpression|>",
        "char",
    ]
    assert sexpr.children[0].contents == "("
    assert sexpr.children[-1].contents == ")"

    qexpr = sexpr.children[2]
    assert [c.contents for c in qexpr.children] == ["{", "x", "}"]
    assert qexpr.children[1].tag == "expression|symbol|regex"


def test_parse_empty_input():
    root = parse("")
    assert [c.tag for c in root.children] == ["regex", "regex"]


def test_parse_expressions_yields_each_top_level_form():
    nodes = list(parse_expressions("1 (a) {b}"))
    assert [n.tag for n in nodes] == [
        "expression|number|regex",
        "expression|sexpression|>",
        "expression|qexpression|>",
    ]


def test_end_position():
    assert end_position("") == (1, 1)
    assert end_position("(1 2") == (1, 5)
    assert end_position("a\nbc") == (2, 3)


@pytest.mark.parametrize(
    "source,message,line,column",
    [
        ("(1 2", "unmatched '(' opened at 1:1", 1, 5),
        ("{1\n(2)", "unmatched '{' opened at 1:1", 2, 4),
        (")", "unexpected ')'", 1, 1),
        ("(1 }", "unexpected '}'", 1, 4),
        ('"str"', "unexpected character '\"'", 1, 1),
    ],
)
def test_syntax_errors(source, message, line, column):
    with pytest.raises(LispySyntaxError) as info:
        parse(source)
    err = info.value
    assert err.message == message
    assert (err.line, err.column) == (line, column)
    assert str(err) == f"<stdin>:{line}:{column}: error: {message}"


def test_syntax_error_carries_filename():
    with pytest.raises(LispySyntaxError) as info:
        parse("(", filename="prog.lspy")
    assert str(info.value).startswith("prog.lspy:1:2: error:")
