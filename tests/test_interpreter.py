import logging

import pytest

from lispy.errors import LispyLoadError, LispySyntaxError
from lispy.interpreter import Interpreter
from lispy.modules.prelude_loader import prelude_files
from lispy.types.value import Error, Number, SExpression


def test_eval_treats_the_line_as_one_expression(interp):
    assert interp.eval("+ 1 2") == Number(3)
    assert interp.eval("") == SExpression()
    assert interp.eval("(+ 1 2)") == Number(3)


def test_eval_of_several_forms_still_runs_them(interp):
    # Both definitions run; the outer expression then has no function head
    result = interp.eval("(def {a} 1) (def {b} 2)")
    assert result == Error("S-expression must start with a function. Got 'S-Expression'")
    assert interp.eval("+ a b") == Number(3)


def test_eval_all_returns_each_result(interp):
    results = interp.eval_all("(def {x} 5) x (+ x 1)")
    assert [str(r) for r in results] == ["()", "5", "6"]


def test_state_persists_between_calls(interp):
    interp.eval("def {counter} 1")
    interp.eval("def {counter} (+ counter 1)")
    assert interp.eval("counter") == Number(2)


def test_syntax_errors_are_raised(interp):
    with pytest.raises(LispySyntaxError):
        interp.eval("(+ 1")
    with pytest.raises(LispySyntaxError):
        interp.eval_all("(def {x} 1) )")


def test_eval_all_parses_before_evaluating(interp):
    with pytest.raises(LispySyntaxError):
        interp.eval_all("(def {early} 1) (")
    assert interp.eval("early") == Error("Unbound symbol 'early'")


def test_load_file(interp, tmp_path):
    src = tmp_path / "prog.lspy"
    src.write_text("; squares\n(def {sq} (\\ {x} {* x x}))\n(sq 12)\n", encoding="utf-8")
    results = interp.load(src)
    assert [str(r) for r in results] == ["()", "144"]


def test_load_missing_file(interp, tmp_path):
    with pytest.raises(LispyLoadError):
        interp.load(tmp_path / "missing.lspy")


def test_load_reports_filename_in_syntax_errors(interp, tmp_path):
    src = tmp_path / "broken.lspy"
    src.write_text("(+ 1\n", encoding="utf-8")
    with pytest.raises(LispySyntaxError) as info:
        interp.load(src)
    assert info.value.filename == str(src)


def test_runaway_recursion_becomes_an_error_value(interp):
    interp.eval("def {forever} (\\ {x} {forever x})")
    assert interp.eval("forever 1") == Error("Maximum recursion depth exceeded.")
    # The interpreter is still usable afterwards
    assert interp.eval("+ 1 1") == Number(2)


def test_builtins_only_without_prelude(interp):
    assert interp.eval("len") == Error("Unbound symbol 'len'")


def test_default_prelude_is_bundled():
    [path] = prelude_files()
    assert path.is_file()
    assert Interpreter().eval("len {1 2 3}") == Number(3)


def test_prelude_source_string():
    itp = Interpreter(prelude="(def {seven} 7)")
    assert itp.eval("seven") == Number(7)


def test_prelude_errors_are_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="lispy"):
        Interpreter(prelude="(head {})")
    assert "Function 'head' passed {}." in caplog.text


def test_missing_prelude_is_a_warning(monkeypatch, tmp_path, caplog):
    monkeypatch.setenv("LISPY_PRELUDE_PATH", str(tmp_path))
    with caplog.at_level(logging.WARNING, logger="lispy"):
        itp = Interpreter()
    assert "Cannot find prelude" in caplog.text
    assert itp.eval("len") == Error("Unbound symbol 'len'")
    assert itp.eval("+ 1 2") == Number(3)


def test_custom_prelude_path(monkeypatch, tmp_path):
    std = tmp_path / "std"
    std.mkdir()
    (std / "core.lspy").write_text("(def {answer} 42)", encoding="utf-8")
    monkeypatch.setenv("LISPY_PRELUDE_PATH", str(tmp_path))
    assert Interpreter().eval("answer") == Number(42)
