import math

import pytest

from workbench.expr import (
    Binary,
    Call,
    ExprError,
    Literal,
    Unary,
    Var,
    format_expr,
    parse,
)


@pytest.mark.parametrize(
    "text, env, want",
    [
        ("sqrt(A / pi)", {"A": 87616, "pi": math.pi}, "167"),
        ("pow(x, 3) + pow(y, 3)", {"x": 12, "y": 1}, "1729"),
        ("pow(x, 3) + pow(y, 3)", {"x": 9, "y": 10}, "1729"),
        ("5 / 9 * (F - 32)", {"F": -40}, "-40"),
        ("5 / 9 * (F - 32)", {"F": 32}, "0"),
        ("5 / 9 * (F - 32)", {"F": 212}, "100"),
        ("-1 + -x", {"x": 1}, "-2"),
        ("-1 - x", {"x": 1}, "-2"),
    ],
)
def test_eval(text, env, want):
    assert f"{parse(text).eval(env):.6g}" == want


@pytest.mark.parametrize(
    "text, want",
    [
        ("x % 2", "unexpected '%'"),
        ("math.Pi", "unexpected '.'"),
        ("!true", "unexpected '!'"),
        ('"hello"', "unexpected '\"'"),
        ("log(10)", 'unknown function "log"'),
        ("sqrt(1, 2)", "call to sqrt has 2 args, want 1"),
    ],
)
def test_errors(text, want):
    with pytest.raises(ExprError) as excinfo:
        parse(text).check(set())
    assert str(excinfo.value) == want


@pytest.mark.parametrize(
    "text, env, want",
    [
        ("x % 2", None, "unexpected '%'"),
        ("!true", None, "unexpected '!'"),
        ("log(10)", None, 'unknown function "log"'),
        ("sqrt(1, 2)", None, "call to sqrt has 2 args, want 1"),
        ("sqrt(A / pi)", {"A": 87616, "pi": math.pi}, "167"),
        ("pow(x, 3) + pow(y, 3)", {"x": 9, "y": 10}, "1729"),
        ("5 / 9 * (F - 32)", {"F": -40}, "-40"),
    ],
)
def test_coverage(text, env, want):
    try:
        expr = parse(text)
        expr.check(set())
    except ExprError as err:
        assert str(err) == want
    else:
        assert f"{expr.eval(env):.6g}" == want


def test_check_collects_variables():
    names = set()
    parse("pow(x, 3) + y * sin(z)").check(names)
    assert names == {"x", "y", "z"}


def test_precedence_and_associativity():
    assert format_expr(parse("1 - 2 - 3")) == "((1 - 2) - 3)"
    assert parse("1 - 2 - 3").eval(None) == -4.0
    assert format_expr(parse("2 * 3 + 4")) == "((2 * 3) + 4)"
    assert format_expr(parse("1 + 2 * 3")) == "(1 + (2 * 3))"
    assert format_expr(parse("(1 + 2) * 3")) == "((1 + 2) * 3)"


def test_format_unary_and_call():
    assert format_expr(parse("-1 + -x")) == "((-1) + (-x))"
    assert format_expr(parse("pow(x, 3)")) == "pow(x, 3)"
    assert str(parse("sin(+y)")) == "sin((+y))"


@pytest.mark.parametrize(
    "text", ["-1 + -x", "pow(x, 3) + pow(y, 3)", "5 / 9 * (F - 32)", "sqrt(A / pi)"]
)
def test_format_round_trip(text):
    expr = parse(text)
    formatted = format_expr(expr)
    assert parse(formatted) == expr
    assert format_expr(parse(formatted)) == formatted


def test_literal_format_uses_shortest_g():
    assert format_expr(Literal(0.5)) == "0.5"
    assert format_expr(Literal(1e6)) == "1e+06"
    assert format_expr(Literal(1e-05)) == "1e-05"
    assert format_expr(Literal(123456.0)) == "123456"


def test_numbers():
    assert parse("1e3").eval(None) == 1000.0
    assert parse(".5").eval(None) == 0.5
    assert parse("3.").eval(None) == 3.0


def test_missing_variable_is_zero():
    assert parse("x + 1").eval({}) == 1.0
    assert parse("x + 1").eval(None) == 1.0


def test_ieee_results():
    assert parse("1 / x").eval({"x": 0}) == math.inf
    assert parse("-1 / x").eval({"x": 0}) == -math.inf
    assert math.isnan(parse("x / x").eval({"x": 0}))
    assert math.isnan(parse("sqrt(x)").eval({"x": -1}))


@pytest.mark.parametrize(
    "text, want",
    [
        ("", "unexpected end of file"),
        ("sqrt(1, 2", "got end of file, want ')'"),
        ("(1", "got end of file, want ')'"),
        ("1 2", "unexpected number 2"),
        ("f(x y)", "got identifier y, want ')'"),
        ("1e", 'parsing "1e": invalid syntax'),
    ],
)
def test_parse_errors(text, want):
    with pytest.raises(ExprError) as excinfo:
        parse(text)
    assert str(excinfo.value) == want


def test_check_rejects_bad_operators():
    with pytest.raises(ExprError, match="unexpected unary op '!'"):
        Unary("!", Literal(1.0)).check(set())
    with pytest.raises(ExprError, match="unexpected binary op '%'"):
        Binary("%", Literal(1.0), Var("x")).check(set())
    with pytest.raises(ExprError, match="call to pow has 1 args, want 2"):
        Call("pow", (Literal(1.0),)).check(set())


def test_eval_rejects_unsupported():
    with pytest.raises(ExprError, match="unsupported function call: log"):
        Call("log", (Literal(1.0),)).eval(None)
    with pytest.raises(ExprError):
        Binary("%", Literal(1.0), Literal(2.0)).eval(None)


def test_format_rejects_unknown():
    with pytest.raises(TypeError):
        format_expr(object())