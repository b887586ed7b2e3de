"""Arithmetic expressions: parsing, checking, evaluation and formatting."""

from __future__ import annotations

import json
import math
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping, MutableSet
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto

Env = Mapping[str, float]

_ARITY = {"pow": 2, "sin": 1, "sqrt": 1}
_RUNE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "'": "\\'",
    "\\": "\\\\",
}


class ExprError(ValueError):
    """A syntax or semantic error in an expression."""


def _quote_rune(ch: str) -> str:
    """Quote a single character the way a rune literal is written."""
    if ch in _RUNE_ESCAPES:
        return f"'{_RUNE_ESCAPES[ch]}'"
    if ch.isprintable():
        return f"'{ch}'"
    code = ord(ch)
    if code < 0x80:
        return f"'\\x{code:02x}'"
    if code < 0x10000:
        return f"'\\u{code:04x}'"
    return f"'\\U{code:08x}'"


def _format_g(value: float) -> str:
    """Format a float with the shortest %g representation."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    sign = "-" if math.copysign(1.0, value) < 0 else ""
    if value == 0:
        return sign + "0"
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    all_digits = "".join(map(str, digit_tuple))
    digits = all_digits.rstrip("0")
    exponent += len(all_digits) - len(digits)
    nd = len(digits)
    dp = nd + exponent
    exp10 = dp - 1
    if exp10 < -4 or exp10 >= 6:
        mantissa = digits[0] + ("." + digits[1:] if nd > 1 else "")
        exp_sign = "+" if exp10 >= 0 else "-"
        return f"{sign}{mantissa}e{exp_sign}{abs(exp10):02d}"
    if dp <= 0:
        body = "0." + "0" * (-dp) + digits
    elif dp >= nd:
        body = digits + "0" * (dp - nd)
    else:
        body = digits[:dp] + "." + digits[dp:]
    return sign + body


def _divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _is_odd_integer(y: float) -> bool:
    return math.isfinite(y) and y == int(y) and int(y) % 2 == 1


def _pow(x: float, y: float) -> float:
    try:
        return math.pow(x, y)
    except OverflowError:
        if x < 0 and _is_odd_integer(y):
            return -math.inf
        return math.inf
    except ValueError:
        if x == 0:
            return math.copysign(math.inf, x) if _is_odd_integer(y) else math.inf
        return math.nan


def _sin(x: float) -> float:
    try:
        return math.sin(x)
    except ValueError:
        return math.nan


def _sqrt(x: float) -> float:
    if x < 0:
        return math.nan
    return math.sqrt(x)


class Expr(ABC):
    """An arithmetic expression."""

    @abstractmethod
    def eval(self, env: Env | None) -> float:
        """Return the value of this expression in the environment env."""

    @abstractmethod
    def check(self, vars: MutableSet[str]) -> None:
        """Raise ExprError on errors and add the variables used to vars."""

    def __str__(self) -> str:
        return format_expr(self)


@dataclass(frozen=True)
class Var(Expr):
    """A variable reference, e.g. x."""

    name: str

    def eval(self, env: Env | None) -> float:
        if not env:
            return 0.0
        return float(env.get(self.name, 0.0))

    def check(self, vars: MutableSet[str]) -> None:
        vars.add(self.name)


@dataclass(frozen=True)
class Literal(Expr):
    """A numeric constant, e.g. 3.141."""

    value: float

    def eval(self, env: Env | None) -> float:
        return float(self.value)

    def check(self, vars: MutableSet[str]) -> None:
        return None


@dataclass(frozen=True)
class Unary(Expr):
    """A unary operator expression, e.g. -x."""

    op: str
    x: Expr

    def eval(self, env: Env | None) -> float:
        if self.op == "+":
            return +self.x.eval(env)
        if self.op == "-":
            return -self.x.eval(env)
        raise ExprError(f"unsupported unary operator: {_quote_rune(self.op)}")

    def check(self, vars: MutableSet[str]) -> None:
        if self.op not in ("+", "-"):
            raise ExprError(f"unexpected unary op {_quote_rune(self.op)}")
        self.x.check(vars)


@dataclass(frozen=True)
class Binary(Expr):
    """A binary operator expression, e.g. x+y."""

    op: str
    x: Expr
    y: Expr

    def eval(self, env: Env | None) -> float:
        if self.op == "+":
            return self.x.eval(env) + self.y.eval(env)
        if self.op == "-":
            return self.x.eval(env) - self.y.eval(env)
        if self.op == "*":
            return self.x.eval(env) * self.y.eval(env)
        if self.op == "/":
            return _divide(self.x.eval(env), self.y.eval(env))
        raise ExprError(f"unsupported binary operator: {_quote_rune(self.op)}")

    def check(self, vars: MutableSet[str]) -> None:
        if self.op not in ("+", "-", "*", "/"):
            raise ExprError(f"unexpected binary op {_quote_rune(self.op)}")
        self.x.check(vars)
        self.y.check(vars)


@dataclass(frozen=True)
class Call(Expr):
    """A function call expression, e.g. sin(x)."""

    fn: str
    args: tuple[Expr, ...] = ()

    def eval(self, env: Env | None) -> float:
        if self.fn == "pow":
            return _pow(self.args[0].eval(env), self.args[1].eval(env))
        if self.fn == "sin":
            return _sin(self.args[0].eval(env))
        if self.fn == "sqrt":
            return _sqrt(self.args[0].eval(env))
        raise ExprError(f"unsupported function call: {self.fn}")

    def check(self, vars: MutableSet[str]) -> None:
        arity = _ARITY.get(self.fn)
        if arity is None:
            name = json.dumps(self.fn, ensure_ascii=False)
            raise ExprError(f"unknown function {name}")
        if len(self.args) != arity:
            raise ExprError(
                f"call to {self.fn} has {len(self.args)} args, want {arity}"
            )
        for arg in self.args:
            arg.check(vars)


# ---- lexer ----


class _Kind(Enum):
    EOF = auto()
    IDENT = auto()
    NUMBER = auto()
    CHAR = auto()


@dataclass(frozen=True)
class _Token:
    kind: _Kind
    text: str = ""

    def is_char(self, chars: str) -> bool:
        return self.kind is _Kind.CHAR and self.text in chars

    def describe(self) -> str:
        if self.kind is _Kind.EOF:
            return "end of file"
        if self.kind is _Kind.IDENT:
            return f"identifier {self.text}"
        if self.kind is _Kind.NUMBER:
            return f"number {self.text}"
        return _quote_rune(self.text)


_WHITESPACE = " \t\n\r"


def _scan_digits(text: str, i: int) -> int:
    while i < len(text) and text[i] in "0123456789":
        i += 1
    return i


def _scan(text: str) -> Iterator[_Token]:
    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        if ch in _WHITESPACE:
            i += 1
            continue
        if ch == "_" or ch.isalpha():
            start = i
            i += 1
            while i < n and (text[i] == "_" or text[i].isalpha() or text[i].isdecimal()):
                i += 1
            yield _Token(_Kind.IDENT, text[start:i])
            continue
        if ch in "0123456789" or (ch == "." and i + 1 < n and text[i + 1] in "0123456789"):
            start = i
            i = _scan_digits(text, i)
            if i < n and text[i] == ".":
                i = _scan_digits(text, i + 1)
            if i < n and text[i] in "eE":
                i += 1
                if i < n and text[i] in "+-":
                    i += 1
                i = _scan_digits(text, i)
            yield _Token(_Kind.NUMBER, text[start:i])
            continue
        yield _Token(_Kind.CHAR, ch)
        i += 1
    while True:
        yield _Token(_Kind.EOF)


def _precedence(token: _Token) -> int:
    if token.is_char("*/"):
        return 2
    if token.is_char("+-"):
        return 1
    return 0


# ---- parser ----


class _Parser:
    def __init__(self, text: str) -> None:
        self._tokens = _scan(text)
        self.token = next(self._tokens)

    def advance(self) -> None:
        self.token = next(self._tokens)

    def parse_expr(self) -> Expr:
        return self.parse_binary(1)

    def parse_binary(self, prec1: int) -> Expr:
        lhs = self.parse_unary()
        prec = _precedence(self.token)
        while prec >= prec1:
            while _precedence(self.token) == prec:
                op = self.token.text
                self.advance()
                rhs = self.parse_binary(prec + 1)
                lhs = Binary(op, lhs, rhs)
            prec -= 1
        return lhs

    def parse_unary(self) -> Expr:
        if self.token.is_char("+-"):
            op = self.token.text
            self.advance()
            return Unary(op, self.parse_unary())
        return self.parse_primary()

    def expect_close(self) -> None:
        if not self.token.is_char(")"):
            raise ExprError(f"got {self.token.describe()}, want ')'")
        self.advance()

    def parse_primary(self) -> Expr:
        token = self.token
        if token.kind is _Kind.IDENT:
            self.advance()
            if not self.token.is_char("("):
                return Var(token.text)
            self.advance()
            args: list[Expr] = []
            if not self.token.is_char(")"):
                while True:
                    args.append(self.parse_expr())
                    if not self.token.is_char(","):
                        break
                    self.advance()
            self.expect_close()
            return Call(token.text, tuple(args))
        if token.kind is _Kind.NUMBER:
            try:
                value = float(token.text)
            except ValueError:
                raise ExprError(f'parsing "{token.text}": invalid syntax') from None
            self.advance()
            return Literal(value)
        if token.is_char("("):
            self.advance()
            expr = self.parse_expr()
            self.expect_close()
            return expr
        raise ExprError(f"unexpected {token.describe()}")


def parse(text: str) -> Expr:
    """Parse text as an arithmetic expression.

    expr = num | id | id '(' expr ',' ... ')' | '-' expr | expr '+' expr
    """
    parser = _Parser(text)
    expr = parser.parse_expr()
    if parser.token.kind is not _Kind.EOF:
        raise ExprError(f"unexpected {parser.token.describe()}")
    return expr


def _write(expr: Expr, out: list[str]) -> None:
    match expr:
        case Literal(value=value):
            out.append(_format_g(float(value)))
        case Var(name=name):
            out.append(name)
        case Unary(op=op, x=x):
            out.append(f"({op}")
            _write(x, out)
            out.append(")")
        case Binary(op=op, x=x, y=y):
            out.append("(")
            _write(x, out)
            out.append(f" {op} ")
            _write(y, out)
            out.append(")")
        case Call(fn=fn, args=args):
            out.append(f"{fn}(")
            for index, arg in enumerate(args):
                if index:
                    out.append(", ")
                _write(arg, out)
            out.append(")")
        case _:
            raise TypeError(f"unknown Expr: {type(expr).__name__}")


def format_expr(expr: Expr) -> str:
    """Format an expression fully parenthesised."""
    out: list[str] = []
    _write(expr, out)
    return "".join(out)