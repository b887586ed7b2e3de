"""Render the 3-D surface of a user-supplied function as SVG, over HTTP."""

from __future__ import annotations

import argparse
import math
from collections.abc import Callable, Iterable
from urllib.parse import parse_qs
from wsgiref.simple_server import make_server

from workbench.expr import Expr, ExprError, _format_g, parse

WIDTH, HEIGHT = 600, 320
CELLS = 100
XYRANGE = 30.0
XYSCALE = WIDTH / 2 / XYRANGE
ZSCALE = HEIGHT * 0.4
ALLOWED_VARS = frozenset({"x", "y", "r"})

_SIN30, _COS30 = 0.5, math.sqrt(3.0 / 4.0)

SurfaceFunc = Callable[[float, float], float]


def corner(f: SurfaceFunc, i: int, j: int) -> tuple[float, float]:
    """Project the corner of grid cell (i, j) onto the 2-D canvas."""
    x = XYRANGE * (i / CELLS - 0.5)
    y = XYRANGE * (j / CELLS - 0.5)
    z = f(x, y)
    sx = WIDTH / 2 + (x - y) * _COS30 * XYSCALE
    sy = HEIGHT / 2 + (x + y) * _SIN30 * XYSCALE - z * ZSCALE
    return sx, sy


def _polygons(f: SurfaceFunc) -> Iterable[str]:
    for i in range(CELLS):
        for j in range(CELLS):
            points = (
                corner(f, i + 1, j),
                corner(f, i, j),
                corner(f, i, j + 1),
                corner(f, i + 1, j + 1),
            )
            coords = " ".join(f"{_format_g(px)},{_format_g(py)}" for px, py in points)
            yield f"<polygon points='{coords}'/>\n"


def render_surface(f: SurfaceFunc) -> str:
    """Return an SVG document plotting z = f(x, y)."""
    header = (
        "<svg xmlns='http://www.w3.org/2000/svg' "
        "style='stroke: grey; fill: white; stroke-width: 0.7' "
        f"width='{WIDTH}' height='{HEIGHT}'>"
    )
    return header + "".join(_polygons(f)) + "</svg>\n"


def parse_and_check(text: str) -> Expr:
    """Parse an expression that may use only the variables x, y and r."""
    if text == "":
        raise ExprError("empty expression")
    expr = parse(text)
    names: set[str] = set()
    expr.check(names)
    undefined = sorted(names - ALLOWED_VARS)
    if undefined:
        raise ExprError(f"undefined variable: {undefined[0]}")
    return expr


def _read_form(environ: dict) -> dict[str, list[str]]:
    query = parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)
    form: dict[str, list[str]] = {}
    method = environ.get("REQUEST_METHOD", "GET").upper()
    content_type = environ.get("CONTENT_TYPE", "")
    if method in ("POST", "PUT", "PATCH") and content_type.startswith(
        "application/x-www-form-urlencoded"
    ):
        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        body = environ["wsgi.input"].read(length) if length > 0 else b""
        form = parse_qs(body.decode("utf-8", "replace"), keep_blank_values=True)
    for key, values in query.items():
        form.setdefault(key, []).extend(values)
    return form


def plot_app(environ, start_response):
    """WSGI handler plotting the surface given by the 'expr' form value."""
    form = _read_form(environ)
    try:
        expr = parse_and_check(form.get("expr", [""])[0])
    except ExprError as err:
        body = f"bad expr: {err}\n".encode()
        start_response(
            "400 Bad Request",
            [
                ("Content-Type", "text/plain; charset=utf-8"),
                ("X-Content-Type-Options", "nosniff"),
                ("Content-Length", str(len(body))),
            ],
        )
        return [body]

    def height(x: float, y: float) -> float:
        return expr.eval({"x": x, "y": y, "r": math.hypot(x, y)})

    body = render_surface(height).encode()
    start_response(
        "200 OK",
        [("Content-Type", "image/svg+xml"), ("Content-Length", str(len(body)))],
    )
    return [body]


def _app(environ, start_response):
    if environ.get("PATH_INFO", "") == "/plot":
        return plot_app(environ, start_response)
    body = b"404 page not found\n"
    start_response(
        "404 Not Found",
        [
            ("Content-Type", "text/plain; charset=utf-8"),
            ("Content-Length", str(len(body))),
        ],
    )
    return [body]


def main(argv=None) -> None:
    """Serve /plot on the given address."""
    parser = argparse.ArgumentParser(description="Plot 3-D surfaces as SVG.")
    parser.add_argument("--addr", default="localhost:8000", help="host:port to listen on")
    args = parser.parse_args(argv)
    host, _, port = args.addr.rpartition(":")
    with make_server(host or "localhost", int(port), _app) as server:
        server.serve_forever()