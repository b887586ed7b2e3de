"""A tiny e-commerce price list served over HTTP."""

from __future__ import annotations

import argparse
import json
import math
import struct
from collections.abc import Mapping
from urllib.parse import parse_qs
from wsgiref.simple_server import make_server

DEFAULT_ITEMS = {"shoes": 50.0, "socks": 5.0}


def _float32(value: float) -> float:
    """Round value to the nearest single-precision float."""
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def format_dollars(amount: float) -> str:
    """Format an amount of dollars, e.g. '$5.00'."""
    return f"${amount:.2f}"


def _parse_price(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return 0.0


class Shop:
    """A price list with list, price and update operations."""

    def __init__(self, items: Mapping[str, float] | None = None) -> None:
        source = DEFAULT_ITEMS if items is None else items
        self._prices = {name: _float32(float(amount)) for name, amount in source.items()}

    def list_items(self) -> list[tuple[str, float]]:
        """Return every item with its price."""
        return list(self._prices.items())

    def price(self, item: str) -> float:
        """Return the price of item; raise LookupError if there is no such item."""
        try:
            return self._prices[item]
        except KeyError:
            raise LookupError(f"no such item: {_quote(item)}") from None

    def update(self, item: str, new_price: str) -> float:
        """Set the price of an existing item from text and return the new price.

        Text that is not a number sets the price to zero.
        """
        if item in self._prices and new_price != "":
            self._prices[item] = _float32(_parse_price(new_price))
            return self._prices[item]
        if new_price == "":
            raise LookupError(f"no updated price provided for item: {_quote(item)}")
        raise LookupError(f"no such item: {_quote(item)}")

    def _respond(self, path: str, query: dict[str, list[str]], raw_query: str) -> tuple[str, str]:
        def first(key: str) -> str:
            values = query.get(key, [])
            return values[0] if values else ""

        try:
            if path == "/list":
                return "200 OK", "".join(
                    f"{name}: {format_dollars(amount)}\n" for name, amount in self.list_items()
                )
            if path == "/price":
                return "200 OK", f"{format_dollars(self.price(first('item')))}\n"
            if path == "/update":
                amount = self.update(first("item"), first("updatePrice"))
                return "200 OK", f"{format_dollars(amount)}\n"
        except LookupError as err:
            return "404 Not Found", f"{err}\n"
        url = path + (f"?{raw_query}" if raw_query else "")
        return "404 Not Found", f"no such page: {url}\n"

    def __call__(self, environ, start_response):
        raw_query = environ.get("QUERY_STRING", "")
        query = parse_qs(raw_query, keep_blank_values=True)
        status, text = self._respond(environ.get("PATH_INFO", ""), query, raw_query)
        body = text.encode("utf-8")
        start_response(
            status,
            [
                ("Content-Type", "text/plain; charset=utf-8"),
                ("Content-Length", str(len(body))),
            ],
        )
        return [body]


def main(argv=None) -> None:
    """Serve /list, /price and /update for the default price list."""
    parser = argparse.ArgumentParser(description="Serve a price list.")
    parser.add_argument("--addr", default="localhost:8000", help="host:port to listen on")
    args = parser.parse_args(argv)
    host, _, port = args.addr.rpartition(":")
    with make_server(host or "localhost", int(port), Shop()) as server:
        server.serve_forever()