"""Celsius and Fahrenheit conversions and a temperature option."""

from __future__ import annotations

import argparse
import json
import re

from workbench.expr import _format_g

_TEMPERATURE = re.compile(
    r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)\s*(\S+)"
)


def c_to_f(c: float) -> float:
    """Convert degrees Celsius to Fahrenheit."""
    return c * 9.0 / 5.0 + 32.0


def f_to_c(f: float) -> float:
    """Convert degrees Fahrenheit to Celsius."""
    return (f - 32.0) * 5.0 / 9.0


def format_celsius(c: float) -> str:
    """Format a Celsius value, e.g. '20°C'."""
    return f"{_format_g(float(c))}°C"


def parse_celsius(text: str) -> float:
    """Parse a quantity with a unit, e.g. '100C' or '212°F', into Celsius."""
    match = _TEMPERATURE.match(text)
    if match:
        value, unit = float(match.group(1)), match.group(2)
        if unit in ("C", "°C"):
            return value
        if unit in ("F", "°F"):
            return f_to_c(value)
    raise ValueError(f"invalid temperature {json.dumps(text, ensure_ascii=False)}")


def _temperature(text: str) -> float:
    try:
        return parse_celsius(text)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def main(argv=None) -> None:
    """Print the value of the -temp option."""
    parser = argparse.ArgumentParser(description="Print a temperature.")
    parser.add_argument(
        "-temp", "--temp", type=_temperature, default=20.0, help="the temperature"
    )
    args = parser.parse_args(argv)
    print(format_celsius(args.temp))