"""Sort a music playlist by columns, print it as a table or serve it as HTML."""

from __future__ import annotations

import argparse
import html
import json
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from fractions import Fraction
from operator import attrgetter
from urllib.parse import parse_qs
from wsgiref.simple_server import make_server

_NS_PER = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_PART = re.compile(r"(\d*)(?:\.(\d*))?([^\d.]*)")


@dataclass
class Track:
    """A playlist entry; length is in seconds."""

    title: str
    artist: str
    album: str
    year: int
    length: float


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def parse_duration(text: str) -> float:
    """Parse a duration such as '3m38s' or '1.5h' and return seconds."""
    rest = text
    negative = False
    if rest and rest[0] in "+-":
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return 0.0
    if not rest:
        raise ValueError(f"time: invalid duration {_quote(text)}")
    total = Fraction(0)
    while rest:
        match = _PART.match(rest)
        whole, frac, unit = match.group(1), match.group(2), match.group(3)
        if whole == "" and not frac:
            raise ValueError(f"time: invalid duration {_quote(text)}")
        if unit == "":
            raise ValueError(f"time: missing unit in duration {_quote(text)}")
        if unit not in _NS_PER:
            raise ValueError(f"time: unknown unit {_quote(unit)} in duration {_quote(text)}")
        value = Fraction(int(whole or "0"))
        if frac:
            value += Fraction(int(frac), 10 ** len(frac))
        total += value * _NS_PER[unit]
        rest = rest[match.end():]
    seconds = total / 1_000_000_000
    return float(-seconds if negative else seconds)


def _fraction(units: int, digits: int) -> str:
    whole, rem = divmod(units, 10**digits)
    frac = f"{rem:0{digits}d}".rstrip("0")
    return f"{whole}.{frac}" if frac else str(whole)


def format_duration(seconds: float) -> str:
    """Format seconds the way durations are written, e.g. '3m38s'."""
    ns = round(seconds * 1_000_000_000)
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    u = abs(ns)
    if u < 1_000_000_000:
        if u < 1_000:
            return f"{sign}{u}ns"
        if u < 1_000_000:
            return f"{sign}{_fraction(u, 3)}\u00b5s"
        return f"{sign}{_fraction(u, 6)}ms"
    secs, frac_ns = divmod(u, 1_000_000_000)
    text = _fraction((secs % 60) * 1_000_000_000 + frac_ns, 9) + "s"
    minutes = secs // 60
    if minutes:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours:
            text = f"{hours}h{text}"
    return sign + text


def tracks() -> list[Track]:
    """Return a fresh copy of the sample playlist."""
    return [
        Track("Go", "Delilah", "From the Roots Up", 2012, parse_duration("3m38s")),
        Track("Go", "Moby", "Moby", 1992, parse_duration("3m37s")),
        Track("Go Ahead", "Alicia Keys", "As I Am", 2007, parse_duration("4m36s")),
        Track("Ready 2 Go", "Martin Solveig", "Smash", 2011, parse_duration("4m24s")),
    ]


def format_tracks(tracks: Iterable[Track]) -> str:
    """Return the tracks as an aligned text table with a header."""
    rows = [
        ["Title", "Artist", "Album", "Year", "Length"],
        ["-----", "------", "-----", "----", "------"],
    ]
    rows.extend(
        [t.title, t.artist, t.album, str(t.year), format_duration(t.length)] for t in tracks
    )
    widths = [max(len(cell) for cell in column) + 2 for column in zip(*rows)]
    return "".join(
        "".join(cell.ljust(width) for cell, width in zip(row, widths)) + "\n" for row in rows
    )


COLUMNS: dict[str, Callable[[Track], object]] = {
    "title": attrgetter("title"),
    "artist": attrgetter("artist"),
    "album": attrgetter("album"),
    "year": attrgetter("year"),
    "length": attrgetter("length"),
}


def _column_key(columns: Iterable[str]) -> Callable[[Track], tuple]:
    names = list(columns)
    if not names:
        raise ValueError("no sort columns")
    for name in names:
        if name not in COLUMNS:
            raise ValueError(f"unknown column {name!r}")
    getters = [COLUMNS[name] for name in names]
    return lambda track: tuple(get(track) for get in getters)


def sort_by_columns(tracks: Iterable[Track], *args: str) -> list[Track]:
    """Return the tracks ordered by the named columns, first column first."""
    return sorted(tracks, key=_column_key(args))


def sort_stable(tracks: Iterable[Track]) -> list[Track]:
    """Return the tracks stably sorted by artist, then stably by title."""
    result = sorted(tracks, key=attrgetter("artist"))
    result.sort(key=attrgetter("title"))
    return result


_PAGE_HEAD = """
<!DOCTYPE html>
<html>
  <head>
    <title>ex7.9</title>
      <style>
        table {
\t      border-collapse: collapse;
        }
        td, th {
\t      border: solid 1px;
\t      padding: 0.5em;
          text-align: right;
        }
      </style>
  </head>
  <body>
    <table>
      <tr>
\t    <th><a href="./?by=title">Title</a></th>
\t    <th><a href="./?by=artist">Artist</a></th>
\t    <th><a href="./?by=album">Album</a></th>
\t    <th><a href="./?by=year">Year</a></th>
\t    <th><a href="./?by=length">Length</a></th>
\t  </tr>
      """
_PAGE_TAIL = """
    </table>
  </body>
</html>"""


class ColumnSorter:
    """A playlist whose sort order is refined by selecting columns."""

    def __init__(self, tracks: Iterable[Track], columns: Iterable[str] = ()) -> None:
        self.tracks = list(tracks)
        self.columns: list[str] = []
        for name in columns:
            if name not in COLUMNS:
                raise ValueError(f"unknown column {name!r}")
            self.columns.append(name)

    def select(self, name: str) -> None:
        """Make name the primary column; unknown names select the title."""
        if name not in COLUMNS:
            name = "title"
        if name in self.columns:
            index = self.columns.index(name)
        else:
            self.columns.append(name)
            index = len(self.columns) - 1
        self.columns[0], self.columns[index] = self.columns[index], self.columns[0]

    def sort(self) -> None:
        """Sort the tracks in place by the selected columns."""
        self.tracks.sort(key=_column_key(self.columns))

    def render_html(self) -> str:
        """Return the tracks as an HTML table with sortable headings."""
        rows = []
        for t in self.tracks:
            cells = [t.title, t.artist, t.album, str(t.year), format_duration(t.length)]
            rows.append(
                "\n      <tr>\n"
                + "".join(f"        <td>{html.escape(cell)}</td>\n" for cell in cells)
                + "      </tr>\n      "
            )
        return _PAGE_HEAD + "".join(rows) + _PAGE_TAIL

    def __call__(self, environ, start_response):
        query = parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)
        column = query.get("by", [""])[0]
        if column:
            self.select(column)
            self.sort()
        body = self.render_html().encode("utf-8")
        start_response(
            "200 OK",
            [
                ("Content-Type", "text/html; charset=utf-8"),
                ("Content-Length", str(len(body))),
            ],
        )
        return [body]


def main(argv=None) -> None:
    """Serve the sortable playlist, or print sorted tables with --print."""
    parser = argparse.ArgumentParser(description="Sort a music playlist.")
    parser.add_argument("--addr", default="localhost:8000", help="host:port to listen on")
    parser.add_argument("--print", dest="print_tables", action="store_true",
                        help="print sorted tables instead of serving")
    args = parser.parse_args(argv)
    if args.print_tables:
        print("By Title, Artist")
        print(format_tracks(sort_by_columns(tracks(), "title", "artist")), end="")
        print("\nUse sort.Stable. By Title, Artist")
        print(format_tracks(sort_stable(tracks())), end="")
        return
    host, _, port = args.addr.rpartition(":")
    with make_server(host or "localhost", int(port), ColumnSorter(tracks())) as server:
        server.serve_forever()