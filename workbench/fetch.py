"""Save a URL into a local file, and wait for a server to respond."""

from __future__ import annotations

import argparse
import logging
import sys
import time
import urllib.error
import urllib.request
from collections.abc import Callable
from pathlib import Path
from urllib.parse import unquote, urlparse

from workbench.sorting import format_duration

INDEX_NAME = "index.html"
_CHUNK = 32 * 1024

log = logging.getLogger(__name__)


def local_name(url_path: str) -> str:
    """Return the last element of a URL path; the root maps to INDEX_NAME."""
    if url_path == "":
        return "."
    stripped = url_path.rstrip("/")
    if not stripped:
        return INDEX_NAME
    return stripped.rsplit("/", 1)[-1]


def fetch(url: str, directory: str | Path | None = None) -> tuple[str, int]:
    """Download url into a file named after its path.

    Returns the name of the file written and the number of bytes in it.
    """
    try:
        resp = urllib.request.urlopen(url, timeout=30)
    except urllib.error.HTTPError as err:
        resp = err  # a response with an error status still has a body
    with resp:
        local = local_name(unquote(urlparse(resp.geturl()).path))
        target = Path(directory) / local if directory is not None else Path(local)
        written = 0
        with open(target, "wb") as out:
            while chunk := resp.read(_CHUNK):
                out.write(chunk)
                written += len(chunk)
    return str(target), written


def _head(url: str) -> None:
    request = urllib.request.Request(url, method="HEAD")
    try:
        with urllib.request.urlopen(request, timeout=10):
            pass
    except urllib.error.HTTPError:
        pass  # the server answered


def wait_for_server(
    url: str,
    timeout: float = 60.0,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Try to contact url with exponential back-off until timeout seconds pass.

    Raises TimeoutError if every attempt fails.
    """
    deadline = time.monotonic() + timeout
    tries = 0
    while time.monotonic() < deadline:
        try:
            _head(url)
            return
        except OSError as err:
            log.warning("server not responding (%s); retrying...", err)
        sleep(float(1 << tries))
        tries += 1
    raise TimeoutError(f"server {url} failed to respond after {format_duration(timeout)}")


def main(argv=None) -> None:
    """Fetch each URL into a local file, or wait for a server with --wait."""
    parser = argparse.ArgumentParser(description="Fetch URLs or wait for a server.")
    parser.add_argument("urls", nargs="*")
    parser.add_argument("--wait", action="store_true", help="wait for a single server")
    parser.add_argument("--timeout", type=float, default=60.0, help="seconds to wait")
    args = parser.parse_args(argv)
    if args.wait:
        if len(args.urls) != 1:
            print("usage: wait url", file=sys.stderr)
            raise SystemExit(1)
        try:
            wait_for_server(args.urls[0], args.timeout)
        except TimeoutError as err:
            print(f"Site is down: {err}", file=sys.stderr)
            raise SystemExit(1) from None
        return
    for url in args.urls:
        try:
            local, n = fetch(url)
        except OSError as err:
            print(f"fetch {url}: {err}", file=sys.stderr)
            continue
        print(f"{url} => {local} ({n} bytes).", file=sys.stderr)