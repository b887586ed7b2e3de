"""Disk usage of the files under one or more directories."""

from __future__ import annotations

import argparse
import os
import queue
import sys
import threading
import time
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor

_MAX_OPEN_DIRS = 20
_TICK = 0.5
_DONE = object()


def _cancelled(cancel: threading.Event | None) -> bool:
    return cancel is not None and cancel.is_set()


def _dirents(directory: str) -> list[os.DirEntry]:
    try:
        with os.scandir(directory) as entries:
            return list(entries)
    except OSError as err:
        print(f"du: {err}", file=sys.stderr)
        return []


def walk_dir(root: str, cancel: threading.Event | None = None) -> Iterator[int]:
    """Yield the size of every file in the tree rooted at root.

    Symbolic links are not followed. Stops early once cancel is set.
    """
    if _cancelled(cancel):
        return
    for entry in _dirents(root):
        if entry.is_dir(follow_symlinks=False):
            yield from walk_dir(os.path.join(root, entry.name), cancel)
        else:
            try:
                yield entry.stat(follow_symlinks=False).st_size
            except OSError as err:
                print(f"du: {err}", file=sys.stderr)


def _sizes(roots: Iterable[str], cancel: threading.Event | None) -> Iterator[int]:
    """Yield file sizes from all roots, walking the roots in parallel."""
    roots = list(roots) or ["."]
    found: queue.Queue = queue.Queue()

    def walk(root: str) -> None:
        try:
            for size in walk_dir(root, cancel):
                found.put(size)
        finally:
            found.put(_DONE)

    with ThreadPoolExecutor(max_workers=min(len(roots), _MAX_OPEN_DIRS)) as pool:
        for root in roots:
            pool.submit(walk, root)
        remaining = len(roots)
        while remaining:
            item = found.get()
            if item is _DONE:
                remaining -= 1
            else:
                yield item


def disk_usage(
    roots: Iterable[str] = (), cancel: threading.Event | None = None
) -> tuple[int, int]:
    """Return the number of files and total bytes under roots ('.' if none)."""
    nfiles = nbytes = 0
    for size in _sizes(roots, cancel):
        nfiles += 1
        nbytes += size
    return nfiles, nbytes


def format_usage(nfiles: int, nbytes: int) -> str:
    """Format a file count and byte total, e.g. '3 files  1.5 GB'."""
    return f"{nfiles} files  {nbytes / 1e9:.1f} GB"


def main(argv=None) -> None:
    """Print the disk usage of the given directories."""
    parser = argparse.ArgumentParser(description="Compute disk usage.")
    parser.add_argument("roots", nargs="*")
    parser.add_argument("-v", dest="verbose", action="store_true",
                        help="show verbose progress messages")
    parser.add_argument("--cancel-on-input", action="store_true",
                        help="stop when a byte arrives on standard input")
    args = parser.parse_args(argv)

    cancel = threading.Event()
    if args.cancel_on_input:
        def watch() -> None:
            sys.stdin.read(1)
            cancel.set()

        threading.Thread(target=watch, daemon=True).start()

    nfiles = nbytes = 0
    last = time.monotonic()
    for size in _sizes(args.roots, cancel):
        nfiles += 1
        nbytes += size
        if args.verbose and time.monotonic() - last >= _TICK:
            print(format_usage(nfiles, nbytes))
            last = time.monotonic()
    if cancel.is_set():
        return
    print(format_usage(nfiles, nbytes))