"""Crawl the web breadth-first, sequentially or with bounded concurrency."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Iterable
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait

from workbench import links

log = logging.getLogger(__name__)

Extractor = Callable[[str], Iterable[str]]


def breadth_first(f: Extractor, worklist: Iterable[str]) -> list[str]:
    """Call f once for each item; items f returns are added to the worklist.

    Returns the items in the order f was called on them.
    """
    seen: set[str] = set()
    visited: list[str] = []
    items = list(worklist)
    while items:
        current, items = items, []
        for item in current:
            if item not in seen:
                seen.add(item)
                visited.append(item)
                items.extend(f(item) or [])
    return visited


def crawl(url: str) -> list[str]:
    """Print url and return the links it contains; log and return [] on error."""
    print(url)
    try:
        return links.extract(url)
    except (OSError, ValueError) as err:
        log.error("%s", err)
        return []


def crawl_concurrently(
    urls: Iterable[str], extract: Extractor = crawl, limit: int = 20
) -> set[str]:
    """Call extract on every reachable link, at most limit calls at once.

    Returns the set of links that were visited.
    """
    if limit < 1:
        raise ValueError("limit must be at least 1")
    seen: set[str] = set()
    pending: set[Future] = set()
    with ThreadPoolExecutor(max_workers=limit) as pool:

        def schedule(found: Iterable[str]) -> None:
            for link in found:
                if link not in seen:
                    seen.add(link)
                    pending.add(pool.submit(extract, link))

        schedule(urls)
        while pending:
            done, remaining = wait(pending, return_when=FIRST_COMPLETED)
            pending.clear()
            pending.update(remaining)
            for future in done:
                schedule(future.result() or [])
    return seen


def main(argv=None) -> None:
    """Crawl the web starting from the command-line URLs."""
    parser = argparse.ArgumentParser(description="Crawl web links.")
    parser.add_argument("urls", nargs="*")
    parser.add_argument("--limit", type=int, default=20, help="concurrent requests")
    parser.add_argument("--sequential", action="store_true", help="crawl one page at a time")
    args = parser.parse_args(argv)
    if args.sequential:
        breadth_first(crawl, args.urls)
    else:
        crawl_concurrently(args.urls, crawl, args.limit)