"""Memoization of a slow function, safe for concurrent callers."""

from __future__ import annotations

import logging
import queue
import threading
import time
import urllib.error
import urllib.request
from collections.abc import Callable, Iterable
from typing import Any

from workbench.sorting import format_duration

log = logging.getLogger(__name__)

Func = Callable[[str], Any]

INCOMING_URLS: tuple[str, ...] = (
    "https://www.example.com",
    "https://docs.example.com",
    "https://play.example.com",
    "http://book.example.com",
    "https://www.example.com",
    "https://docs.example.com",
    "https://play.example.com",
    "http://book.example.com",
)


class _Entry:
    """The result of one call of the memoized function, once it is ready."""

    def __init__(self) -> None:
        self.ready = threading.Event()
        self.value: Any = None
        self.error: BaseException | None = None

    def resolve(self, f: Func, key: str) -> None:
        try:
            self.value = f(key)
        except Exception as err:  # the error is cached like a value
            self.error = err
        finally:
            self.ready.set()

    def result(self) -> Any:
        self.ready.wait()
        if self.error is not None:
            raise self.error
        return self.value


class Memo:
    """Caches the results of calling f.

    Requests for different keys proceed in parallel; concurrent requests
    for the same key wait until the first one completes. Exceptions raised
    by f are cached and raised again for later requests.
    """

    def __init__(self, f: Func) -> None:
        self._f = f
        self._lock = threading.Lock()
        self._cache: dict[str, _Entry] = {}

    def get(self, key: str) -> Any:
        """Return f(key), computing it only on the first request for key."""
        with self._lock:
            entry = self._cache.get(key)
            first = entry is None
            if first:
                entry = _Entry()
                self._cache[key] = entry
        if first:
            entry.resolve(self._f, key)
        return entry.result()


class ServerMemo:
    """Caches the results of calling f, with the cache owned by a monitor thread.

    Call close when done, or use the memo as a context manager.
    """

    def __init__(self, f: Func) -> None:
        self._requests: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False
        self._server = threading.Thread(target=self._serve, args=(f,), daemon=True)
        self._server.start()

    def _serve(self, f: Func) -> None:
        cache: dict[str, _Entry] = {}
        while (request := self._requests.get()) is not None:
            key, response = request
            entry = cache.get(key)
            if entry is None:
                entry = _Entry()
                cache[key] = entry
                threading.Thread(target=entry.resolve, args=(f, key), daemon=True).start()
            response.put(entry)

    def get(self, key: str) -> Any:
        """Return f(key), computing it only on the first request for key."""
        response: queue.Queue = queue.Queue(maxsize=1)
        with self._lock:
            if self._closed:
                raise RuntimeError("memo is closed")
            self._requests.put((key, response))
        return response.get().result()

    def close(self) -> None:
        """Stop the monitor thread; later calls of get raise RuntimeError."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._requests.put(None)
        self._server.join()

    def __enter__(self) -> ServerMemo:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def http_get_body(url: str) -> bytes:
    """GET url and return the body of the response."""
    try:
        with urllib.request.urlopen(url, timeout=30) as resp:
            return resp.read()
    except urllib.error.HTTPError as err:
        with err:
            return err.read()


def _timed_get(memo: Any, url: str) -> tuple[str, float, int] | None:
    start = time.monotonic()
    try:
        value = memo.get(url)
    except Exception as err:
        log.warning("%s", err)
        return None
    elapsed = time.monotonic() - start
    print(f"{url}, {format_duration(elapsed)}, {len(value)} bytes")
    return url, elapsed, len(value)


def run_sequential(memo: Any, urls: Iterable[str] = INCOMING_URLS) -> list[tuple[str, float, int]]:
    """Get each URL in turn, printing and returning (url, seconds, size) for each success."""
    return [row for url in urls if (row := _timed_get(memo, url)) is not None]


def run_concurrent(memo: Any, urls: Iterable[str] = INCOMING_URLS) -> list[tuple[str, float, int]]:
    """Get every URL at once, printing and returning (url, seconds, size) for each success.

    The order of the results is the order in which the requests finished.
    """
    results: list[tuple[str, float, int]] = []
    lock = threading.Lock()

    def worker(url: str) -> None:
        row = _timed_get(memo, url)
        if row is not None:
            with lock:
                results.append(row)

    threads = [threading.Thread(target=worker, args=(url,)) for url in urls]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return results