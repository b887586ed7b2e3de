import threading
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest

from workbench.memo import (
    INCOMING_URLS,
    Memo,
    ServerMemo,
    http_get_body,
    run_concurrent,
    run_sequential,
)


class FakeBodies:
    """Stands in for an HTTP fetch and counts the calls per URL."""

    def __init__(self, failing=()):
        self.calls = Counter()
        self.lock = threading.Lock()
        self.failing = set(failing)

    def __call__(self, url):
        with self.lock:
            self.calls[url] += 1
        if url in self.failing:
            raise OSError(f"cannot reach {url}")
        return url.encode() * 3


@pytest.fixture(params=["mutex", "server"])
def make_memo(request):
    created = []

    def factory(f):
        memo = Memo(f) if request.param == "mutex" else ServerMemo(f)
        created.append(memo)
        return memo

    yield factory
    for memo in created:
        if isinstance(memo, ServerMemo):
            memo.close()


def test_sequential_fetches_each_url_once(make_memo, capsys):
    fake = FakeBodies()
    memo = make_memo(fake)
    results = run_sequential(memo, INCOMING_URLS)
    assert [url for url, _, _ in results] == list(INCOMING_URLS)
    assert all(size == len(url.encode() * 3) for url, _, size in results)
    assert set(fake.calls.values()) == {1}
    assert len(fake.calls) == 4
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 8
    assert lines[0].startswith("https://www.example.com, ")
    assert lines[0].endswith(f"{len(b'https://www.example.com' * 3)} bytes")


def test_concurrent_fetches_each_url_once(make_memo):
    fake = FakeBodies()
    memo = make_memo(fake)
    results = run_concurrent(memo, INCOMING_URLS)
    assert sorted(url for url, _, _ in results) == sorted(INCOMING_URLS)
    assert set(fake.calls.values()) == {1}


def test_concurrent_requests_for_same_key_wait_for_first(make_memo):
    gate = threading.Event()
    calls = Counter()
    lock = threading.Lock()

    def slow(key):
        with lock:
            calls[key] += 1
        gate.wait(5)
        return key.upper()

    memo = make_memo(slow)
    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [pool.submit(memo.get, "key") for _ in range(8)]
        gate.set()
        values = [future.result(timeout=5) for future in futures]
    assert values == ["KEY"] * 8
    assert calls["key"] == 1


def test_errors_are_cached(make_memo):
    fake = FakeBodies(failing={"http://down.example.com"})
    memo = make_memo(fake)
    for _ in range(2):
        with pytest.raises(OSError, match="cannot reach"):
            memo.get("http://down.example.com")
    assert fake.calls["http://down.example.com"] == 1


def test_failed_urls_are_skipped(make_memo, capsys):
    fake = FakeBodies(failing={"http://book.example.com"})
    memo = make_memo(fake)
    results = run_sequential(memo, INCOMING_URLS)
    assert "http://book.example.com" not in {url for url, _, _ in results}
    assert len(results) == 6


def test_server_memo_rejects_get_after_close():
    memo = ServerMemo(str.upper)
    assert memo.get("abc") == "ABC"
    memo.close()
    with pytest.raises(RuntimeError):
        memo.get("abc")


def test_server_memo_as_context_manager():
    with ServerMemo(len) as memo:
        assert memo.get("four") == 4
    with pytest.raises(RuntimeError):
        memo.get("four")


def test_http_get_body_reads_response():
    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            body = b"hello memo"
            self.send_response(200)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, *args):
            pass

    server = HTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        url = f"http://127.0.0.1:{server.server_address[1]}/"
        memo = Memo(http_get_body)
        assert memo.get(url) == b"hello memo"
        assert memo.get(url) == b"hello memo"
    finally:
        server.shutdown()
        server.server_close()