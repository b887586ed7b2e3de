import functools
import http.server
import socket
import threading
import time

import pytest

from workbench.fetch import INDEX_NAME, fetch, local_name, main, wait_for_server
from workbench.sorting import format_duration


class _QuietHandler(http.server.SimpleHTTPRequestHandler):
    def log_message(self, format, *args):
        pass


@pytest.fixture
def server_url(tmp_path):
    handler = functools.partial(_QuietHandler, directory=str(tmp_path))
    server = http.server.ThreadingHTTPServer(("127.0.0.1", 0), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}/"
    finally:
        server.shutdown()
        server.server_close()


def _closed_port():
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


def test_local_name_last_element():
    assert local_name("/a/b/report.pdf") == "report.pdf"
    assert local_name("/dir/") == "dir"


def test_local_name_root_and_empty():
    assert local_name("/") == INDEX_NAME
    assert local_name("") == "."


def test_fetch_file_url(tmp_path):
    source = tmp_path / "data.txt"
    source.write_bytes(b"hello, world\n" * 100)
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    name, n = fetch(source.as_uri(), out_dir)
    assert name == str(out_dir / "data.txt")
    assert n == len(source.read_bytes())
    assert (out_dir / "data.txt").read_bytes() == source.read_bytes()


def test_fetch_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        fetch((tmp_path / "absent.txt").as_uri(), tmp_path)


def test_main_fetches_into_cwd(tmp_path, monkeypatch, capsys):
    source = tmp_path / "page.html"
    source.write_text("<p>hi</p>")
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    main([source.as_uri()])
    assert (work / "page.html").read_text() == "<p>hi</p>"
    assert "=> page.html" in capsys.readouterr().err


def test_wait_for_server_success(server_url):
    calls = []
    assert wait_for_server(server_url, 5.0, calls.append) is None
    assert calls == []


def test_wait_for_server_zero_timeout_gives_up_at_once():
    calls = []
    with pytest.raises(TimeoutError) as info:
        wait_for_server(f"http://127.0.0.1:{_closed_port()}/", 0, calls.append)
    assert calls == []
    assert str(info.value).endswith(f"after {format_duration(0)}")


def test_wait_for_server_backs_off_exponentially():
    delays = []

    def fake_sleep(seconds):
        delays.append(seconds)
        time.sleep(0.05)

    with pytest.raises(TimeoutError, match="failed to respond"):
        wait_for_server(f"http://127.0.0.1:{_closed_port()}/", 0.3, fake_sleep)
    assert delays
    assert delays == [float(2**i) for i in range(len(delays))]