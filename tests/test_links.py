import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from workbench.htmldoc import parse_html
from workbench.links import (
    all_resource_links,
    extract,
    extract_from_document,
    find_links,
    links_for_tag,
    main,
)

INDEX = (
    b"<html><head><link href='style.css'></head><body>"
    b"<a href='about.html'>About</a><img src='/pic.png'>"
    b"<script src='app.js'></script></body></html>"
)


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):
        if self.path != "/dir/index.html":
            self.send_response(404)
            self.send_header("Content-Length", "0")
            self.end_headers()
            return
        self.send_response(200)
        self.send_header("Content-Type", "text/html")
        self.send_header("Content-Length", str(len(INDEX)))
        self.end_headers()
        self.wfile.write(INDEX)

    def log_message(self, *args):
        pass


@pytest.fixture
def server(monkeypatch):
    for name in ("http_proxy", "HTTP_PROXY", "https_proxy", "HTTPS_PROXY"):
        monkeypatch.delenv(name, raising=False)
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_port}"
    httpd.shutdown()
    httpd.server_close()


DOC = (
    "<a href='other.html'>o</a><img src='pic.png'><script src='app.js'></script>"
    "<link href='/style.css' src='icon.png'><a name='x'>n</a>"
)


def test_extract_from_document_resolves_against_base():
    doc = parse_html(DOC)
    links = extract_from_document(doc, "http://example.com/dir/page.html")
    assert links == [
        "http://example.com/dir/other.html",
        "http://example.com/dir/pic.png",
        "http://example.com/style.css",
        "http://example.com/dir/icon.png",
    ]


def test_extract_from_document_keeps_absolute_links():
    doc = parse_html("<a href='https://example.com/x'>x</a>")
    assert extract_from_document(doc, "http://example.com/") == ["https://example.com/x"]


def test_extract_from_document_skips_bad_urls():
    doc = parse_html("<a href='http://[::1'>bad</a><a href='good'>g</a>")
    links = extract_from_document(doc, "http://example.com/")
    assert len(links) == 1
    assert links[0].endswith("/good")


def test_all_resource_links_raw_in_order():
    doc = parse_html(DOC)
    assert all_resource_links(doc) == ["other.html", "pic.png", "app.js", "/style.css"]


@pytest.mark.parametrize(
    "tag, expected",
    [
        ("a", ["other.html"]),
        ("img", ["pic.png"]),
        ("script", ["app.js"]),
        ("link", ["/style.css"]),
        ("div", []),
    ],
)
def test_links_for_tag(tag, expected):
    assert links_for_tag(parse_html(DOC), tag) == expected


def test_extract_from_server(server):
    links = extract(server + "/dir/index.html")
    assert links == [
        server + "/dir/style.css",
        server + "/dir/about.html",
        server + "/pic.png",
    ]


def test_find_links_from_server(server):
    assert find_links(server + "/dir/index.html") == [
        "style.css",
        "about.html",
        "/pic.png",
        "app.js",
    ]


def test_extract_reports_status(server):
    url = server + "/missing"
    with pytest.raises(OSError) as info:
        extract(url)
    assert str(info.value) == f"getting {url}: 404 Not Found"


def test_main_prints_links_and_errors(server, capsys):
    main([server + "/missing", server + "/dir/index.html"])
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["style.css", "about.html", "/pic.png", "app.js"]
    assert captured.err.startswith("findlinks2: getting ")