"""A small HTML document tree: parsing, traversal and anchor links."""

from __future__ import annotations

import urllib.error
import urllib.request
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from html.parser import HTMLParser


class NodeType(Enum):
    """The kind of a document node."""

    ERROR = 0
    TEXT = 1
    DOCUMENT = 2
    ELEMENT = 3
    COMMENT = 4
    DOCTYPE = 5


@dataclass(eq=False)
class Node:
    """A node of an HTML document tree."""

    type: NodeType
    data: str = ""
    attrs: list[tuple[str, str]] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def attr(self, key: str) -> str | None:
        """Return the value of the first attribute named key, or None."""
        for name, value in self.attrs:
            if name == key:
                return value
        return None

    @property
    def first_child(self) -> Node | None:
        return self.children[0] if self.children else None

    def is_element(self, *names: str) -> bool:
        return self.type is NodeType.ELEMENT and (not names or self.data in names)


_VOID_ELEMENTS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "link", "meta", "param", "source", "track", "wbr",
    }
)


class _TreeBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.document = Node(NodeType.DOCUMENT)
        self._stack: list[Node] = [self.document]

    def _append(self, node: Node) -> None:
        self._stack[-1].children.append(node)

    def handle_starttag(self, tag, attrs):
        node = Node(NodeType.ELEMENT, tag, [(k, v or "") for k, v in attrs])
        self._append(node)
        if tag not in _VOID_ELEMENTS:
            self._stack.append(node)

    def handle_startendtag(self, tag, attrs):
        self._append(Node(NodeType.ELEMENT, tag, [(k, v or "") for k, v in attrs]))

    def handle_endtag(self, tag):
        open_tags = [node.data for node in self._stack[1:]]
        if tag in open_tags:
            position = len(self._stack) - 1 - open_tags[::-1].index(tag)
            del self._stack[position:]

    def handle_data(self, data):
        siblings = self._stack[-1].children
        if siblings and siblings[-1].type is NodeType.TEXT:
            siblings[-1].data += data
        else:
            self._append(Node(NodeType.TEXT, data))

    def handle_comment(self, data):
        self._append(Node(NodeType.COMMENT, data))

    def handle_decl(self, decl):
        if decl[:7].upper() == "DOCTYPE":
            self._append(Node(NodeType.DOCTYPE, decl[7:].strip()))


def parse_html(text: str) -> Node:
    """Parse HTML text leniently into a tree rooted at a document node."""
    builder = _TreeBuilder()
    builder.feed(text)
    builder.close()
    return builder.document


NodeFunc = Callable[[Node], None]


def for_each_node(node: Node, pre: NodeFunc | None = None, post: NodeFunc | None = None) -> None:
    """Call pre before and post after visiting the children of every node."""
    if pre is not None:
        pre(node)
    for child in node.children:
        for_each_node(child, pre, post)
    if post is not None:
        post(node)


def _walk(node: Node) -> Iterator[Node]:
    yield node
    for child in node.children:
        yield from _walk(child)


def anchor_links(doc: Node) -> list[str]:
    """Return the href of every <a> element, in document order."""
    return [
        value
        for node in _walk(doc)
        if node.is_element("a")
        for key, value in node.attrs
        if key == "href"
    ]


@dataclass(frozen=True)
class _Response:
    url: str
    content_type: str
    text: str


def _fetch(url: str, timeout: float = 30.0) -> _Response:
    """GET url, raising OSError on failure or a non-success status."""
    try:
        with urllib.request.urlopen(url, timeout=timeout) as resp:
            body = resp.read()
            charset = resp.headers.get_content_charset() or "utf-8"
            try:
                text = body.decode(charset, "replace")
            except LookupError:
                text = body.decode("utf-8", "replace")
            return _Response(resp.geturl(), resp.headers.get("Content-Type", ""), text)
    except urllib.error.HTTPError as err:
        raise OSError(f"getting {url}: {err.code} {err.reason}") from None