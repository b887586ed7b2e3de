"""Outlines, titles and text of HTML documents."""

from __future__ import annotations

import argparse
import sys
from collections import Counter

from workbench.htmldoc import Node, NodeType, _fetch, _walk, for_each_node, parse_html

_SKIPPED_TEXT = ("style", "script")


class NotHTMLError(ValueError):
    """A resource whose content type is not HTML."""


def outline(doc: Node) -> list[str]:
    """Return indented start and end tags of every element."""
    lines: list[str] = []
    depth = 0

    def start(node: Node) -> None:
        nonlocal depth
        if node.type is NodeType.ELEMENT:
            lines.append(f"{' ' * (depth * 2)}<{node.data}>")
            depth += 1

    def end(node: Node) -> None:
        nonlocal depth
        if node.type is NodeType.ELEMENT:
            depth -= 1
            lines.append(f"{' '.rjust(depth * 2)}</{node.data}>")

    for_each_node(doc, start, end)
    return lines


def element_counts(doc: Node) -> dict[str, int]:
    """Return how many elements of each tag name the document holds."""
    return dict(Counter(node.data for node in _walk(doc) if node.type is NodeType.ELEMENT))


def _is_titled(node: Node) -> bool:
    return node.is_element("title") and node.first_child is not None


def titles(doc: Node) -> list[str]:
    """Return the text of every non-empty title element."""
    return [node.first_child.data for node in _walk(doc) if _is_titled(node)]


def sole_title(doc: Node) -> str:
    """Return the text of the only non-empty title element.

    Raises ValueError if there is none or more than one.
    """
    title = ""
    for node in _walk(doc):
        if _is_titled(node):
            if title:
                raise ValueError("multiple title elements")
            title = node.first_child.data
    if not title:
        raise ValueError("no title element")
    return title


def text_nodes(doc: Node) -> list[str]:
    """Return the content of every text node outside style and script."""

    def walk(node: Node):
        if node.is_element(*_SKIPPED_TEXT):
            return
        if node.type is NodeType.TEXT:
            yield node.data
        for child in node.children:
            yield from walk(child)

    return list(walk(doc))


def check_content_type(url: str, content_type: str) -> None:
    """Raise NotHTMLError unless content_type is text/html."""
    if content_type != "text/html" and not content_type.startswith("text/html;"):
        raise NotHTMLError(f"{url} has type {content_type}, not text/html")


def fetch_title(url: str) -> str:
    """Fetch url and return the text of its sole title element."""
    resp = _fetch(url)
    check_content_type(url, resp.content_type)
    return sole_title(parse_html(resp.text))


def _report(mode: str, url: str) -> list[str]:
    if mode == "title":
        return [fetch_title(url)]
    doc = parse_html(_fetch(url).text)
    if mode == "outline":
        return outline(doc)
    if mode == "text":
        return text_nodes(doc)
    return [f"{tag}\t{count}" for tag, count in sorted(element_counts(doc).items())]


def main(argv=None) -> None:
    """Print the title, outline, text or element counts of each URL."""
    parser = argparse.ArgumentParser(description="Inspect HTML documents.")
    parser.add_argument("urls", nargs="*")
    parser.add_argument(
        "--mode", choices=("title", "outline", "text", "counts"), default="title"
    )
    args = parser.parse_args(argv)
    for url in args.urls:
        try:
            lines = _report(args.mode, url)
        except (OSError, ValueError) as err:
            print(f"{args.mode}: {err}", file=sys.stderr)
            continue
        for line in lines:
            print(line)