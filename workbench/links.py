"""Extract links from HTML documents and web pages."""

from __future__ import annotations

import argparse
import sys
from urllib.parse import urljoin

from workbench.htmldoc import Node, _fetch, _walk, parse_html

_TAG_ATTRIBUTE = {"a": "href", "img": "src", "script": "src", "link": "href"}


def _attr_values(node: Node, key: str) -> list[str]:
    return [value for name, value in node.attrs if name == key]


def extract_from_document(doc: Node, base_url: str) -> list[str]:
    """Return absolute links of a/link hrefs and img/link srcs, in order."""
    links: list[str] = []

    def add(value: str) -> None:
        try:
            links.append(urljoin(base_url, value))
        except ValueError:
            pass  # ignore bad URLs

    for node in _walk(doc):
        if node.is_element("a", "link"):
            for value in _attr_values(node, "href"):
                add(value)
        if node.is_element("img", "link"):
            for value in _attr_values(node, "src"):
                add(value)
    return links


def all_resource_links(doc: Node) -> list[str]:
    """Return a/link hrefs and img/script srcs as written, in order."""
    links: list[str] = []
    for node in _walk(doc):
        if node.is_element("a", "link"):
            links.extend(_attr_values(node, "href"))
        if node.is_element("img", "script"):
            links.extend(_attr_values(node, "src"))
    return links


def links_for_tag(doc: Node, tag: str) -> list[str]:
    """Return the link attribute of every element named tag."""
    key = _TAG_ATTRIBUTE.get(tag)
    if key is None:
        return []
    return [
        value for node in _walk(doc) if node.is_element(tag) for value in _attr_values(node, key)
    ]


def extract(url: str) -> list[str]:
    """Fetch url and return its links resolved against the final URL."""
    resp = _fetch(url)
    return extract_from_document(parse_html(resp.text), resp.url)


def find_links(url: str) -> list[str]:
    """Fetch url and return the links and resources it names."""
    return all_resource_links(parse_html(_fetch(url).text))


def main(argv=None) -> None:
    """Print the links found in each URL."""
    parser = argparse.ArgumentParser(description="Print the links in web pages.")
    parser.add_argument("urls", nargs="*")
    args = parser.parse_args(argv)
    for url in args.urls:
        try:
            links = find_links(url)
        except (OSError, ValueError) as err:
            print(f"findlinks2: {err}", file=sys.stderr)
            continue
        for link in links:
            print(link)