"""Topological ordering of course prerequisites."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Set

PREREQS: dict[str, list[str]] = {
    "algorithms": ["data structures"],
    "calculus": ["linear algebra"],
    "compilers": [
        "data structures",
        "formal languages",
        "computer organization",
    ],
    "linear algebra": ["calculus"],
    "data structures": ["discrete math"],
    "databases": ["data structures"],
    "discrete math": ["intro to programming"],
    "formal languages": ["discrete math"],
    "networks": ["operating systems"],
    "operating systems": ["data structures", "computer organization"],
    "programming languages": ["data structures", "computer organization"],
}

PREREQS_SETS: dict[str, set[str]] = {
    "algorithms": {"data structures"},
    "calculus": {"linear algebra"},
    "compilers": {"data structures", "formal languages", "computer organization"},
    "data structures": {"discrete math"},
    "databases": {"data structures"},
    "discrete math": {"intro to programming"},
    "formal languages": {"discrete math"},
    "networks": {"operating systems"},
    "operating systems": {"data structures", "computer organization"},
    "programming languages": {"data structures", "computer organization"},
}


def _order(graph: Mapping, roots: Iterable[str], children) -> list[str]:
    order: list[str] = []
    seen: set[str] = set()

    def visit_all(items: Iterable[str]) -> None:
        for item in items:
            if item not in seen:
                seen.add(item)
                visit_all(children(graph.get(item, ())))
                order.append(item)

    visit_all(roots)
    return order


def topo_sort(graph: Mapping[str, list[str]]) -> list[str]:
    """Return every node with prerequisites first, starting from sorted keys."""
    return _order(graph, sorted(graph), list)


def topo_sort_sets(graph: Mapping[str, Set[str]]) -> list[str]:
    """Return every node with prerequisites first for set-valued prerequisites."""
    return _order(graph, list(graph), sorted)


def main(argv=None) -> None:
    """Print both topological orders of the built-in course table."""
    for index, course in enumerate(topo_sort_sets(PREREQS_SETS)):
        print(f"{index}:\t{course}")
    for index, course in enumerate(topo_sort(PREREQS), start=1):
        print(f"{index}:\t{course}")