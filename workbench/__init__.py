"""Small, self-contained tools: expressions, HTML, crawling, memoization and more."""

__version__ = "0.1.0"