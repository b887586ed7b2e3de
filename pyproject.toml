[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "workbench"
version = "0.1.0"
description = "Small, self-contained tools: an expression evaluator, HTML link and title extraction, crawling, memoization, disk usage and more."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "expression-evaluator",
    "html",
    "crawler",
    "memoization",
    "bit-vector",
    "topological-sort",
    "disk-usage",
    "wsgi",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
workbench-surface = "workbench.surface:main"
workbench-toposort = "workbench.toposort:main"
workbench-tempflag = "workbench.tempconv:main"
workbench-title = "workbench.htmltools:main"
workbench-findlinks = "workbench.links:main"
workbench-tracks = "workbench.sorting:main"
workbench-shop = "workbench.shop:main"
workbench-fetch = "workbench.fetch:main"
workbench-crawl = "workbench.crawl:main"
workbench-du = "workbench.du:main"

[tool.hatch.build.targets.wheel]
packages = ["workbench"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
