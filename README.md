# workbench

A set of small, independent tools. Everything runs on the Python standard library alone (Python 3.10 or later).

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Library modules

- `workbench.expr` parses and evaluates arithmetic expressions. It handles the
  operators `+ - * /`, unary `+` and `-`, parentheses, variables, and the
  functions `pow`, `sin` and `sqrt`.
  - `parse(text)` returns an `Expr`, which is one of `Var`, `Literal`, `Unary`,
    `Binary` or `Call`. A syntax error raises `ExprError`.
  - `Expr.check(vars)` raises `ExprError` for an unknown function, a wrong
    number of arguments or an unexpected operator. It adds every variable name
    it finds to the set `vars`.
  - `Expr.eval(env)` computes the value. A variable that is missing from `env`
    counts as 0.
  - `format_expr(expr)` writes the expression out with every subexpression in
    parentheses.

  ```python
  import math
  from workbench.expr import parse

  e = parse("sqrt(A / pi)")
  e.check(set())
  e.eval({"A": 87616, "pi": math.pi})  # 167.0
  ```

- `workbench.surface` turns functions of `x` and `y` into SVG surface plots.
  - `corner` projects one grid corner onto the canvas.
  - `render_surface(f)` returns an SVG document.
  - `parse_and_check(text)` parses an expression and accepts only the
    variables `x`, `y` and `r`.
  - `plot_app` is a WSGI handler that plots the form value `expr`.
- `workbench.intset` provides `IntSet`, a set of non-negative integers stored
  as 64-bit words. Its methods are `add`, `add_all`, `has`, `remove`, `clear`,
  `union_with`, `word_count` and `words`. It supports `in` and iteration, and
  its string form looks like `{1 9 42 144}`.
- `workbench.geometry` provides `Point` (with `distance` and `scale_by`),
  `Path` (a list of points whose `distance` is the length travelled along it),
  `RGBA`, `ColoredPoint`, and the function `distance(p, q)`.
- `workbench.toposort` provides `topo_sort` for list-valued prerequisite maps,
  which starts from the sorted keys. It also provides `topo_sort_sets` for
  set-valued prerequisite maps. `PREREQS` and `PREREQS_SETS` hold a sample
  table of course prerequisites.
- `workbench.tempconv` converts between Celsius and Fahrenheit.
  - `c_to_f` and `f_to_c` do the conversion.
  - `format_celsius` gives strings such as `20°C`.
  - `parse_celsius` reads values such as `100C`, `37°C`, `212F` or `-40°F`,
    and raises `ValueError` for any other unit.
- `workbench.counters` counts what is written to it.
  - `ByteCounter`, `WordCounter` and `LineCounter` are writers that count
    bytes, words and lines.
  - `count_words` and `count_lines` count directly.
  - `counting_writer(writer)` wraps another writer and counts the bytes that
    pass through it.
- `workbench.funcs` provides:
  - `sum_ints(*args)`;
  - `squares()`, a generator that yields 1, 4, 9, …;
  - `Values`, a dict that maps each key to a list of strings, with `get`
    (returns the first value, or `""`) and `add`.
- `workbench.htmldoc` builds a simple HTML node tree.
  - `parse_html` returns `Node` objects that carry a `NodeType`.
  - `for_each_node(node, pre, post)` visits nodes in pre-order and post-order.
  - `anchor_links` collects the `href` of every `<a>`.
- `workbench.htmltools` works on that tree.
  - `outline` returns the indented start and end tags.
  - `element_counts` counts elements by tag name.
  - `titles` returns the document's titles.
  - `sole_title` raises `ValueError` if the document has no title or more
    than one.
  - `text_nodes` returns the text, skipping `<style>` and `<script>`.
  - `check_content_type` raises `NotHTMLError` when a content type is not
    `text/html`.
  - `fetch_title(url)` downloads a page and returns its title.
- `workbench.links` finds links.
  - `extract_from_document` resolves links against a base URL.
  - `all_resource_links` returns `a`/`link` hrefs and `img`/`script` srcs.
  - `links_for_tag` returns the links of one tag.
  - `extract(url)` and `find_links(url)` download a page first.
- `workbench.sorting` handles a sample playlist.
  - `Track` and `tracks()` hold the sample data.
  - `parse_duration` and `format_duration` convert durations such as `3m38s`.
  - `format_tracks` returns an aligned text table.
  - `sort_by_columns(tracks, "title", "artist")` and `sort_stable` sort the
    tracks.
  - `ColumnSorter` is a WSGI application whose sort order is refined as
    columns are selected with `?by=`.
- `workbench.readers` provides `StringReader`, which reads the UTF-8 bytes of
  a string, and `LimitReader`, which stops reading after a fixed number of
  bytes.
- `workbench.shop` provides `Shop`, a price list with `list_items`, `price`
  and `update`. It is also a WSGI application that serves `/list`,
  `/price?item=...` and `/update?item=...&updatePrice=...`. `format_dollars`
  formats amounts such as `$5.00`.
- `workbench.fetch` provides:
  - `fetch(url, directory)`, which saves a URL to a file named after the last
    element of its path, or `index.html` for the root;
  - `local_name`;
  - `wait_for_server(url, timeout, sleep)`, which retries with exponential
    back-off and raises `TimeoutError` if every attempt fails.
- `workbench.crawl` provides `breadth_first(f, worklist)`, `crawl(url)` and
  `crawl_concurrently(urls, extract, limit)`. The last one makes at most
  `limit` calls at once.
- `workbench.memo` provides `Memo` and `ServerMemo`, which memoize a slow
  function for many threads. Concurrent requests for the same key share one
  call, and exceptions are cached like values. `ServerMemo` keeps its cache
  in a monitor thread and must be closed; it is also a context manager.
  `http_get_body`, `run_sequential` and `run_concurrent` time lookups of
  URLs.
- `workbench.bank` provides `Bank`, a single account with `deposit` and
  `balance` that is safe to use from many threads.
- `workbench.cake` provides `CakeShop`, a simulation of a bake, ice and
  inscribe pipeline. It has configurable times, variability, buffers and
  number of icers. Call `work(runs)` to run it.
- `workbench.du` reports disk usage.
  - `walk_dir(root, cancel)` yields file sizes.
  - `disk_usage(roots, cancel)` returns `(files, bytes)` and walks the roots
    in parallel. Setting the `threading.Event` passed as `cancel` stops it
    early.
  - `format_usage` gives strings such as `3 files  0.0 GB`.

## Commands

| Command | What it does |
| --- | --- |
| `workbench-surface [--addr HOST:PORT]` | Serves `/plot?expr=...`, an SVG plot of the surface `z = f(x, y, r)` |
| `workbench-toposort` | Prints the sample course prerequisites in topological order |
| `workbench-tempflag [-temp VALUE]` | Prints the temperature given (default `20°C`) in Celsius |
| `workbench-title [--mode title\|outline\|text\|counts] URL ...` | Prints the title, outline, text or element counts of each HTML page |
| `workbench-findlinks URL ...` | Prints the links and resources named in each page |
| `workbench-tracks [--addr HOST:PORT] [--print]` | Serves the playlist table, sortable by clicking a column heading; `--print` prints sorted tables instead |
| `workbench-shop [--addr HOST:PORT]` | Serves the price list |
| `workbench-fetch URL ...` | Downloads each URL into a local file |
| `workbench-fetch --wait [--timeout SECONDS] URL` | Waits for a server to respond |
| `workbench-crawl [--limit N] [--sequential] URL ...` | Crawls the web from the given URLs and prints each page visited |
| `workbench-du [-v] [--cancel-on-input] [DIR ...]` | Prints the number of files and their total size |

The servers listen on `localhost:8000` by default.

## What it does not do

- The HTML parser is lenient and is built on `html.parser`. It does not build
  the tree the way a browser would, and it does not run scripts.
- There are no plain TCP servers or clients. The servers here are WSGI
  applications that run on `wsgiref`.
- No images are processed.
- Network commands need access to the URLs you give them. `workbench.memo`'s
  `INCOMING_URLS` are example.com addresses and serve only as sample input.