import io

import pytest

from workbench.counters import (
    ByteCounter,
    CountingWriter,
    LineCounter,
    WordCounter,
    count_lines,
    count_words,
    counting_writer,
)


def test_byte_counter():
    c = ByteCounter()
    assert c.write(b"hello") == 5
    assert int(c) == 5
    c.count = 0
    name = "Dolly"
    c.write(f"hello, {name}")
    assert int(c) == 12


def test_byte_counter_counts_utf8_bytes():
    c = ByteCounter()
    text = "héllo"
    c.write(text)
    assert c.count == len(text.encode("utf-8"))


@pytest.mark.parametrize(
    "words", [["this", "is", "a", "sentence"], ["This"], ["one", "two", "three"]]
)
def test_word_counter(words):
    w = WordCounter()
    assert w.write(" ".join(words)) == len(words)
    assert int(w) == len(words)
    assert str(w) == f"contains {len(words)} words"


def test_word_counter_accumulates():
    w = WordCounter()
    w.write("a b")
    w.write("  c\td\n")
    assert w.count == count_words("a b") + count_words("  c\td\n")


def test_count_words_ignores_extra_space():
    assert count_words("  alpha \t beta\n") == count_words("alpha beta")
    assert count_words("   ") == 0


def test_string_count():
    w = WordCounter()
    text = "hello  world Hi"
    assert w.string_count(text) == len(text.split())
    assert w.count == len(text.split())
    with pytest.raises(ValueError, match="input cant be empty"):
        w.string_count("")


@pytest.mark.parametrize(
    "lines", [["This is another", "line"], ["This is one line"], ["a", "b", "c"]]
)
def test_line_counter(lines):
    counter = LineCounter()
    assert counter.write("\n".join(lines)) == len(lines)
    assert int(counter) == len(lines)


def test_line_counter_accumulates():
    counter = LineCounter()
    counter.write("This is another\nline")
    counter.write("This is one line")
    assert counter.count == count_lines("This is another\nline") + count_lines(
        "This is one line"
    )


def test_count_lines_stops_at_empty_line():
    assert count_lines(b"first\n\nsecond") == count_lines(b"first")
    assert count_lines(b"") == 0
    assert count_lines("x\r\ny") == count_lines("x\ny")


def test_counting_writer_passes_through():
    sink = io.BytesIO()
    writer = counting_writer(sink)
    writer.write(b"this is counterwriter writing !!")
    writer.write(b"more")
    assert sink.getvalue() == b"this is counterwriter writing !!more"
    assert writer.count == len(sink.getvalue())


def test_counting_writer_text_sink():
    sink = io.StringIO()
    writer = CountingWriter(sink)
    writer.write("abc")
    assert sink.getvalue() == "abc"
    assert writer.count == len("abc")