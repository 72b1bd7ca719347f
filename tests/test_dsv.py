import pytest

from transitplanner.datastreams import StringDataSink, StringDataSource
from transitplanner.dsv import DSVReader, DSVWriter


def read_all(text, delimiter=","):
    return list(DSVReader(StringDataSource(text), delimiter))


def write_all(rows, delimiter=",", quote_all=False):
    sink = StringDataSink()
    writer = DSVWriter(sink, delimiter, quote_all)
    for row in rows:
        writer.write_row(row)
    return sink.text


def test_reads_simple_rows():
    assert read_all("a,b\nc,d") == [["a", "b"], ["c", "d"]]


def test_read_row_returns_none_at_end():
    reader = DSVReader(StringDataSource("x,y\n"))
    assert reader.read_row() == ["x", "y"]
    assert reader.end()
    assert reader.read_row() is None


def test_empty_source_has_no_rows():
    reader = DSVReader(StringDataSource(""))
    assert reader.read_row() is None
    assert reader.end()


def test_crlf_line_endings():
    assert read_all("a,b\r\nc\r\n") == [["a", "b"], ["c"]]


def test_empty_line_gives_single_empty_cell():
    assert read_all("\nz") == [[""], ["z"]]


def test_trailing_delimiter_gives_empty_cell():
    assert read_all("a,b,\n") == [["a", "b", ""]]


def test_custom_delimiter():
    assert read_all("one|two|three", "|") == [["one", "two", "three"]]


def test_quoted_cell_keeps_delimiter_and_newline():
    rows = read_all('"a,b","line\nbreak"\nnext')
    assert rows == [["a,b", "line\nbreak"], ["next"]]


def test_writer_plain_row():
    assert write_all([["a", "b", "c"]]) == "a,b,c\n"


def test_writer_quotes_when_needed():
    assert write_all([["a", "b,c"]]) == 'a,"b,c"\n'


def test_writer_quote_all():
    assert write_all([["a", "b"]], quote_all=True) == '"a","b"\n'


def test_writer_empty_row():
    assert write_all([[]]) == "\n"


@pytest.mark.parametrize(
    "rows",
    [
        [["plain", "cells"], ["more", "data"]],
        [['has "quotes"', "x"], ["comma,inside", ""]],
        [["multi\nline", "carriage\rreturn"]],
        [["tab\tseparated", "ok"]],
    ],
)
@pytest.mark.parametrize("quote_all", [False, True])
def test_round_trip(rows, quote_all):
    text = write_all(rows, quote_all=quote_all)
    assert read_all(text) == rows


def test_round_trip_other_delimiter():
    rows = [["a;b", "c"], ["d", 'e"f']]
    text = write_all(rows, delimiter=";")
    assert read_all(text, ";") == rows