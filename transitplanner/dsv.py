"""Reading and writing delimiter-separated values."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .datastreams import DataSink, DataSource


class DSVReader:
    """Reads rows of delimiter-separated values from a data source."""

    def __init__(self, source: DataSource, delimiter: str = ",") -> None:
        self._source = source
        self._delimiter = delimiter
        self._ended = False

    def end(self) -> bool:
        """Return True once the reader has reached the end of its source."""
        return self._ended

    def read_row(self) -> list[str] | None:
        """Return the next row as a list of cells, or None when no rows remain."""
        if self._ended:
            return None
        src = self._source
        row: list[str] = []
        cell: list[str] = []
        in_quotes = False
        first_char = True

        while True:
            ch = None if src.end() else src.get()
            if ch is None:
                self._ended = True
                if cell or row:
                    row.append("".join(cell))
                return row or None

            if first_char:
                first_char = False
                if ch == '"':
                    in_quotes = True
                    continue

            if in_quotes:
                if ch == '"':
                    if src.peek() == '"':
                        cell.append('"')
                        src.get()
                    else:
                        in_quotes = False
                else:
                    cell.append(ch)
            elif ch == self._delimiter:
                row.append("".join(cell))
                cell = []
                first_char = True
            elif ch in "\n\r":
                row.append("".join(cell))
                if ch == "\r" and src.peek() == "\n":
                    src.get()
                if src.end():
                    self._ended = True
                return row
            elif ch == '"':
                if src.peek() == '"':
                    cell.append('"')
                    src.get()
            else:
                cell.append(ch)

    def __iter__(self) -> Iterator[list[str]]:
        while (row := self.read_row()) is not None:
            yield row


class DSVWriter:
    """Writes rows of delimiter-separated values to a data sink."""

    def __init__(self, sink: DataSink, delimiter: str = ",", quote_all: bool = False) -> None:
        self._sink = sink
        self._delimiter = delimiter
        self._quote_all = quote_all

    def _format_cell(self, field: str) -> str:
        needs_quotes = self._quote_all or any(
            marker in field for marker in (self._delimiter, '"', "\n", "\r")
        )
        if needs_quotes:
            return '"' + field.replace('"', '""') + '"'
        return field

    def write_row(self, row: Iterable[str]) -> None:
        """Write one row followed by a newline."""
        line = self._delimiter.join(self._format_cell(field) for field in row)
        self._sink.write(line + "\n")