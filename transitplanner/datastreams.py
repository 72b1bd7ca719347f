"""Character sources and sinks over strings, files and standard streams."""

from __future__ import annotations

import os
import sys
from abc import ABC, abstractmethod
from typing import TextIO


class DataSource(ABC):
    """A forward-only stream of characters with one character of lookahead."""

    @abstractmethod
    def end(self) -> bool:
        """Return True once no more characters are available."""

    @abstractmethod
    def get(self) -> str | None:
        """Consume and return the next character, or None at the end."""

    @abstractmethod
    def peek(self) -> str | None:
        """Return the next character without consuming it, or None at the end."""

    def read(self, count: int) -> str:
        """Consume up to count characters; returns an empty string when none remain."""
        chars: list[str] = []
        while len(chars) < count:
            ch = self.get()
            if ch is None:
                break
            chars.append(ch)
        return "".join(chars)


class DataSink(ABC):
    """A destination for characters."""

    def put(self, ch: str) -> None:
        """Write a single character."""
        self.write(ch)

    @abstractmethod
    def write(self, data: str) -> None:
        """Write a run of characters."""


class StringDataSource(DataSource):
    """Reads characters from an in-memory string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._index = 0

    def end(self) -> bool:
        return self._index >= len(self._text)

    def get(self) -> str | None:
        if self._index < len(self._text):
            ch = self._text[self._index]
            self._index += 1
            return ch
        return None

    def peek(self) -> str | None:
        if self._index < len(self._text):
            return self._text[self._index]
        return None

    def read(self, count: int) -> str:
        if count <= 0:
            return ""
        chunk = self._text[self._index:self._index + count]
        self._index += len(chunk)
        return chunk


class StringDataSink(DataSink):
    """Collects written characters into a string."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    @property
    def text(self) -> str:
        """Everything written so far."""
        return "".join(self._parts)

    def put(self, ch: str) -> None:
        self._parts.append(ch)

    def write(self, data: str) -> None:
        self._parts.append(data)


class FileDataSource(DataSource):
    """Reads characters from a text file; raises OSError if it cannot be opened."""

    def __init__(self, filename: str | os.PathLike[str]) -> None:
        self._file = open(filename, encoding="utf-8", newline="")
        self._next = self._file.read(1)

    def end(self) -> bool:
        return self._next == ""

    def get(self) -> str | None:
        ch = self._next
        if not ch:
            return None
        self._next = self._file.read(1)
        return ch

    def peek(self) -> str | None:
        return self._next or None

    def read(self, count: int) -> str:
        if count <= 0 or not self._next:
            return ""
        chunk = self._next + self._file.read(count - 1)
        self._next = self._file.read(1)
        return chunk

    def close(self) -> None:
        """Close the underlying file."""
        self._file.close()
        self._next = ""

    def __enter__(self) -> FileDataSource:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class FileDataSink(DataSink):
    """Writes characters to a text file, replacing its contents."""

    def __init__(self, filename: str | os.PathLike[str]) -> None:
        self._file = open(filename, "w", encoding="utf-8", newline="")

    def put(self, ch: str) -> None:
        self._file.write(ch)

    def write(self, data: str) -> None:
        self._file.write(data)

    def close(self) -> None:
        """Flush and close the underlying file."""
        self._file.close()

    def __enter__(self) -> FileDataSink:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class FileDataFactory:
    """Creates file sources and sinks relative to a base directory."""

    def __init__(self, path: str = "") -> None:
        if not path:
            self.base_path = "./"
        else:
            self.base_path = path if path.endswith("/") else path + "/"

    def create_source(self, name: str) -> FileDataSource:
        """Open the named file under the base directory for reading."""
        return FileDataSource(self.base_path + name)

    def create_sink(self, name: str) -> FileDataSink:
        """Create the base directory if needed and open the named file for writing."""
        os.makedirs(self.base_path, exist_ok=True)
        return FileDataSink(self.base_path + name)


class StandardDataSource(DataSource):
    """Reads characters from standard input or another text stream.

    After a newline no lookahead is taken, so interactive input does not block;
    end() turns True only once a read has hit the end of the stream.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._pending: str | None = None
        self._eof = False

    def _input(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdin

    def end(self) -> bool:
        return self._eof

    def peek(self) -> str | None:
        if self._pending is None:
            if self._eof:
                return None
            ch = self._input().read(1)
            if not ch:
                self._eof = True
                return None
            self._pending = ch
        return self._pending

    def get(self) -> str | None:
        ch = self.peek()
        if ch is None:
            return None
        self._pending = None
        if ch != "\n":
            self.peek()
        return ch

    def read(self, count: int) -> str:
        """Consume up to count characters, crossing newlines; empty at the end."""
        if self._eof and self._pending is None:
            return ""
        chars: list[str] = []
        while len(chars) < count:
            ch = self.get()
            if ch is None:
                break
            chars.append(ch)
        return "".join(chars)


class StandardDataSink(DataSink):
    """Writes characters to standard output or another text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def _output(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def put(self, ch: str) -> None:
        self._output().write(ch)

    def write(self, data: str) -> None:
        self._output().write(data)


class StandardErrorDataSink(StandardDataSink):
    """Writes characters to standard error or another text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__(stream)

    def _output(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr