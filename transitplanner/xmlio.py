"""Streaming XML entity reader and writer."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from xml.parsers import expat

from .datastreams import DataSink, DataSource
from .strutils import strip


class EntityType(Enum):
    """Kinds of XML entity produced by the reader and accepted by the writer."""

    START_ELEMENT = auto()
    END_ELEMENT = auto()
    CHAR_DATA = auto()
    COMPLETE_ELEMENT = auto()


@dataclass
class XMLEntity:
    """An element event or a run of character data.

    For elements, name_data holds the element name; for character data it holds the text.
    """

    type: EntityType
    name_data: str = ""
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def attribute_value(self, name: str) -> str:
        """Return the value of the named attribute, or an empty string if absent."""
        for key, value in self.attributes:
            if key == name:
                return value
        return ""

    def has_attribute(self, name: str) -> bool:
        """Return True if the named attribute is present."""
        return any(key == name for key, _ in self.attributes)

    def set_attribute(self, name: str, value: str) -> None:
        """Set an attribute, replacing an existing value or appending a new one."""
        for position, (key, _) in enumerate(self.attributes):
            if key == name:
                self.attributes[position] = (name, value)
                return
        self.attributes.append((name, value))


class XMLParseError(ValueError):
    """Raised when the input is not well-formed XML."""


class XMLReader:
    """Reads XML entities one at a time from a data source."""

    _CHUNK_SIZE = 4096

    def __init__(self, source: DataSource) -> None:
        self._source = source
        self._ended = False
        self._queue: deque[XMLEntity] = deque()
        self._chardata: list[str] = []
        parser = expat.ParserCreate()
        parser.ordered_attributes = True
        parser.StartElementHandler = self._on_start
        parser.EndElementHandler = self._on_end
        parser.CharacterDataHandler = self._on_chardata
        self._parser = parser

    def _parse(self, data: str, final: bool) -> None:
        try:
            self._parser.Parse(data, final)
        except expat.ExpatError as exc:
            raise XMLParseError(expat.ErrorString(exc.code)) from exc

    def _flush_chardata(self) -> None:
        if self._chardata:
            text = strip("".join(self._chardata))
            self._chardata.clear()
            if text:
                self._queue.append(XMLEntity(EntityType.CHAR_DATA, text))

    def _on_start(self, name: str, attrs: list[str]) -> None:
        self._flush_chardata()
        pairs = list(zip(attrs[::2], attrs[1::2]))
        self._queue.append(XMLEntity(EntityType.START_ELEMENT, name, pairs))

    def _on_end(self, name: str) -> None:
        self._flush_chardata()
        self._queue.append(XMLEntity(EntityType.END_ELEMENT, name))

    def _on_chardata(self, text: str) -> None:
        self._chardata.append(text)

    def _fill_queue(self) -> None:
        while not self._queue and not self._ended:
            chunk = self._source.read(self._CHUNK_SIZE)
            if not chunk:
                self._ended = True
                self._parse("", True)
                self._flush_chardata()
                return
            self._parse(chunk, False)
            if self._source.end():
                self._ended = True

    def end(self) -> bool:
        """Return True once the source is exhausted and every entity has been read."""
        return self._ended and not self._queue

    def read_entity(self, skipdata: bool = False) -> XMLEntity | None:
        """Return the next entity, or None when none remain.

        With skipdata set, character data entities are passed over.
        Raises XMLParseError on malformed input.
        """
        while True:
            self._fill_queue()
            if not self._queue:
                return None
            entity = self._queue.popleft()
            if skipdata and entity.type is EntityType.CHAR_DATA:
                continue
            return entity


_ESCAPES = str.maketrans({
    "&": "&amp;",
    '"': "&quot;",
    "'": "&apos;",
    "<": "&lt;",
    ">": "&gt;",
})


def _escape(text: str) -> str:
    return text.translate(_ESCAPES)


def _open_tag(entity: XMLEntity, closing: str = ">") -> str:
    attrs = "".join(f' {key}="{_escape(value)}"' for key, value in entity.attributes)
    return f"<{entity.name_data}{attrs}{closing}"


@dataclass
class _Pending:
    entity: XMLEntity
    flushed: bool = False


class XMLWriter:
    """Writes XML entities to a data sink.

    Start tags are held back until content or the matching end arrives; an end
    element closes the most recently opened element whatever its name.
    """

    def __init__(self, sink: DataSink) -> None:
        self._sink = sink
        self._stack: list[_Pending] = []

    def _flush_pending(self) -> None:
        if self._stack and not self._stack[-1].flushed:
            top = self._stack[-1]
            self._sink.write(_open_tag(top.entity))
            top.flushed = True

    def _write_end(self) -> None:
        if not self._stack:
            raise ValueError("end element without a matching start element")
        pending = self._stack.pop()
        output = "" if pending.flushed else _open_tag(pending.entity)
        self._sink.write(output + f"</{pending.entity.name_data}>")

    def write_entity(self, entity: XMLEntity) -> None:
        """Write one entity; raises ValueError for an unmatched end element."""
        match entity.type:
            case EntityType.START_ELEMENT:
                self._flush_pending()
                self._stack.append(_Pending(entity))
            case EntityType.END_ELEMENT:
                self._write_end()
            case EntityType.CHAR_DATA:
                self._flush_pending()
                self._sink.write(_escape(entity.name_data))
            case EntityType.COMPLETE_ELEMENT:
                self._flush_pending()
                self._sink.write(_open_tag(entity, "/>"))

    def flush(self) -> None:
        """Close every element that is still open."""
        while self._stack:
            self._write_end()