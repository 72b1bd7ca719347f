"""Writing KML documents with styles, placemarks and paths."""

from __future__ import annotations

from collections.abc import Iterable

from .datastreams import DataSink
from .geoutils import Location
from .xmlio import EntityType, XMLEntity, XMLWriter

_XML_DECLARATION = "<?xml version='1.0' encoding='UTF-8'?>"
_KML_NAMESPACE = "http://www.opengis.net/kml/2.2"
_RELATIVE_TO_GROUND = "relativeToGround"


def _format_location(point: Location) -> str:
    return f"{point[1]:.6f},{point[0]:.6f}"


class KMLWriter:
    """Writes an indented KML document to a sink.

    The document is finished by close() or on leaving a with block; the sink
    itself is left open.
    """

    def __init__(self, sink: DataSink, name: str, desc: str) -> None:
        sink.write(_XML_DECLARATION)
        self._writer = XMLWriter(sink)
        self._level = 0
        self._point_styles: set[str] = set()
        self._line_styles: set[str] = set()
        self._closed = False
        self._start_tag("kml", [("xmlns", _KML_NAMESPACE)])
        self._start_tag("Document")
        self._data_element("name", name)
        self._data_element("description", desc)

    def _indent_text(self) -> str:
        return "\n" + "  " * self._level

    def _indent(self) -> None:
        self._writer.write_entity(XMLEntity(EntityType.CHAR_DATA, self._indent_text()))

    def _start_tag(self, name: str, attributes: list[tuple[str, str]] | None = None) -> None:
        self._indent()
        self._writer.write_entity(XMLEntity(EntityType.START_ELEMENT, name, list(attributes or [])))
        self._level += 1

    def _end_tag(self, name: str) -> None:
        if not self._level:
            return
        self._level -= 1
        self._indent()
        self._writer.write_entity(XMLEntity(EntityType.END_ELEMENT, name))

    def _data_element(self, name: str, data: str) -> None:
        self._indent()
        self._writer.write_entity(XMLEntity(EntityType.START_ELEMENT, name))
        self._writer.write_entity(XMLEntity(EntityType.CHAR_DATA, data))
        self._writer.write_entity(XMLEntity(EntityType.END_ELEMENT, name))

    def _indented_lines(self, lines: Iterable[str]) -> None:
        indent = self._indent_text()
        self._writer.write_entity(XMLEntity(EntityType.CHAR_DATA, indent + indent.join(lines)))

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("KML document is already closed")

    def create_point_style(self, stylename: str, color: int) -> None:
        """Define a point style; raises ValueError if it already exists."""
        self._check_open()
        if stylename in self._point_styles:
            raise ValueError(f"point style {stylename!r} already defined")
        self._start_tag("Style", [("id", stylename)])
        self._start_tag("Point")
        self._data_element("color", f"{color:08x}")
        self._end_tag("Point")
        self._end_tag("Style")
        self._point_styles.add(stylename)

    def create_line_style(self, stylename: str, color: int, width: int) -> None:
        """Define a line style; raises ValueError if it already exists."""
        self._check_open()
        if stylename in self._line_styles:
            raise ValueError(f"line style {stylename!r} already defined")
        self._start_tag("Style", [("id", stylename)])
        self._start_tag("LineStyle")
        self._data_element("color", f"{color:08x}")
        self._data_element("width", str(width))
        self._end_tag("LineStyle")
        self._end_tag("Style")
        self._line_styles.add(stylename)

    def create_point(self, name: str, desc: str, stylename: str, point: Location) -> None:
        """Add a point placemark; raises ValueError for an undefined point style."""
        self._check_open()
        if stylename not in self._point_styles:
            raise ValueError(f"unknown point style {stylename!r}")
        self._start_tag("Placemark")
        self._data_element("name", name)
        self._data_element("description", desc)
        self._data_element("styleUrl", "#" + stylename)
        self._start_tag("Point")
        self._data_element("tessellate", "1")
        self._data_element("altitudeMode", _RELATIVE_TO_GROUND)
        self._start_tag("coordinates")
        self._indented_lines([_format_location(point)])
        self._end_tag("coordinates")
        self._end_tag("Point")
        self._end_tag("Placemark")

    def create_path(self, name: str, stylename: str, points: Iterable[Location]) -> None:
        """Add a line-string placemark; raises ValueError for an undefined line style."""
        self._check_open()
        if stylename not in self._line_styles:
            raise ValueError(f"unknown line style {stylename!r}")
        lines = [_format_location(point) for point in points]
        self._start_tag("Placemark")
        self._data_element("name", name)
        self._data_element("styleUrl", "#" + stylename)
        self._start_tag("LineString")
        self._data_element("tessellate", "1")
        self._data_element("altitudeMode", _RELATIVE_TO_GROUND)
        self._start_tag("coordinates")
        self._indented_lines(lines)
        self._end_tag("coordinates")
        self._end_tag("LineString")
        self._end_tag("Placemark")

    def close(self) -> None:
        """Close the Document and kml elements; further calls do nothing."""
        if self._closed:
            return
        self._end_tag("Document")
        self._end_tag("kml")
        self._closed = True

    def __enter__(self) -> KMLWriter:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()