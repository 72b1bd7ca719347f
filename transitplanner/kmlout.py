"""Convert saved trip CSV files into KML documents."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

from .datastreams import DataSource, FileDataFactory, FileDataSink, FileDataSource
from .dsv import DSVReader
from .geoutils import Location
from .kml import KMLWriter
from .streetmap import INVALID_NODE_ID, OpenStreetMap
from .strutils import split
from .xmlio import XMLReader

OSM_FILENAME = "city.osm"
STOP_FILENAME = "stops.csv"
BUS_PATH_FILENAME = "buspaths.csv"

_SYNTAX = "Syntax Error: kmlout [--data=path | --results=path] file [file ...]"

_WALK_COLOR = 0xFF313131
_BIKE_COLOR = 0xFFBE7443
_BUS_COLOR = 0xFFA5A5A5
_POINT_COLOR = 0xFF8D5F24
_DEFAULT_WIDTH = 4

_POINT_STYLE = "PointStyle"
_WALK_STYLE = "WalkStyle"
_BIKE_STYLE = "BikeStyle"
_BUS_STYLE = "BusStyle"
_LINE_STYLES = frozenset({_WALK_STYLE, _BIKE_STYLE, _BUS_STYLE})

_ORIGIN: Location = (0.0, 0.0)


@dataclass
class KMLArguments:
    """Command-line settings for the KML converter."""

    data_directory: str = "./data"
    results_directory: str = "./results"
    filenames: list[str] = field(default_factory=list)


def _option_value(argument: str, option: str) -> str | None:
    parts = split(argument, "=")
    if len(parts) != 2 or parts[0] != option:
        return None
    return parts[1]


def parse_arguments(args: Sequence[str]) -> KMLArguments:
    """Parse the arguments; a malformed option ends parsing.

    Raises ValueError carrying the syntax message when no file is named.
    """
    parsed = KMLArguments()
    for argument in args:
        if argument.startswith("--data"):
            value = _option_value(argument, "--data")
            if value is None:
                break
            parsed.data_directory = value
        elif argument.startswith("--results"):
            value = _option_value(argument, "--results")
            if value is None:
                break
            parsed.results_directory = value
        else:
            parsed.filenames.append(argument)
    if not parsed.filenames:
        raise ValueError(_SYNTAX)
    return parsed


def _column_indices(header: list[str], names: Sequence[str]) -> dict[str, int] | None:
    indices: dict[str, int] = {}
    for position, cell in enumerate(header):
        if cell in names:
            indices[cell] = position
    if len(indices) != len(names):
        return None
    return indices


def _describe(title: str, label: str, ident: int, location: Location) -> str:
    return (
        f"{title}\n{label}: {ident}"
        f"\nLatitude: {location[0]:.6f}\nLongitude: {location[1]:.6f}"
    )


def _close(source: object) -> None:
    closer = getattr(source, "close", None)
    if callable(closer):
        closer()


class KMLTranslator:
    """Turns trip files of (mode, node_id) rows into KML using map and bus data.

    Raises ValueError when the stops or bus path tables lack their headers or
    a bus path names a node that is not on the map.
    """

    def __init__(self, street_map: OpenStreetMap, stops: DSVReader, buspaths: DSVReader) -> None:
        self._locations: dict[int, Location] = {}
        for index in range(street_map.node_count()):
            node = street_map.node_by_index(index)
            if node is not None:
                self._locations[node.id] = node.location

        self._stop_ids: dict[int, int] = {}
        header = stops.read_row()
        if header is not None:
            columns = _column_indices(header, ("stop_id", "node_id"))
            if columns is None:
                raise ValueError("Missing stops header!")
            for row in stops:
                self._stop_ids[int(row[columns["node_id"]])] = int(row[columns["stop_id"]])

        self._segments: dict[tuple[int, int], list[Location]] = {}
        header = buspaths.read_row()
        if header is not None:
            columns = _column_indices(header, ("src_id", "dest_id", "routes", "path"))
            if columns is None:
                raise ValueError("Missing buspath header!")
            for row in buspaths:
                src = int(row[columns["src_id"]])
                dest = int(row[columns["dest_id"]])
                locations: list[Location] = []
                for text in split(row[columns["path"]], ","):
                    node_id = int(text)
                    node = street_map.node_by_id(node_id)
                    if node is None:
                        raise ValueError(f"unknown node {node_id} in bus path")
                    locations.append(node.location)
                self._segments[(src, dest)] = locations

    @staticmethod
    def _parse_trip(reader: DSVReader) -> list[tuple[str, int]]:
        header = reader.read_row()
        if header is None:
            return []
        columns = _column_indices(header, ("mode", "node_id"))
        if columns is None:
            return []
        return [(row[columns["mode"]], int(row[columns["node_id"]])) for row in reader]

    def _read_trip(self, filename: str) -> list[tuple[str, int]]:
        source: DataSource = FileDataSource(filename)
        try:
            return self._parse_trip(DSVReader(source, ","))
        finally:
            _close(source)

    @staticmethod
    def _path(kml: KMLWriter, name: str, style: str, points: list[Location]) -> None:
        if style in _LINE_STYLES:
            kml.create_path(name, style, points)

    def _write_trip(self, kml: KMLWriter, steps: list[tuple[str, int]]) -> None:
        current = INVALID_NODE_ID
        last_location = _ORIGIN
        last_mode = ""
        sub_path: list[Location] = []
        for mode, node_id in steps:
            location = self._locations.get(node_id, _ORIGIN)
            if current == INVALID_NODE_ID:
                kml.create_point(
                    "Start Point",
                    _describe("Start Point", "Node ID", node_id, location),
                    _POINT_STYLE,
                    location,
                )
                sub_path.append(location)
            else:
                if mode != last_mode:
                    if len(sub_path) > 1:
                        self._path(kml, last_mode, last_mode + "Style", sub_path)
                    sub_path = [last_location]
                if mode == "Bus":
                    if mode != last_mode:
                        kml.create_point(
                            "Bus Stop",
                            _describe("Bus Stop", "Stop ID", self._stop_ids.get(current, 0), last_location),
                            _POINT_STYLE,
                            last_location,
                        )
                    self._path(kml, mode, _BUS_STYLE, self._segments.get((current, node_id), []))
                    kml.create_point(
                        "Bus Stop",
                        _describe("Bus Stop", "Stop ID", self._stop_ids.get(node_id, 0), location),
                        _POINT_STYLE,
                        location,
                    )
                else:
                    sub_path.append(location)
            current, last_location, last_mode = node_id, location, mode
        if len(sub_path) > 1:
            self._path(kml, last_mode, last_mode + "Style", sub_path)
        kml.create_point(
            "End Point",
            _describe("End Point", "Node ID", current, last_location),
            _POINT_STYLE,
            last_location,
        )

    def translate_file(self, filename: str) -> str:
        """Write the KML for a trip file next to it and return the KML file name.

        The file name must look like src_dest_cost.csv; a cost containing "hr"
        marks a fastest path. Raises ValueError for other names.
        """
        steps = self._read_trip(filename)
        dot = filename.rfind(".")
        kml_filename = (filename if dot == -1 else filename[:dot]) + ".kml"
        parts = split(split(filename, "/")[-1], "_")
        if len(parts) < 2:
            raise ValueError(f"trip file name {filename!r} does not name its endpoints")
        description = "Fastest path" if "hr" in parts[-1] else "Shortest path"

        sink = FileDataSink(kml_filename)
        try:
            with KMLWriter(sink, f"{parts[0]} to {parts[1]}", description) as kml:
                kml.create_point_style(_POINT_STYLE, _POINT_COLOR)
                kml.create_line_style(_WALK_STYLE, _WALK_COLOR, _DEFAULT_WIDTH)
                kml.create_line_style(_BIKE_STYLE, _BIKE_COLOR, _DEFAULT_WIDTH)
                kml.create_line_style(_BUS_STYLE, _BUS_COLOR, _DEFAULT_WIDTH)
                self._write_trip(kml, steps)
        finally:
            sink.close()
        return kml_filename


def main(argv: Sequence[str] | None = None) -> int:
    """Convert each named trip file to KML; returns the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        parsed = parse_arguments(args)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    factory = FileDataFactory(parsed.data_directory)
    stop_source = factory.create_source(STOP_FILENAME)
    path_source = factory.create_source(BUS_PATH_FILENAME)
    osm_source = factory.create_source(OSM_FILENAME)
    try:
        street_map = OpenStreetMap(XMLReader(osm_source))
        translator = KMLTranslator(
            street_map, DSVReader(stop_source, ","), DSVReader(path_source, ",")
        )
    finally:
        for source in (stop_source, path_source, osm_source):
            _close(source)

    for filename in parsed.filenames:
        translator.translate_file(filename)
    return 0


if __name__ == "__main__":
    sys.exit(main())