"""Interactive command processor for the transportation planner."""

from __future__ import annotations

import math
import re
from collections.abc import Iterator, Sequence

from .datastreams import DataSink, DataSource, FileDataFactory
from .dsv import DSVWriter
from .geoutils import Location, convert_ll_to_dms
from .kml import KMLWriter
from .planner import DijkstraTransportationPlanner, TripStep
from .streetmap import Node

_LEADING_INT = re.compile(r"[+-]?\d+")

_HELP_LINES = (
    "help Display this help menu",
    "exit Exit the program",
    "count Output the number of nodes in the map",
    'node Syntax "node [0, count)"',
    "Will output node ID and Lat/Lon for node",
    'fastest Syntax "fastest start end"',
    "Calculates the time for fastest path from start to end",
    'shortest Syntax "shortest start end"',
    "Calculates the distance for the shortest path from start to end",
    "save Saves the last calculated path to file",
    "print Prints the steps for the last calculated path",
)

_WALK_COLOR = 0xFF313131
_BIKE_COLOR = 0xFFBE7443
_BUS_COLOR = 0xFFA5A5A5
_POINT_COLOR = 0xFF8D5F24
_PATH_WIDTH = 4
_POINT_STYLE = "PointStyle"


def _parse_int(token: str) -> int | None:
    match = _LEADING_INT.match(token)
    return int(match.group()) if match else None


def _parse_ints(tokens: Sequence[str], count: int) -> list[int] | None:
    if len(tokens) < count:
        return None
    values = [_parse_int(token) for token in tokens[:count]]
    if any(value is None for value in values):
        return None
    return values  # type: ignore[return-value]


def _point_description(title: str, node_id: int, location: Location) -> str:
    return (
        f"{title}\nNode ID: {node_id}"
        f"\nLatitude: {location[0]:.6f}\nLongitude: {location[1]:.6f}"
    )


def _close(sink: DataSink) -> None:
    closer = getattr(sink, "close", None)
    if callable(closer):
        closer()


class TransportationPlannerCommandLine:
    """Reads commands line by line, answers on the output sink and reports
    problems on the error sink. Saved paths go to the results factory."""

    def __init__(
        self,
        cmdsrc: DataSource,
        outsink: DataSink,
        errsink: DataSink,
        results: FileDataFactory,
        planner: DijkstraTransportationPlanner,
    ) -> None:
        self._source = cmdsrc
        self._out = outsink
        self._err = errsink
        self._results = results
        self._planner = planner
        self._trip_path: list[TripStep] = []
        self._shortest_path: list[int] = []

    def _lines(self) -> Iterator[str]:
        while True:
            chars: list[str] = []
            complete = False
            while not self._source.end():
                ch = self._source.get()
                if ch is None:
                    break
                if ch == "\n":
                    complete = True
                    break
                chars.append(ch)
            if not complete and not chars:
                return
            yield "".join(chars)

    @staticmethod
    def _write_line(sink: DataSink, line: str) -> None:
        sink.write(line + "\n")

    def _find_node(self, node_id: int) -> Node | None:
        for index in range(self._planner.node_count()):
            node = self._planner.sorted_node_by_index(index)
            if node is not None and node.id == node_id:
                return node
        return None

    def _endpoints(self) -> tuple[int, int] | None:
        if self._trip_path:
            return self._trip_path[0].node_id, self._trip_path[-1].node_id
        if self._shortest_path:
            return self._shortest_path[0], self._shortest_path[-1]
        return None

    def _save(self, filename: str) -> bool:
        endpoints = self._endpoints()
        if endpoints is None:
            self._write_line(self._err, "No path to save")
            return False

        csv_name = filename + ".csv"
        try:
            csv_sink = self._results.create_sink(csv_name)
        except OSError:
            self._write_line(self._err, "Failed to create file: " + csv_name)
            return False
        try:
            writer = DSVWriter(csv_sink, ",")
            writer.write_row(["mode", "node_id"])
            if self._trip_path:
                for step in self._trip_path:
                    writer.write_row([step.mode.value, str(step.node_id)])
            else:
                for node_id in self._shortest_path:
                    writer.write_row(["Walk", str(node_id)])
        finally:
            _close(csv_sink)

        kml_name = filename + ".kml"
        try:
            kml_sink = self._results.create_sink(kml_name)
        except OSError:
            self._write_line(self._err, "Failed to create KML file: " + kml_name)
            return False

        src, dest = endpoints
        desc = "Fastest path" if self._trip_path else "Shortest path"
        try:
            with KMLWriter(kml_sink, f"{src} to {dest}", desc) as kml:
                kml.create_point_style(_POINT_STYLE, _POINT_COLOR)
                kml.create_line_style("WalkStyle", _WALK_COLOR, _PATH_WIDTH)
                kml.create_line_style("BikeStyle", _BIKE_COLOR, _PATH_WIDTH)
                kml.create_line_style("BusStyle", _BUS_COLOR, _PATH_WIDTH)
                if self._trip_path:
                    self._write_trip_kml(kml)
                else:
                    self._write_shortest_kml(kml)
        finally:
            _close(kml_sink)

        self._write_line(self._out, "Path saved to " + filename)
        return True

    def _write_trip_kml(self, kml: KMLWriter) -> None:
        locations: list[Location] = []
        current_mode = ""
        last = len(self._trip_path) - 1
        for position, step in enumerate(self._trip_path):
            node = self._find_node(step.node_id)
            if node is None:
                continue
            mode = step.mode.value
            if current_mode != mode and locations:
                kml.create_path(current_mode, current_mode + "Style", locations)
                locations = []
            if position == 0:
                kml.create_point(
                    "Start Point",
                    _point_description("Start Point", step.node_id, node.location),
                    _POINT_STYLE,
                    node.location,
                )
            elif position == last:
                kml.create_point(
                    "End Point",
                    _point_description("End Point", step.node_id, node.location),
                    _POINT_STYLE,
                    node.location,
                )
            elif current_mode != mode:
                title = mode + " Point"
                kml.create_point(
                    title,
                    _point_description(title, step.node_id, node.location),
                    _POINT_STYLE,
                    node.location,
                )
            current_mode = mode
            locations.append(node.location)
            if position == last:
                kml.create_path(current_mode, current_mode + "Style", locations)

    def _write_shortest_kml(self, kml: KMLWriter) -> None:
        points: list[Location] = []
        last = len(self._shortest_path) - 1
        for position, node_id in enumerate(self._shortest_path):
            node = self._find_node(node_id)
            if node is None:
                continue
            if position == 0:
                kml.create_point(
                    "Start Point",
                    _point_description("Start Point", node_id, node.location),
                    _POINT_STYLE,
                    node.location,
                )
            elif position == last:
                kml.create_point(
                    "End Point",
                    _point_description("End Point", node_id, node.location),
                    _POINT_STYLE,
                    node.location,
                )
            points.append(node.location)
        if points:
            kml.create_path("Walk", "WalkStyle", points)

    def _node(self, args: Sequence[str]) -> None:
        values = _parse_ints(args, 1)
        if values is None:
            self._write_line(self._err, "Usage: node [0, count)")
            return
        index = values[0]
        count = self._planner.node_count()
        if not 0 <= index < count:
            self._write_line(self._err, f"Index out of range [0, {count})")
            return
        node = self._planner.sorted_node_by_index(index)
        if node is None:
            self._write_line(self._err, f"Node not found at index {index}")
            return
        self._write_line(
            self._out,
            f"Node {index}: id = {node.id} is at {convert_ll_to_dms(node.location)}",
        )

    def _shortest(self, args: Sequence[str]) -> None:
        values = _parse_ints(args, 2)
        if values is None:
            self._write_line(self._err, "Usage: shortest start end")
            return
        src, dest = values
        self._trip_path = []
        distance, path = self._planner.find_shortest_path(src, dest)
        self._shortest_path = list(path)
        if math.isfinite(distance):
            self._write_line(self._out, f"Shortest path distance: {distance:g} miles")
        else:
            self._write_line(self._err, f"No path exists between {src} and {dest}")

    def _fastest(self, args: Sequence[str]) -> None:
        values = _parse_ints(args, 2)
        if values is None:
            self._write_line(self._err, "Usage: fastest start end")
            return
        src, dest = values
        self._shortest_path = []
        time, steps = self._planner.find_fastest_path(src, dest)
        self._trip_path = list(steps)
        if math.isfinite(time):
            self._write_line(self._out, f"Fastest path time: {time:g} hours")
        else:
            self._write_line(self._err, f"No path exists between {src} and {dest}")

    def _save_command(self, args: Sequence[str]) -> None:
        if args:
            self._save(args[0])
            return
        endpoints = self._endpoints()
        if endpoints is None:
            self._write_line(self._err, "No path to save")
            return
        self._save(f"{endpoints[0]}_{endpoints[1]}")

    def _print(self) -> None:
        if self._trip_path:
            try:
                description = self._planner.get_path_description(self._trip_path)
            except ValueError:
                self._write_line(self._err, "Failed to generate path description")
                return
            for line in description:
                self._write_line(self._out, line)
        elif self._shortest_path:
            joined = " -> ".join(str(node_id) for node_id in self._shortest_path)
            self._write_line(self._out, "Path: " + joined)
        else:
            self._write_line(self._err, "No path computed yet to print")

    def process_commands(self) -> bool:
        """Run commands until exit or quit (returns True) or end of input (returns False)."""
        for line in self._lines():
            tokens = line.split()
            command = tokens[0] if tokens else ""
            args = tokens[1:]
            if command in ("exit", "quit"):
                return True
            if command == "help":
                for help_line in _HELP_LINES:
                    self._write_line(self._out, help_line)
            elif command == "count":
                self._write_line(self._out, f"{self._planner.node_count()} nodes")
            elif command == "node":
                self._node(args)
            elif command == "shortest":
                self._shortest(args)
            elif command == "fastest":
                self._fastest(args)
            elif command == "save":
                self._save_command(args)
            elif command == "print":
                self._print()
            else:
                self._write_line(self._err, "Unknown command: " + command)
        return False