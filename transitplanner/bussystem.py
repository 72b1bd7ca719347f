"""Bus stops and routes loaded from CSV tables."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .dsv import DSVReader

INVALID_STOP_ID = 2**64 - 1
_UINT64 = 2**64
_LEADING_INT = re.compile(r"[ \t\n\r\f\v]*([+-]?)(\d+)")


def _parse_uint(text: str) -> int:
    """Parse a leading unsigned integer the way the CSV tables expect.

    Raises ValueError when no digits lead the text and OverflowError when the
    value does not fit in 64 bits.
    """
    match = _LEADING_INT.match(text)
    if not match:
        raise ValueError(f"not a number: {text!r}")
    value = int(match.group(2))
    if value >= _UINT64:
        raise OverflowError(f"value out of range: {text!r}")
    if match.group(1) == "-":
        value = (-value) % _UINT64
    return value


@dataclass(frozen=True)
class Stop:
    """A bus stop located at a street-map node."""

    id: int
    node_id: int


@dataclass(frozen=True)
class Route:
    """A named route visiting stops in order."""

    name: str
    stop_ids: tuple[int, ...]

    def stop_count(self) -> int:
        """Number of stops on the route."""
        return len(self.stop_ids)

    def stop_id(self, index: int) -> int:
        """Return the stop ID at index, or INVALID_STOP_ID if out of range."""
        if 0 <= index < len(self.stop_ids):
            return self.stop_ids[index]
        return INVALID_STOP_ID


class CSVBusSystem:
    """Stops from (stop_id, node_id) rows and routes from (route, stop_id) rows.

    Rows with fewer than two cells or non-numeric IDs, such as headers, are skipped.
    Routes are ordered by name.
    """

    def __init__(self, stop_reader: DSVReader, route_reader: DSVReader) -> None:
        self._stops_by_id: dict[int, Stop] = {}
        self._stops: list[Stop] = []
        for row in stop_reader:
            if len(row) < 2:
                continue
            try:
                stop = Stop(_parse_uint(row[0]), _parse_uint(row[1]))
            except ValueError:
                continue
            self._stops_by_id[stop.id] = stop
            self._stops.append(stop)

        stops_per_route: dict[str, list[int]] = {}
        for row in route_reader:
            if len(row) < 2:
                continue
            try:
                stop_id = _parse_uint(row[1])
            except ValueError:
                continue
            stops_per_route.setdefault(row[0], []).append(stop_id)

        self._routes = [
            Route(name, tuple(stop_ids)) for name, stop_ids in sorted(stops_per_route.items())
        ]
        self._routes_by_name = {route.name: route for route in self._routes}

    def stop_count(self) -> int:
        """Number of distinct stop IDs."""
        return len(self._stops_by_id)

    def route_count(self) -> int:
        """Number of routes."""
        return len(self._routes_by_name)

    def stop_by_index(self, index: int) -> Stop | None:
        """Return the stop at index in file order, or None if out of range."""
        if 0 <= index < len(self._stops):
            return self._stops[index]
        return None

    def stop_by_id(self, stop_id: int) -> Stop | None:
        """Return the stop with the ID, or None."""
        return self._stops_by_id.get(stop_id)

    def route_by_index(self, index: int) -> Route | None:
        """Return the route at index in name order, or None if out of range."""
        if 0 <= index < len(self._routes):
            return self._routes[index]
        return None

    def route_by_name(self, name: str) -> Route | None:
        """Return the route with the name, or None."""
        return self._routes_by_name.get(name)