"""Shortest driving paths and fastest walk, bike and bus trips over a street map."""

from __future__ import annotations

import heapq
import math
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from .busindexer import BusSystemIndexer
from .bussystem import CSVBusSystem
from .geoutils import (
    Location,
    bearing_to_direction,
    calculate_bearing,
    convert_ll_to_dms,
    haversine_distance_miles,
)
from .streetmap import Node, OpenStreetMap

_LEADING_FLOAT = re.compile(r"[ \t\n\r\f\v]*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_WALK = 0
_BIKE = 1
_MODES = 2

_Graph = list[list[tuple[int, float]]]


class TransportationMode(Enum):
    """How a trip step was travelled."""

    WALK = "Walk"
    BIKE = "Bike"
    BUS = "Bus"


class TripStep(NamedTuple):
    """Arrival at a node by a mode of transport."""

    mode: TransportationMode
    node_id: int


@dataclass
class Configuration:
    """The map, bus system and speeds a planner works with.

    Speeds are in miles per hour and bus_stop_time is in hours.
    """

    street_map: OpenStreetMap
    bus_system: CSVBusSystem
    walk_speed: float
    bike_speed: float
    default_speed_limit: float
    bus_stop_time: float


@dataclass
class _Leg:
    mode: TransportationMode
    start: Location
    end: Location
    miles: float


def _parse_leading_float(text: str) -> float | None:
    match = _LEADING_FLOAT.match(text)
    return float(match.group(1)) if match else None


def _travel_time(miles: float, speed: float) -> float:
    return miles / speed if speed else math.inf


class DijkstraTransportationPlanner:
    """Plans trips on a street map with an accompanying bus system."""

    def __init__(self, config: Configuration) -> None:
        self._config = config
        street_map = config.street_map
        nodes = (street_map.node_by_index(i) for i in range(street_map.node_count()))
        self._nodes: list[Node] = sorted(
            (node for node in nodes if node is not None), key=lambda node: node.id
        )
        self._index: dict[int, int] = {node.id: i for i, node in enumerate(self._nodes)}
        count = len(self._nodes)
        self._driving: _Graph = [[] for _ in range(count)]
        self._walking: _Graph = [[] for _ in range(count)]
        self._biking: _Graph = [[] for _ in range(count)]
        self._build_graphs()
        self._bus_indexer = BusSystemIndexer(config.bus_system)

    def _build_graphs(self) -> None:
        config = self._config
        street_map = config.street_map
        for way in (street_map.way_by_index(i) for i in range(street_map.way_count())):
            if way is None:
                continue
            one_way = way.get_attribute("oneway") == "yes"
            bike_ok = way.get_attribute("bicycle") != "no"
            speed = config.default_speed_limit
            if way.has_attribute("maxspeed"):
                parsed = _parse_leading_float(way.get_attribute("maxspeed"))
                if parsed is not None:
                    speed = parsed
            for id1, id2 in zip(way.node_ids, way.node_ids[1:]):
                if id1 not in self._index or id2 not in self._index:
                    continue
                a, b = self._index[id1], self._index[id2]
                miles = haversine_distance_miles(self._nodes[a].location, self._nodes[b].location)

                walk = _travel_time(miles, config.walk_speed)
                self._walking[a].append((b, walk))
                self._walking[b].append((a, walk))

                drive = _travel_time(miles, speed)
                self._driving[a].append((b, drive))
                if not one_way:
                    self._driving[b].append((a, drive))

                if bike_ok:
                    bike = _travel_time(miles, config.bike_speed)
                    self._biking[a].append((b, bike))
                    if not one_way:
                        self._biking[b].append((a, bike))

    def node_count(self) -> int:
        """Number of nodes in the map."""
        return len(self._nodes)

    def sorted_node_by_index(self, index: int) -> Node | None:
        """Return the node at index in ID order, or None if out of range."""
        if 0 <= index < len(self._nodes):
            return self._nodes[index]
        return None

    def find_shortest_path(self, src: int, dest: int) -> tuple[float, list[int]]:
        """Return the cost and node IDs of the best driving path from src to dest.

        Edges are weighted by travel time at the way's speed limit. When no path
        exists the cost is infinite and the path is empty.
        """
        if src not in self._index or dest not in self._index:
            return math.inf, []
        start, goal = self._index[src], self._index[dest]
        dist = [math.inf] * len(self._nodes)
        prev: list[int | None] = [None] * len(self._nodes)
        dist[start] = 0.0
        heap: list[tuple[float, int]] = [(0.0, start)]
        while heap:
            d, u = heapq.heappop(heap)
            if d > dist[u]:
                continue
            if u == goal:
                break
            for v, weight in self._driving[u]:
                alt = dist[u] + weight
                if alt < dist[v]:
                    dist[v] = alt
                    prev[v] = u
                    heapq.heappush(heap, (alt, v))
        if math.isinf(dist[goal]):
            return math.inf, []
        path: list[int] = []
        at: int | None = goal
        while at is not None:
            path.append(self._nodes[at].id)
            at = prev[at]
        path.reverse()
        return dist[goal], path

    def _stop_node_index(self, position: int) -> int | None:
        stop = self._config.bus_system.stop_by_index(position)
        if stop is None:
            return None
        return self._index.get(stop.node_id)

    def _bus_rides(self, node: int, dest_location: Location) -> Iterator[tuple[int, float]]:
        """Yield (alighting node, cost) for each route boarding at the node."""
        config = self._config
        stop = self._bus_indexer.stop_by_node_id(self._nodes[node].id)
        if stop is None:
            return
        bus_system = config.bus_system
        for route in (bus_system.route_by_index(i) for i in range(bus_system.route_count())):
            if route is None:
                continue
            try:
                boarding = route.stop_ids.index(stop.id)
            except ValueError:
                continue
            if boarding >= route.stop_count() - 1:
                continue
            best_remaining = math.inf
            best_node = 0
            best_time = 0.0
            route_miles = 0.0
            for position in range(boarding + 1, route.stop_count()):
                seg_a = self._stop_node_index(position - 1)
                seg_b = self._stop_node_index(position)
                if seg_a is not None and seg_b is not None:
                    route_miles += haversine_distance_miles(
                        self._nodes[seg_a].location, self._nodes[seg_b].location
                    )
                if seg_b is None:
                    continue
                remaining = haversine_distance_miles(dest_location, self._nodes[seg_b].location)
                if remaining < best_remaining:
                    best_remaining = remaining
                    best_node = seg_b
                    best_time = _travel_time(route_miles, config.default_speed_limit)
            if best_remaining < math.inf:
                yield best_node, config.bus_stop_time + best_time

    def find_fastest_path(self, src: int, dest: int) -> tuple[float, list[TripStep]]:
        """Return the time in hours and the steps of the fastest trip from src to dest.

        The trip starts on foot; a bike may be picked up or dropped at any node,
        and buses may be boarded on foot at stops. When no trip exists the time
        is infinite and the step list is empty.
        """
        if src not in self._index or dest not in self._index:
            return math.inf, []
        states = len(self._nodes) * _MODES
        dist = [math.inf] * states
        prev = [-1] * states
        by_bus = [False] * states
        start = self._index[src] * _MODES + _WALK
        dist[start] = 0.0
        heap: list[tuple[float, int]] = [(0.0, start)]
        dest_location = self._nodes[self._index[dest]].location

        def relax(state: int, new_cost: float, from_state: int, bus: bool) -> None:
            if new_cost < dist[state]:
                dist[state] = new_cost
                prev[state] = from_state
                by_bus[state] = bus
                heapq.heappush(heap, (new_cost, state))

        while heap:
            cost, state = heapq.heappop(heap)
            if cost > dist[state]:
                continue
            node, mode = divmod(state, _MODES)
            if self._nodes[node].id == dest:
                return cost, self._trip_steps(state, prev, by_bus)

            graph = self._walking if mode == _WALK else self._biking
            for neighbour, weight in graph[node]:
                relax(neighbour * _MODES + mode, cost + weight, state, False)

            other = _BIKE if mode == _WALK else _WALK
            relax(node * _MODES + other, cost, state, False)

            if mode == _WALK:
                for alight, ride_cost in self._bus_rides(node, dest_location):
                    relax(alight * _MODES + _WALK, cost + ride_cost, state, True)
        return math.inf, []

    def _trip_steps(self, state: int, prev: list[int], by_bus: list[bool]) -> list[TripStep]:
        chain: list[int] = []
        while state != -1:
            chain.append(state)
            state = prev[state]
        chain.reverse()
        steps: list[TripStep] = []
        for item in chain:
            node, mode = divmod(item, _MODES)
            if by_bus[item]:
                travel = TransportationMode.BUS
            elif mode == _BIKE:
                travel = TransportationMode.BIKE
            else:
                travel = TransportationMode.WALK
            steps.append(TripStep(travel, self._nodes[node].id))
        return steps

    def _location(self, node_id: int) -> Location:
        try:
            return self._nodes[self._index[node_id]].location
        except KeyError:
            raise ValueError(f"unknown node {node_id}") from None

    def get_path_description(self, path: Sequence[TripStep]) -> list[str]:
        """Describe a trip as a start line, one line per leg, and an end line.

        Each leg joins consecutive moves made by the same mode. Raises
        ValueError for a node that is not on the map.
        """
        if not path:
            return []
        first = path[0]
        previous_id = first.node_id
        previous_location = self._location(previous_id)
        start_location = previous_location
        legs: list[_Leg] = []
        for step in path[1:]:
            location = self._location(step.node_id)
            if step.node_id == previous_id:
                continue
            miles = haversine_distance_miles(previous_location, location)
            if legs and legs[-1].mode is step.mode:
                legs[-1].end = location
                legs[-1].miles += miles
            else:
                legs.append(_Leg(step.mode, previous_location, location, miles))
            previous_id = step.node_id
            previous_location = location

        lines = [f"Start at {convert_ll_to_dms(start_location)}"]
        for leg in legs:
            direction = bearing_to_direction(calculate_bearing(leg.start, leg.end))
            lines.append(
                f"{leg.mode.value} {direction} {leg.miles:.1f} mi to {convert_ll_to_dms(leg.end)}"
            )
        lines.append(f"End at {convert_ll_to_dms(previous_location)}")
        return lines