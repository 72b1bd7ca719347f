"""Sorted and node-keyed indexes over a bus system."""

from __future__ import annotations

from .bussystem import CSVBusSystem, Route, Stop


class BusSystemIndexer:
    """Stops sorted by ID, routes sorted by name, and stops keyed by node ID."""

    def __init__(self, bus_system: CSVBusSystem) -> None:
        self._bus_system = bus_system
        stops = (bus_system.stop_by_index(i) for i in range(bus_system.stop_count()))
        self._stops: list[Stop] = sorted(
            (stop for stop in stops if stop is not None), key=lambda stop: stop.id
        )
        self._node_to_stop: dict[int, Stop] = {stop.node_id: stop for stop in self._stops}
        routes = (bus_system.route_by_index(i) for i in range(bus_system.route_count()))
        self._routes: list[Route] = sorted(
            (route for route in routes if route is not None), key=lambda route: route.name
        )

    def stop_count(self) -> int:
        """Number of indexed stops."""
        return len(self._stops)

    def route_count(self) -> int:
        """Number of indexed routes."""
        return len(self._routes)

    def sorted_stop_by_index(self, index: int) -> Stop | None:
        """Return the stop at index in ID order, or None if out of range."""
        if 0 <= index < len(self._stops):
            return self._stops[index]
        return None

    def sorted_route_by_index(self, index: int) -> Route | None:
        """Return the route at index in name order, or None if out of range."""
        if 0 <= index < len(self._routes):
            return self._routes[index]
        return None

    def stop_by_node_id(self, node_id: int) -> Stop | None:
        """Return the stop at the street-map node, or None."""
        return self._node_to_stop.get(node_id)

    def routes_by_node_ids(self, src: int, dest: int) -> set[Route]:
        """Return every route with a segment directly joining the stops at src and dest."""
        src_stop = self.stop_by_node_id(src)
        dest_stop = self.stop_by_node_id(dest)
        if src_stop is None or dest_stop is None:
            return set()
        wanted = {(src_stop.id, dest_stop.id), (dest_stop.id, src_stop.id)}
        return {
            route
            for route in self._routes
            if any(pair in wanted for pair in zip(route.stop_ids, route.stop_ids[1:]))
        }

    def route_between_node_ids(self, src: int, dest: int) -> bool:
        """Return True if some route directly joins the stops at src and dest."""
        return bool(self.routes_by_node_ids(src, dest))