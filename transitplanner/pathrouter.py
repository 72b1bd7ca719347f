"""A general-purpose shortest-path router over tagged vertices."""

from __future__ import annotations

import heapq
import math
from typing import Any, Sequence

NO_PATH_EXISTS = math.inf


class DijkstraPathRouter:
    """Directed weighted graph with Dijkstra shortest-path search.

    Vertices are numbered from 0 in the order they are added and each carries
    an arbitrary tag.
    """

    def __init__(self) -> None:
        self._tags: list[Any] = []
        self._adjacency: list[list[tuple[int, float]]] = []
        self._frozen: list[tuple[tuple[int, float], ...]] | None = None

    def vertex_count(self) -> int:
        """Number of vertices in the graph."""
        return len(self._tags)

    def add_vertex(self, tag: Any) -> int:
        """Add a vertex carrying the tag and return its ID."""
        self._tags.append(tag)
        self._adjacency.append([])
        self._frozen = None
        return len(self._tags) - 1

    def _valid(self, vertex: int) -> bool:
        return 0 <= vertex < len(self._tags)

    def get_vertex_tag(self, vertex: int) -> Any:
        """Return the tag of the vertex, or None for an unknown vertex."""
        if self._valid(vertex):
            return self._tags[vertex]
        return None

    def add_edge(self, src: int, dest: int, weight: float, bidir: bool = False) -> None:
        """Add an edge from src to dest, and back again when bidir is set.

        Raises ValueError for an unknown vertex or a negative weight.
        """
        if not self._valid(src) or not self._valid(dest):
            raise ValueError(f"unknown vertex in edge {src} -> {dest}")
        if weight < 0:
            raise ValueError(f"negative edge weight {weight}")
        self._adjacency[src].append((dest, weight))
        if bidir:
            self._adjacency[dest].append((src, weight))
        self._frozen = None

    def precompute(self, deadline: Any = None) -> bool:
        """Freeze the adjacency lists for faster repeated searches; always True.

        The snapshot is dropped again as soon as the graph changes.
        """
        self._frozen = [tuple(edges) for edges in self._adjacency]
        return True

    def _edges(self) -> Sequence[Sequence[tuple[int, float]]]:
        return self._frozen if self._frozen is not None else self._adjacency

    def find_shortest_path(self, src: int, dest: int) -> tuple[float, list[int]]:
        """Return the distance and vertex path from src to dest.

        When no path exists the distance is NO_PATH_EXISTS and the path is empty.
        """
        if not self._valid(src) or not self._valid(dest):
            return NO_PATH_EXISTS, []

        adjacency = self._edges()
        count = len(self._tags)
        dist = [math.inf] * count
        prev: list[int | None] = [None] * count
        dist[src] = 0.0
        heap: list[tuple[float, int]] = [(0.0, src)]
        while heap:
            d, u = heapq.heappop(heap)
            if d > dist[u]:
                continue
            if u == dest:
                break
            for v, weight in adjacency[u]:
                alt = d + weight
                if alt < dist[v]:
                    dist[v] = alt
                    prev[v] = u
                    heapq.heappush(heap, (alt, v))

        if math.isinf(dist[dest]):
            return NO_PATH_EXISTS, []

        path: list[int] = []
        at: int | None = dest
        while at is not None:
            path.append(at)
            at = prev[at]
        path.reverse()
        return dist[dest], path