"""Street map of nodes and ways read from OpenStreetMap XML."""

from __future__ import annotations

from dataclasses import dataclass, field

from .geoutils import Location
from .xmlio import EntityType, XMLEntity, XMLReader

INVALID_NODE_ID = 2**64 - 1


def _lookup(attributes: list[tuple[str, str]], key: str) -> str | None:
    for name, value in attributes:
        if name == key:
            return value
    return None


@dataclass
class Node:
    """A map node with its location and tags."""

    id: int
    location: Location
    attributes: list[tuple[str, str]] = field(default_factory=list)

    @property
    def attribute_count(self) -> int:
        """Number of tags on the node."""
        return len(self.attributes)

    def attribute_key(self, index: int) -> str:
        """Return the key of the tag at index, or an empty string if out of range."""
        if 0 <= index < len(self.attributes):
            return self.attributes[index][0]
        return ""

    def has_attribute(self, key: str) -> bool:
        """Return True if the node carries the tag."""
        return _lookup(self.attributes, key) is not None

    def get_attribute(self, key: str) -> str:
        """Return the tag's value, or an empty string if absent."""
        value = _lookup(self.attributes, key)
        return "" if value is None else value


@dataclass
class Way:
    """An ordered list of node IDs with tags."""

    id: int
    node_ids: list[int] = field(default_factory=list)
    attributes: list[tuple[str, str]] = field(default_factory=list)

    @property
    def node_count(self) -> int:
        """Number of nodes along the way."""
        return len(self.node_ids)

    @property
    def attribute_count(self) -> int:
        """Number of tags on the way."""
        return len(self.attributes)

    def node_id(self, index: int) -> int:
        """Return the node ID at index, or INVALID_NODE_ID if out of range."""
        if 0 <= index < len(self.node_ids):
            return self.node_ids[index]
        return INVALID_NODE_ID

    def attribute_key(self, index: int) -> str:
        """Return the key of the tag at index, or an empty string if out of range."""
        if 0 <= index < len(self.attributes):
            return self.attributes[index][0]
        return ""

    def has_attribute(self, key: str) -> bool:
        """Return True if the way carries the tag."""
        return _lookup(self.attributes, key) is not None

    def get_attribute(self, key: str) -> str:
        """Return the tag's value, or an empty string if absent."""
        value = _lookup(self.attributes, key)
        return "" if value is None else value


def _is_end(entity: XMLEntity | None, name: str) -> bool:
    return entity is None or (entity.type is EntityType.END_ELEMENT and entity.name_data == name)


def _tag(entity: XMLEntity) -> tuple[str, str]:
    return entity.attribute_value("k"), entity.attribute_value("v")


class OpenStreetMap:
    """Nodes and ways loaded from an XML reader.

    Raises ValueError when a node or way carries a malformed numeric attribute.
    """

    def __init__(self, reader: XMLReader) -> None:
        self._nodes_by_id: dict[int, Node] = {}
        self._ways_by_id: dict[int, Way] = {}
        self._nodes: list[Node] = []
        self._ways: list[Way] = []

        while (entity := reader.read_entity(True)) is not None:
            if entity.type is not EntityType.START_ELEMENT:
                continue
            if entity.name_data == "node":
                self._read_node(reader, entity)
            elif entity.name_data == "way":
                self._read_way(reader, entity)

    def _read_node(self, reader: XMLReader, start: XMLEntity) -> None:
        node_id = int(start.attribute_value("id"))
        location = (float(start.attribute_value("lat")), float(start.attribute_value("lon")))
        attrs: list[tuple[str, str]] = []
        while not _is_end(entity := reader.read_entity(True), "node"):
            if entity.type is EntityType.START_ELEMENT and entity.name_data == "tag":
                attrs.append(_tag(entity))
        node = Node(node_id, location, attrs)
        self._nodes_by_id[node_id] = node
        self._nodes.append(node)

    def _read_way(self, reader: XMLReader, start: XMLEntity) -> None:
        way_id = int(start.attribute_value("id"))
        node_ids: list[int] = []
        attrs: list[tuple[str, str]] = []
        while not _is_end(entity := reader.read_entity(True), "way"):
            if entity.type is not EntityType.START_ELEMENT:
                continue
            if entity.name_data == "nd":
                node_ids.append(int(entity.attribute_value("ref")))
            elif entity.name_data == "tag":
                attrs.append(_tag(entity))
        way = Way(way_id, node_ids, attrs)
        self._ways_by_id[way_id] = way
        self._ways.append(way)

    def node_count(self) -> int:
        """Number of distinct node IDs."""
        return len(self._nodes_by_id)

    def way_count(self) -> int:
        """Number of distinct way IDs."""
        return len(self._ways_by_id)

    def node_by_index(self, index: int) -> Node | None:
        """Return the node at index in file order, or None if out of range."""
        if 0 <= index < len(self._nodes):
            return self._nodes[index]
        return None

    def node_by_id(self, node_id: int) -> Node | None:
        """Return the node with the ID, or None."""
        return self._nodes_by_id.get(node_id)

    def way_by_index(self, index: int) -> Way | None:
        """Return the way at index in file order, or None if out of range."""
        if 0 <= index < len(self._ways):
            return self._ways[index]
        return None

    def way_by_id(self, way_id: int) -> Way | None:
        """Return the way with the ID, or None."""
        return self._ways_by_id.get(way_id)