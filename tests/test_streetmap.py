import pytest

from transitplanner.datastreams import StringDataSource
from transitplanner.streetmap import INVALID_NODE_ID, OpenStreetMap
from transitplanner.xmlio import XMLReader

OSM = """<?xml version='1.0' encoding='UTF-8'?>
<osm version="0.6">
  <node id="1" lat="38.5" lon="-121.7"/>
  <node id="2" lat="38.6" lon="-121.8">
    <tag k="highway" v="traffic_signals"/>
    <tag k="name" v="Corner"/>
  </node>
  <node id="3" lat="38.7" lon="-121.9"/>
  <way id="100">
    <nd ref="1"/>
    <nd ref="2"/>
    <nd ref="3"/>
    <tag k="oneway" v="yes"/>
  </way>
  <way id="101">
    <nd ref="3"/>
    <nd ref="1"/>
  </way>
</osm>
"""


def _load(text):
    return OpenStreetMap(XMLReader(StringDataSource(text)))


@pytest.fixture
def street_map():
    return _load(OSM)


def test_counts(street_map):
    assert street_map.node_count() == 3
    assert street_map.way_count() == 2


def test_node_by_index_and_id(street_map):
    node = street_map.node_by_index(1)
    assert node.id == 2
    assert node.location == (38.6, -121.8)
    assert street_map.node_by_id(2) is node


def test_node_out_of_range(street_map):
    assert street_map.node_by_index(3) is None
    assert street_map.node_by_id(99) is None


def test_node_attributes(street_map):
    node = street_map.node_by_id(2)
    assert node.attribute_count == 2
    assert node.attribute_key(0) == "highway"
    assert node.attribute_key(5) == ""
    assert node.has_attribute("name")
    assert not node.has_attribute("missing")
    assert node.get_attribute("name") == "Corner"
    assert node.get_attribute("missing") == ""


def test_node_without_tags(street_map):
    assert street_map.node_by_id(1).attribute_count == 0


def test_way_nodes(street_map):
    way = street_map.way_by_id(100)
    assert way.node_ids == [1, 2, 3]
    assert way.node_count == 3
    assert way.node_id(0) == 1
    assert way.node_id(3) == INVALID_NODE_ID


def test_way_attributes(street_map):
    way = street_map.way_by_index(0)
    assert way.has_attribute("oneway")
    assert way.get_attribute("oneway") == "yes"
    assert way.attribute_key(0) == "oneway"
    assert street_map.way_by_index(1).attribute_count == 0


def test_way_out_of_range(street_map):
    assert street_map.way_by_index(2) is None
    assert street_map.way_by_id(5) is None


def test_out_of_range_node_id_is_max_uint64(street_map):
    assert street_map.way_by_id(101).node_id(2) == 18446744073709551615


def test_empty_map():
    street_map = _load("<osm></osm>")
    assert street_map.node_count() == 0
    assert street_map.way_count() == 0


def test_malformed_id_raises():
    with pytest.raises(ValueError):
        _load('<osm><node id="abc" lat="1" lon="2"/></osm>')


def test_duplicate_ids_counted_once():
    street_map = _load('<osm><node id="7" lat="1" lon="2"/><node id="7" lat="3" lon="4"/></osm>')
    assert street_map.node_count() == 1
    assert street_map.node_by_id(7).location == (3.0, 4.0)