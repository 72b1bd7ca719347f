import pytest

from transitplanner.busindexer import BusSystemIndexer
from transitplanner.bussystem import CSVBusSystem
from transitplanner.datastreams import StringDataSource
from transitplanner.dsv import DSVReader

STOPS = "stop_id,node_id\n3,1003\n1,1001\n2,1002\n4,1004\n"
ROUTES = "route,stop_id\nB,3\nB,2\nA,1\nA,2\nA,3\nC,4\nC,1\n"


@pytest.fixture
def indexer():
    system = CSVBusSystem(
        DSVReader(StringDataSource(STOPS), ","),
        DSVReader(StringDataSource(ROUTES), ","),
    )
    return BusSystemIndexer(system)


def test_counts(indexer):
    assert indexer.stop_count() == 4
    assert indexer.route_count() == 3


def test_stops_sorted_by_id(indexer):
    ids = [indexer.sorted_stop_by_index(i).id for i in range(indexer.stop_count())]
    assert ids == sorted(ids)
    assert indexer.sorted_stop_by_index(4) is None


def test_routes_sorted_by_name(indexer):
    names = [indexer.sorted_route_by_index(i).name for i in range(indexer.route_count())]
    assert names == ["A", "B", "C"]
    assert indexer.sorted_route_by_index(3) is None


def test_stop_by_node_id(indexer):
    assert indexer.stop_by_node_id(1002).id == 2
    assert indexer.stop_by_node_id(5) is None


def test_routes_between_adjacent_stops(indexer):
    routes = indexer.routes_by_node_ids(1002, 1003)
    assert {route.name for route in routes} == {"A", "B"}


def test_routes_either_direction(indexer):
    assert indexer.routes_by_node_ids(1001, 1004) == indexer.routes_by_node_ids(1004, 1001)
    assert {route.name for route in indexer.routes_by_node_ids(1001, 1004)} == {"C"}


def test_non_adjacent_stops_have_no_route(indexer):
    assert indexer.routes_by_node_ids(1001, 1003) == set()
    assert not indexer.route_between_node_ids(1001, 1003)


def test_unknown_node_has_no_route(indexer):
    assert indexer.routes_by_node_ids(1001, 9) == set()
    assert not indexer.route_between_node_ids(9, 1001)


def test_route_between(indexer):
    assert indexer.route_between_node_ids(1001, 1002)
    assert indexer.route_between_node_ids(1003, 1002)