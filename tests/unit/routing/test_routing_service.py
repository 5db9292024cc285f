"""Unit tests for the RoutingService facade (find_route / get_interchanges)."""

import itertools
import threading

import pytest

from src.network_bc.routing.network_graph import NetworkGraph
from src.network_bc.routing.routing_service import RoutingService


class TestFindRoute:
    """Concrete route scenarios."""

    def test_change_between_two_lines(self, two_line_connections):
        """L1 A-B-C + L2 C-D-E: A to E is two segments, 5 stations, 1 change, 11 min."""
        service = RoutingService(NetworkGraph(two_line_connections))
        route = service.find_route("A", "E")

        assert route is not None
        assert len(route.segments) == 2
        assert route.segments[0].line == "L1"
        assert route.segments[0].stations == ("A", "B", "C")
        assert route.segments[1].line == "L2"
        assert route.segments[1].stations == ("C", "D", "E")
        assert route.total_stations == 5
        assert route.changes == 1
        assert route.estimated_time == 11

    def test_shared_track_no_change(self, shared_track_connections):
        """Two identical lines: A to C is 1 segment, 3 stations, 0 changes, 4 min."""
        service = RoutingService(NetworkGraph(shared_track_connections))
        route = service.find_route("A", "C")

        assert route is not None
        assert len(route.segments) == 1
        assert route.total_stations == 3
        assert route.changes == 0
        assert route.estimated_time == 4

    def test_station_details_attached(self, routing_service):
        route = routing_service.find_route("A", "E")
        names = [s.name for s in route.segments[0].station_details]
        assert names == ["Station A", "Station B", "Station C"]

    def test_line_colors_from_network(self, routing_service):
        route = routing_service.find_route("A", "E")
        assert [s.color for s in route.segments] == ["#111111", "#222222"]


class TestReflexivity:

    def test_same_station_is_empty_route(self, routing_service):
        """Same origin and destination: 0 stations, 0 changes, 0 minutes."""
        route = routing_service.find_route("B", "B")
        assert route is not None
        assert route.origin == "B"
        assert route.destination == "B"
        assert route.segments == ()
        assert route.total_stations == 0
        assert route.changes == 0
        assert route.estimated_time == 0

    def test_same_unknown_station_is_no_route(self, routing_service):
        """An id not on the graph has no route, even to itself."""
        assert routing_service.find_route("NOPE", "NOPE") is None


class TestNoRoute:

    def test_unknown_origin(self, routing_service):
        assert routing_service.find_route("NOPE", "A") is None

    def test_unknown_destination(self, routing_service):
        assert routing_service.find_route("A", "NOPE") is None

    def test_station_in_no_branch(self, routing_service):
        """Z has a station record but is in no branch."""
        assert routing_service.get_station("Z") is not None
        assert not routing_service.station_exists("Z")
        assert routing_service.find_route("A", "Z") is None

    def test_disconnected_component(self, routing_service):
        assert routing_service.find_route("A", "Y") is None
        assert routing_service.find_route("Y", "A") is None


class TestRouteProperties:
    """Properties that hold for every route in the network."""

    CONNECTED = ["A", "B", "C", "D", "E"]

    @pytest.fixture
    def overlapping_service(self):
        """Network with forks and overlapping lines."""
        return RoutingService(NetworkGraph({
            "L1": [["A", "B", "C", "D"], ["B", "F", "G"]],
            "L2": [["C", "D", "E"]],
            "L3": [["G", "E", "H"]],
        }))

    def test_symmetric_reachability(self, routing_service):
        for origin, destination in itertools.permutations(self.CONNECTED, 2):
            there = routing_service.find_route(origin, destination)
            back = routing_service.find_route(destination, origin)
            assert there is not None and back is not None
            assert there.total_stations == back.total_stations
            assert there.changes == back.changes

    def test_segment_continuity(self, overlapping_service):
        stations = list(overlapping_service.graph.adjacency)
        for origin, destination in itertools.permutations(stations, 2):
            route = overlapping_service.find_route(origin, destination)
            assert route is not None
            for current, following in zip(route.segments, route.segments[1:]):
                assert current.stations[-1] == following.stations[0]

    def test_non_negative_statistics(self, overlapping_service):
        stations = list(overlapping_service.graph.adjacency)
        for origin, destination in itertools.product(stations, repeat=2):
            route = overlapping_service.find_route(origin, destination)
            assert route.changes >= 0
            assert route.estimated_time >= 0
            if route.segments:
                assert route.changes == len(route.segments) - 1
            else:
                assert route.changes == 0

    def test_route_ends_match_query(self, overlapping_service):
        route = overlapping_service.find_route("A", "H")
        assert route.origin == "A"
        assert route.destination == "H"
        assert route.segments[0].from_station == "A"
        assert route.segments[-1].to_station == "H"

    def test_idempotent(self, overlapping_service):
        first = overlapping_service.find_route("A", "H")
        for _ in range(3):
            again = overlapping_service.find_route("A", "H")
            assert again == first


class TestInterchanges:

    def test_interchange_lines(self, routing_service):
        interchanges = routing_service.get_interchanges()
        assert set(interchanges) == {"C"}
        assert set(interchanges["C"]) == {"L1", "L2"}


class TestServiceConstruction:

    def test_from_snapshot(self, network_store):
        service = RoutingService.from_snapshot(network_store.snapshot)
        assert service.graph is network_store.graph
        assert service.get_station("A").name == "Station A"

    def test_line_name_falls_back_to_id(self, routing_service):
        """L3 has branches but no line record."""
        assert routing_service.line_name("L1") == "Line One"
        assert routing_service.line_name("L3") == "L3"

    def test_cancelled_query_has_no_route(self, routing_service):
        cancel = threading.Event()
        cancel.set()
        assert routing_service.find_route("A", "E", cancel_event=cancel) is None


class TestDescribeRoute:
    """Tests for human-readable instructions."""

    def test_instructions_with_change(self, routing_service):
        route = routing_service.find_route("A", "E")
        assert routing_service.describe_route(route) == [
            "Take the Line One line from Station A to Station C (2 stops)",
            "Change to the Line Two line at Station C",
            "Take the Line Two line from Station C to Station E (2 stops)",
        ]

    def test_single_stop_wording(self, routing_service):
        route = routing_service.find_route("A", "B")
        assert routing_service.describe_route(route) == [
            "Take the Line One line from Station A to Station B (1 stop)",
        ]

    def test_fallback_names(self):
        """Without reference data, ids and derived line names are used."""
        service = RoutingService(NetworkGraph({"hammersmith-city": [["a", "b"]]}))
        route = service.find_route("a", "b")
        assert service.describe_route(route) == [
            "Take the Hammersmith City line from a to b (1 stop)",
        ]

    def test_empty_route_has_no_instructions(self, routing_service):
        route = routing_service.find_route("A", "A")
        assert routing_service.describe_route(route) == []
