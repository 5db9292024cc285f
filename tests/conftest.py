"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from app import create_app
from core.containers import RoutingContainer
from core.rate_limiter import limiter
from src.network_bc.network.infrastructure.services.network_loader import parse_network
from src.network_bc.routing.network_graph import NetworkGraph
from src.network_bc.routing.network_store import NetworkStore
from src.network_bc.routing.routing_service import RoutingService


SAMPLE_DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "underground-network.json"


def _station(station_id, lines, lat=51.5, lng=-0.1):
    return {
        "id": station_id,
        "name": f"Station {station_id}",
        "lat": lat,
        "lng": lng,
        "lines": lines,
        "zone": [1],
    }


@pytest.fixture
def two_line_connections():
    """L1 A-B-C meets L2 C-D-E at C."""
    return {"L1": [["A", "B", "C"]], "L2": [["C", "D", "E"]]}


@pytest.fixture
def shared_track_connections():
    """Two lines running over the same track."""
    return {"L1": [["A", "B", "C"]], "L2": [["A", "B", "C"]]}


@pytest.fixture
def network_document():
    """Small network: L1 A-B-C, L2 C-D-E, L3 X-Y (disconnected), Z in no branch."""
    return {
        "generated": "2024-01-01T00:00:00Z",
        "stations": [
            _station("A", ["L1"]),
            _station("B", ["L1"]),
            _station("C", ["L1", "L2"]),
            _station("D", ["L2"]),
            _station("E", ["L2"]),
            _station("X", ["L3"]),
            _station("Y", ["L3"]),
            _station("Z", []),
        ],
        "lines": [
            {"id": "L1", "name": "Line One", "color": "#111111"},
            {"id": "L2", "name": "Line Two", "color": "#222222"},
        ],
        "lineConnections": {
            "L1": [["A", "B", "C"]],
            "L2": [["C", "D", "E"]],
            "L3": [["X", "Y"]],
        },
    }


@pytest.fixture
def network(network_document):
    return parse_network(network_document)


@pytest.fixture
def graph(network):
    return NetworkGraph.from_network(network)


@pytest.fixture
def routing_service(network, graph):
    return RoutingService(graph, network.stations, network.lines)


@pytest.fixture
def network_store(network):
    """A loaded store that is not the process-wide singleton."""
    store = NetworkStore()
    store.load_network(network, source="test")
    return store


@pytest.fixture
def sample_data_path():
    return SAMPLE_DATA_PATH


@pytest.fixture
def container(network_store):
    container = RoutingContainer()
    container.network_store.override(providers.Object(network_store))
    yield container
    container.network_store.reset_override()


@pytest.fixture
def client(container):
    """Create a test client for the FastAPI app over the test network."""
    limiter.reset()
    with TestClient(create_app(container)) as c:
        yield c


@pytest.fixture
def api_base_url():
    """Base URL for routing API endpoints."""
    return "/api/v1/routing"
