"""Routing module for transit pathfinding.

Provides route planning between stations in the line network.

Components:
- NetworkGraph: adjacency, station lines and edge -> lines index
- find_shortest_path: Dijkstra with a line-change penalty
- build_route: path -> line segments + summary statistics
- RoutingService: find_route / get_interchanges facade

Data stores:
- NetworkStore: in-memory singleton holding the loaded network
"""

from .network_graph import NetworkGraph
from .route import Route, RouteSegment
from .shortest_path import find_shortest_path
from .path_segmenter import build_route, segment_path
from .routing_service import RoutingService
from .network_store import NetworkStore, NetworkSnapshot

__all__ = [
    "NetworkGraph",
    "Route",
    "RouteSegment",
    "find_shortest_path",
    "build_route",
    "segment_path",
    "RoutingService",
    "NetworkStore",
    "NetworkSnapshot",
]
