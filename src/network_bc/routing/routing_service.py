"""Route planning service.

Finds routes between two stations of the network, preferring paths with
fewer line changes, and returns them as line segments with summary
statistics (stations, changes, estimated minutes).

The service is built over an already constructed NetworkGraph and the
station reference table. It keeps no per-query state, so a single instance
can serve concurrent requests.
"""

import logging
import threading
from typing import Dict, List, Mapping, Optional

from src.network_bc.line.domain.entities.line import Line, display_line_name
from src.network_bc.routing.network_graph import NetworkGraph
from src.network_bc.routing.path_segmenter import build_route
from src.network_bc.routing.route import Route
from src.network_bc.routing.shortest_path import find_shortest_path
from src.network_bc.station.domain.entities.station import Station

logger = logging.getLogger(__name__)


class RoutingService:
    """Service for finding routes in the line network."""

    def __init__(
        self,
        graph: NetworkGraph,
        stations: Optional[Mapping[str, Station]] = None,
        lines: Optional[Mapping[str, Line]] = None,
    ):
        self.graph = graph
        self.stations: Mapping[str, Station] = stations or {}
        self.lines: Mapping[str, Line] = lines or {}

    @classmethod
    def from_snapshot(cls, snapshot) -> "RoutingService":
        """Build over a NetworkSnapshot (graph, stations and lines loaded together)."""
        return cls(snapshot.graph, snapshot.stations, snapshot.lines)

    def get_station(self, station_id: str) -> Optional[Station]:
        return self.stations.get(station_id)

    def station_exists(self, station_id: str) -> bool:
        """True if the station is on the routing graph."""
        return self.graph.has_station(station_id)

    def find_route(
        self,
        from_station_id: str,
        to_station_id: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> Optional[Route]:
        """Find the best route between two stations.

        Args:
            from_station_id: Origin station ID
            to_station_id: Destination station ID
            cancel_event: Optional event to abandon the search

        Returns:
            Route, or None if no route exists (unknown station or
            disconnected network). Same origin and destination gives an
            empty route with zero stations and zero minutes.
        """
        logger.debug(f"Finding route {from_station_id} -> {to_station_id}")

        if not self.station_exists(from_station_id) or not self.station_exists(to_station_id):
            logger.info(f"No route: unknown station in {from_station_id} -> {to_station_id}")
            return None

        if from_station_id == to_station_id:
            return Route.empty(from_station_id, to_station_id)

        path = find_shortest_path(self.graph, from_station_id, to_station_id, cancel_event)
        if path is None:
            logger.info(f"No route found between {from_station_id} and {to_station_id}")
            return None

        return build_route(self.graph, path, self.stations)

    def get_interchanges(self) -> Dict[str, List[str]]:
        """Stations served by more than one line: {station_id: [line_id, ...]}."""
        return self.graph.get_interchanges()

    def line_name(self, line_id: str) -> str:
        line = self.lines.get(line_id)
        return line.name if line else display_line_name(line_id)

    def station_name(self, station_id: str) -> str:
        station = self.stations.get(station_id)
        return station.name if station else station_id

    def describe_route(self, route: Route) -> List[str]:
        """Human-readable step-by-step instructions for a route."""
        instructions = []
        for index, segment in enumerate(route.segments):
            if index > 0:
                instructions.append(
                    f"Change to the {self.line_name(segment.line)} line at "
                    f"{self.station_name(segment.from_station)}"
                )
            stops = segment.stop_count
            instructions.append(
                f"Take the {self.line_name(segment.line)} line from "
                f"{self.station_name(segment.from_station)} to "
                f"{self.station_name(segment.to_station)} "
                f"({stops} stop{'' if stops == 1 else 's'})"
            )
        return instructions
