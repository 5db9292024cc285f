"""NetworkStore - in-memory network data for routing.

Holds the station table, the lines and the NetworkGraph built from them.
Loaded once when the server starts; every request reads the same
immutable snapshot, so no per-request locking is needed.

A reload builds a complete new snapshot first and then swaps it in, so
requests in flight keep using the old data until the swap.
"""

import logging
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from src.network_bc.line.domain.entities.line import Line
from src.network_bc.network.domain.entities import LineNetwork
from src.network_bc.network.infrastructure.services.network_loader import load_network
from src.network_bc.routing.network_graph import NetworkGraph
from src.network_bc.routing.routing_service import RoutingService
from src.network_bc.station.domain.entities.station import Station

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetworkSnapshot:
    """Everything routing needs, loaded together."""
    network: LineNetwork
    graph: NetworkGraph

    @property
    def stations(self) -> Mapping[str, Station]:
        return self.network.stations

    @property
    def lines(self) -> Mapping[str, Line]:
        return self.network.lines


class NetworkStore:
    """Singleton holding the loaded network in memory.

    Thread-safe for concurrent reads. Uses a lock for loads and reloads.
    """

    _instance: Optional['NetworkStore'] = None
    _lock = threading.Lock()

    def __init__(self):
        self._snapshot: Optional[NetworkSnapshot] = None
        self._reload_lock = threading.Lock()

        self.load_time_seconds = 0.0
        self.stats: Dict[str, int] = {}
        self.source: Optional[str] = None

    @classmethod
    def get_instance(cls) -> 'NetworkStore':
        """Get the singleton instance (thread-safe)."""
        if cls._instance is None:
            with cls._lock:
                # Double-check locking
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton (tests or full reload)."""
        with cls._lock:
            cls._instance = None

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    @property
    def snapshot(self) -> NetworkSnapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise RuntimeError("Network data has not been loaded")
        return snapshot

    @property
    def graph(self) -> NetworkGraph:
        return self.snapshot.graph

    @property
    def stations(self) -> Mapping[str, Station]:
        return self.snapshot.stations

    @property
    def lines(self) -> Mapping[str, Line]:
        return self.snapshot.lines

    def load_data(self, path: Union[str, Path]) -> None:
        """Load the network data file once. Later calls are no-ops."""
        if self.is_loaded:
            return

        with self._reload_lock:
            if self.is_loaded:  # Double-check
                return
            self._do_load(load_network(path), source=str(path))

    def reload_data(self, path: Union[str, Path]) -> None:
        """Reload from disk without restarting the server.

        The current snapshot stays in place if the new data fails to load.
        """
        with self._reload_lock:
            self._do_load(load_network(path), source=str(path))

    def load_network(self, network: LineNetwork, source: str = "<memory>") -> None:
        """Replace the snapshot with an already parsed network."""
        with self._reload_lock:
            self._do_load(network, source=source)

    def create_routing_service(self) -> RoutingService:
        return RoutingService.from_snapshot(self.snapshot)

    def _do_load(self, network: LineNetwork, source: str) -> None:
        start = time.time()
        logger.info(f"Building network graph from {source}...")

        graph = NetworkGraph.from_network(network)
        self._snapshot = NetworkSnapshot(network=network, graph=graph)

        self.source = source
        self.load_time_seconds = time.time() - start
        self.stats = {
            'stations': len(network.stations),
            'lines': len(network.lines),
            'branches': sum(len(line.branches) for line in network.lines.values()),
            'graph_stations': graph.station_count,
            'edges': graph.edge_count,
            'interchanges': len(graph.get_interchanges()),
        }
        logger.info(f"Network loaded in {self.load_time_seconds:.3f}s: {self.stats}")
