"""Network graph for routing.

Built once from the per-line branch data:

- adjacency: station_id -> neighbouring station_ids (undirected)
- station_lines: station_id -> line_ids serving the station
- edge_lines: {station_a, station_b} -> line_ids running over that edge

Every edge comes from a consecutive pair in some branch, so every edge has
at least one line. The graph is read-only once built and can be shared
between threads.
"""

import logging
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterator, List, Mapping, Optional, Sequence, Tuple

from src.network_bc.line.domain.entities.line import DEFAULT_LINE_COLOR
from src.network_bc.network.domain.entities import LineNetwork, NetworkDataError

logger = logging.getLogger(__name__)

EdgeKey = FrozenSet[str]

_NO_LINES: FrozenSet[str] = frozenset()


def edge_key(station_a: str, station_b: str) -> EdgeKey:
    """Undirected key for the edge between two stations."""
    return frozenset((station_a, station_b))


class NetworkGraph:
    """Undirected station graph with per-edge line index."""

    def __init__(
        self,
        line_connections: Mapping[str, Sequence[Sequence[str]]],
        line_colors: Optional[Mapping[str, str]] = None,
    ):
        # dict-as-ordered-set keeps neighbour order deterministic
        adjacency: Dict[str, Dict[str, None]] = {}
        station_lines: Dict[str, set] = {}
        edge_lines: Dict[EdgeKey, set] = {}

        for line_id, branches in line_connections.items():
            for index, branch in enumerate(branches):
                self._check_branch(line_id, index, branch)
                previous = None
                for station_id in branch:
                    adjacency.setdefault(station_id, {})
                    station_lines.setdefault(station_id, set()).add(line_id)

                    if previous is not None:
                        adjacency[previous][station_id] = None
                        adjacency[station_id][previous] = None
                        edge_lines.setdefault(edge_key(previous, station_id), set()).add(line_id)
                    previous = station_id

        self._adjacency: Dict[str, Tuple[str, ...]] = {
            station_id: tuple(neighbours) for station_id, neighbours in adjacency.items()
        }
        self._station_lines: Dict[str, FrozenSet[str]] = {
            station_id: frozenset(lines) for station_id, lines in station_lines.items()
        }
        self._edge_lines: Dict[EdgeKey, FrozenSet[str]] = {
            key: frozenset(lines) for key, lines in edge_lines.items()
        }
        self._line_colors: Dict[str, str] = dict(line_colors or {})

        logger.debug(
            f"Built network graph: {len(self._adjacency)} stations, "
            f"{len(self._edge_lines)} edges, {len(line_connections)} lines"
        )

    @classmethod
    def from_network(cls, network: LineNetwork) -> "NetworkGraph":
        return cls(network.line_connections, network.line_colors)

    @staticmethod
    def _check_branch(line_id: str, index: int, branch: Sequence[str]) -> None:
        if isinstance(branch, str) or not isinstance(branch, Sequence):
            raise NetworkDataError(f"line '{line_id}' branch {index} is not a sequence of station ids")
        for position, station_id in enumerate(branch):
            if not isinstance(station_id, str) or not station_id:
                raise NetworkDataError(
                    f"line '{line_id}' branch {index} has an invalid station id at position {position}"
                )
            if position > 0 and branch[position - 1] == station_id:
                raise NetworkDataError(
                    f"line '{line_id}' branch {index} repeats station '{station_id}' consecutively"
                )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def adjacency(self) -> Mapping[str, Tuple[str, ...]]:
        return MappingProxyType(self._adjacency)

    @property
    def station_lines(self) -> Mapping[str, FrozenSet[str]]:
        return MappingProxyType(self._station_lines)

    @property
    def station_count(self) -> int:
        return len(self._adjacency)

    @property
    def edge_count(self) -> int:
        return len(self._edge_lines)

    def has_station(self, station_id: str) -> bool:
        return station_id in self._adjacency

    def neighbors(self, station_id: str) -> Tuple[str, ...]:
        """Directly connected stations, in the order they were first linked."""
        return self._adjacency.get(station_id, ())

    def lines_at(self, station_id: str) -> FrozenSet[str]:
        return self._station_lines.get(station_id, _NO_LINES)

    def get_connection_lines(self, station_a: str, station_b: str) -> FrozenSet[str]:
        """Lines running directly between two adjacent stations (either direction).

        An empty set means the pair is not an edge of this network.
        """
        lines = self._edge_lines.get(edge_key(station_a, station_b))
        if lines is None:
            logger.warning(f"No line connects '{station_a}' and '{station_b}'")
            return _NO_LINES
        return lines

    def line_color(self, line_id: str) -> str:
        return self._line_colors.get(line_id) or DEFAULT_LINE_COLOR

    def edges(self) -> Iterator[Tuple[str, str, FrozenSet[str]]]:
        """Yield (station_a, station_b, lines) once per undirected edge."""
        for key, lines in self._edge_lines.items():
            station_a, station_b = sorted(key)
            yield station_a, station_b, lines

    def get_interchanges(self) -> Dict[str, List[str]]:
        """Stations served by more than one line: {station_id: [line_id, ...]}."""
        return {
            station_id: sorted(lines)
            for station_id, lines in self._station_lines.items()
            if len(lines) > 1
        }

    def is_interchange(self, station_id: str) -> bool:
        return len(self.lines_at(station_id)) > 1
