"""Turn a station path into line segments for display.

Consecutive stations are grouped into maximal runs on a single line. When
an edge is served by several lines the line already being travelled on is
kept; otherwise the candidate that runs furthest along the path starts a
new segment (alphabetical on ties), which gives the fewest segments.
The station where a change happens ends one segment and starts the next.
"""

import logging
from typing import Callable, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from src.network_bc.routing.network_graph import NetworkGraph
from src.network_bc.routing.route import Route, RouteSegment, estimate_minutes
from src.network_bc.station.domain.entities.station import Station

logger = logging.getLogger(__name__)


UNKNOWN_LINE = "unknown"


def select_line(
    candidates,
    current_line: Optional[str],
    reach: Optional[Callable[[str], int]] = None,
) -> str:
    """Prefer staying on the current line.

    Otherwise take the candidate with the longest `reach` (edges it covers
    from here on), or the first candidate by id when no reach is given.
    """
    if current_line is not None and current_line in candidates:
        return current_line
    if not candidates:
        return UNKNOWN_LINE
    ordered = sorted(candidates)
    if reach is None:
        return ordered[0]
    return max(ordered, key=reach)


def _run_length(edge_lines: Sequence[FrozenSet[str]], start: int, line: str) -> int:
    length = 0
    for lines in edge_lines[start:]:
        if line not in lines:
            break
        length += 1
    return length


def segment_path(graph: NetworkGraph, path: Sequence[str]) -> List[Tuple[str, List[str]]]:
    """Split a station path into [(line_id, [station_id, ...]), ...]."""
    edge_lines = [graph.get_connection_lines(a, b) for a, b in zip(path, path[1:])]
    segments: List[Tuple[str, List[str]]] = []
    current_line: Optional[str] = None

    for index, (station, next_station) in enumerate(zip(path, path[1:])):
        selected = select_line(
            edge_lines[index],
            current_line,
            reach=lambda line: _run_length(edge_lines, index, line),
        )
        if selected == UNKNOWN_LINE:
            logger.warning(f"No line found for path edge {station} -> {next_station}")

        if selected != current_line:
            # Change station closes the previous segment and opens the next
            segments.append((selected, [station]))
            current_line = selected
        segments[-1][1].append(next_station)

    return segments


def build_route(
    graph: NetworkGraph,
    path: Sequence[str],
    stations: Optional[Mapping[str, Station]] = None,
) -> Route:
    """Build a Route (segments + summary statistics) from a station path."""
    if not path:
        return Route.empty()

    stations = stations or {}
    segments = []
    for line_id, station_ids in segment_path(graph, path):
        segments.append(RouteSegment(
            line=line_id,
            color=graph.line_color(line_id),
            stations=tuple(station_ids),
            # Stations without a reference record are left out of the details
            station_details=tuple(stations[s] for s in station_ids if s in stations),
        ))

    total_stations = len(path)
    changes = max(0, len(segments) - 1)

    return Route(
        origin=path[0],
        destination=path[-1],
        segments=tuple(segments),
        total_stations=total_stations,
        changes=changes,
        estimated_time=estimate_minutes(total_stations, changes),
    )
