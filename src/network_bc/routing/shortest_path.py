"""Shortest path search with a line-change penalty.

Dijkstra over (station, line ridden) states. Each hop costs 1; switching
to a different line at a station costs an extra LINE_CHANGE_PENALTY, and
the first line boarded at the origin is free. A path's cost is therefore
hops + penalty x changes, the same in both directions, and the changes
counted here are the ones the path segmenter shows.

Ties on cost are broken by fewer hops, then by discovery order.
"""

import heapq
import itertools
import logging
import threading
from typing import Dict, Iterator, List, Optional, Set, Tuple

from src.network_bc.routing.network_graph import NetworkGraph

logger = logging.getLogger(__name__)


HOP_COST = 1
LINE_CHANGE_PENALTY = 3  # Equivalent to travelling 3 extra stations
INFINITY = float('inf')

# (station_id, line ridden into it); the origin has no line yet
State = Tuple[str, Optional[str]]


def _transitions(
    graph: NetworkGraph,
    current_line: Optional[str],
    current: str,
    neighbor: str,
) -> Iterator[Tuple[str, int]]:
    """Yield (line, penalty) for riding from `current` to `neighbor`.

    Staying on the current line is never worse than switching on a shared
    edge, so other lines are only tried when the current one does not run
    there.
    """
    lines = graph.get_connection_lines(current, neighbor)
    if current_line in lines:
        yield current_line, 0
        return
    penalty = 0 if current_line is None else LINE_CHANGE_PENALTY
    for line in sorted(lines):
        yield line, penalty


def find_shortest_path(
    graph: NetworkGraph,
    origin: str,
    destination: str,
    cancel_event: Optional[threading.Event] = None,
) -> Optional[List[str]]:
    """Find the lowest-cost station sequence from origin to destination.

    Args:
        graph: Network graph to search
        origin: Origin station ID
        destination: Destination station ID
        cancel_event: Optional event; when set the search stops early

    Returns:
        Station IDs from origin to destination (inclusive), or None if
        either station is unknown, the destination is unreachable or the
        search was cancelled.
    """
    if not graph.has_station(origin) or not graph.has_station(destination):
        return None

    if origin == destination:
        return [origin]

    start: State = (origin, None)
    distances: Dict[State, Tuple[float, int]] = {start: (0, 0)}
    previous: Dict[State, Optional[State]] = {start: None}
    visited: Set[State] = set()

    # (cost, hops, push order, state) - push order makes ties first-found
    counter = itertools.count()
    queue: List[Tuple[float, int, int, State]] = [(0, 0, next(counter), start)]
    reached: Optional[State] = None

    while queue:
        if cancel_event is not None and cancel_event.is_set():
            logger.info(f"Route search {origin} -> {destination} cancelled")
            return None

        cost, hops, _, state = heapq.heappop(queue)

        # Stale queue entry
        if state in visited:
            continue
        visited.add(state)

        current, current_line = state

        # First settlement is final, so stop at the destination
        if current == destination:
            reached = state
            break

        for neighbor in graph.neighbors(current):
            for line, penalty in _transitions(graph, current_line, current, neighbor):
                next_state = (neighbor, line)
                if next_state in visited:
                    continue

                candidate = (cost + HOP_COST + penalty, hops + 1)
                if candidate < distances.get(next_state, (INFINITY, 0)):
                    distances[next_state] = candidate
                    previous[next_state] = state
                    heapq.heappush(queue, (candidate[0], candidate[1], next(counter), next_state))

    if reached is None:
        return None

    path = []
    step: Optional[State] = reached
    while step is not None:
        path.append(step[0])
        step = previous[step]
    path.reverse()

    logger.debug(f"Shortest path {origin} -> {destination}: cost {distances[reached][0]}, {len(path)} stations")
    return path
