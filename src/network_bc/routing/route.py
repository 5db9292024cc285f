"""Route result types.

A Route is built fresh per query and never mutated afterwards, so it can
be handed to any number of consumers (API responses, scripts) as is.
"""

from dataclasses import dataclass
from typing import Tuple

from src.network_bc.line.domain.entities.line import display_line_name
from src.network_bc.station.domain.entities.station import Station


MINUTES_PER_STATION = 2  # Per hop between adjacent stations
MINUTES_PER_CHANGE = 3


def estimate_minutes(total_stations: int, changes: int) -> int:
    """Fixed linear journey time model, not derived from timetables."""
    if total_stations <= 0:
        return 0
    return (total_stations - 1) * MINUTES_PER_STATION + changes * MINUTES_PER_CHANGE


@dataclass(frozen=True)
class RouteSegment:
    """A run of consecutive stations travelled on one line without changing."""
    line: str
    color: str
    stations: Tuple[str, ...]
    station_details: Tuple[Station, ...] = ()

    @property
    def line_name(self) -> str:
        return display_line_name(self.line)

    @property
    def from_station(self) -> str:
        return self.stations[0]

    @property
    def to_station(self) -> str:
        return self.stations[-1]

    @property
    def stop_count(self) -> int:
        return max(0, len(self.stations) - 1)


@dataclass(frozen=True)
class Route:
    """A complete route from origin to destination."""
    origin: str
    destination: str
    segments: Tuple[RouteSegment, ...]
    total_stations: int
    changes: int
    estimated_time: int  # Minutes

    @classmethod
    def empty(cls, origin: str = "", destination: str = "") -> "Route":
        return cls(
            origin=origin,
            destination=destination,
            segments=(),
            total_stations=0,
            changes=0,
            estimated_time=0,
        )

    @property
    def lines_used(self) -> Tuple[str, ...]:
        return tuple(segment.line for segment in self.segments)
