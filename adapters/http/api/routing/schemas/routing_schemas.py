"""Route planner response schemas.

These schemas define the structure of route planning responses: a route
made of line segments, each listing the stations travelled through.
"""

from typing import List, Optional
from pydantic import BaseModel

from src.network_bc.routing.route import Route, RouteSegment
from src.network_bc.station.domain.entities.station import Station


class RouteStationResponse(BaseModel):
    """A station within a route segment."""
    id: str
    name: str
    lat: float
    lon: float

    @classmethod
    def from_station(cls, station: Station) -> "RouteStationResponse":
        return cls(id=station.id, name=station.name, lat=station.lat, lon=station.lon)


class RouteSegmentResponse(BaseModel):
    """A ride on a single line without changing."""
    line_id: str
    line_name: str
    line_color: str
    stop_count: int
    stations: List[str]
    station_details: List[RouteStationResponse] = []

    @classmethod
    def from_segment(cls, segment: RouteSegment, line_name: str) -> "RouteSegmentResponse":
        return cls(
            line_id=segment.line,
            line_name=line_name,
            line_color=segment.color,
            stop_count=segment.stop_count,
            stations=list(segment.stations),
            station_details=[RouteStationResponse.from_station(s) for s in segment.station_details],
        )


class RouteResponse(BaseModel):
    """Complete route from origin to destination."""
    origin: str
    destination: str
    total_stations: int
    changes: int
    estimated_time_minutes: int
    segments: List[RouteSegmentResponse]
    instructions: List[str] = []


class RoutePlannerResponse(BaseModel):
    """Response from the route planner endpoint.

    `success` is False (and `route` None) when no route exists; this is
    an expected outcome, not an error.
    """
    success: bool
    message: Optional[str] = None
    route: Optional[RouteResponse] = None


class InterchangeResponse(BaseModel):
    """A station served by more than one line."""
    station_id: str
    station_name: str
    lines: List[str]


class InterchangesResponse(BaseModel):
    count: int
    interchanges: List[InterchangeResponse]


class StationResponse(BaseModel):
    """Station reference record."""
    id: str
    name: str
    lat: float
    lon: float
    lines: List[str]
    zones: List[int] = []
    is_interchange: bool = False

    class Config:
        from_attributes = True


def route_to_response(route: Route, line_name, instructions: List[str]) -> RouteResponse:
    """Convert a domain Route; `line_name` maps a line id to its display name."""
    return RouteResponse(
        origin=route.origin,
        destination=route.destination,
        total_stations=route.total_stations,
        changes=route.changes,
        estimated_time_minutes=route.estimated_time,
        segments=[RouteSegmentResponse.from_segment(s, line_name(s.line)) for s in route.segments],
        instructions=instructions,
    )
