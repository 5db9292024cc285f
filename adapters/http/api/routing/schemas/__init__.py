from .routing_schemas import (
    RouteStationResponse,
    RouteSegmentResponse,
    RouteResponse,
    RoutePlannerResponse,
    InterchangeResponse,
    InterchangesResponse,
    StationResponse,
    route_to_response,
)

__all__ = [
    "RouteStationResponse",
    "RouteSegmentResponse",
    "RouteResponse",
    "RoutePlannerResponse",
    "InterchangeResponse",
    "InterchangesResponse",
    "StationResponse",
    "route_to_response",
]
