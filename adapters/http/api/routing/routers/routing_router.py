"""Route planning API endpoints."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from core.containers import RoutingContainer
from core.rate_limiter import limiter, RateLimits
from adapters.http.api.routing.schemas import (
    InterchangeResponse,
    InterchangesResponse,
    RoutePlannerResponse,
    StationResponse,
    route_to_response,
)
from src.network_bc.routing.routing_service import RoutingService

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/routing", tags=["routing"])


def get_routing_service(request: Request) -> RoutingService:
    """Resolve the routing service from the app's container.

    Returns 503 while the network data is still loading.
    """
    container: RoutingContainer = request.app.state.container
    store = container.network_store()
    if not store.is_loaded:
        raise HTTPException(status_code=503, detail="Network data is being loaded")
    return container.routing_service()


@router.get("/route-planner", response_model=RoutePlannerResponse)
@limiter.limit(RateLimits.ROUTE_PLANNER)
def plan_route(
    request: Request,
    from_station: str = Query(..., alias="from", description="Origin station ID"),
    to_station: str = Query(..., alias="to", description="Destination station ID"),
    service: RoutingService = Depends(get_routing_service),
):
    """Plan a route between two stations.

    Returns the route with the fewest stations, biased towards fewer line
    changes, split into one segment per line ridden.

    **Example requests:**
    ```
    GET /routing/route-planner?from=bank&to=oxford-circus
    GET /routing/route-planner?from=waterloo&to=kings-cross-st-pancras
    ```
    """
    unknown = [s for s in (from_station, to_station) if not service.station_exists(s)]
    if unknown:
        logger.info(f"Route planner called with unknown station(s): {unknown}")
        return RoutePlannerResponse(
            success=False,
            message=f"Unknown station: {', '.join(dict.fromkeys(unknown))}",
        )

    route = service.find_route(from_station, to_station)
    if route is None:
        return RoutePlannerResponse(
            success=False,
            message="No route found between these stations",
        )

    return RoutePlannerResponse(
        success=True,
        route=route_to_response(route, service.line_name, service.describe_route(route)),
    )


@router.get("/interchanges", response_model=InterchangesResponse)
@limiter.limit(RateLimits.INTERCHANGES)
def list_interchanges(
    request: Request,
    service: RoutingService = Depends(get_routing_service),
):
    """List stations served by more than one line."""
    interchanges = [
        InterchangeResponse(
            station_id=station_id,
            station_name=service.station_name(station_id),
            lines=lines,
        )
        for station_id, lines in sorted(service.get_interchanges().items())
    ]
    return InterchangesResponse(count=len(interchanges), interchanges=interchanges)


@router.get("/stations/{station_id}", response_model=StationResponse)
@limiter.limit(RateLimits.STATIONS)
def get_station(
    request: Request,
    station_id: str,
    service: RoutingService = Depends(get_routing_service),
):
    """Get a station record with the lines that serve it."""
    station = service.get_station(station_id)
    if station is None:
        raise HTTPException(status_code=404, detail=f"Station {station_id} not found")

    lines = sorted(service.graph.lines_at(station_id)) or list(station.lines)
    return StationResponse(
        id=station.id,
        name=station.name,
        lat=station.lat,
        lon=station.lon,
        lines=lines,
        zones=list(station.zones),
        is_interchange=len(lines) > 1,
    )
