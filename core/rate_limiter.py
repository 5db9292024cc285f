"""Rate limiting configuration for the API.

Uses SlowAPI with in-memory storage (suitable for single-instance deployments).
For multi-instance deployments, set RATE_LIMIT_STORAGE_URI to a Redis URL.

Rate limits are defined per endpoint type:
- Critical: Computationally expensive endpoints (route-planner, reload)
- Medium: Standard lookups (stations, interchanges)
- Low: Lightweight endpoints (health)
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from core.config import settings


def get_client_identifier(request: Request) -> str:
    """Get client identifier for rate limiting.

    Uses X-Forwarded-For header if behind a proxy, otherwise remote address.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP (original client)
        return forwarded.split(",")[0].strip()

    return get_remote_address(request)


limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=["200/minute"],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
)


class RateLimits:
    """Centralized rate limit definitions."""

    # Critical - computationally expensive
    ROUTE_PLANNER = "60/minute"      # Shortest path search
    ADMIN_RELOAD = "2/minute"        # Rebuilds the network graph

    # Medium - standard lookups
    STATIONS = "200/minute"
    INTERCHANGES = "200/minute"

    # Low - lightweight
    HEALTH = "1000/minute"
    DEFAULT = "200/minute"


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Custom handler for rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": f"Rate limit exceeded: {exc.detail}",
            "retry_after": getattr(exc, "retry_after", 60),
        },
        headers={
            "Retry-After": str(getattr(exc, "retry_after", 60)),
            "X-RateLimit-Limit": str(exc.detail) if exc.detail else "unknown",
        }
    )
