import hmac
import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
load_dotenv()  # Load .env file before importing settings

from fastapi import APIRouter, FastAPI, BackgroundTasks, Header, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from core.config import settings
from core.containers import RoutingContainer
from core.rate_limiter import limiter, rate_limit_exceeded_handler, RateLimits

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)


# Health and admin endpoints. Declared once at import so their rate limits
# are registered once, however many apps create_app() builds.
system_router = APIRouter(tags=["system"])


@system_router.get("/health")
@limiter.limit(RateLimits.HEALTH)
async def health_check(request: Request):
    """Health check endpoint.

    Returns 503 until the network data is loaded into memory.
    """
    store = request.app.state.container.network_store()

    if not store.is_loaded:
        return JSONResponse(
            status_code=503,
            content={
                "status": "loading",
                "message": "Network data is being loaded into memory"
            }
        )

    return {
        "status": "healthy",
        "network_store": {
            "loaded": True,
            "source": store.source,
            "load_time_seconds": round(store.load_time_seconds, 3),
            "stats": store.stats
        }
    }


@system_router.post("/admin/reload-network")
@limiter.limit(RateLimits.ADMIN_RELOAD)
async def reload_network(
    request: Request,
    background_tasks: BackgroundTasks,
    x_admin_token: str = Header(None, alias="X-Admin-Token")
):
    """Reload network data without restarting the server.

    During reload the old data remains available for requests. Once the
    new graph is built it replaces the old one atomically.

    Requires X-Admin-Token header for authentication.
    """
    if not x_admin_token or not settings.ADMIN_TOKEN:
        raise HTTPException(status_code=401, detail="Unauthorized: Missing admin token")
    if not hmac.compare_digest(settings.ADMIN_TOKEN, x_admin_token):
        raise HTTPException(status_code=401, detail="Unauthorized: Invalid admin token")

    store = request.app.state.container.network_store()

    def do_reload():
        try:
            store.reload_data(settings.NETWORK_DATA_PATH)
        except ValueError:
            logger.exception("Network reload failed, keeping current data")

    background_tasks.add_task(do_reload)

    return {
        "status": "reload_initiated",
        "message": "Network data reload started in background"
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the network into memory before serving requests."""
    store = app.state.container.network_store()
    if not store.is_loaded:
        store.load_data(settings.NETWORK_DATA_PATH)
    yield


def create_app(container: Optional[RoutingContainer] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Transit Routing API",
        description="Route planning over a station and line network",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.container = container or RoutingContainer()

    # CORS middleware - Public API, no credentials needed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Register routers
    from adapters.http.api.routing.routers import routing_router
    app.include_router(system_router)
    app.include_router(routing_router, prefix="/api/v1")

    return app


app = create_app()
