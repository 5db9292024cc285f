from dependency_injector import containers, providers

from src.network_bc.routing.network_store import NetworkStore
from src.network_bc.routing.routing_service import RoutingService


class RoutingContainer(containers.DeclarativeContainer):
    """Dependency injection container for the routing bounded context."""

    # Process-wide network store (override with providers.Object in tests)
    network_store = providers.Callable(NetworkStore.get_instance)

    # Built per request from the store's current snapshot
    routing_service = providers.Factory(
        RoutingService.from_snapshot,
        snapshot=network_store.provided.snapshot,
    )
