from .routing_container import RoutingContainer

__all__ = ["RoutingContainer"]
