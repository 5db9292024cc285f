from .routing_router import router as routing_router

__all__ = ["routing_router"]
