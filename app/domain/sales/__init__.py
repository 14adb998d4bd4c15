"""Sales domain - checkout, cancellation and stock movement"""

from .router import items_router, router

__all__ = ["router", "items_router"]
