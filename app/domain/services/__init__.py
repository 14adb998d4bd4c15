"""Service catalogue domain"""

from .router import categories_router, router

__all__ = ["router", "categories_router"]
