"""Inventory domain - products, suppliers and product categories"""

from .router import categories_router, router, suppliers_router

__all__ = ["router", "categories_router", "suppliers_router"]
