"""Warehouse domain API package."""

from warehouse.api.routes import entry_router, product_router, supplier_router, withdrawal_router

__all__ = ["product_router", "supplier_router", "entry_router", "withdrawal_router"]
