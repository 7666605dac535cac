"""Stowage domain API package."""

from stowage.api.routes import container_router, item_router, report_router, waste_router

__all__ = ["item_router", "container_router", "waste_router", "report_router"]
