"""Menu API package."""

from menu.api.routes import get_catalog, menu_router

__all__ = ["menu_router", "get_catalog"]
