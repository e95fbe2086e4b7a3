"""APIRouter registration for the asset server."""

from __future__ import annotations

from asset_server.routes.assets import router as assets_router
from asset_server.routes.health import router as health_router

__all__ = ["assets_router", "health_router"]
