"""FastAPI application package for the asset server.

Serves fingerprinted, content-addressed static assets with conditional
caching. The request handler and its helpers live in `asset_server/logic/`;
route adapters live in `asset_server/routes/`.
"""

from __future__ import annotations

from asset_server.main import create_app

__all__ = ["create_app"]
