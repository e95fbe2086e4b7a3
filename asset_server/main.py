from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI

from asset_server.config import AppConfig, load_config
from asset_server.http.problem import handle_unexpected_error
from asset_server.logging_setup import configure_logging
from asset_server.logic.handler import AssetServer
from asset_server.logic.resolver import AssetResolver, FileSystemResolver
from asset_server.routes import assets_router, health_router

logger = logging.getLogger(__name__)


def create_app(resolver: Optional[AssetResolver] = None, config: Optional[AppConfig] = None) -> FastAPI:
    """Build the FastAPI application.

    Without an explicit resolver, assets are served from `assets.root` on disk.
    The assets router is mounted at `assets.mount_prefix`; the handler sees
    paths relative to it.
    """
    cfg = config or load_config()
    configure_logging(cfg.logging.level)

    if resolver is None:
        resolver = FileSystemResolver(cfg.assets.root, default_charset=cfg.assets.default_charset)
        logger.info("assets.resolver.filesystem root=%s", cfg.assets.root)

    app = FastAPI(title="Asset Server")
    app.state.asset_server = AssetServer(resolver)
    app.state.config = cfg

    app.add_exception_handler(Exception, handle_unexpected_error)
    app.include_router(health_router)
    # FastAPI rejects a bare "/" prefix; mounting at the root means no prefix
    prefix = "" if cfg.assets.mount_prefix == "/" else cfg.assets.mount_prefix
    app.include_router(assets_router, prefix=prefix)
    logger.info("assets.mounted prefix=%s", cfg.assets.mount_prefix)
    return app


__all__ = ["create_app"]
