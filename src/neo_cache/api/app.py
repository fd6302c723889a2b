"""Neo Cache API application.

FastAPI application exposing the internal cache consistency endpoints. The
cache module is attached to ``app.state`` when the app is created; the
lifespan starts policy hot reload and closes clients on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from ..__version__ import __version__
from ..config.logging_config import setup_logging
from ..config.settings import CacheSettings, get_settings
from ..module import CacheModule, create_cache_module
from .exception_handlers import register_exception_handlers
from .routers import cache_consistency_router, cache_namespace_router, tenant_config_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    setup_logging()

    module: CacheModule = app.state.cache_module
    await module.start()
    logger.info(f"{module.settings.app_name} started")

    yield

    await module.aclose()


def create_app(
    module: Optional[CacheModule] = None,
    settings: Optional[CacheSettings] = None,
    is_production: bool = True,
) -> FastAPI:
    """Create the cache API.

    Args:
        module: Pre-wired cache module, built from settings when omitted
        settings: Settings used to build the module
        is_production: Hide unexpected error details from responses

    Returns:
        Configured FastAPI application
    """
    if module is None:
        module = create_cache_module(settings or get_settings())

    app = FastAPI(
        title="Neo Cache API",
        version=__version__,
        description="Cache consistency engine: read-through caching and delayed double-delete invalidation",
        lifespan=lifespan,
    )
    app.state.cache_module = module

    register_exception_handlers(app, is_production=is_production)

    app.include_router(cache_consistency_router)
    app.include_router(cache_namespace_router)
    app.include_router(tenant_config_router)

    @app.get("/health", tags=["Health"])
    async def health():
        return {
            "status": "ok",
            "clients": module.client_provider.client_keys,
            "lock_nodes": len(module.redlock.nodes),
            "pending_second_deletes": module.consistency_service.pending_count,
        }

    logger.info("Created Neo Cache API")
    return app
