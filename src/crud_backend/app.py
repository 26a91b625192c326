"""
FastAPI application factory
Users and posts under /v1, backed by the store selected in Settings
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import Depends, FastAPI

from crud_backend import __version__
from crud_backend.api.routes import health, users, posts
from crud_backend.config.settings import Settings, load_settings
from crud_backend.database.factory import Stores, open_stores, close_stores
from crud_backend.services.posts_service import PostsService
from crud_backend.services.users_service import UsersService
from crud_backend.utils.auth import authenticate_api
from crud_backend.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


def bind_stores(app: FastAPI, stores: Stores) -> None:
    """Attach the stores and the services built on them to app.state"""
    app.state.stores = stores
    app.state.users_service = UsersService(stores.users)
    app.state.posts_service = PostsService(stores.posts)


def create_app(settings: Optional[Settings] = None, stores: Optional[Stores] = None) -> FastAPI:
    """
    Build the application

    Args:
        settings: Runtime configuration; read from the environment when omitted
        stores: Pre-built stores. When given they are bound immediately and
            the caller owns their lifecycle; otherwise they are opened on
            startup and closed on shutdown.
    """
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        if stores is not None:
            yield
            return

        opened = await open_stores(settings)
        bind_stores(app, opened)
        try:
            yield
        finally:
            await close_stores(opened)

    app = FastAPI(
        title="CRUD Backend",
        description="Users and posts REST API",
        version=__version__,
        lifespan=lifespan
    )
    app.state.settings = settings
    if stores is not None:
        bind_stores(app, stores)

    setup_error_handling(app)

    users_dependencies = [Depends(authenticate_api)] if settings.enable_auth else []

    app.include_router(health.router, prefix="/v1/health", tags=["Health"])
    app.include_router(users.router, prefix="/v1/users", tags=["Users"], dependencies=users_dependencies)
    app.include_router(posts.router, prefix="/v1/posts", tags=["Posts"])

    logger.info(f"Application created (store={settings.store_backend}, auth={settings.enable_auth})")
    return app
