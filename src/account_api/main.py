"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown of the user store.
Middleware, exception handlers and routers are all registered here.

Configuration is explicit: Settings and the TokenService are built once
here and placed on app.state; handlers reach them through dependencies.
Building the TokenService fails fast if a signing secret is empty.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI

from account_api import __version__
from account_api.api import api_router
from account_api.api.responses import install_exception_handlers
from account_api.auth.jwt import TokenService
from account_api.config import Settings, get_settings
from account_api.db.engine import create_client
from account_api.services.user_store import MongoUserStore, StoreError, UserStore

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at
    shutdown. The store is opened once and shared by every request.
    """
    settings: Settings = app.state.settings
    logger.info(
        "account.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    store: Optional[UserStore] = getattr(app.state, "user_store", None)
    if store is None:
        store = MongoUserStore(create_client(settings), settings.mongo_database)
        try:
            await store.ping()
            await store.ensure_indexes()
        except StoreError as e:
            logger.error("account.store_unavailable", error=str(e))
            await store.close()
            raise
        app.state.user_store = store
    logger.info("account.store_connected")

    yield

    logger.info("account.shutdown")
    await store.close()
    logger.info("account.store_disconnected")


def create_app(
    settings: Optional[Settings] = None,
    user_store: Optional[UserStore] = None,
) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Account API",
        description="User registration, login and profile management",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.tokens = TokenService.from_settings(settings)
    if user_store is not None:
        app.state.user_store = user_store

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → ResponseHeaders → handler

    from account_api.middleware.headers import ResponseHeadersMiddleware
    from account_api.middleware.request_id import RequestIdMiddleware

    app.add_middleware(ResponseHeadersMiddleware, cors_origin=settings.cors_origin)
    app.add_middleware(RequestIdMiddleware)

    install_exception_handlers(app)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: account_api.main:app)
app = create_app()
