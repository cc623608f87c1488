from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from support_chat.api.middleware.request_context import RequestContextMiddleware
from support_chat.api.v1.routers import (
    admin_conversations,
    attachments,
    health,
    messages,
    ws,
)
from support_chat.application.exceptions import (
    ForbiddenError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from support_chat.application.uow import UoWFactory
from support_chat.config import settings
from support_chat.infrastructure.db.session import engine
from support_chat.infrastructure.db.uow import open_uow
from support_chat.infrastructure.ws.presence import PresenceRegistry
from support_chat.services.delivery_broker import DeliveryBroker

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    logger.info("Support chat service starting")

    yield

    await engine.dispose()
    logger.info("Database connection pool closed")


def create_app(uow_factory: UoWFactory | None = None) -> FastAPI:
    app = FastAPI(
        title="Support Chat Service",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.uow_factory = uow_factory or open_uow
    app.state.presence = PresenceRegistry()
    app.state.broker = DeliveryBroker(
        app.state.presence,
        app.state.uow_factory,
        storage_timeout=settings.STORAGE_TIMEOUT_SECONDS,
        push_timeout=settings.PUSH_TIMEOUT_SECONDS,
        max_content_length=settings.MESSAGE_MAX_LENGTH,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(messages.router)
    app.include_router(attachments.router)
    app.include_router(admin_conversations.router)
    app.include_router(ws.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def _not_found(_req: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.detail})

    @app.exception_handler(ForbiddenError)
    async def _forbidden(_req: Request, exc: ForbiddenError) -> JSONResponse:
        return JSONResponse(status_code=403, content={"detail": exc.detail})

    @app.exception_handler(ValidationError)
    async def _validation(_req: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.detail})

    @app.exception_handler(StorageError)
    async def _storage(_req: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure: %s", exc.detail)
        return JSONResponse(status_code=503, content={"detail": exc.detail})
