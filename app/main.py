"""
FastAPI application factory.

Creates and configures the FastAPI application instance. Run with
``uvicorn app.main:create_app --factory``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.router import api_router
from app.core.config import Settings, get_settings
from app.core.exceptions import TodoAppError
from app.core.logging import configure_logging
from app.core.security import TokenService
from app.db.repositories.memory import InMemoryCredentialStore, InMemoryTodoStore
from app.db.session import build_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info("Starting %s %s (storage: %s)", settings.PROJECT_NAME, settings.VERSION, settings.STORAGE_BACKEND)
    yield
    if app.state.engine is not None:
        app.state.engine.dispose()
    logger.info("Shutting down application...")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework errors in the response envelope."""
    return JSONResponse(status_code=exc.status_code, content={"status": exc.status_code, "message": exc.detail},
                        headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Bad request on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST,
                        content={"status": status.HTTP_400_BAD_REQUEST, "message": "Bad request"})


async def domain_exception_handler(request: Request, exc: TodoAppError) -> JSONResponse:
    """Last resort for domain errors a service did not translate."""
    logger.error("Unhandled domain error on %s: %s", request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                        content={"status": status.HTTP_500_INTERNAL_SERVER_ERROR,
                                 "message": "Internal server error"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application and its collaborators.

    Args:
        settings: Explicit settings; read from the environment when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Multi-user todo list API with token authentication.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan)

    app.state.settings = settings
    app.state.token_service = TokenService(settings.SECRET_KEY, algorithm=settings.ALGORITHM,
                                           expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    if settings.STORAGE_BACKEND == "memory":
        app.state.engine = None
        app.state.credential_store = InMemoryCredentialStore()
        app.state.todo_store = InMemoryTodoStore()
    else:
        app.state.engine = build_engine(settings)
        app.state.credential_store = None
        app.state.todo_store = None

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(TodoAppError, domain_exception_handler)

    # Include API router
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/")
    async def root():
        """Root endpoint - health check."""
        return {
            "message": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "status": "healthy"
        }

    @app.get("/ping")
    async def ping():
        return {"message": "pong"}

    return app
