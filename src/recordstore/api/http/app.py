"""FastAPI application factory and setup."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from loguru import logger
from starlette.responses import JSONResponse

from recordstore.api.http.app_data import ApplicationDependencies
from recordstore.api.http.routers import book, health
from recordstore.core.errors import CommitError, IllegalStateError, ValidationError
from recordstore.core.services import DbManageService, DbSessionService
from recordstore.runtime.config.config_data import ConfigData
from recordstore.runtime.context import get_config


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "detail": str(exc),
                "violations": [
                    {"field": v.field, "message": v.message} for v in exc.violations
                ],
            },
        )

    @app.exception_handler(IllegalStateError)
    async def illegal_state_handler(request: Request, exc: IllegalStateError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})

    @app.exception_handler(CommitError)
    async def commit_error_handler(request: Request, exc: CommitError) -> JSONResponse:
        logger.error("Request {} {} failed to commit: {}", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)}
        )


def create_app(config: ConfigData | None = None) -> FastAPI:
    """Build the API for ``config`` (the current context's by default)."""
    config = config or get_config()

    database_service = DbSessionService(config.database, config.app.environment)
    if config.database.create_tables:
        DbManageService(database_service.engine).create_all()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        logger.info("Shutting down; disposing database engine")
        database_service.dispose()

    app = FastAPI(title=config.app.name, lifespan=lifespan)
    app.state.app_dependencies = ApplicationDependencies(
        config=config, database_service=database_service
    )
    app.include_router(health.router)
    app.include_router(book.router)
    _register_exception_handlers(app)
    return app
