"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from project_hub import __version__
from project_hub.api.routes import local_repo, notes, projects, snapshots
from project_hub.config import Settings, get_settings
from project_hub.database import Database, init_db
from project_hub.exceptions import (
    BranchExistsError,
    NotFoundError,
    PreconditionFailedError,
    StorageError,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/mcp/project-hub"


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors onto HTTP responses."""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})

    @app.exception_handler(PreconditionFailedError)
    async def precondition_handler(request: Request, exc: PreconditionFailedError):
        code = status.HTTP_409_CONFLICT if isinstance(exc, BranchExistsError) else status.HTTP_400_BAD_REQUEST
        return JSONResponse(status_code=code, content={"detail": exc.message})

    @app.exception_handler(StorageError)
    @app.exception_handler(SQLAlchemyError)
    async def storage_handler(request: Request, exc: Exception):
        logger.error("Storage failure on %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal storage error"},
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; the record store is opened by the lifespan."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        database = Database(settings.database_url, echo=settings.database_echo)
        app.state.database = database
        try:
            await init_db(database, create_schema=settings.create_schema)
            yield
        finally:
            # Shutdown
            await database.dispose()

    app = FastAPI(
        title="Project Hub API",
        description="Local project tracking: projects, local history, branches and notes",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(projects.router, prefix=API_PREFIX, tags=["Projects"])
    app.include_router(local_repo.router, prefix=API_PREFIX, tags=["Local Repository"])
    app.include_router(snapshots.router, prefix=API_PREFIX, tags=["File Snapshots"])
    app.include_router(notes.router, prefix=API_PREFIX, tags=["Notes"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app


settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app(settings)
