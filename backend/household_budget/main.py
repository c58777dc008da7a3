from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from ulid import ULID

from .api import api_router
from .api.errors import register_error_handlers
from .config import AppConfig
from .database import Database

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the application around one shared Database."""
    config = config or AppConfig()
    database = Database(
        config.database.url,
        max_connections=config.database.max_connections,
        echo=config.database.echo,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle startup and shutdown events."""
        database.create_schema()
        logger.info("database_ready", url=database.url.render_as_string(hide_password=True))
        yield
        # Cleanup on shutdown
        database.dispose()

    app = FastAPI(
        title="Household Budget",
        description="Monthly household budgeting service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.database = database

    if config.cors.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def bind_request_id(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(ULID())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    register_error_handlers(app)

    # API routes
    app.include_router(api_router, prefix="/api/v1")

    return app
