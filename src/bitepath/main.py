"""FastAPI application entry point."""

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from bitepath import __version__
from bitepath.config import get_settings
from bitepath.logging_config import LoggingContext, configure_logging, get_logger
from bitepath.routers import grocery_router

settings = get_settings()

# Configure logging on module load
configure_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(
        f"Starting BitePath grocery API (default units: {settings.default_display_system}, "
        f"storage: {settings.storage_path})"
    )
    yield
    logger.info("Shutting down BitePath grocery API")


app = FastAPI(
    title="BitePath Grocery API",
    description="Aggregated grocery lists from weekly meal plans",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

REQUEST_ID_HEADER = "X-Request-ID"
USER_ID_HEADER = "X-User-ID"


@app.middleware("http")
async def request_context(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Tag every log record of a request with its request and user ids."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    with LoggingContext(request_id=request_id, user_id=request.headers.get(USER_ID_HEADER)):
        response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


app.include_router(grocery_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "bitepath-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "BitePath Grocery API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }
