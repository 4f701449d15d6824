"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from recipefinder.config import get_settings
from recipefinder.database import init_db
from recipefinder.logging_config import LoggingContext, configure_logging, get_logger
from recipefinder.routers import (
    categories_router,
    kitchen_router,
    recipes_router,
    shopping_router,
    units_router,
)

settings = get_settings()

# Configure logging on module load
configure_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(
        f"Starting RecipeFinder API (environment={settings.environment}, "
        f"default system={settings.default_measurement_system.value})"
    )
    init_db()
    yield
    logger.info("Shutting down RecipeFinder API")


app = FastAPI(
    title="RecipeFinder API",
    description="Ingredient categorization, unit conversion and shopping lists",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag log lines emitted while handling a request with its id."""
    request_id = request.headers.get("x-request-id") or uuid4().hex
    with LoggingContext(request_id=request_id):
        response = await call_next(request)
    response.headers["x-request-id"] = request_id
    return response


app.include_router(categories_router)
app.include_router(units_router)
app.include_router(recipes_router)
app.include_router(shopping_router)
app.include_router(kitchen_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "recipefinder-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "RecipeFinder API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
