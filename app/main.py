# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Contact Us API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main          # binds API_HOST:API_PORT
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.auth import routes as auth_routes
from app.config import settings
from app.exceptions import (
    ContactApiException,
    contact_api_exception_handler,
    validation_exception_handler,
)
from app.routers import contact_us, health, hello_world
from core.services import ContactUsService, ContactUsValidator
from lib.cache import ReadThroughCache, create_redis_client
from lib.supabase_client import ContactUsRepository, create_supabase_client

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def build_contact_us_service() -> ContactUsService:
    """Wire the repository, cache and validator from settings."""
    repository = ContactUsRepository(
        create_supabase_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY),
        table=settings.CONTACT_US_TABLE,
        search_column=settings.CONTACT_US_SEARCH_COLUMN,
    )
    cache = ReadThroughCache(
        create_redis_client(settings.REDIS_URL, timeout=settings.REQUEST_TIMEOUT_SECONDS),
        ttl_seconds=settings.CACHE_TTL_SECONDS,
        namespace=settings.CACHE_NAMESPACE,
    )
    return ContactUsService(
        repository=repository,
        cache=cache,
        validator=ContactUsValidator(),
        timeout_seconds=settings.REQUEST_TIMEOUT_SECONDS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: connect the database client and the cache
    - Shutdown: close the cache connection pool
    """
    logger.info(f"Starting Contact Us API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    service = build_contact_us_service()
    app.state.contact_us_service = service

    yield

    logger.info("Shutting down Contact Us API")
    await service.cache.close()


# Create FastAPI application
app = FastAPI(
    title="Contact Us API",
    description="CRUD backend for contact requests with a short-lived read cache.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Inspect and verify bearer tokens",
        },
        {
            "name": "Contact Us",
            "description": "Create, search, page through and delete contact requests",
        },
        {
            "name": "Hello World",
            "description": "Smoke-test greeting",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(ContactApiException, contact_api_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "status": False,
            "message": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# The same authorization router answers under both prefixes
app.include_router(auth_routes.router, prefix="/auth", tags=["Auth"])
app.include_router(auth_routes.router, prefix="/authorization", tags=["Auth"])

app.include_router(hello_world.router, prefix="/hello-world", tags=["Hello World"])

app.include_router(contact_us.router, prefix=settings.CONTACT_US_PREFIX, tags=["Contact Us"])

app.include_router(health.router, prefix="/api/v1", tags=["Health"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Contact Us API",
        "message": "app-root",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    uvicorn.run(
        app,
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    run()
