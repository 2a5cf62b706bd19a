# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the bakery catalog API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import asyncio
import json
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.auth import get_current_admin
from app.auth import routes as auth_routes
from app.config import get_settings
from app.exceptions import (
    CatalogException,
    catalog_exception_handler,
    validation_exception_handler,
)
from app.revalidation import (
    REVALIDATE_CHANNEL,
    NullViewInvalidator,
    RedisViewInvalidator,
    renderer_manager,
)
from app.revalidation import routes as revalidation_routes
from app.routers import admin_categories, admin_products, catalog, dashboard, health, testimonials
from lib.supabase_client import create_supabase_client

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Global flag for Redis listener task
_redis_listener_task = None
_shutdown_event = None


async def redis_pubsub_listener():
    """
    Background task that forwards revalidation events to renderers.

    Any process that mutates the catalog publishes on REVALIDATE_CHANNEL;
    this listener relays each event to the renderer WebSockets connected
    to this process.
    """
    import redis.asyncio as aioredis

    logger.info("Starting Redis pub/sub listener for revalidation events")

    redis_client = None
    pubsub = None
    try:
        redis_client = aioredis.from_url(settings.REDIS_URL)
        pubsub = redis_client.pubsub()
        await pubsub.subscribe(REVALIDATE_CHANNEL)

        async for message in pubsub.listen():
            if _shutdown_event and _shutdown_event.is_set():
                break

            if message["type"] == "message":
                try:
                    event = json.loads(message["data"])
                    await renderer_manager.broadcast(event)
                    logger.debug(f"Forwarded revalidation for {event.get('paths')}")

                except json.JSONDecodeError as e:
                    logger.warning(f"Invalid JSON in Redis message: {e}")
                except Exception as e:
                    logger.error(f"Error processing Redis message: {e}")

    except asyncio.CancelledError:
        logger.info("Redis pub/sub listener cancelled")
    except Exception as e:
        logger.error(f"Redis pub/sub listener error: {e}")
    finally:
        try:
            if pubsub is not None:
                await pubsub.unsubscribe(REVALIDATE_CHANNEL)
            if redis_client is not None:
                await redis_client.aclose()
        except Exception as e:
            logger.debug(f"Error closing Redis listener: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: create the Supabase client and the view invalidator, start
      the revalidation listener
    - Shutdown: stop the listener
    """
    global _redis_listener_task, _shutdown_event

    # Startup
    logger.info(f"Starting bakery catalog API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    app.state.supabase = create_supabase_client(settings)

    if settings.REVALIDATION_ENABLED:
        app.state.invalidator = RedisViewInvalidator(settings.REDIS_URL)
        _shutdown_event = asyncio.Event()
        _redis_listener_task = asyncio.create_task(redis_pubsub_listener())
    else:
        logger.info("Revalidation disabled")
        app.state.invalidator = NullViewInvalidator()

    yield

    # Shutdown
    logger.info("Shutting down bakery catalog API")

    if _shutdown_event:
        _shutdown_event.set()
    if _redis_listener_task:
        _redis_listener_task.cancel()
        try:
            await _redis_listener_task
        except asyncio.CancelledError:
            pass


# Create FastAPI application
app = FastAPI(
    title="Bakery Catalog API",
    description="""
## Home Bakery Catalog API

Backs a home bakery's storefront (categories, gallery, product pages,
testimonials) and its admin panel.

### Key Features

- **Catalog management**: categories, products, and product photos
- **Photo workflow**: single and batch uploads, one primary photo per product
- **Testimonials**: customer submissions with optional photo, admin featuring
- **Revalidation**: renderers subscribe to `/ws/revalidate` to rebuild cached pages

Admin endpoints require a Supabase Auth access token as a Bearer token.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Verify admin access tokens"},
        {"name": "Catalog", "description": "Public storefront reads"},
        {"name": "Testimonials", "description": "Customer testimonials"},
        {"name": "Admin: Categories", "description": "Manage categories"},
        {"name": "Admin: Products", "description": "Manage products and their photos"},
        {"name": "Admin: Testimonials", "description": "Moderate testimonials"},
        {"name": "Admin: Dashboard", "description": "Catalog counters"},
        {"name": "Revalidation", "description": "Renderer cache invalidation"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
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

@app.exception_handler(CatalogException)
async def handle_catalog_exception(request: Request, exc: CatalogException):
    """Handle catalog exceptions raised from routes."""
    return await catalog_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle request body/parameter validation failures."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

admin_only = [Depends(get_current_admin)]

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Public storefront endpoints
app.include_router(
    catalog.router,
    prefix="/api/v1",
    tags=["Catalog"]
)

app.include_router(
    testimonials.router,
    prefix="/api/v1/testimonials",
    tags=["Testimonials"]
)

# Admin endpoints
app.include_router(
    admin_categories.router,
    prefix="/api/v1/admin/categories",
    tags=["Admin: Categories"],
    dependencies=admin_only,
)

app.include_router(
    admin_products.router,
    prefix="/api/v1/admin/products",
    tags=["Admin: Products"],
    dependencies=admin_only,
)

app.include_router(
    testimonials.admin_router,
    prefix="/api/v1/admin/testimonials",
    tags=["Admin: Testimonials"],
    dependencies=admin_only,
)

app.include_router(
    dashboard.router,
    prefix="/api/v1/admin/dashboard",
    tags=["Admin: Dashboard"],
    dependencies=admin_only,
)

# Renderer revalidation WebSocket
app.include_router(
    revalidation_routes.router,
    tags=["Revalidation"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Bakery Catalog API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
