"""
Helix - Main Application.

FastAPI application serving the contacts app's tag and contact-list endpoints.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID, uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from helix import __version__
from helix.config import get_settings
from helix.exceptions import HelixException
from helix.schemas import ErrorDetail, ErrorResponse, HealthResponse

# Import module routers
from helix.auth.router import router as auth_router
from helix.modules.tags import router as tags_router
from helix.modules.contacts import router as contacts_router

# Configure standard logging
logging.basicConfig(
    level=get_settings().app_log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("helix")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    logger.info(
        f"Starting Helix API v{__version__} "
        f"[env={settings.app_env}] "
        f"[storage={settings.storage_backend}] "
        f"[features={settings.features.to_dict()}]"
    )
    yield
    logger.info("Shutting down Helix API")


# Create FastAPI application
app = FastAPI(
    title="Helix API",
    description="Tag management and contact browsing for the Helix contacts app.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Middleware
# =============================================================================


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Assign the request id, echo it back and log the request around it."""
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    request.state.request_id = request_id
    logger.info(f"[{request_id}] {request.method} {request.url.path}")

    response = await call_next(request)

    response.headers["X-Request-ID"] = request_id
    logger.info(f"[{request_id}] {request.method} {request.url.path} -> {response.status_code}")
    return response


# =============================================================================
# Exception Handlers
# =============================================================================


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Render the ``{"error": {...}}`` body; ids that are not UUIDs are dropped."""
    request_id = getattr(request.state, "request_id", None)
    try:
        request_id = str(UUID(request_id)) if request_id else None
    except ValueError:
        request_id = None

    body = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details, request_id=request_id)
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@app.exception_handler(HelixException)
async def helix_exception_handler(request: Request, exc: HelixException):
    """Handle Helix custom exceptions."""
    logger.warning(f"HelixException on {request.url.path}: {exc.code} - {exc.message}")
    return _error_response(request, exc.status_code, exc.code, exc.message, exc.details)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled {type(exc).__name__} on {request.url.path}: {exc}")
    message = str(exc) if get_settings().app_debug else "An unexpected error occurred"
    return _error_response(request, 500, "INTERNAL_ERROR", message)


# =============================================================================
# Health Check
# =============================================================================


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Health check endpoint."""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        version=__version__,
        features=settings.features.to_dict(),
        storage_backend=settings.storage_backend,
        app_env=settings.app_env,
        is_production=settings.is_production,
    )


# =============================================================================
# Register Module Routers
# =============================================================================

app.include_router(auth_router)
app.include_router(tags_router)
app.include_router(contacts_router)


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint redirect to docs."""
    return {"message": "Welcome to Helix API", "docs": "/docs"}
