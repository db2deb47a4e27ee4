"""FastAPI application factory and configuration."""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.database import init_db
from app.dependencies import require_service_key
from app.logging_config import setup_logging

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ", ".join(CORS_METHODS),
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Client-Info, Apikey",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    setup_logging()
    logger.info(f"Starting custom domain service in {settings.ENVIRONMENT} mode")
    logger.info(f"Database: {settings.DATABASE_URL.split('@')[-1]}")  # Hide credentials
    await init_db()
    if not settings.netlify_configured:
        logger.warning("Netlify credentials not configured; registrar endpoints will fail")
    yield
    logger.info("Shutting down custom domain service")


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = str(first["loc"][-1]) if first.get("loc") else "request"
    if first.get("type") == "missing":
        return f"{field} is required"
    return f"{field}: {first.get('msg', 'invalid value')}"


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"success": false, "error": ...}``."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if isinstance(exc.detail, dict):
            body = exc.detail
        else:
            body = {"success": False, "error": str(exc.detail)}
        return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "error": _validation_message(exc),
                "code": "VALIDATION_ERROR",
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Unknown error occurred", "code": "INTERNAL_ERROR"},
            headers=CORS_HEADERS,
        )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Custom Domain Service",
        description="Custom domain verification, Netlify registration and SSL tracking",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Plain OPTIONS requests get an empty 200; preflights are handled by CORSMiddleware
    @app.middleware("http")
    async def answer_options(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)
        return await call_next(request)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=CORS_METHODS,
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "custom-domain-service",
            "version": "0.1.0",
            "environment": settings.ENVIRONMENT,
        }

    # Mount routes
    from app.routes import domains, provisioning

    api_dependencies = [Depends(require_service_key)]
    app.include_router(
        provisioning.router, prefix="/api", tags=["Provisioning"], dependencies=api_dependencies
    )
    app.include_router(
        domains.router, prefix="/api", tags=["Domains"], dependencies=api_dependencies
    )

    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )
