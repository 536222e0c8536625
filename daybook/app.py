"""
FastAPI Application Entry Point
Daybook Backend API Server

Usage:
    # Development with auto-reload
    uvicorn daybook.app:app --reload

    # Production
    uvicorn daybook.app:app --host 0.0.0.0 --port 5000

    # Via the CLI
    daybook start
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from daybook import __version__
from daybook.config.loader import get_config
from daybook.core.exceptions import ConflictError, DaybookError
from daybook.core.logger import get_logger
from daybook.handlers import register_fastapi_routes

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI application lifecycle management"""
    logger.info("========== Daybook Backend Starting ==========")

    try:
        config_loader = get_config()
        logger.info(f"✓ Configuration loaded: {config_loader.config_file}")

        from daybook.core.db import get_db

        db = get_db()
        logger.info(f"✓ Database initialized: {db.db.name}")

        if not config_loader.get("auth.admin_password"):
            logger.warning("ADMIN_PASSWORD is not configured, every login will be rejected")

        logger.info("========== Daybook Backend Ready ==========")

    except Exception as e:
        logger.error(f"Failed to initialize backend: {e}", exc_info=True)
        raise

    yield

    logger.info("========== Daybook Backend Shutting Down ==========")


def _error_body(message: str) -> Dict[str, Any]:
    return {
        "success": False,
        "error": message,
        "timestamp": datetime.now().isoformat(),
    }


def _operation_name(request: Request) -> str:
    route = request.scope.get("route")
    name = getattr(route, "name", None) or "process request"
    return name.replace("_", " ")


async def daybook_error_handler(request: Request, exc: DaybookError) -> JSONResponse:
    body = _error_body(exc.message)
    if isinstance(exc, ConflictError) and exc.existing is not None:
        body["data"] = exc.existing
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=body)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{location}: {message}"
    return JSONResponse(status_code=400, content=_error_body(message))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500, content=_error_body(f"Failed to {_operation_name(request)}")
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Daybook Backend API",
        description="Personal daily-activity tracker",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_config().get("server.cors_origins", ["*"]),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DaybookError, daybook_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    register_fastapi_routes(app, prefix="/api")

    @app.get("/")
    async def root():
        """Root endpoint with API information"""
        return {
            "service": "Daybook Backend API",
            "version": __version__,
            "status": "running",
            "docs": "/docs",
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        from daybook.core.db import get_db

        try:
            database_ok = get_db().ping()
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            database_ok = False

        return {
            "status": "healthy" if database_ok else "unhealthy",
            "service": "daybook-backend",
            "database": database_ok,
        }

    logger.info("✓ FastAPI application created with routes")
    return app


app = create_app()
