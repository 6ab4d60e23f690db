"""
FastAPI Application
==================

Application factory for the HTML to PDF service: middleware, exception
handlers mapping every failure to a structured JSON error, and the service
information endpoint.
"""

from contextlib import asynccontextmanager
import uuid
from typing import AsyncGenerator, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from html2pdf.api.responses import error_response, json_error
from html2pdf.api.routes.files import router as files_router
from html2pdf.config.logging import get_logger, setup_logging
from html2pdf.config.settings import Settings, get_settings
from html2pdf.core.errors import ConversionServiceError, PDFGenerationError
from html2pdf.core.rendering.pdf_generator import PlaywrightPDFGenerator
from html2pdf.models.schemas import ServiceInfo

logger = get_logger(__name__)

ENDPOINTS = {
    "GET /": "Service information and health check",
    "POST /files": "Convert HTML string to PDF file (direct download)",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    logger.info(
        "HTML to PDF Service started",
        port=settings.port,
        environment=settings.environment,
        health_check=f"http://localhost:{settings.port}/",
        convert_endpoint=f"POST http://localhost:{settings.port}/files",
    )
    try:
        yield
    finally:
        logger.info(
            "Shutting down HTML to PDF Service",
            active_renders=app.state.pdf_generator.active_renders,
        )


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def _request_target(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers translating exceptions into structured error bodies."""

    @app.exception_handler(ConversionServiceError)
    async def conversion_error_handler(
        request: Request, exc: ConversionServiceError
    ) -> JSONResponse:
        """Handle validation, size and rendering errors with their own codes."""
        settings: Settings = request.app.state.settings
        log = logger.bind(
            request_id=_request_id(request), error_code=exc.code, status_code=exc.status_code
        )

        if isinstance(exc, PDFGenerationError):
            log.error("PDF conversion error", error_message=str(exc))
        else:
            log.warning("Request rejected", error_message=exc.message)

        return error_response(
            exc,
            expose_details=bool(settings.expose_error_details),
            request_id=_request_id(request),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Report unmatched routes as ROUTE_NOT_FOUND and other HTTP errors generically."""
        if exc.status_code in (404, 405):
            message = f"Route {request.method} {_request_target(request)} not found"
            logger.info("Route not found", request_id=_request_id(request), route=message)
            return json_error(
                404, "Not Found", message, "ROUTE_NOT_FOUND", request_id=_request_id(request)
            )

        logger.error(
            "HTTP exception",
            status_code=exc.status_code,
            detail=exc.detail,
            request_id=_request_id(request),
        )
        return json_error(
            exc.status_code,
            "HTTP Error",
            str(exc.detail),
            f"HTTP_{exc.status_code}",
            request_id=_request_id(request),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """General exception handler for unexpected errors."""
        logger.error(
            "Unhandled exception",
            exception=str(exc),
            request_id=_request_id(request),
            exc_info=True,
        )
        return json_error(
            500,
            "Internal Server Error",
            "An unexpected error occurred",
            "UNHANDLED_ERROR",
            request_id=_request_id(request),
        )


def create_app(
    settings: Optional[Settings] = None,
    pdf_generator: Optional[PlaywrightPDFGenerator] = None,
) -> FastAPI:
    """
    Application factory function for creating a FastAPI app instance.

    Args:
        settings: Settings to build the app with, the global settings by default
        pdf_generator: Generator to render with, built from ``settings`` by default

    Returns:
        FastAPI application instance
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Convert HTML documents to PDF files with headless Chromium",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_docs else None,
        redoc_url="/redoc" if settings.enable_docs else None,
        openapi_url="/openapi.json" if settings.enable_docs else None,
    )
    app.state.settings = settings
    app.state.pdf_generator = pdf_generator or PlaywrightPDFGenerator(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Request-ID"],
    )

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):  # type: ignore[no-untyped-def]
        """Add request ID to all requests."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    register_exception_handlers(app)

    # Root endpoint
    @app.get("/", response_model=ServiceInfo, tags=["General"])
    async def root() -> ServiceInfo:
        """Service information and health check."""
        return ServiceInfo(
            message="Welcome to the HTML to PDF Conversion Service",
            status="online",
            version=settings.app_version,
            port=settings.port,
            environment=settings.environment,
            endpoints=ENDPOINTS,
        )

    app.include_router(files_router)

    return app
