"""
Main entrypoint for the Razor Tracker API.

This module assembles the FastAPI application: logging, CORS, request
logging, error handlers that render the response envelope, and the
versioned routers.  The storage backend is chosen once at start‑up
unless one is passed to ``create_app`` (as the tests do).  Run with::

    uvicorn razor_tracker_api.app.main:app --reload
"""

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.responses import error_response, success_response
from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.exceptions import (
    BackendUnavailableError,
    DanglingReferenceError,
    NotFoundError,
    RazorTrackerError,
    ValidationFailureError,
)
from .core.logging_config import setup_logging
from .storage import StorageBackend, create_backend


logger = logging.getLogger(__name__)


_ERROR_STATUS = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    DanglingReferenceError: status.HTTP_400_BAD_REQUEST,
    ValidationFailureError: status.HTTP_400_BAD_REQUEST,
    BackendUnavailableError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error(status_code: int, error: str) -> JSONResponse:
    if status_code >= 500:
        logger.error("Request failed (%s): %s", status_code, error)
    else:
        logger.warning("Request rejected (%s): %s", status_code, error)
    return JSONResponse(status_code=status_code, content=error_response(error))


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RazorTrackerError)
    async def domain_error_handler(request: Request, exc: RazorTrackerError) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        return _error(status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        )
        return _error(status.HTTP_400_BAD_REQUEST, f"Invalid request: {details}")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(
    backend: Optional[StorageBackend] = None,
    config: Optional[Settings] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    backend : Optional[StorageBackend]
        Storage to use.  When omitted, ``create_backend`` selects one on
        the startup event.
    config : Optional[Settings]
        Settings to use instead of the module‑level ``settings``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    config = config or default_settings
    setup_logging(config.log_level, config.log_file or None)

    app = FastAPI(title=config.project_name, version=config.api_version, debug=config.debug)
    app.state.settings = config
    app.state.backend = backend

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origin_list(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Content-Length"],
        max_age=12 * 60 * 60,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    _register_error_handlers(app)

    @app.get("/health", tags=["health"])
    def health_check(request: Request):
        active = request.app.state.backend
        return success_response(
            {
                "status": "healthy",
                "backend": active.name if active is not None else None,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
            "Service is running",
        )

    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Select the storage once; an injected backend is kept as is.
        if app.state.backend is None:
            app.state.backend = create_backend(config)
        logger.info("%s started with %s backend", config.project_name, app.state.backend.name)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
