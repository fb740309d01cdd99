"""FastAPI application entry point.

Serves the backend of the three onboarding wizards:
- /api/v1/... draft, submit and upload endpoints (app.api.v1.router)
- /uploads/... the stored CVs, profile photos and company logos
- /health

Every error leaves as {"error": {"code", "message", "details"}}. Field
problems carry ``{"field": ..., "message": ...}`` details so the wizard
can put them next to the matching form input.
"""

from pathlib import Path

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.api.v1.router import router as v1_router
from app.core.config import settings
from app.core.errors import APIError
from app.core.logging import configure_logging
from app.core.rate_limiting import limiter, rate_limit_exceeded_handler
from app.core.responses import ErrorDetail, ErrorResponse

logger = structlog.get_logger()

UPLOADS_MOUNT_PATH = "/uploads"

# Sent on every response; the API never returns HTML.
_SECURITY_HEADERS: dict[str, str] = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Embedder-Policy": "require-corp",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses.

    Draft endpoints return personal data (KTP address, birth date, phone),
    so /api/ responses are never cached. Uploaded photos and logos are
    embedded by the web app from another origin, so /uploads/ is the one
    path served with a cross-origin resource policy.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        path = request.url.path

        response.headers.update(_SECURITY_HEADERS)
        response.headers["Cross-Origin-Resource-Policy"] = (
            "cross-origin"
            if path.startswith(f"{UPLOADS_MOUNT_PATH}/")
            else "same-origin"
        )
        if path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store, max-age=0"
        # HTTPS terminates at the reverse proxy
        if settings.environment == "production":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response


def _error_response(
    status_code: int,
    code: str,
    message: str,
    details: list[dict] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=ErrorDetail(code=code, message=message, details=details)
        ).model_dump(),
    )


def api_error_handler(_request: Request, exc: APIError) -> JSONResponse:
    """Render an APIError (service or dependency) in the error envelope."""
    return _error_response(exc.status_code, exc.code, exc.message, exc.details)


def _field_path(loc: tuple) -> str:
    """("body", "data", "alamat") -> "data.alamat"."""
    parts = [str(part) for part in loc]
    if parts and parts[0] in ("body", "query", "path", "form"):
        parts = parts[1:]
    return ".".join(parts) or "body"


def validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies answer 400 with one detail per field.

    Only the first problem per field is kept, the way the wizard shows one
    message under each input.
    """
    details: list[dict] = []
    seen: set[str] = set()
    for error in exc.errors():
        field = _field_path(tuple(error["loc"]))
        if field in seen:
            continue
        seen.add(field)
        details.append({"field": field, "message": error["msg"]})
    return _error_response(
        400, "VALIDATION_ERROR", "Request validation failed", details
    )


def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the stack trace, answer a generic 500."""
    logger.exception("Unhandled exception", exc_info=exc, path=str(request.url.path))
    return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    The upload directory is created here, since StaticFiles refuses to
    mount a missing one.
    """
    configure_logging()

    app = FastAPI(
        title="Job Board Onboarding API",
        version="1.0.0",
        description="Onboarding and job-posting wizards for the job board",
    )

    # Starlette runs the last-added middleware first; CORS must see
    # preflight requests before anything else.
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "X-Request-ID"],
    )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, internal_error_handler)
    app.state.limiter = limiter

    app.include_router(v1_router, prefix="/api/v1")

    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    app.mount(
        UPLOADS_MOUNT_PATH,
        StaticFiles(directory=settings.upload_dir),
        name="uploads",
    )

    @app.get("/health")
    def health_check() -> dict:
        return {"status": "healthy"}

    return app


# uvicorn app.main:app
app = create_app()
