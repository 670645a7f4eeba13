"""RFC 7807 Problem Details error handling.

Provides centralized exception handling and the application's error
taxonomy. All errors return a consistent JSON format:

    {
        "type": "about:blank",
        "title": "Too Many Requests",
        "status": 429,
        "detail": "AI request limit reached. Please wait a moment and try again.",
        "instance": "/api/v1/assistant/chat",
        "request_id": "4f1c..."
    }

Upstream failures (Supabase, AI gateway, e-mail provider) are never
retried; they surface once with a user-facing message.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger()


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str, status_code: int = 500, error_type: str = "about:blank"):
        self.detail = detail
        self.status_code = status_code
        self.error_type = error_type
        super().__init__(detail)


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(detail=detail, status_code=404)


class ValidationError(AppError):
    """Request validation failed."""

    def __init__(self, detail: str = "Validation failed"):
        super().__init__(detail=detail, status_code=422)


class AuthenticationError(AppError):
    """No valid session."""

    def __init__(self, detail: str = "You must be logged in"):
        super().__init__(detail=detail, status_code=401)


class ForbiddenError(AppError):
    """Authenticated, but not allowed."""

    def __init__(self, detail: str = "Administrator access required"):
        super().__init__(detail=detail, status_code=403)


class EmptyDatasetError(AppError):
    """Nothing to report on for the requested period."""

    def __init__(self, detail: str = "No transactions found for this period"):
        super().__init__(detail=detail, status_code=400)


class UpstreamError(AppError):
    """A collaborator (Supabase, AI gateway, e-mail provider) failed."""

    def __init__(self, detail: str = "An upstream service failed, please try again later"):
        super().__init__(detail=detail, status_code=502)


class UpstreamRateLimitedError(UpstreamError):
    """The AI provider rejected the call with a rate limit."""

    def __init__(
        self,
        detail: str = "AI request limit reached. Please wait a moment and try again.",
    ):
        super().__init__(detail=detail)
        self.status_code = 429


class UpstreamQuotaExhaustedError(UpstreamError):
    """The AI provider has no credits left for this workspace."""

    def __init__(self, detail: str = "AI credits exhausted. Add credits to continue."):
        super().__init__(detail=detail)
        self.status_code = 402


class ConfigurationError(AppError):
    """A provider key or URL is missing."""

    def __init__(self, detail: str = "Service is not configured"):
        super().__init__(detail=detail, status_code=500)


def _build_problem_detail(
    status: int,
    title: str,
    detail: str,
    error_type: str = "about:blank",
    instance: str = "",
    request_id: str = "",
) -> dict:
    """Build RFC 7807 Problem Details response body."""
    body = {
        "type": error_type,
        "title": title,
        "status": status,
        "detail": detail,
    }
    if instance:
        body["instance"] = instance
    if request_id:
        body["request_id"] = request_id
    return body


# HTTP status code to title mapping
_STATUS_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    402: "Payment Required",
    403: "Forbidden",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    429: "Too Many Requests",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
}


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        title = _STATUS_TITLES.get(exc.status_code, "Error")
        request_id = getattr(request.state, "request_id", "")
        if exc.status_code >= 500:
            logger.warning("app_error", status=exc.status_code, detail=exc.detail)
        body = _build_problem_detail(
            status=exc.status_code,
            title=title,
            detail=exc.detail,
            error_type=exc.error_type,
            instance=str(request.url.path),
            request_id=request_id,
        )
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        title = _STATUS_TITLES.get(exc.status_code, "Error")
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        request_id = getattr(request.state, "request_id", "")
        body = _build_problem_detail(
            status=exc.status_code,
            title=title,
            detail=detail,
            instance=str(request.url.path),
            request_id=request_id,
        )
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = getattr(request.state, "request_id", "")
        logger.error("unhandled_error", error=str(exc), exc_info=exc)
        body = _build_problem_detail(
            status=500,
            title="Internal Server Error",
            detail="An unexpected error occurred",
            instance=str(request.url.path),
            request_id=request_id,
        )
        return JSONResponse(status_code=500, content=body)
