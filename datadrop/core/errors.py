"""API error type and the handler that renders it as ``{"error", "details"}``."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error raised by routes; rendered with its status code and a flat error body."""

    def __init__(self, status_code: int, error: str, details: str | None = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details

    def to_dict(self) -> dict[str, str]:
        body = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render ApiError; server-side failures are logged."""
    if exc.status_code >= 500:
        logger.error(
            "HTTP %s on %s %s: %s (%s)",
            exc.status_code,
            request.method,
            request.url.path,
            exc.error,
            exc.details,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def setup_error_handlers(app: FastAPI) -> None:
    """Register error handlers with the FastAPI app."""
    app.add_exception_handler(ApiError, api_error_handler)
