"""FastAPI adapter – FastAPIExceptionMapper."""
from __future__ import annotations

from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from metadata_editor.kernel.errors import (
    ApplicationError,
    BaseError,
    ConflictError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    ValidationError,
)
from metadata_editor.observability.correlation import CorrelationContext
from metadata_editor.observability.logging import get_logger

logger = get_logger(__name__)


class FastAPIExceptionMapper:
    """Register error → HTTP status-code mappings on a FastAPI app.

    Error body schema::

        {"code": "not_found", "message": "...", "correlation_id": "..."}

    Mappings
    --------
    ``ValidationError``     → 400
    ``NotFoundError``       → 404
    ``ConflictError``       → 409
    ``DomainError``         → 422
    ``InfrastructureError`` → 503
    ``ApplicationError``    → 500 (message withheld)
    """

    def __init__(self) -> None:
        # ORDER MATTERS: more-specific subtypes first
        self._map: list[tuple[type[BaseError], int]] = [
            (ValidationError, 400),
            (NotFoundError, 404),
            (ConflictError, 409),
            (DomainError, 422),
            (InfrastructureError, 503),
            (ApplicationError, 500),
        ]

    def register(self, app: FastAPI) -> None:
        """Register all error handlers on a ``FastAPI`` app."""
        for exc_type, status in self._map:
            app.add_exception_handler(exc_type, self._make_handler(status))

    @staticmethod
    def _make_handler(status: int) -> Callable[[Request, Any], Awaitable[JSONResponse]]:
        async def handler(request: Request, exc: Any) -> JSONResponse:  # noqa: ARG001
            ctx = CorrelationContext.get()
            if status >= 500:
                logger.error("http.server_error", code=exc.code, error=exc.message)
                body: dict[str, Any] = {"code": "internal_error", "message": "Something went wrong"}
                if status == 503:
                    body = {"code": exc.code, "message": "Storage unavailable"}
            else:
                body = exc.to_dict()
            body["correlation_id"] = ctx.correlation_id if ctx is not None else None
            return JSONResponse(status_code=status, content=body)

        return handler


__all__ = ["FastAPIExceptionMapper"]
