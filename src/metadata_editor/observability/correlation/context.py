"""Observability – RequestContext, CorrelationContext."""
from __future__ import annotations

import dataclasses
from contextvars import ContextVar
from uuid import uuid4


@dataclasses.dataclass(frozen=True)
class RequestContext:
    """Ambient context for a single request."""
    correlation_id: str
    trace_id: str | None = None

    @classmethod
    def new(cls) -> "RequestContext":
        return cls(correlation_id=str(uuid4()))


_CTX_VAR: ContextVar[RequestContext | None] = ContextVar("_metadata_editor_request_ctx", default=None)


class CorrelationContext:
    """Ambient correlation context stored in a ``ContextVar``."""

    @staticmethod
    def set(ctx: RequestContext) -> None:
        _CTX_VAR.set(ctx)

    @staticmethod
    def get() -> RequestContext | None:
        return _CTX_VAR.get()

    @staticmethod
    def clear() -> None:
        _CTX_VAR.set(None)

    @staticmethod
    def set_from_headers(headers: dict[str, str]) -> RequestContext:
        """Extract correlation context from HTTP headers and store it.

        Priority order for correlation ID:
        ``X-Correlation-ID`` → ``X-Request-ID`` → generated UUID.

        The W3C ``traceparent`` header (``ver-trace_id-parent_id-flags``)
        populates :attr:`RequestContext.trace_id`.  Header names are matched
        case-insensitively.
        """
        norm: dict[str, str] = {k.lower(): v for k, v in headers.items()}

        correlation_id = (
            norm.get("x-correlation-id", "").strip()
            or norm.get("x-request-id", "").strip()
            or str(uuid4())
        )

        trace_id: str | None = None
        traceparent = norm.get("traceparent")
        if traceparent:
            parts = traceparent.split("-")
            if len(parts) >= 2 and parts[1]:
                trace_id = parts[1]

        ctx = RequestContext(correlation_id=correlation_id, trace_id=trace_id)
        _CTX_VAR.set(ctx)
        return ctx


__all__ = ["CorrelationContext", "RequestContext"]
