"""FastAPI adapter – dependency functions resolving services from ``app.state``."""
from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Request

from metadata_editor.application.records import RecordService
from metadata_editor.application.search import MetadataSearchEngine
from metadata_editor.config.options import OptionCatalogue
from metadata_editor.kernel.time import Clock


def get_record_service(request: Request) -> RecordService:
    return request.app.state.record_service


def get_search_engine(request: Request) -> MetadataSearchEngine:
    return request.app.state.search_engine


def get_options(request: Request) -> OptionCatalogue:
    return request.app.state.options


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


RecordServiceDep = Annotated[RecordService, Depends(get_record_service)]
SearchEngineDep = Annotated[MetadataSearchEngine, Depends(get_search_engine)]
OptionsDep = Annotated[OptionCatalogue, Depends(get_options)]
ClockDep = Annotated[Clock, Depends(get_clock)]


_ERROR_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "code": {"type": "string"},
        "message": {"type": "string"},
        "correlation_id": {"type": "string", "nullable": True},
    },
    "required": ["code", "message"],
}

_STATUS_DESCRIPTIONS: dict[int, str] = {
    400: "Validation error",
    404: "Record not found",
    409: "Record already exists",
    500: "Internal server error",
    503: "Storage unavailable",
}


def error_responses(*codes: int) -> dict[int | str, dict[str, Any]]:
    """Build a route's ``responses`` dict for the given HTTP error codes.

    Usage::

        @router.post("/api/metadata", responses=error_responses(400, 409))
        async def create_record(...): ...
    """
    return {
        code: {
            "description": _STATUS_DESCRIPTIONS.get(code, "Error"),
            "content": {"application/json": {"schema": _ERROR_SCHEMA}},
        }
        for code in codes
    }


__all__ = [
    "ClockDep",
    "OptionsDep",
    "RecordServiceDep",
    "SearchEngineDep",
    "error_responses",
    "get_clock",
    "get_options",
    "get_record_service",
    "get_search_engine",
]
