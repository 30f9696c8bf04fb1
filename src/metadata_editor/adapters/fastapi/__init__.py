"""FastAPI adapter – app factory, middleware, exception mapper, routers, deps."""
from metadata_editor.adapters.fastapi.app import create_app
from metadata_editor.adapters.fastapi.deps import error_responses
from metadata_editor.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from metadata_editor.adapters.fastapi.middleware import FastAPICorrelationIdMiddleware
from metadata_editor.adapters.fastapi.routers import (
    FastAPIHealthRouter,
    FastAPIOptionsRouter,
    FastAPIRecordsRouter,
    FastAPISearchRouter,
    parse_search_options,
)

__all__ = [
    "FastAPICorrelationIdMiddleware",
    "FastAPIExceptionMapper",
    "FastAPIHealthRouter",
    "FastAPIOptionsRouter",
    "FastAPIRecordsRouter",
    "FastAPISearchRouter",
    "create_app",
    "error_responses",
    "parse_search_options",
]
