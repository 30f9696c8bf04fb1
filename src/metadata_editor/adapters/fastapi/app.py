"""FastAPI adapter – application factory."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import metadata_editor
from metadata_editor.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from metadata_editor.adapters.fastapi.middleware import FastAPICorrelationIdMiddleware
from metadata_editor.adapters.fastapi.routers import (
    FastAPIHealthRouter,
    FastAPIOptionsRouter,
    FastAPIRecordsRouter,
    FastAPISearchRouter,
)
from metadata_editor.adapters.mongodb import create_client, record_collection
from metadata_editor.application.records import RecordService
from metadata_editor.application.search import FieldRegistry, MetadataSearchEngine
from metadata_editor.config.options import OptionCatalogue
from metadata_editor.config.settings import AppSettings
from metadata_editor.kernel.time import Clock, SystemClock
from metadata_editor.observability.logging import get_logger

logger = get_logger(__name__)


def create_app(
    settings: AppSettings | None = None,
    *,
    collection: Any = None,
    registry: FieldRegistry | None = None,
    options: OptionCatalogue | None = None,
    clock: Clock | None = None,
) -> FastAPI:
    """Wire the services and return the FastAPI app.

    When *collection* is given it serves both the search engine and the
    record service and no MongoDB client is created; otherwise a motor
    client is built from ``settings.mongodb_uri`` and closed on shutdown.
    Indexes are ensured on startup for the MongoDB-backed collection.
    """
    settings = settings or AppSettings()
    client = None
    if collection is None:
        client = create_client(settings)
        collection = record_collection(client, settings)

    options = options or OptionCatalogue(settings.options_dir or None)
    clock = clock or SystemClock()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if client is not None:
            try:
                await collection.ensure_indexes()
            except Exception as exc:  # noqa: BLE001
                logger.warning("app.index_setup_failed", error=str(exc))
        logger.info("app.started", collection=settings.collection_name)
        yield
        if client is not None:
            client.close()
        logger.info("app.stopped")

    app = FastAPI(title="Metadata Editor API", version=metadata_editor.__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.clock = clock
    app.state.options = options
    app.state.collection = collection
    app.state.record_service = RecordService(collection, options=options, clock=clock)
    app.state.search_engine = MetadataSearchEngine(
        collection,
        registry,
        storage_timeout=settings.search_timeout_seconds or None,
    )

    origins = settings.cors_allow_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-ID"],
    )
    app.add_middleware(FastAPICorrelationIdMiddleware)
    FastAPIExceptionMapper().register(app)

    async def mongodb() -> bool:
        return await collection.ping()

    app.include_router(FastAPIHealthRouter(readiness_checks=[mongodb]))
    app.include_router(FastAPIRecordsRouter())
    app.include_router(FastAPISearchRouter())
    app.include_router(FastAPIOptionsRouter())
    return app


__all__ = ["create_app"]
