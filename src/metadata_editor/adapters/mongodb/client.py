"""MongoDB adapter – motor client construction from settings."""

from __future__ import annotations

from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient

from metadata_editor.adapters.mongodb.collection import MongoRecordCollection
from metadata_editor.config.settings import AppSettings


def create_client(settings: AppSettings) -> AsyncIOMotorClient:
    """Return a timezone-aware motor client for ``settings.mongodb_uri``."""
    return AsyncIOMotorClient(settings.mongodb_uri, tz_aware=True)


def record_collection(client: Any, settings: AppSettings) -> MongoRecordCollection:
    return MongoRecordCollection(client[settings.database_name][settings.collection_name])


__all__ = ["create_client", "record_collection"]
