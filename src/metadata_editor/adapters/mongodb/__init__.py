"""MongoDB adapter – record collection backed by motor."""

from metadata_editor.adapters.mongodb.client import create_client, record_collection
from metadata_editor.adapters.mongodb.collection import MongoRecordCollection

__all__ = [
    "MongoRecordCollection",
    "create_client",
    "record_collection",
]
