"""Application records – metadata record use cases."""
from metadata_editor.application.records.models import RecordMetadata, RecordPayload
from metadata_editor.application.records.service import RecordService
from metadata_editor.application.records.store import RecordStore

__all__ = ["RecordMetadata", "RecordPayload", "RecordService", "RecordStore"]
