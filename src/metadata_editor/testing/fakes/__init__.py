"""Testing fakes – in-memory doubles for the storage ports."""
from metadata_editor.testing.fakes.collection import InMemoryRecordCollection, matches
from metadata_editor.kernel.time import FrozenClock

__all__ = ["FrozenClock", "InMemoryRecordCollection", "matches"]
