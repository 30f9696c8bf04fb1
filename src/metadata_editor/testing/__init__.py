"""Testing helpers – in-memory doubles for the storage ports."""
