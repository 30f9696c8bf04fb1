"""Kernel time – Clock port + implementations."""
from metadata_editor.kernel.time.clock import Clock, FrozenClock, SystemClock

__all__ = ["Clock", "FrozenClock", "SystemClock"]
