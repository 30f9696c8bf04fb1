"""Observability – structured logging helpers."""
from metadata_editor.observability.logging.factory import JsonLoggerFactory
from metadata_editor.observability.logging.processors import CorrelationProcessor, get_logger

__all__ = [
    "CorrelationProcessor",
    "JsonLoggerFactory",
    "get_logger",
]
