"""Observability – correlation context."""
from metadata_editor.observability.correlation.context import CorrelationContext, RequestContext

__all__ = ["CorrelationContext", "RequestContext"]
