"""Application-layer errors – faults in wiring and configuration."""

from __future__ import annotations

from metadata_editor.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


__all__ = ["ApplicationError"]
