"""
metadata_editor – REST service for flexible bibliographic metadata records.

Import path convention::

    from metadata_editor.application.search import MetadataSearchEngine, default_registry
    from metadata_editor.application.records import RecordService
    from metadata_editor.adapters.fastapi import create_app
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
