"""Run the metadata editor API: ``python -m metadata_editor``."""
from __future__ import annotations

import uvicorn

from metadata_editor.adapters.fastapi import create_app
from metadata_editor.config.settings import AppSettings, DotenvSettingsLoader, SettingsFactory
from metadata_editor.observability.logging import JsonLoggerFactory, get_logger


def main() -> None:
    settings = SettingsFactory.create(AppSettings, loaders=[DotenvSettingsLoader()])
    JsonLoggerFactory.configure(settings.log_level)
    get_logger(__name__).info("app.starting", host=settings.host, port=settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
