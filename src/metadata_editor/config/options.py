"""Option catalogue – select-list values read from ``<name>-options.json`` files."""
from __future__ import annotations

import json
import threading
from pathlib import Path

from metadata_editor.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_OPTIONS_DIR = Path(__file__).resolve().parent.parent / "data"

FALLBACK_OPTIONS: dict[str, tuple[str, ...]] = {
    "genre": (
        "literature",
        "language",
        "new testament",
        "old testament",
        "magazine",
        "apocrypha",
        "academic",
    ),
    "dialect": ("urmi", "standard", "other"),
    "source": ("private", "online", "published"),
}


class OptionCatalogue:
    """Cached loader for option lists.

    A missing or malformed file is logged and replaced by the built-in
    fallback list for that option type (empty for unknown types).
    """

    def __init__(self, options_dir: str | Path | None = None) -> None:
        self._dir = Path(options_dir) if options_dir else DEFAULT_OPTIONS_DIR
        self._cache: dict[str, tuple[str, ...]] = {}
        self._lock = threading.Lock()

    @property
    def options_dir(self) -> Path:
        return self._dir

    def get(self, option_type: str) -> tuple[str, ...]:
        with self._lock:
            cached = self._cache.get(option_type)
            if cached is None:
                cached = self._load(option_type)
                self._cache[option_type] = cached
            return cached

    def reload(self) -> None:
        """Drop cached lists; the next :meth:`get` re-reads the files."""
        with self._lock:
            self._cache.clear()
        logger.info("options.reloaded", options_dir=str(self._dir))

    def _load(self, option_type: str) -> tuple[str, ...]:
        path = self._dir / f"{option_type}-options.json"
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("options.load_failed", option_type=option_type, path=str(path), error=str(exc))
            return FALLBACK_OPTIONS.get(option_type, ())
        if not isinstance(data, list) or not all(isinstance(v, str) for v in data):
            logger.error("options.invalid_format", option_type=option_type, path=str(path))
            return FALLBACK_OPTIONS.get(option_type, ())
        return tuple(data)


__all__ = ["DEFAULT_OPTIONS_DIR", "FALLBACK_OPTIONS", "OptionCatalogue"]
