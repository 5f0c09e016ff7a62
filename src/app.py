"""Application composition root.

This module wires together configuration and the string store for the API runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from src.config.settings import Settings
from src.storage.store import StringStore


@dataclass(frozen=True)
class App:
    """Shared application dependencies for route handlers."""

    settings: Settings
    store: StringStore


def create_app(settings: Settings) -> App:
    """Create the application container.

    Note:
        The returned store is not loaded. Call `app.store.load()` at startup.
    """

    path = Path(settings.data_file) if settings.persist else None
    return App(settings=settings, store=StringStore(path))
