"""Composition root: builds a watcher from settings. Explicit wiring only."""
from __future__ import annotations

from watcher.app.application.mongodb_watcher import MongoDbWatcher, create_watcher
from watcher.app.config.settings import Settings


def create_watcher_from_settings(settings: Settings | None = None) -> MongoDbWatcher:
    _settings = settings or Settings()

    def _configure(builder) -> None:
        if _settings.mongodb_query.strip():
            builder.with_query(_settings.mongodb_collection, _settings.mongodb_query)

    return create_watcher(
        _settings.watcher_name,
        _settings.mongodb_connection_string,
        _settings.mongodb_database,
        timeout_seconds=_settings.mongodb_timeout_seconds,
        configurator=_configure,
    )
