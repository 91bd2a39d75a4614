"""MongoDB watcher configuration and its builder."""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial

from watcher.app.constants import DEFAULT_TIMEOUT_SECONDS
from watcher.app.infrastructure.persistence.factory import create_mongo_connection
from watcher.app.ports.mongodb import (
    AsyncValidator,
    ConnectionProvider,
    MongoDb,
    MongoDbProvider,
    Validator,
)


def _no_database() -> MongoDb | None:
    return None


@dataclass(frozen=True)
class MongoDbWatcherConfiguration:
    """Immutable watcher configuration. Build it with MongoDbWatcherConfigurationBuilder."""

    connection_string: str
    database: str
    connection_provider: ConnectionProvider
    mongodb_provider: MongoDbProvider = _no_database
    collection_name: str = ""
    query: str = ""
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    async_validators: tuple[AsyncValidator, ...] = field(default_factory=tuple)
    validators: tuple[Validator, ...] = field(default_factory=tuple)


class MongoDbWatcherConfigurationBuilder:
    """Fluent builder; every `with_*`/`ensure_*` method returns the builder."""

    def __init__(
        self,
        connection_string: str,
        database: str,
        timeout_seconds: float | None = None,
    ) -> None:
        if not connection_string or not connection_string.strip():
            raise ValueError("MongoDB connection string can not be empty.")
        if not database or not database.strip():
            raise ValueError("MongoDB database name can not be empty.")
        if timeout_seconds is not None and timeout_seconds <= 0:
            raise ValueError("MongoDB timeout must be greater than zero.")

        self._connection_string = connection_string
        self._database = database
        self._timeout_seconds = float(timeout_seconds) if timeout_seconds is not None else DEFAULT_TIMEOUT_SECONDS
        self._collection_name = ""
        self._query = ""
        self._connection_provider: ConnectionProvider | None = None
        self._mongodb_provider: MongoDbProvider = _no_database
        self._async_validators: list[AsyncValidator] = []
        self._validators: list[Validator] = []

    def with_query(self, collection_name: str, query: str) -> "MongoDbWatcherConfigurationBuilder":
        if not collection_name or not collection_name.strip():
            raise ValueError("MongoDB collection name can not be empty.")
        self._collection_name = collection_name
        self._query = query
        return self

    def ensure_that(self, predicate: Validator) -> "MongoDbWatcherConfigurationBuilder":
        self._validators.append(predicate)
        return self

    def ensure_that_async(self, predicate: AsyncValidator) -> "MongoDbWatcherConfigurationBuilder":
        self._async_validators.append(predicate)
        return self

    def with_connection_provider(self, provider: ConnectionProvider) -> "MongoDbWatcherConfigurationBuilder":
        if provider is None:
            raise ValueError("MongoDB connection provider can not be None.")
        self._connection_provider = provider
        return self

    def with_mongodb_provider(self, provider: MongoDbProvider) -> "MongoDbWatcherConfigurationBuilder":
        if provider is None:
            raise ValueError("MongoDB database provider can not be None.")
        self._mongodb_provider = provider
        return self

    def build(self) -> MongoDbWatcherConfiguration:
        connection_provider = self._connection_provider or partial(
            create_mongo_connection,
            database=self._database,
            timeout_seconds=self._timeout_seconds,
        )
        return MongoDbWatcherConfiguration(
            connection_string=self._connection_string,
            database=self._database,
            connection_provider=connection_provider,
            mongodb_provider=self._mongodb_provider,
            collection_name=self._collection_name,
            query=self._query,
            timeout_seconds=self._timeout_seconds,
            async_validators=tuple(self._async_validators),
            validators=tuple(self._validators),
        )
